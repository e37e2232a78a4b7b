"""
Coach Proxy - FastAPI application forwarding chat turns to OpenAI.
Also keeps a per-user in-memory conversation store for syncing across devices.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from config import Config
from routes import account, chat, conversations, health
from services.conversation_store import ConversationStore
from utils.exceptions import GatewayError
from utils.http_client import UpstreamClientManager
from utils.logger import app_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    app.state.conversation_store = ConversationStore(max_users=Config.MAX_TRACKED_USERS)
    app_logger.info(
        f"{Config.SERVICE_NAME} ready: model={Config.COACH_MODEL}, "
        f"max tracked users={Config.MAX_TRACKED_USERS or 'unbounded'}"
    )
    yield
    app.state.conversation_store.clear()
    await UpstreamClientManager.close_all()

app = FastAPI(title=Config.APP_TITLE, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report body validation failures as 400 with a readable message."""
    errors = exc.errors()
    app_logger.warning(f"Validation error for {request.url.path}: {len(errors)} error(s)")

    if errors:
        first_error = errors[0]
        loc = [str(part) for part in first_error.get('loc', []) if part != 'body']
        field = ".".join(loc) if loc else 'body'
        message = f"{field}: {first_error.get('msg', 'Validation error')}"
    else:
        message = "Invalid request"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": message,
            "detail": [
                {"msg": error.get('msg'), "type": error.get('type'), "loc": list(error.get('loc', []))}
                for error in errors
            ]
        },
    )


@app.exception_handler(GatewayError)
async def gateway_exception_handler(request: Request, exc: GatewayError):
    """Errors raised outside a route's own handling, e.g. from dependencies."""
    app_logger.error(f"{request.method} {request.url.path} failed ({exc.status_code}): {exc.message}")
    return exc.to_response()


app.include_router(health.router, tags=["health"])
app.include_router(chat.router, tags=["chat"])
app.include_router(conversations.router, tags=["conversations"])
app.include_router(account.router, tags=["account"])


if __name__ == "__main__":
    import uvicorn
    app_logger.info(f"{Config.SERVICE_NAME} listening on port {Config.PORT}")
    uvicorn.run(app, host=Config.HOST, port=Config.PORT)
