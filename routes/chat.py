"""
Route handlers for chat completion.
Handles the /chat endpoint (non-streaming).
"""
from fastapi import APIRouter, Depends

from models.api_models import ChatRequest, ChatResponse
from services.completion_service import CompletionService
from routes.deps import get_completion_service
from utils.exceptions import GatewayError, InternalFault
from utils.logger import app_logger

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, service: CompletionService = Depends(get_completion_service)):
    """
    Forward a chat turn to the upstream completion API.
    """
    try:
        content = await service.complete(request.messages, request.temperature)
        return {"content": content}

    except GatewayError as e:
        app_logger.warning(f"Chat rejected ({e.status_code}): {e.message}")
        return e.to_response()
    except Exception as e:
        app_logger.exception(f"Error in /chat: {str(e)}")
        return InternalFault().to_response()
