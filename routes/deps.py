"""
FastAPI dependencies handing shared components to route handlers.
"""
from fastapi import Request

from config import Config
from services.completion_service import CompletionService
from services.conversation_store import ConversationStore
from utils.exceptions import InternalFault
from utils.http_client import UpstreamClientManager
from utils.logger import app_logger


def get_conversation_store(request: Request) -> ConversationStore:
    """Return the store created in the application lifespan."""
    store = getattr(request.app.state, "conversation_store", None)
    if store is None:
        app_logger.error("Conversation store missing from app state")
        raise InternalFault()
    return store


def get_completion_service() -> CompletionService:
    """Build a completion service from current configuration."""
    return CompletionService(
        client_provider=UpstreamClientManager.get_client,
        model=Config.COACH_MODEL,
        default_temperature=Config.DEFAULT_TEMPERATURE,
        timeout=Config.UPSTREAM_TIMEOUT
    )
