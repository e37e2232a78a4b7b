"""
Route handlers for cross-device conversation sync.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from models.api_models import ConversationsResponse, SyncRequest
from routes.deps import get_conversation_store
from services.conversation_store import ConversationStore
from utils.exceptions import GatewayError, InternalFault
from utils.logger import app_logger

router = APIRouter()


@router.get("/conversations", response_model=ConversationsResponse)
async def get_conversations(
    user_id: Optional[str] = Query(None, alias="userId"),
    store: ConversationStore = Depends(get_conversation_store)
):
    """Return the conversations last synced for a user."""
    try:
        conversations = store.get(user_id)
        app_logger.info(f"Fetched {len(conversations)} conversations")
        return {"conversations": conversations}

    except GatewayError as e:
        app_logger.warning(f"GET /conversations rejected: {e.message}")
        return e.to_response()
    except Exception as e:
        app_logger.exception(f"Error in GET /conversations: {str(e)}")
        return InternalFault().to_response()


@router.post("/conversations/sync", response_model=ConversationsResponse)
async def sync_conversations(
    request: Optional[SyncRequest] = None,
    store: ConversationStore = Depends(get_conversation_store)
):
    """
    Overwrite a user's conversations with the set sent by one device.
    Last writer wins; nothing is merged.
    """
    try:
        request = request or SyncRequest()
        conversations = store.sync(request.user_id, request.conversations)
        app_logger.info(f"Synced {len(conversations)} conversations ({store.user_count()} users tracked)")
        return {"conversations": conversations}

    except GatewayError as e:
        app_logger.warning(f"Sync rejected: {e.message}")
        return e.to_response()
    except Exception as e:
        app_logger.exception(f"Error in /conversations/sync: {str(e)}")
        return InternalFault().to_response()
