"""
Route handlers for account removal.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from models.api_models import AccountDeletionResponse
from routes.deps import get_conversation_store
from services.conversation_store import ConversationStore
from utils.exceptions import GatewayError, InternalFault
from utils.logger import app_logger

router = APIRouter()


@router.delete("/account", response_model=AccountDeletionResponse)
async def delete_account(
    user_id: Optional[str] = Query(None, alias="userId"),
    store: ConversationStore = Depends(get_conversation_store)
):
    """Forget everything stored for a user. Unknown users succeed too."""
    try:
        removed = store.delete(user_id)
        app_logger.info(f"Account deleted (had stored conversations: {removed})")
        return {"success": True}

    except GatewayError as e:
        app_logger.warning(f"DELETE /account rejected: {e.message}")
        return e.to_response()
    except Exception as e:
        app_logger.exception(f"Error in DELETE /account: {str(e)}")
        return InternalFault().to_response()
