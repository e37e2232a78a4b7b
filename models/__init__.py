"""
Models package exports.
"""
from models.api_models import (
    Message,
    ChatRequest,
    ChatResponse,
    SyncRequest,
    ConversationsResponse,
    AccountDeletionResponse,
    HealthResponse,
)
from models.chat_models import UpstreamCall

__all__ = [
    'Message',
    'ChatRequest',
    'ChatResponse',
    'SyncRequest',
    'ConversationsResponse',
    'AccountDeletionResponse',
    'HealthResponse',
    'UpstreamCall'
]
