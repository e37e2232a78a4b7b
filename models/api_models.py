"""
Pydantic data models for API requests and responses.
"""
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    """Chat message model."""
    role: str  # "system", "user", "assistant", ...
    content: str


class ChatRequest(BaseModel):
    """Chat request carrying the conversation turn to forward upstream."""
    messages: Optional[List[Message]] = None
    # Non-numeric values are replaced by the configured default, not rejected
    temperature: Optional[Any] = None


class ChatResponse(BaseModel):
    """Completion text returned to the client."""
    content: str


class SyncRequest(BaseModel):
    """Full conversation set pushed by one device."""
    model_config = ConfigDict(populate_by_name=True)

    # Both shapes are checked by the store so that the error message stays uniform
    user_id: Optional[Any] = Field(None, alias="userId")
    conversations: Optional[Any] = None


class ConversationsResponse(BaseModel):
    """Conversation set stored for a user."""
    conversations: List[Any]


class AccountDeletionResponse(BaseModel):
    success: bool


class HealthResponse(BaseModel):
    status: str
    service: str
