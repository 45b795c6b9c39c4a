"""Saved conversation API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from formchat.schemas.chat_schema import ChatMessage


class ConversationNameRequest(BaseModel):
    """Extracted field data to name a conversation from."""

    form_fields_data: dict[str, Any] = Field(default_factory=dict)


class ConversationNameResponse(BaseModel):
    """Generated conversation name."""

    model_config = ConfigDict(frozen=True)

    name: str


class ConversationResponse(BaseModel):
    """Saved conversation record."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    form_id: int
    name: str
    form_fields_data: dict[str, Any]
    transcript: list[ChatMessage]
    created_at: datetime


class ConversationListResponse(BaseModel):
    """Page of saved conversations for a form."""

    model_config = ConfigDict(frozen=True)

    conversations: list[ConversationResponse]
    has_next: bool = False
