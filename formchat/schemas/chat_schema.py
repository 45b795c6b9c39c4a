"""Chat message and completion schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """Individual chat message."""

    role: Literal["user", "assistant", "system"]
    content: str


class CompletionChoice(BaseModel):
    """One generated alternative of a chat completion."""

    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class CompletionUsage(BaseModel):
    """Token accounting reported by the model provider."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class Completion(BaseModel):
    """Fully materialised chat completion."""

    model: str | None = None
    choices: list[CompletionChoice]
    usage: CompletionUsage | None = None


class ConversationRequest(BaseModel):
    """Full message history of a form conversation."""

    messages: list[ChatMessage] = Field(default_factory=list)


class NextQuestionRequest(ConversationRequest):
    """Request for the model's next question."""

    stream: bool = True
