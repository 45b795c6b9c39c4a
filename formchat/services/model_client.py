"""Chat completion client over a LangChain chat model."""

from collections.abc import AsyncIterator, Sequence
from typing import Any

import structlog
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    BaseMessageChunk,
    HumanMessage,
    SystemMessage,
)

from formchat.schemas.chat_schema import (
    ChatMessage,
    Completion,
    CompletionChoice,
    CompletionUsage,
)

logger = structlog.get_logger()


def to_langchain_message(message: ChatMessage) -> BaseMessage:
    """Convert a role-tagged chat message to its LangChain counterpart."""
    match message.role:
        case "system":
            return SystemMessage(content=message.content)
        case "user":
            return HumanMessage(content=message.content)
        case "assistant":
            return AIMessage(content=message.content)
        case _:
            raise ValueError(f"Unsupported message role: {message.role}")


def content_text(content: str | list[Any]) -> str:
    """Flatten LangChain message content (plain or content blocks) into text."""
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)


class CompletionStream:
    """Finite, ordered stream of generated text fragments.

    The stream can be iterated once; a second iteration raises RuntimeError.
    """

    def __init__(self, chunks: AsyncIterator[BaseMessageChunk]) -> None:
        self._chunks = chunks
        self._head: BaseMessageChunk | None = None
        self._consumed = False

    @classmethod
    async def open(
        cls, chunks: AsyncIterator[BaseMessageChunk]
    ) -> "CompletionStream":
        """Start the stream, surfacing connection faults before returning."""
        stream = cls(chunks)
        try:
            stream._head = await anext(chunks)
        except StopAsyncIteration:
            stream._head = None
        return stream

    def __aiter__(self) -> AsyncIterator[str]:
        if self._consumed:
            raise RuntimeError("Completion stream has already been consumed")
        self._consumed = True
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[str]:
        if self._head is not None:
            text = content_text(self._head.content)
            self._head = None
            if text:
                yield text
        async for chunk in self._chunks:
            text = content_text(chunk.content)
            if text:
                yield text

    async def aclose(self) -> None:
        """Close the underlying model stream."""
        aclose = getattr(self._chunks, "aclose", None)
        if aclose is not None:
            await aclose()


class ModelClient:
    """Sends role-tagged messages to the configured chat model."""

    def __init__(self, llm: BaseChatModel) -> None:
        self._llm = llm

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        stream: bool = True,
    ) -> Completion | CompletionStream:
        """Run one chat completion.

        Returns a CompletionStream when ``stream`` is set, otherwise a fully
        materialised Completion. Provider faults propagate unchanged.
        """
        lc_messages = [to_langchain_message(m) for m in messages]
        logger.debug(
            "Calling chat model", message_count=len(lc_messages), stream=stream
        )

        if stream:
            return await CompletionStream.open(self._llm.astream(lc_messages))

        response = await self._llm.ainvoke(lc_messages)
        return self._to_completion(response)

    @staticmethod
    def _to_completion(response: BaseMessage) -> Completion:
        metadata = getattr(response, "response_metadata", None) or {}
        usage_metadata = getattr(response, "usage_metadata", None)

        usage: CompletionUsage | None = None
        if usage_metadata:
            usage = CompletionUsage(
                prompt_tokens=usage_metadata.get("input_tokens", 0),
                completion_tokens=usage_metadata.get("output_tokens", 0),
                total_tokens=usage_metadata.get("total_tokens", 0),
            )

        return Completion(
            model=metadata.get("model_name") or metadata.get("model"),
            choices=[
                CompletionChoice(
                    index=0,
                    message=ChatMessage(
                        role="assistant",
                        content=content_text(response.content),
                    ),
                    finish_reason=metadata.get("finish_reason")
                    or metadata.get("stop_reason"),
                )
            ],
            usage=usage,
        )
