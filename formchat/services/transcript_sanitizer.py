"""Removal of synthetic messages from a form conversation transcript."""

from formchat.core.settings import ConversationConfig
from formchat.schemas.chat_schema import ChatMessage


def sanitize_conversation_messages(
    messages: list[ChatMessage],
    config: ConversationConfig,
) -> list[ChatMessage]:
    """Strip messages and markers the client injected on the user's behalf.

    Drops a leading start message and a trailing end message, then cuts the
    end marker (and anything after it) from the last assistant message.
    The list is modified in place and returned.
    """
    if messages and messages[0].content == config.start_message:
        messages.pop(0)

    if messages and messages[-1].content == config.end_message:
        messages.pop()

    last_assistant = next(
        (m for m in reversed(messages) if m.role == "assistant"),
        None,
    )
    if last_assistant is not None and config.end_marker in last_assistant.content:
        last_assistant.content = last_assistant.content.split(config.end_marker, 1)[0]

    return messages
