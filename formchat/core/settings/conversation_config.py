"""Form-filling conversation configuration."""

from pydantic import BaseModel


class ConversationConfig(BaseModel, frozen=True):
    """Synthetic messages injected by the client to drive a conversation.

    ``start_message`` is sent on the user's behalf to open the flow and
    ``end_message`` to close it. The model marks its final question with
    ``[<end_token>]``; when no token is configured the end message is used.
    """

    start_message: str
    end_message: str
    end_token: str | None = None

    @property
    def end_marker(self) -> str:
        """Bracketed terminator the model appends to its last message."""
        return f"[{self.end_token or self.end_message}]"
