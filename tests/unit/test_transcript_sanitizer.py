"""Unit tests for transcript sanitization."""

import pytest

from formchat.core.settings import ConversationConfig
from formchat.schemas.chat_schema import ChatMessage
from formchat.services.transcript_sanitizer import sanitize_conversation_messages


def _msgs(*pairs: tuple[str, str]) -> list[ChatMessage]:
    return [ChatMessage(role=role, content=content) for role, content in pairs]  # type: ignore[arg-type]


def _pairs(messages: list[ChatMessage]) -> list[tuple[str, str]]:
    return [(m.role, m.content) for m in messages]


class TestSanitizeConversationMessages:
    """Tests for sanitize_conversation_messages."""

    def test_documented_scenario(self) -> None:
        config = ConversationConfig(
            start_message="hello, i want to fill the form",
            end_message="finish",
            end_token="END",
        )
        messages = _msgs(
            ("user", "hello, i want to fill the form"),
            ("assistant", "Q1?"),
            ("user", "A1"),
            ("assistant", "Thanks![END]"),
            ("user", "finish"),
        )

        result = sanitize_conversation_messages(messages, config)

        assert _pairs(result) == [
            ("assistant", "Q1?"),
            ("user", "A1"),
            ("assistant", "Thanks!"),
        ]

    def test_full_conversation_with_default_token(
        self,
        finished_messages: list[ChatMessage],
        conversation_config: ConversationConfig,
    ) -> None:
        result = sanitize_conversation_messages(finished_messages, conversation_config)

        assert _pairs(result) == [
            ("assistant", "What is your full name?"),
            ("user", "Ada Lovelace"),
            ("assistant", "And your email address?"),
            ("user", "ada@example.com"),
            ("assistant", "Thank you, that's all!"),
        ]

    def test_mutates_and_returns_same_list(
        self,
        finished_messages: list[ChatMessage],
        conversation_config: ConversationConfig,
    ) -> None:
        result = sanitize_conversation_messages(finished_messages, conversation_config)

        assert result is finished_messages
        assert len(finished_messages) == 5

    def test_idempotent_on_clean_input(
        self, conversation_config: ConversationConfig
    ) -> None:
        messages = _msgs(
            ("assistant", "What is your name?"),
            ("user", "Ada"),
            ("assistant", "Thanks!"),
        )
        once = _pairs(sanitize_conversation_messages(messages, conversation_config))
        twice = _pairs(sanitize_conversation_messages(messages, conversation_config))

        assert once == twice == [
            ("assistant", "What is your name?"),
            ("user", "Ada"),
            ("assistant", "Thanks!"),
        ]

    def test_start_marker_only_removed_when_first(
        self, conversation_config: ConversationConfig
    ) -> None:
        messages = _msgs(
            ("assistant", "Hi!"),
            ("user", "hello, i want to fill the form"),
        )
        result = sanitize_conversation_messages(messages, conversation_config)

        assert _pairs(result) == [
            ("assistant", "Hi!"),
            ("user", "hello, i want to fill the form"),
        ]

    def test_end_marker_only_removed_when_last(
        self, conversation_config: ConversationConfig
    ) -> None:
        messages = _msgs(
            ("user", "finish"),
            ("assistant", "Are you sure?"),
        )
        result = sanitize_conversation_messages(messages, conversation_config)

        assert _pairs(result) == [
            ("user", "finish"),
            ("assistant", "Are you sure?"),
        ]

    def test_only_last_assistant_message_is_stripped(
        self, conversation_config: ConversationConfig
    ) -> None:
        messages = _msgs(
            ("assistant", "Early[finish] slip"),
            ("user", "ok"),
            ("assistant", "Done[finish] trailing"),
        )
        result = sanitize_conversation_messages(messages, conversation_config)

        assert result[0].content == "Early[finish] slip"
        assert result[2].content == "Done"

    def test_cuts_at_first_occurrence(
        self, conversation_config: ConversationConfig
    ) -> None:
        messages = _msgs(("assistant", "Bye[finish] and [finish] again"))
        result = sanitize_conversation_messages(messages, conversation_config)

        assert result[0].content == "Bye"

    def test_unbracketed_token_left_alone(
        self, conversation_config: ConversationConfig
    ) -> None:
        messages = _msgs(("assistant", "We can finish now"))
        result = sanitize_conversation_messages(messages, conversation_config)

        assert result[0].content == "We can finish now"

    def test_marker_at_start_leaves_empty_content(
        self, conversation_config: ConversationConfig
    ) -> None:
        messages = _msgs(("user", "hi"), ("assistant", "[finish]"))
        result = sanitize_conversation_messages(messages, conversation_config)

        assert result[1].content == ""

    def test_no_assistant_message(
        self, conversation_config: ConversationConfig
    ) -> None:
        messages = _msgs(
            ("user", "hello, i want to fill the form"),
            ("user", "Ada[finish]"),
            ("user", "finish"),
        )
        result = sanitize_conversation_messages(messages, conversation_config)

        assert _pairs(result) == [("user", "Ada[finish]")]

    @pytest.mark.parametrize(
        "contents",
        [
            [],
            ["hello, i want to fill the form"],
            ["finish"],
        ],
    )
    def test_empty_after_trimming(
        self, contents: list[str], conversation_config: ConversationConfig
    ) -> None:
        messages = _msgs(*[("user", c) for c in contents])
        assert sanitize_conversation_messages(messages, conversation_config) == []

    def test_start_then_end_on_two_message_list(
        self, conversation_config: ConversationConfig
    ) -> None:
        messages = _msgs(
            ("user", "hello, i want to fill the form"),
            ("user", "finish"),
        )
        assert sanitize_conversation_messages(messages, conversation_config) == []
