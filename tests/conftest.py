"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, AsyncIterator, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, AIMessageChunk
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from formchat.core.database import Base
from formchat.core.settings import ConversationConfig
from formchat.models.conversation import Conversation  # noqa: F401
from formchat.models.form import Form, FormField  # noqa: F401
from formchat.schemas.chat_schema import ChatMessage
from formchat.schemas.form_schema import FormFieldSchema, FormWithFields

START_MESSAGE = "hello, i want to fill the form"
END_MESSAGE = "finish"

# --- Test DB (SQLite in-memory) ---


@pytest.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory database with all tables."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def test_session_factory(
    test_engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    test_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide a raw async session for repository tests."""
    async with test_session_factory() as session:
        yield session


# --- Domain fixtures ---


@pytest.fixture
def conversation_config() -> ConversationConfig:
    """Markers used by the client to open and close a conversation."""
    return ConversationConfig(start_message=START_MESSAGE, end_message=END_MESSAGE)


@pytest.fixture
def contact_form() -> FormWithFields:
    """Small two-field form."""
    return FormWithFields(
        id=1,
        name="Contact request",
        description="Tell us how to reach you.",
        fields=[
            FormFieldSchema(name="full_name", label="Full name"),
            FormFieldSchema(
                name="email",
                label="Email address",
                type="email",
                description="Work email preferred",
            ),
            FormFieldSchema(
                name="newsletter",
                label="Newsletter",
                type="boolean",
                required=False,
            ),
        ],
    )


@pytest.fixture
def finished_messages() -> list[ChatMessage]:
    """A complete conversation as sent by the client on save."""
    return [
        ChatMessage(role="user", content=START_MESSAGE),
        ChatMessage(role="assistant", content="What is your full name?"),
        ChatMessage(role="user", content="Ada Lovelace"),
        ChatMessage(role="assistant", content="And your email address?"),
        ChatMessage(role="user", content="ada@example.com"),
        ChatMessage(role="assistant", content="Thank you, that's all![finish]"),
        ChatMessage(role="user", content=END_MESSAGE),
    ]


# --- Mock LLM ---


def make_chunk_stream(*chunks: str) -> AsyncIterator[AIMessageChunk]:
    """Async iterator of AI message chunks, like BaseChatModel.astream."""

    async def _gen() -> AsyncIterator[AIMessageChunk]:
        for chunk in chunks:
            yield AIMessageChunk(content=chunk)

    return _gen()


@pytest.fixture
def mock_llm() -> MagicMock:
    """Create a mock LLM for testing."""
    mock = MagicMock(spec=BaseChatModel)
    mock.ainvoke = AsyncMock(
        return_value=AIMessage(
            content="Test response",
            response_metadata={"model_name": "gpt-test", "finish_reason": "stop"},
            usage_metadata={
                "input_tokens": 12,
                "output_tokens": 3,
                "total_tokens": 15,
            },
        )
    )
    mock.astream = MagicMock(
        side_effect=lambda messages: make_chunk_stream("Hello", ", ", "Ada")
    )
    return mock


@pytest.fixture
def chunk_stream() -> Callable[..., AsyncIterator[AIMessageChunk]]:
    """Factory for fake model streams."""
    return make_chunk_stream
