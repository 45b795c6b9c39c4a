"""Conversation repository for saved form conversations."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from formchat.models.conversation import Conversation


class ConversationRepository:
    """Encapsulates conversation database queries.

    Records are append-only: they are created once per successful save and
    never updated or deleted here.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_conversation(
        self,
        form_id: int,
        name: str,
        form_fields_data: dict[str, Any],
        transcript: list[dict[str, Any]],
    ) -> Conversation:
        """Create a conversation record."""
        conversation = Conversation(
            form_id=form_id,
            name=name,
            form_fields_data=form_fields_data,
            transcript=transcript,
        )
        self._session.add(conversation)
        await self._session.flush()
        await self._session.refresh(conversation)
        return conversation

    async def find_conversation_by_id(
        self, conversation_id: int
    ) -> Conversation | None:
        """Find a conversation by its primary key."""
        result = await self._session.execute(
            select(Conversation).where(Conversation.id == conversation_id)
        )
        return result.scalar_one_or_none()

    async def find_conversations_by_form(
        self,
        form_id: int,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Conversation]:
        """List a form's conversations, newest first."""
        result = await self._session.execute(
            select(Conversation)
            .where(Conversation.form_id == form_id)
            .order_by(Conversation.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())
