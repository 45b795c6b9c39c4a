"""Form repository for form definition lookups."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from formchat.models.form import Form, FormField


class FormRepository:
    """Encapsulates form database queries."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, form_id: int) -> Form | None:
        """Find a form and its fields by primary key."""
        result = await self._session.execute(select(Form).where(Form.id == form_id))
        return result.scalar_one_or_none()

    async def create_form(
        self,
        name: str,
        fields: list[dict[str, Any]],
        description: str | None = None,
    ) -> Form:
        """Create a form with its fields, keeping the given field order."""
        form = Form(
            name=name,
            description=description,
            fields=[
                FormField(position=position, **field)
                for position, field in enumerate(fields)
            ],
        )
        self._session.add(form)
        await self._session.flush()
        await self._session.refresh(form, attribute_names=["created_at", "fields"])
        return form
