"""Create a form from a JSON definition.

Usage:
    python -m scripts.create_form --file forms/contact.json

The file holds ``{"name": ..., "description": ..., "fields": [...]}`` where
each field has ``name``, ``label`` and optionally ``type``, ``description``
and ``required``.
"""

import argparse
import asyncio
import json
from pathlib import Path

from formchat.core.database import Base, async_session_factory, engine
from formchat.repositories.form_repo import FormRepository


async def create_form(path: Path) -> None:
    """Insert the form described in ``path``."""
    definition = json.loads(path.read_text(encoding="utf-8"))

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        repo = FormRepository(session)
        form = await repo.create_form(
            name=definition["name"],
            description=definition.get("description"),
            fields=definition.get("fields", []),
        )
        await session.commit()
        print(f"Form created: {form.name} (id={form.id}, fields={len(form.fields)})")

    await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a form")
    parser.add_argument("--file", required=True, type=Path, help="Form JSON file")
    args = parser.parse_args()

    asyncio.run(create_form(args.file))


if __name__ == "__main__":
    main()
