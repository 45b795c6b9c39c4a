"""Service layer for form-filling conversations."""

import json
from typing import Any

import structlog

from formchat.core.exceptions import (
    ConversationNamingError,
    ConversationNotFoundError,
    ConversationPersistenceError,
    ConversationSaveError,
    FormDataExtractionError,
    FormDataParseError,
)
from formchat.core.settings import ConversationConfig
from formchat.models.conversation import Conversation
from formchat.repositories.conversation_repo import ConversationRepository
from formchat.schemas.chat_schema import ChatMessage, Completion
from formchat.schemas.form_schema import FormWithFields
from formchat.services.model_client import CompletionStream, ModelClient
from formchat.services.prompt_service import PromptProvider
from formchat.services.transcript_sanitizer import sanitize_conversation_messages

logger = structlog.get_logger()


class ConversationService:
    """Drives a form conversation through the chat model and saves the result."""

    def __init__(
        self,
        form: FormWithFields,
        model_client: ModelClient,
        prompt_provider: PromptProvider,
        conversation_repo: ConversationRepository,
        config: ConversationConfig,
    ) -> None:
        self._form = form
        self._model_client = model_client
        self._prompts = prompt_provider
        self._conversation_repo = conversation_repo
        self._config = config

    @property
    def form(self) -> FormWithFields:
        return self._form

    async def get_next_question(
        self,
        messages: list[ChatMessage],
        stream: bool = True,
    ) -> Completion | CompletionStream:
        """Ask the model for the next question of the form flow.

        Model faults are not caught here.
        """
        system_message = self._prompts.get_conversation_flow_prompt_message()
        return await self._model_client.complete([system_message, *messages], stream)

    async def get_form_fields_data_from_conversation(
        self, messages: list[ChatMessage]
    ) -> dict[str, Any]:
        """Extract the collected field values as a JSON object."""
        system_message = self._prompts.get_form_fields_data_prompt_message()
        try:
            completion = await self._model_client.complete(
                [system_message, *messages], stream=False
            )
            content = completion.choices[0].message.content
        except Exception as exc:
            logger.exception(
                "Unable to get form data from conversation", form_id=self._form.id
            )
            raise FormDataExtractionError() from exc

        try:
            form_fields_data = json.loads(content)
        except (ValueError, RecursionError) as exc:
            logger.exception(
                "Unable to parse form data reply", form_id=self._form.id
            )
            raise FormDataParseError() from exc

        if not isinstance(form_fields_data, dict):
            logger.error(
                "Form data reply is not a JSON object",
                form_id=self._form.id,
                reply_type=type(form_fields_data).__name__,
            )
            raise FormDataParseError()

        return form_fields_data

    async def generate_conversation_name(
        self, form_fields_data: dict[str, Any]
    ) -> str:
        """Name a conversation from its extracted field data."""
        system_message = self._prompts.get_conversation_name_prompt_message(
            form_fields_data
        )
        try:
            completion = await self._model_client.complete(
                [system_message], stream=False
            )
            return completion.choices[0].message.content.strip()
        except Exception as exc:
            logger.exception(
                "Unable to generate conversation name", form_id=self._form.id
            )
            raise ConversationNamingError() from exc

    def sanitize_conversation_messages(
        self, messages: list[ChatMessage]
    ) -> list[ChatMessage]:
        """Drop synthetic start/end messages in place and return the list."""
        return sanitize_conversation_messages(messages, self._config)

    async def save_conversation(self, messages: list[ChatMessage]) -> Conversation:
        """Extract, name, sanitize and persist a finished conversation.

        Every call creates a new record.
        """
        try:
            form_fields_data = await self.get_form_fields_data_from_conversation(
                messages
            )
            name = await self.generate_conversation_name(form_fields_data)
            transcript = self.sanitize_conversation_messages(messages)
        except (FormDataExtractionError, ConversationNamingError) as exc:
            # Already logged with its traceback
            logger.error(
                "Unable to save conversation",
                form_id=self._form.id,
                cause=exc.code,
            )
            raise ConversationSaveError() from exc
        except Exception as exc:
            logger.exception("Unable to save conversation", form_id=self._form.id)
            raise ConversationSaveError() from exc

        try:
            conversation = await self._conversation_repo.create_conversation(
                form_id=self._form.id,
                name=name,
                form_fields_data=form_fields_data,
                transcript=[message.model_dump() for message in transcript],
            )
        except Exception as exc:
            logger.exception(
                "Unable to persist conversation", form_id=self._form.id
            )
            raise ConversationPersistenceError() from exc

        logger.info(
            "Conversation saved",
            form_id=self._form.id,
            conversation_id=conversation.id,
            name=name,
        )
        return conversation

    async def get_conversation(self, conversation_id: int) -> Conversation:
        """Retrieve a saved conversation of this form."""
        conversation = await self._conversation_repo.find_conversation_by_id(
            conversation_id
        )
        if conversation is None or conversation.form_id != self._form.id:
            raise ConversationNotFoundError()
        return conversation

    async def list_conversations(
        self, limit: int = 20, offset: int = 0
    ) -> tuple[list[Conversation], bool]:
        """Return a page of this form's conversations and whether more exist."""
        rows = await self._conversation_repo.find_conversations_by_form(
            form_id=self._form.id, limit=limit + 1, offset=offset
        )
        return rows[:limit], len(rows) > limit
