"""System prompts for driving, extracting and naming form conversations."""

import json
from typing import Any, Protocol

from formchat.core.settings import ConversationConfig
from formchat.schemas.chat_schema import ChatMessage
from formchat.schemas.form_schema import FormWithFields

CONVERSATION_FLOW_PROMPT_TEMPLATE = (
    "You are a friendly assistant helping a user fill out the form "
    '"{form_name}".\n'
    "{form_description}"
    "Collect the following fields by asking the user one question at a time:\n"
    "{field_list}\n\n"
    'The user opens the conversation with "{start_message}". '
    "Ask follow-up questions when an answer is unclear or invalid for the field "
    "type, and never ask for a field that has already been answered. "
    "Once every required field has an answer, thank the user and end that final "
    "message with {end_marker}. "
    'If the user says "{end_message}", wrap up immediately and end your reply '
    "with {end_marker}."
)

FORM_FIELDS_DATA_PROMPT_TEMPLATE = (
    'Read the conversation below in which a user filled out the form "{form_name}" '
    "and extract the user's answers.\n"
    "Fields:\n"
    "{field_list}\n\n"
    "Reply with a single JSON object whose keys are exactly these field names: "
    "{field_names}. Use null for fields the user did not answer. "
    "Do not wrap the JSON in markdown and do not add any other text."
)

CONVERSATION_NAME_PROMPT_TEMPLATE = (
    'A user filled out the form "{form_name}" with the following data:\n'
    "{form_fields_data}\n\n"
    "Write a short, human-readable name (at most six words) for this submission. "
    "Reply with the name only, without quotes."
)


class PromptProvider(Protocol):
    """Source of system-role messages for each conversation situation."""

    def get_conversation_flow_prompt_message(self) -> ChatMessage: ...

    def get_form_fields_data_prompt_message(self) -> ChatMessage: ...

    def get_conversation_name_prompt_message(
        self, form_fields_data: dict[str, Any]
    ) -> ChatMessage: ...


class FormPromptService:
    """Builds system prompts from a form definition."""

    def __init__(self, form: FormWithFields, config: ConversationConfig) -> None:
        self._form = form
        self._config = config

    def get_conversation_flow_prompt_message(self) -> ChatMessage:
        description = (
            f"{self._form.description.strip()}\n" if self._form.description else ""
        )
        content = CONVERSATION_FLOW_PROMPT_TEMPLATE.format(
            form_name=self._form.name,
            form_description=description,
            field_list=self._field_list(),
            start_message=self._config.start_message,
            end_message=self._config.end_message,
            end_marker=self._config.end_marker,
        )
        return ChatMessage(role="system", content=content)

    def get_form_fields_data_prompt_message(self) -> ChatMessage:
        content = FORM_FIELDS_DATA_PROMPT_TEMPLATE.format(
            form_name=self._form.name,
            field_list=self._field_list(),
            field_names=", ".join(field.name for field in self._form.fields),
        )
        return ChatMessage(role="system", content=content)

    def get_conversation_name_prompt_message(
        self, form_fields_data: dict[str, Any]
    ) -> ChatMessage:
        content = CONVERSATION_NAME_PROMPT_TEMPLATE.format(
            form_name=self._form.name,
            form_fields_data=json.dumps(form_fields_data, ensure_ascii=False),
        )
        return ChatMessage(role="system", content=content)

    def _field_list(self) -> str:
        """Render one bullet per field: name, label, type, requiredness."""
        lines = []
        for field in self._form.fields:
            line = f"- {field.name} ({field.label}, {field.type}"
            line += ", required)" if field.required else ", optional)"
            if field.description:
                line += f": {field.description}"
            lines.append(line)
        return "\n".join(lines)
