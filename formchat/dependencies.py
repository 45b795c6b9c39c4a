"""Global dependencies for the application."""

from functools import lru_cache

from fastapi import Depends
from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI
from sqlalchemy.ext.asyncio import AsyncSession

from formchat.core.config import settings
from formchat.core.database import get_async_session
from formchat.core.exceptions import FormNotFoundError
from formchat.repositories.conversation_repo import ConversationRepository
from formchat.repositories.form_repo import FormRepository
from formchat.schemas.form_schema import FormWithFields
from formchat.services.conversation_service import ConversationService
from formchat.services.model_client import ModelClient
from formchat.services.prompt_service import FormPromptService


@lru_cache
def get_llm() -> BaseChatModel:
    """Get the LLM instance based on the configured provider."""
    llm_config = settings.llm
    match llm_config.provider:
        case "openai":
            return ChatOpenAI(
                model=llm_config.openai_model,
                api_key=llm_config.openai_api_key,
                temperature=llm_config.temperature,
            )
        case "anthropic":
            return ChatAnthropic(  # type: ignore[call-arg]
                model_name=llm_config.anthropic_model,
                api_key=llm_config.anthropic_api_key,
                temperature=llm_config.temperature,
            )
        case _:
            raise ValueError(f"Unsupported LLM provider: {llm_config.provider}")


@lru_cache
def get_model_client() -> ModelClient:
    """Get the process-wide model client."""
    return ModelClient(get_llm())


def get_form_repository(
    session: AsyncSession = Depends(get_async_session),
) -> FormRepository:
    """Get FormRepository bound to the current session."""
    return FormRepository(session)


def get_conversation_repository(
    session: AsyncSession = Depends(get_async_session),
) -> ConversationRepository:
    """Get ConversationRepository bound to the current session."""
    return ConversationRepository(session)


async def get_form(
    form_id: int,
    form_repo: FormRepository = Depends(get_form_repository),
) -> FormWithFields:
    """Load the form addressed by the request path."""
    form = await form_repo.find_by_id(form_id)
    if form is None:
        raise FormNotFoundError()
    return FormWithFields.model_validate(form)


def get_conversation_service(
    form: FormWithFields = Depends(get_form),
    conversation_repo: ConversationRepository = Depends(get_conversation_repository),
    model_client: ModelClient = Depends(get_model_client),
) -> ConversationService:
    """Get ConversationService for the requested form."""
    return ConversationService(
        form=form,
        model_client=model_client,
        prompt_provider=FormPromptService(form, settings.conversation),
        conversation_repo=conversation_repo,
        config=settings.conversation,
    )
