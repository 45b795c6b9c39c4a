"""Domain-specific configuration models."""

from formchat.core.settings.app_config import AppConfig
from formchat.core.settings.conversation_config import ConversationConfig
from formchat.core.settings.database_config import DatabaseConfig
from formchat.core.settings.llm_config import LLMConfig
from formchat.core.settings.server_config import ServerConfig

__all__ = [
    "AppConfig",
    "ConversationConfig",
    "DatabaseConfig",
    "LLMConfig",
    "ServerConfig",
]
