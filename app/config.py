"""
Configuration management for the travel planner.
Supports multiple LLM providers behind an OpenAI-compatible API:
OpenAI, Gemini, Mistral, OpenRouter, Ollama, plus an offline mock.
"""
from pydantic_settings import BaseSettings
from typing import Literal, Optional

from .errors import ConfigurationError


# Providers that can run without an API key
KEYLESS_PROVIDERS = {"ollama", "mock"}

DEFAULT_BASE_URLS = {
    "openai": "https://api.openai.com/v1",
    "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
    "mistral": "https://api.mistral.ai/v1",
    "openrouter": "https://openrouter.ai/api/v1",
    "ollama": "http://localhost:11434/v1",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # LLM Configuration
    llm_provider: Literal["openai", "gemini", "mistral", "openrouter", "ollama", "mock"] = "gemini"
    llm_api_key: Optional[str] = None
    llm_base_url: Optional[str] = None
    llm_model: str = "gemini-1.5-pro"

    # LLM Parameters
    llm_temperature: float = 0.7
    llm_max_tokens: int = 4000
    llm_timeout_seconds: float = 120.0

    # Server Configuration
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = True
    log_level: str = "INFO"

    # Session behaviour
    success_notice_seconds: float = 3.0
    chat_history_turns: int = 0
    section_duplicate_policy: Literal["last", "first"] = "last"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_llm_config() -> dict:
    """Get LLM configuration based on provider."""
    return {
        "provider": settings.llm_provider,
        "api_key": settings.llm_api_key,
        "model": settings.llm_model,
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
        "timeout": settings.llm_timeout_seconds,
        "base_url": settings.llm_base_url or DEFAULT_BASE_URLS.get(settings.llm_provider),
    }


def require_api_key(config: dict) -> str:
    """
    Return the API key for the configured provider.

    Keyless providers get a dummy value. Everything else fails fast with
    an actionable message instead of letting the request reach the network.
    """
    api_key = (config.get("api_key") or "").strip()
    if api_key:
        return api_key
    if config.get("provider") in KEYLESS_PROVIDERS:
        return "not-needed"
    raise ConfigurationError(
        f"Missing API key for the '{config.get('provider')}' provider. "
        "Set LLM_API_KEY in your environment or .env file and try again."
    )
