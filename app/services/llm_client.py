"""
LLM Client - Unified text-generation interface for multiple LLM providers.
Supports OpenAI, Gemini, Mistral, OpenRouter and Ollama through the
OpenAI-compatible API, plus an offline mock. Calls are never retried.
"""
from openai import AsyncOpenAI, OpenAIError
from typing import Optional
import logging

from ..config import get_llm_config, require_api_key
from ..errors import GenerationError

logger = logging.getLogger(__name__)


class LLMClient:
    """Async LLM client with OpenAI-compatible API."""

    def __init__(self, config: Optional[dict] = None):
        self.config = config or get_llm_config()
        self.provider = self.config["provider"]
        self.model = self.config["model"]
        self.temperature = self.config["temperature"]
        self.max_tokens = self.config["max_tokens"]
        self.client: Optional[AsyncOpenAI] = None

        # Use mock client if provider is 'mock'
        if self.provider == "mock":
            from .mock_llm import MockLLMClient
            self._mock = MockLLMClient()
            self.model = self._mock.model
        else:
            self._mock = None

    def ensure_configured(self):
        """Raise ConfigurationError if the provider needs a key and none is set."""
        require_api_key(self.config)

    def _get_client(self) -> AsyncOpenAI:
        # Created lazily so a missing key surfaces per request, not at startup
        if self.client is None:
            self.client = AsyncOpenAI(
                api_key=require_api_key(self.config),
                base_url=self.config["base_url"],
                timeout=self.config["timeout"],
                max_retries=0,
            )
            logger.info(f"Initialized LLM client provider={self.provider} model={self.model}")
        return self.client

    async def chat(
        self,
        messages: list[dict],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Send a chat completion request.

        Args:
            messages: List of message dicts with 'role' and 'content'
            temperature: Override default temperature
            max_tokens: Override default max tokens

        Returns:
            The assistant's response content

        Raises:
            ConfigurationError: Missing API key (no request is sent)
            GenerationError: The provider failed or returned nothing
        """
        if self._mock is not None:
            return await self._mock.chat(messages, temperature, max_tokens)

        client = self._get_client()
        kwargs = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature if temperature is not None else self.temperature,
            "max_tokens": max_tokens or self.max_tokens,
        }

        try:
            response = await client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            logger.error(f"LLM Chat Error ({self.provider}): {e}")
            raise GenerationError(f"The AI service could not complete the request: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise GenerationError("The AI service returned an empty response.")
        return content

    async def generate(self, prompt: str) -> str:
        """Single-prompt text completion."""
        return await self.chat([{"role": "user", "content": prompt}])


# Global LLM client instance
llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create the global LLM client."""
    global llm_client
    if llm_client is None:
        llm_client = LLMClient()
    return llm_client
