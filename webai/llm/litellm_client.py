"""
WebAI LiteLLM Client - Unified LLM client powered by litellm

Supports any provider litellm can route to:
- OpenAI (default)
- Anthropic
- Azure OpenAI
- Google Gemini
- Ollama (local models)
"""

import logging
import os
from typing import Any, Dict, List, Optional

from .base import BaseLLMClient, LLMConfig, LLMResponse, Usage

logger = logging.getLogger(__name__)

# Provider -> default environment variable for API key
_PROVIDER_ENV_VARS: Dict[str, Optional[str]] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "azure": "AZURE_OPENAI_API_KEY",
    "gemini": "GOOGLE_API_KEY",
    "ollama": None,
}


def build_litellm_model_string(provider: str, model: str) -> str:
    """Map provider + model to the litellm model string.

    litellm uses prefixed model strings to route to the correct provider.

    Args:
        provider: Provider name (openai, anthropic, azure, gemini, ollama).
        model: Raw model name (e.g. "gpt-4o-mini").

    Returns:
        litellm-compatible model string.
    """
    provider = provider.lower()
    if provider == "openai":
        return model
    if provider in ("anthropic", "azure", "gemini", "ollama"):
        return f"{provider}/{model}"
    return model


def resolve_api_key(provider: str, api_key: Optional[str] = None) -> Optional[str]:
    """Explicit key first, then the provider's conventional env var."""
    if api_key:
        return api_key
    env_var = _PROVIDER_ENV_VARS.get(provider.lower())
    return os.environ.get(env_var) if env_var else None


class LiteLLMClient(BaseLLMClient):
    """
    LLM client that delegates to ``litellm.acompletion``.

    Example:
        config = LLMConfig(model="gpt-4o-mini", api_key="sk-xxx")
        client = LiteLLMClient(config=config, provider_name="openai")
        response = await client.chat_completion([
            {"role": "user", "content": "Hello!"}
        ])
    """

    def __init__(
        self,
        config: Optional[LLMConfig] = None,
        provider_name: str = "openai",
        **kwargs,
    ):
        super().__init__(config, **kwargs)

        self.provider = provider_name.lower()
        self._litellm_model = build_litellm_model_string(self.provider, self.config.model)
        self._api_key = resolve_api_key(self.provider, self.config.api_key)

        # Base kwargs shared by every call
        self._base_kwargs: Dict[str, Any] = {"timeout": self.config.timeout}
        if self.config.base_url:
            self._base_kwargs["api_base"] = self.config.base_url
        if self._api_key:
            self._base_kwargs["api_key"] = self._api_key
        if self.config.max_retries:
            self._base_kwargs["num_retries"] = self.config.max_retries

        logger.info(
            f"LiteLLMClient initialized: provider={self.provider}, "
            f"litellm_model={self._litellm_model}"
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self._api_key) or _PROVIDER_ENV_VARS.get(self.provider, "") is None

    async def _call_api(self, messages: List[Dict[str, Any]], **kwargs) -> LLMResponse:
        """Make a non-streaming call via litellm.acompletion."""
        import litellm

        params: Dict[str, Any] = {
            "model": kwargs.get("model") or self._litellm_model,
            "messages": messages,
            **self._model_params(**kwargs),
            **self._base_kwargs,
        }

        logger.info(f"[LiteLLM] model={params['model']}, messages={len(messages)}")

        response = await litellm.acompletion(**params)

        choice = response.choices[0]
        usage = None
        if getattr(response, "usage", None):
            usage = Usage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )

        return LLMResponse(
            content=choice.message.content or "",
            usage=usage,
        )
