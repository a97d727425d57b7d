"""
WebAI LLM Client Base - Shared client contract for answer generation

- BaseLLMClient: async chat completion over provider-specific ``_call_api``
- LLMConfig: model, credentials and sampling defaults
- LLMResponse / Usage: the text and token counts the answer backend reads
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..constants import DEFAULT_MAX_TOKENS, DEFAULT_MODEL


@dataclass
class LLMConfig:
    """
    Client settings.

    Attributes:
        api_key: Provider key (falls back to the provider's env var)
        model: Model name, e.g. "gpt-4o-mini"
        base_url: Optional API base override
        temperature: Sampling temperature
        max_tokens: Output cap when a call does not pass one
        timeout: Request timeout in seconds
        max_retries: Provider-side retries (0 disables)
    """
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: Optional[str] = None
    temperature: float = 0.7
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: int = 60
    max_retries: int = 0


@dataclass
class Usage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class LLMResponse:
    content: str
    usage: Optional[Usage] = None


class BaseLLMClient(ABC):
    """
    Base class for LLM clients.

    Subclasses implement ``_call_api``; callers use ``chat_completion``.
    """

    provider: str = "unknown"

    def __init__(self, config: Optional[LLMConfig] = None, **kwargs):
        if config is None:
            config = LLMConfig(**kwargs)
        else:
            for key, value in kwargs.items():
                if hasattr(config, key):
                    setattr(config, key, value)
        self.config = config

    @abstractmethod
    async def _call_api(self, messages: List[Dict[str, Any]], **kwargs) -> LLMResponse:
        """Provider-specific call. ``kwargs`` may carry max_tokens / temperature / model."""

    async def chat_completion(self, messages: List[Dict[str, Any]], **kwargs) -> LLMResponse:
        """Send one non-streaming chat completion request."""
        return await self._call_api(messages, **kwargs)

    def _model_params(self, **kwargs) -> Dict[str, Any]:
        """Sampling params with per-call overrides applied."""
        return {
            "temperature": kwargs.get("temperature", self.config.temperature),
            "max_tokens": kwargs.get("max_tokens", self.config.max_tokens),
        }

