"""
WebAI LLM - Answer generation backends

Provides a LiteLLMClient that supports any litellm provider, and the
LLMAnswerBackend adapter the orchestrator calls.

Usage:
    from webai.llm import LiteLLMClient, LLMConfig, LLMAnswerBackend

    client = LiteLLMClient(config=LLMConfig(model="gpt-4o-mini"), provider_name="openai")
    backend = LLMAnswerBackend(client)
    result = await backend.chat("What is 2 + 2?", [], token_budget=8000)
"""

from .base import BaseLLMClient, LLMConfig, LLMResponse, Usage
from .litellm_client import LiteLLMClient
from .backend import LLMAnswerBackend, UnavailableBackend

__all__ = [
    "BaseLLMClient",
    "LLMConfig",
    "LLMResponse",
    "Usage",
    "LiteLLMClient",
    "LLMAnswerBackend",
    "UnavailableBackend",
]
