"""
Answer backends - adapt an LLM client to the ask engine's chat capability.

``LLMAnswerBackend.chat(prompt, context_blocks, token_budget)`` sends:

    system:  "WebAI Pro"
    user:    <context block>      (one message per block)
    user:    <prompt>

and caps output at ``min(1024, token_budget // 2)`` tokens (512 when no
budget is given). Any client failure surfaces as a SERVER_ERROR PublicError.
"""

import logging
from typing import Any, Dict, List, Optional

from ..constants import DEFAULT_MAX_TOKENS, MAX_TOKENS_CAP, SYSTEM_PROMPT
from ..protocols import AnswerResult
from ..result import ErrorCode, PublicError
from .base import BaseLLMClient

logger = logging.getLogger(__name__)


def max_tokens_for(token_budget: Optional[int]) -> int:
    """Output cap derived from the plan token budget."""
    if not token_budget:
        return DEFAULT_MAX_TOKENS
    return min(MAX_TOKENS_CAP, token_budget // 2)


def build_messages(prompt: str, context_blocks: List[str]) -> List[Dict[str, Any]]:
    messages: List[Dict[str, Any]] = [{"role": "system", "content": SYSTEM_PROMPT}]
    messages.extend({"role": "user", "content": block} for block in context_blocks)
    messages.append({"role": "user", "content": prompt})
    return messages


class LLMAnswerBackend:
    """AnswerBackend backed by any BaseLLMClient."""

    def __init__(self, llm_client: BaseLLMClient) -> None:
        if llm_client is None:
            raise ValueError("llm_client is required")
        self.llm_client = llm_client

    async def chat(
        self,
        prompt: str,
        context_blocks: List[str],
        token_budget: Optional[int] = None,
    ) -> AnswerResult:
        messages = build_messages(prompt, context_blocks)
        try:
            response = await self.llm_client.chat_completion(
                messages, max_tokens=max_tokens_for(token_budget)
            )
        except PublicError:
            raise
        except Exception as e:
            logger.error(f"Answer backend call failed: {e}", exc_info=True)
            raise PublicError("Model request failed", ErrorCode.SERVER_ERROR) from e

        tokens_used = response.usage.total_tokens if response.usage else None
        return AnswerResult(text=response.content or "", tokens_used=tokens_used)


class UnavailableBackend:
    """Stand-in used when no model credentials are configured."""

    async def chat(
        self,
        prompt: str,
        context_blocks: List[str],
        token_budget: Optional[int] = None,
    ) -> AnswerResult:
        raise PublicError("Model unavailable", ErrorCode.SERVER_ERROR)
