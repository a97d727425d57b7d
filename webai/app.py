"""
WebAI Application - Single entry point for the ask engine.

Usage:
    from webai import WebAI

    app = WebAI.from_config_file("config.yaml")   # or WebAI() to read env vars
    result = await app.ask({"prompt": "What is 2 + 2?", "userId": "user_123"})
    if result.ok:
        print(result.data.answer)
    else:
        print(result.code, result.error)

``ask`` always returns exactly one AskResult. Gate order: prompt check
(BAD_REQUEST), rate limit (RATE_LIMITED), entitlement (SUBSCRIPTION_REQUIRED),
then the orchestrator workflow. Any exception raised past the gates fires
an operational alert and becomes a failure result.
"""

import asyncio
import dataclasses
import logging
import time
from typing import Any, Dict, List, Optional, Union

from .config import AppConfig
from .entitlements.providers import RevenueCatProvider, WhopProvider
from .llm.backend import LLMAnswerBackend, UnavailableBackend
from .llm.base import LLMConfig
from .llm.litellm_client import LiteLLMClient
from .models import AskRequest
from .orchestrator.entitlement_cache import EntitlementCache
from .orchestrator.models import OrchestratorConfig, WorkflowState
from .orchestrator.orchestrator import Orchestrator
from .orchestrator.rate_limiter import RateLimiter
from .protocols import AlertSink, AnswerBackend, EntitlementProvider, TelemetrySink
from .result import (
    AskData,
    AskFailure,
    AskResult,
    AskSuccess,
    ErrorCode,
    PublicError,
    bad_request,
    rate_limited,
    server_error,
    subscription_required,
)
from .store import Clock, TTLStore
from .telemetry.emitter import TelemetryEmitter
from .telemetry.sinks import LoggingTelemetrySink, SlackAlertSink
from .tools.builtin import default_registry
from .tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


def build_backend(config: AppConfig) -> AnswerBackend:
    """LiteLLM-backed answers, or a backend that always fails when no key is configured."""
    llm_cfg = config.llm
    client = LiteLLMClient(
        config=LLMConfig(
            model=llm_cfg.model,
            api_key=llm_cfg.api_key,
            base_url=llm_cfg.base_url,
            timeout=llm_cfg.timeout,
        ),
        provider_name=llm_cfg.provider,
    )
    if not client.has_credentials:
        logger.warning(f"No API key for LLM provider '{llm_cfg.provider}'; answers will fail")
        return UnavailableBackend()
    return LLMAnswerBackend(client)


def build_providers(config: AppConfig) -> List[EntitlementProvider]:
    """Configured providers in priority order (Whop, then RevenueCat)."""
    ent_cfg = config.entitlements
    providers: List[EntitlementProvider] = []
    if ent_cfg.whop_api_key:
        providers.append(WhopProvider(ent_cfg.whop_api_key, timeout=ent_cfg.timeout_seconds))
    if ent_cfg.revenuecat_secret:
        providers.append(RevenueCatProvider(ent_cfg.revenuecat_secret, timeout=ent_cfg.timeout_seconds))
    if not providers:
        logger.warning("No entitlement providers configured; every user resolves to inactive")
    return providers


class WebAI:
    """
    WebAI application entry point.

    Wires the rate limiter, entitlement cache, tool registry, answer backend
    and telemetry from an AppConfig. Any collaborator can be injected.

    Args:
        config: AppConfig (defaults to AppConfig.from_env())
        backend: AnswerBackend override
        providers: Entitlement providers override, in priority order
        registry: Tool registry override
        telemetry_sink: Analytics sink (defaults to structured logging)
        alert_sink: Alert sink (defaults to Slack when a webhook is configured)
        clock: Wall clock for the cache and rate-limit stores
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        *,
        backend: Optional[AnswerBackend] = None,
        providers: Optional[List[EntitlementProvider]] = None,
        registry: Optional[ToolRegistry] = None,
        telemetry_sink: Optional[TelemetrySink] = None,
        alert_sink: Optional[AlertSink] = None,
        clock: Clock = time.time,
    ):
        self.config = config or AppConfig.from_env()
        cfg = self.config

        if alert_sink is None and cfg.alerts.slack_webhook_url:
            alert_sink = SlackAlertSink(cfg.alerts.slack_webhook_url)
        self.telemetry = TelemetryEmitter(
            telemetry_sink=telemetry_sink or LoggingTelemetrySink(),
            alert_sink=alert_sink,
        )

        self.rate_limiter = RateLimiter(
            store=TTLStore(clock=clock),
            max_requests=cfg.rate_limit.max_requests,
            window_seconds=cfg.rate_limit.window_seconds,
        )
        self.entitlements = EntitlementCache(
            providers=providers if providers is not None else build_providers(cfg),
            store=TTLStore(clock=clock),
            ttl_seconds=cfg.entitlements.cache_ttl_seconds,
            single_flight=cfg.entitlements.single_flight,
        )
        self.orchestrator = Orchestrator(
            entitlements=self.entitlements,
            backend=backend or build_backend(cfg),
            registry=registry if registry is not None else default_registry(),
            telemetry=self.telemetry,
            config=OrchestratorConfig(
                parallel_tools=cfg.tools.parallel,
                history_char_limit=cfg.tools.history_char_limit,
            ),
        )

    @classmethod
    def from_config_file(cls, path: str, **kwargs) -> "WebAI":
        return cls(AppConfig.load(path), **kwargs)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def ask(self, raw: Union[AskRequest, Dict[str, Any], None]) -> AskResult:
        """Answer one request. Never raises for workflow failures."""
        try:
            request = self._normalize(raw)
        except (TypeError, ValueError, AttributeError) as e:
            logger.info(f"Rejected malformed ask request: {e}")
            return bad_request("Invalid request.")

        try:
            if not request.prompt:
                return bad_request("Missing prompt.")

            decision = await self.rate_limiter.allow(request.user_id, self.config.rate_limit.max_requests)
            if not decision.allowed:
                return rate_limited(decision.retry_after)
            self._trace(request, WorkflowState.RATE_CHECKED)

            entitlement = await self.entitlements.resolve(request.user_id)
            if not entitlement.active:
                return subscription_required()
            self._trace(request, WorkflowState.ENTITLED)

            data = await self._run_workflow(request)
            return AskSuccess(data=data)

        except Exception as e:
            self.telemetry.alert(f"ask.error {e}")
            if isinstance(e, PublicError):
                logger.warning(f"ask failed: {e.code.value} {e.message}")
                return AskFailure(error=e.message, code=e.code)
            logger.error(f"ask failed: {e}", exc_info=True)
            return server_error()

    async def aclose(self) -> None:
        """Wait for background telemetry and alerts to finish."""
        await self.telemetry.drain()

    async def __aenter__(self) -> "WebAI":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _run_workflow(self, request: AskRequest) -> AskData:
        timeout = self.config.request_timeout_seconds
        if not timeout:
            return await self.orchestrator.run_workflow(request)
        try:
            return await asyncio.wait_for(self.orchestrator.run_workflow(request), timeout=timeout)
        except asyncio.TimeoutError:
            raise PublicError("Request timed out.", ErrorCode.SERVER_ERROR)

    @staticmethod
    def _normalize(raw: Union[AskRequest, Dict[str, Any], None]) -> AskRequest:
        if isinstance(raw, AskRequest):
            request = dataclasses.replace(raw, prompt=(raw.prompt or "").strip())
        else:
            request = AskRequest.from_raw(raw or {})
        logger.debug(f"[ask] user={request.user_id or '-'} state={WorkflowState.VALIDATED.value}")
        return request

    @staticmethod
    def _trace(request: AskRequest, state: WorkflowState) -> None:
        logger.debug(f"[ask] user={request.user_id or '-'} state={state.value}")
