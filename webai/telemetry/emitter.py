"""
Fire-and-forget dispatch to telemetry and alert sinks.

Every send runs as a background task. Failures are logged and never reach
the request path. ``drain()`` waits for outstanding sends (shutdown, tests).

Usage::

    telemetry = TelemetryEmitter(telemetry_sink=LoggingTelemetrySink())
    telemetry.emit_workflow(user_id="u1", plan="pro", used_tools=["math"],
                            timed_out_tools=[], errored_tools=[])
    telemetry.alert("ask.error boom")
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from ..protocols import AlertSink, TelemetrySink

logger = logging.getLogger(__name__)


class TelemetryEmitter:
    """Non-blocking front for an optional TelemetrySink and AlertSink."""

    def __init__(
        self,
        telemetry_sink: Optional[TelemetrySink] = None,
        alert_sink: Optional[AlertSink] = None,
    ) -> None:
        self.telemetry_sink = telemetry_sink
        self.alert_sink = alert_sink
        self._pending: Set["asyncio.Task[None]"] = set()

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------

    def emit(self, event: Dict[str, Any]) -> None:
        """Record an analytics event in the background."""
        if self.telemetry_sink is None:
            return
        self._dispatch("telemetry", self.telemetry_sink.record, event)

    def emit_workflow(
        self,
        user_id: Optional[str],
        plan: str,
        used_tools: List[str],
        timed_out_tools: List[str],
        errored_tools: List[str],
    ) -> None:
        """Summarize one completed ask workflow."""
        event: Dict[str, Any] = {
            "t": datetime.now(timezone.utc).isoformat(),
            "event_type": "ask_completed",
            "plan": plan,
            "used_tools": list(used_tools),
            "timed_out_tools": list(timed_out_tools),
            "errored_tools": list(errored_tools),
        }
        if user_id:
            event["user_id"] = user_id
        self.emit(event)

    def alert(self, message: str) -> None:
        """Send an operational alert in the background."""
        if self.alert_sink is None:
            return
        self._dispatch("alert", self.alert_sink.notify, message)

    async def drain(self) -> None:
        """Wait for every in-flight send to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _dispatch(self, kind: str, send: Callable[[Any], Awaitable[None]], payload: Any) -> None:
        task = asyncio.ensure_future(self._guard(kind, send, payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    @staticmethod
    async def _guard(kind: str, send: Callable[[Any], Awaitable[None]], payload: Any) -> None:
        try:
            await send(payload)
        except Exception as e:
            logger.warning(f"{kind} sink failed: {e}", exc_info=True)
