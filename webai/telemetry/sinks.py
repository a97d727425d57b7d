"""
Telemetry and alert sinks.

- LoggingTelemetrySink: JSON analytics lines on the ``webai.analytics`` logger
- SlackAlertSink: posts ``{"text": message}`` to a Slack incoming webhook
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

_analytics_logger = logging.getLogger("webai.analytics")


class LoggingTelemetrySink:
    """Writes each event as one JSON log line."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or _analytics_logger

    async def record(self, event: Dict[str, Any]) -> None:
        entry: Dict[str, Any] = {"timestamp": datetime.now(timezone.utc).isoformat()}
        entry.update(event)
        self._log.info(json.dumps(entry, default=str))


class SlackAlertSink:
    """Operational alerts via a Slack incoming webhook."""

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not webhook_url:
            raise ValueError("webhook_url is required")
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._client = client

    async def notify(self, message: str) -> None:
        payload = {"text": message}
        if self._client is not None:
            response = await self._client.post(self.webhook_url, json=payload, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.webhook_url, json=payload)
        response.raise_for_status()
