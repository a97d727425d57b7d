"""
WebAI Telemetry - Best-effort analytics and operational alerts
"""

from .emitter import TelemetryEmitter
from .sinks import LoggingTelemetrySink, SlackAlertSink

__all__ = [
    "TelemetryEmitter",
    "LoggingTelemetrySink",
    "SlackAlertSink",
]
