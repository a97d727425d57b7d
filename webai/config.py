"""
WebAI configuration.

Loaded from a YAML file with ``${VAR}`` environment substitution, or
straight from environment variables via ``AppConfig.from_env()``.

Example config.yaml::

    llm:
      provider: openai
      model: gpt-4o-mini
      api_key: ${OPENAI_API_KEY}
    entitlements:
      whop_api_key: ${WHOP_API_KEY}
      cache_ttl_seconds: 300
    rate_limit:
      max_requests: 30
    tools:
      parallel: true
    alerts:
      slack_webhook_url: ${SLACK_WEBHOOK_URL}
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import yaml

from .constants import (
    DEFAULT_MODEL,
    ENTITLEMENT_TTL_SECONDS,
    HISTORY_CHAR_LIMIT,
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_WINDOW_SECONDS,
)


def _load_config(path: str) -> dict:
    """Read YAML config file with ${VAR} environment variable substitution."""
    with open(path, "r", encoding="utf-8") as f:
        raw = f.read()

    def _replace_env(match):
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(
                f"Environment variable '{var_name}' not set "
                f"(referenced in config file '{path}')"
            )
        return value

    resolved = re.sub(r"\$\{(\w+)\}", _replace_env, raw)
    return yaml.safe_load(resolved) or {}


@dataclass
class LLMSettings:
    provider: str = "openai"
    model: str = DEFAULT_MODEL
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout: int = 60


@dataclass
class EntitlementSettings:
    whop_api_key: Optional[str] = None
    revenuecat_secret: Optional[str] = None
    cache_ttl_seconds: float = ENTITLEMENT_TTL_SECONDS
    single_flight: bool = True
    timeout_seconds: float = 10.0


@dataclass
class RateLimitSettings:
    max_requests: int = RATE_LIMIT_MAX_REQUESTS
    window_seconds: int = RATE_LIMIT_WINDOW_SECONDS


@dataclass
class ToolSettings:
    parallel: bool = True
    history_char_limit: int = HISTORY_CHAR_LIMIT


@dataclass
class AlertSettings:
    slack_webhook_url: Optional[str] = None


@dataclass
class AppConfig:
    """Full application configuration tree."""

    llm: LLMSettings = field(default_factory=LLMSettings)
    entitlements: EntitlementSettings = field(default_factory=EntitlementSettings)
    rate_limit: RateLimitSettings = field(default_factory=RateLimitSettings)
    tools: ToolSettings = field(default_factory=ToolSettings)
    alerts: AlertSettings = field(default_factory=AlertSettings)
    request_timeout_seconds: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppConfig":
        """Build from a parsed config mapping. Unknown keys are rejected."""
        data = dict(data or {})
        return cls(
            llm=_section(LLMSettings, data, "llm"),
            entitlements=_section(EntitlementSettings, data, "entitlements"),
            rate_limit=_section(RateLimitSettings, data, "rate_limit"),
            tools=_section(ToolSettings, data, "tools"),
            alerts=_section(AlertSettings, data, "alerts"),
            request_timeout_seconds=data.get("request_timeout_seconds"),
        )

    @classmethod
    def load(cls, path: str) -> "AppConfig":
        return cls.from_dict(_load_config(path))

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build from environment variables; every credential is optional."""
        env = os.environ if env is None else env
        timeout = env.get("WEBAI_REQUEST_TIMEOUT_SECONDS")
        return cls(
            llm=LLMSettings(
                provider=env.get("WEBAI_LLM_PROVIDER", "openai"),
                model=env.get("WEBAI_LLM_MODEL", DEFAULT_MODEL),
                api_key=env.get("OPENAI_API_KEY") or None,
                base_url=env.get("WEBAI_LLM_BASE_URL") or None,
            ),
            entitlements=EntitlementSettings(
                whop_api_key=env.get("WHOP_API_KEY") or None,
                revenuecat_secret=env.get("REVENUECAT_SECRET") or None,
            ),
            alerts=AlertSettings(
                slack_webhook_url=env.get("SLACK_WEBHOOK_URL") or None,
            ),
            request_timeout_seconds=float(timeout) if timeout else None,
        )


def _section(section_cls, data: Dict[str, Any], key: str):
    raw = data.get(key) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config section '{key}' must be a mapping")
    known = set(section_cls.__dataclass_fields__)
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown keys in config section '{key}': {sorted(unknown)}")
    return section_cls(**raw)
