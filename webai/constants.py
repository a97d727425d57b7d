"""
Shared constants for the WebAI ask engine.

Centralizes values that are needed by the orchestrator, the entry point
and the HTTP layer to avoid circular imports and duplication.
"""

# Bump whenever AskData changes shape incompatibly.
API_VERSION = 2

# ── Entitlement cache ──
ENTITLEMENT_TTL_SECONDS = 300

# ── Rate limiting ──
RATE_LIMIT_MAX_REQUESTS = 30
RATE_LIMIT_WINDOW_SECONDS = 60
RATE_LIMIT_RETRY_SECONDS = 60

# ── History condensation ──
HISTORY_CHAR_LIMIT = 800
TRUNCATION_MARKER = "…"

# ── Tools ──
DEFAULT_TOOL_TIMEOUT_MS = 5000
TOOL_CONTEXT_HEADER = "Tools info:\n"

# ── Answer backend ──
SYSTEM_PROMPT = "WebAI Pro"
DEFAULT_MAX_TOKENS = 512
MAX_TOKENS_CAP = 1024
DEFAULT_MODEL = "gpt-4o-mini"
