"""History condensation for the answer context.

Two steps, both pure:

Step 1 -- Keep only the most recent ``history_limit`` turns.
Step 2 -- Cut each remaining turn to ``char_limit`` characters, marking cuts.
"""

from typing import List, Sequence

from ..constants import HISTORY_CHAR_LIMIT, TRUNCATION_MARKER
from ..models import ConversationTurn


def condense_history(
    history: Sequence[ConversationTurn],
    history_limit: int,
    char_limit: int = HISTORY_CHAR_LIMIT,
) -> List[str]:
    """Return the last *history_limit* turns' content, each truncated.

    Args:
        history: Full ordered history, oldest first.
        history_limit: Number of turns to keep (0 keeps none).
        char_limit: Max characters kept per turn before the marker.

    Returns:
        Condensed content strings, oldest first.
    """
    recent = _keep_recent(history or [], history_limit)
    return [truncate_content(turn.content, char_limit) for turn in recent]


def truncate_content(content: str, char_limit: int = HISTORY_CHAR_LIMIT) -> str:
    """Cut *content* to *char_limit* characters, appending the truncation marker."""
    if len(content) <= char_limit:
        return content
    return content[:char_limit] + TRUNCATION_MARKER


class HistoryCondenser:
    """Binds a per-turn character limit so the orchestrator can vary only the window."""

    def __init__(self, char_limit: int = HISTORY_CHAR_LIMIT) -> None:
        if char_limit < 0:
            raise ValueError("char_limit must be >= 0")
        self.char_limit = char_limit

    def condense(self, history: Sequence[ConversationTurn], history_limit: int) -> List[str]:
        return condense_history(history, history_limit, self.char_limit)


# ------------------------------------------------------------------
# Internal
# ------------------------------------------------------------------

def _keep_recent(history: Sequence[ConversationTurn], keep: int) -> List[ConversationTurn]:
    if keep <= 0:
        return []
    return list(history[-keep:]) if len(history) > keep else list(history)
