"""Tests for webai.orchestrator.context_manager

Tests cover:
- condense_history() - windowing, truncation, edge cases
- Idempotence on already-condensed input
- HistoryCondenser binding
"""

import pytest

from webai.models import ConversationTurn, Role
from webai.orchestrator.context_manager import HistoryCondenser, condense_history, truncate_content


def _turns(*contents):
    roles = [Role.USER, Role.ASSISTANT]
    return [ConversationTurn(role=roles[i % 2], content=c) for i, c in enumerate(contents)]


# =========================================================================
# condense_history
# =========================================================================


class TestCondenseHistory:

    def test_empty_history(self):
        assert condense_history([], history_limit=4) == []

    def test_none_history(self):
        assert condense_history(None, history_limit=4) == []

    def test_limit_larger_than_history(self):
        history = _turns("a", "b", "c")
        assert condense_history(history, history_limit=10) == ["a", "b", "c"]

    def test_limit_equal_to_history(self):
        history = _turns("a", "b", "c")
        assert condense_history(history, history_limit=3) == ["a", "b", "c"]

    def test_keeps_most_recent(self):
        history = _turns("1", "2", "3", "4", "5", "6")
        assert condense_history(history, history_limit=4) == ["3", "4", "5", "6"]

    def test_zero_limit_keeps_nothing(self):
        history = _turns("a", "b")
        assert condense_history(history, history_limit=0) == []

    def test_truncates_long_turns(self):
        history = _turns("x" * 900)
        result = condense_history(history, history_limit=4, char_limit=800)
        assert result == ["x" * 800 + "…"]

    def test_exact_length_not_truncated(self):
        history = _turns("y" * 800)
        assert condense_history(history, history_limit=4) == ["y" * 800]

    def test_does_not_mutate_input(self):
        history = _turns("a" * 1000, "b")
        condense_history(history, history_limit=1)
        assert len(history) == 2
        assert history[0].content == "a" * 1000


class TestIdempotence:

    @pytest.mark.parametrize("limit,chars", [(4, 800), (10, 50), (1, 5)])
    def test_recondensing_is_stable(self, limit, chars):
        history = _turns("short", "mid" * 10, "z" * 40)
        within = [t for t in history if len(t.content) <= chars]
        once = condense_history(within, limit, chars)
        twice = condense_history(_turns(*once), limit, chars)
        assert once == twice


class TestTruncateContent:

    def test_short_passthrough(self):
        assert truncate_content("hello", 10) == "hello"

    def test_cut_with_marker(self):
        assert truncate_content("hello world", 5) == "hello…"


class TestHistoryCondenser:

    def test_uses_bound_char_limit(self):
        condenser = HistoryCondenser(char_limit=3)
        assert condenser.condense(_turns("abcdef"), history_limit=2) == ["abc…"]

    def test_negative_char_limit_rejected(self):
        with pytest.raises(ValueError):
            HistoryCondenser(char_limit=-1)
