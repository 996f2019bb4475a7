"""Unit tests for trustsim.models.payoffs.

Tests cover:
- Scoring every move pair under default payoffs
- set_value: short keys, field names, unknown keys, non-canonical warning
- reset_to_default idempotence
"""

import logging

import pytest

from trustsim.errors import ConfigurationError
from trustsim.models.moves import Move
from trustsim.models.payoffs import DEFAULT_PAYOFFS, PayoffMatrix

C = Move.COOPERATE
D = Move.DEFECT


class TestScore:
    """Tests for PayoffMatrix.score."""

    def test_default_values(self, payoffs):
        """Defaults are P=0, S=-1, R=2, T=3."""
        assert payoffs.as_dict() == {"P": 0.0, "S": -1.0, "R": 2.0, "T": 3.0}

    def test_each_outcome(self, payoffs):
        """Each move pair maps to the matching payoff."""
        assert payoffs.score(C, C) == 2
        assert payoffs.score(D, D) == 0
        assert payoffs.score(D, C) == 3
        assert payoffs.score(C, D) == -1

    def test_canonical_ordering(self, payoffs):
        """T > R > P > S holds for the default matrix."""
        assert payoffs.score(D, C) > payoffs.score(C, C) > payoffs.score(D, D) > payoffs.score(C, D)
        assert payoffs.is_canonical


class TestSetValue:
    """Tests for PayoffMatrix.set_value."""

    def test_short_keys(self, payoffs):
        payoffs.set_value("T", 5)
        payoffs.set_value("p", 1)
        assert payoffs.temptation == 5
        assert payoffs.punishment == 1
        assert payoffs.score(D, C) == 5
        assert payoffs.score(D, D) == 1

    def test_field_names(self, payoffs):
        payoffs.set_value("reward", 2.5)
        assert payoffs.score(C, C) == 2.5

    def test_unknown_key_rejected(self, payoffs):
        with pytest.raises(ConfigurationError) as exc_info:
            payoffs.set_value("X", 1)
        assert "Unknown payoff key" in str(exc_info.value)

    def test_non_numeric_value_rejected(self, payoffs):
        with pytest.raises(ConfigurationError) as exc_info:
            payoffs.set_value("P", "abc")
        assert "Invalid payoff value" in str(exc_info.value)
        assert payoffs.punishment == 0

    def test_non_canonical_is_accepted_with_warning(self, payoffs, caplog):
        """A non-canonical matrix still scores; a warning is logged."""
        with caplog.at_level(logging.WARNING, logger="trustsim.models.payoffs"):
            payoffs.set_value("S", 10)

        assert payoffs.score(C, D) == 10
        assert not payoffs.is_canonical
        assert "canonical" in caplog.text


class TestResetToDefault:
    """Tests for PayoffMatrix.reset_to_default."""

    def test_restores_defaults(self):
        payoffs = PayoffMatrix(punishment=1, sucker=0, reward=3, temptation=5)
        payoffs.reset_to_default()
        assert payoffs.as_dict() == DEFAULT_PAYOFFS

    def test_idempotent(self, payoffs):
        payoffs.reset_to_default()
        payoffs.reset_to_default()
        assert payoffs.as_dict() == DEFAULT_PAYOFFS
