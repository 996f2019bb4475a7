"""Payoff model for the Prisoner's Dilemma.

Holds the four outcome values and scores any pair of moves from the
perspective of the first mover.

Payoff names follow the usual game theory labels:
- T (Temptation): self defects while other cooperates
- R (Reward): both cooperate
- P (Punishment): both defect
- S (Sucker): self cooperates while other defects

The canonical ordering T > R > P > S makes mutual cooperation worth
sustaining in a repeated game. It is not enforced: a matrix edited into a
different ordering still scores, it just changes which strategies pay off.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, ValidationError

from trustsim.errors import ConfigurationError
from trustsim.models.moves import Move

logger = logging.getLogger(__name__)


DEFAULT_PAYOFFS: dict[str, float] = {
    "P": 0.0,
    "S": -1.0,
    "R": 2.0,
    "T": 3.0,
}

# Short payoff keys to field names
_KEY_TO_FIELD: dict[str, str] = {
    "P": "punishment",
    "S": "sucker",
    "R": "reward",
    "T": "temptation",
}


class PayoffMatrix(BaseModel):
    """The four payoff values of a symmetric 2x2 Prisoner's Dilemma.

    Attributes:
        punishment: P, both defect
        sucker: S, self cooperates, other defects
        reward: R, both cooperate
        temptation: T, self defects, other cooperates
    """

    model_config = ConfigDict(validate_assignment=True)

    punishment: float = DEFAULT_PAYOFFS["P"]
    sucker: float = DEFAULT_PAYOFFS["S"]
    reward: float = DEFAULT_PAYOFFS["R"]
    temptation: float = DEFAULT_PAYOFFS["T"]

    def score(self, self_move: Move, other_move: Move) -> float:
        """Payoff for the agent playing self_move against other_move."""
        if self_move is Move.COOPERATE:
            if other_move is Move.COOPERATE:
                return self.reward
            return self.sucker
        if other_move is Move.COOPERATE:
            return self.temptation
        return self.punishment

    def set_value(self, key: str, value: float) -> None:
        """Overwrite one payoff value.

        Args:
            key: One of "P", "S", "R", "T" (or the matching field name)
            value: New payoff. No range validation is applied.

        Raises:
            ConfigurationError: If key is not a payoff name or value is not a number
        """
        field_name = _KEY_TO_FIELD.get(key.upper(), key.lower())
        if field_name not in _KEY_TO_FIELD.values():
            raise ConfigurationError(
                f"Unknown payoff key: {key}. Valid keys: {list(_KEY_TO_FIELD.keys())}"
            )
        try:
            setattr(self, field_name, value)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid payoff value for {key}: {value!r}") from e

        if not self.is_canonical:
            logger.warning(
                f"Payoffs are not in canonical order T > R > P > S: {self.as_dict()}"
            )

    def reset_to_default(self) -> None:
        """Restore the default payoffs {P: 0, S: -1, R: 2, T: 3}."""
        for key, value in DEFAULT_PAYOFFS.items():
            setattr(self, _KEY_TO_FIELD[key], value)

    @property
    def is_canonical(self) -> bool:
        """Whether T > R > P > S holds."""
        return self.temptation > self.reward > self.punishment > self.sucker

    def as_dict(self) -> dict[str, float]:
        """Payoffs keyed by their short names."""
        return {key: getattr(self, field_name) for key, field_name in _KEY_TO_FIELD.items()}


__all__ = [
    "DEFAULT_PAYOFFS",
    "PayoffMatrix",
]
