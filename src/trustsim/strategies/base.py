"""Base strategy interface for trustsim.

A strategy is a decision policy over move history. Each agent owns one
strategy instance and one MatchMemory record; the record is the only
strategy state that survives between rounds, and it is reset at the start
of every pairing.

Strategies are a closed set identified by StrategyKind. Instances are
created through the STRATEGIES lookup table via get_strategy().
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Sequence

from trustsim.errors import ConfigurationError
from trustsim.models.moves import Move


class StrategyKind(Enum):
    """The eight strategy identifiers."""

    TIT_FOR_TAT = "tit_for_tat"
    ALWAYS_DEFECT = "always_defect"
    ALWAYS_COOPERATE = "always_cooperate"
    GRUDGE = "grudge"
    PROBER = "prober"
    TIT_FOR_TWO_TATS = "tit_for_two_tats"
    PAVLOV = "pavlov"
    RANDOM = "random"


@dataclass
class MatchMemory:
    """Strategy-specific scratch state for one pairing.

    Attributes:
        rounds_played: Rounds remembered so far in this match
        betrayed: Opponent has defected at least once (GRUDGE)
        probe_retaliated: Opponent defected during the probe rounds 2-4 (PROBER)
    """

    rounds_played: int = 0
    betrayed: bool = False
    probe_retaliated: bool = False


class Strategy(ABC):
    """Abstract base class for all strategies.

    Subclasses implement decide(). The default remember() counts rounds
    and tracks betrayal, which covers every strategy in the catalog that
    needs memory at all; PROBER extends it.
    """

    kind: ClassVar[StrategyKind]
    name: ClassVar[str] = "Strategy"
    description: ClassVar[str] = ""

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize strategy.

        Args:
            rng: Random source for stochastic strategies (seed it for reproducible runs)
        """
        self._random = rng or random.Random()

    @abstractmethod
    def decide(
        self,
        own_history: Sequence[Move],
        opponent_history: Sequence[Move],
        memory: MatchMemory,
    ) -> Move:
        """Choose the next move.

        Args:
            own_history: This agent's moves so far in the match
            opponent_history: Opponent's moves so far in the match
            memory: This agent's match memory

        Returns:
            The chosen move
        """
        pass

    def remember(self, own_move: Move, opponent_move: Move, memory: MatchMemory) -> MatchMemory:
        """Fold one completed round into match memory.

        Args:
            own_move: Move this agent played (as recorded)
            opponent_move: Move the opponent played (as recorded)
            memory: Memory record to update

        Returns:
            The updated memory record
        """
        memory.rounds_played += 1
        if opponent_move is Move.DEFECT:
            memory.betrayed = True
        return memory

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def resolve_kind(kind: StrategyKind | str) -> StrategyKind:
    """Resolve a StrategyKind from an enum member or a loosely formatted name."""
    if isinstance(kind, StrategyKind):
        return kind

    if isinstance(kind, str):
        type_name = kind.strip().lower().replace("-", "_").replace(" ", "_")
        for member in StrategyKind:
            if type_name in (member.value, member.value.replace("_", "")):
                return member

    raise ConfigurationError(
        f"Unknown strategy kind: {kind!r}. "
        f"Valid kinds: {[k.value for k in StrategyKind]}"
    )


def get_strategy(kind: StrategyKind | str, rng: Optional[random.Random] = None) -> Strategy:
    """Create a strategy instance by kind.

    Args:
        kind: StrategyKind member or its name (e.g. "tit_for_tat", "Tit-For-Tat")
        rng: Random source handed to the strategy

    Returns:
        New strategy instance

    Raises:
        ConfigurationError: If the kind is unknown
    """
    # Import here to avoid circular imports
    from trustsim.strategies.catalog import STRATEGIES

    strategy_kind = resolve_kind(kind)
    return STRATEGIES[strategy_kind](rng=rng)


def list_strategy_kinds() -> list[str]:
    """Names of all available strategy kinds."""
    return [k.value for k in StrategyKind]


__all__ = [
    "StrategyKind",
    "MatchMemory",
    "Strategy",
    "get_strategy",
    "resolve_kind",
    "list_strategy_kinds",
]
