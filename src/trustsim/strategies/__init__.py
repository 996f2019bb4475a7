"""Strategy catalog for trustsim.

All strategies implement the Strategy base class interface and are looked
up by StrategyKind through get_strategy().
"""

from trustsim.strategies.base import (
    MatchMemory,
    Strategy,
    StrategyKind,
    get_strategy,
    list_strategy_kinds,
    resolve_kind,
)
from trustsim.strategies.catalog import (
    STRATEGIES,
    AlwaysCooperate,
    AlwaysDefect,
    Grudge,
    Pavlov,
    Prober,
    RandomStrategy,
    TitForTat,
    TitForTwoTats,
)

__all__ = [
    # Base classes and types
    "Strategy",
    "StrategyKind",
    "MatchMemory",
    # Factory functions
    "get_strategy",
    "list_strategy_kinds",
    "resolve_kind",
    # Catalog
    "STRATEGIES",
    "TitForTat",
    "AlwaysDefect",
    "AlwaysCooperate",
    "Grudge",
    "Prober",
    "TitForTwoTats",
    "Pavlov",
    "RandomStrategy",
]
