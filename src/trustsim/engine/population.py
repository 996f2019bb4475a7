"""Population construction helpers."""

from __future__ import annotations

import random
from collections import Counter
from typing import Mapping, Optional, Sequence

from trustsim.agent import Agent
from trustsim.errors import ConfigurationError
from trustsim.strategies.base import StrategyKind, resolve_kind

# Starting mix shown in the sandbox: mostly trusting, a few cheaters and copycats
DEFAULT_DISTRIBUTION: dict[StrategyKind, int] = {
    StrategyKind.ALWAYS_COOPERATE: 15,
    StrategyKind.ALWAYS_DEFECT: 5,
    StrategyKind.TIT_FOR_TAT: 5,
}


def create_population(
    distribution: Optional[Mapping[StrategyKind | str, int]] = None,
    rng: Optional[random.Random] = None,
) -> list[Agent]:
    """Build a population from a strategy distribution.

    Agents are laid out in mapping order, each kind in a contiguous block,
    with sequential IDs starting at 0.

    Args:
        distribution: Number of agents per strategy kind (DEFAULT_DISTRIBUTION if None)
        rng: Random source shared by stochastic strategies

    Returns:
        List of freshly created agents

    Raises:
        ConfigurationError: If a kind is unknown or a count is negative
    """
    if distribution is None:
        distribution = DEFAULT_DISTRIBUTION

    agents: list[Agent] = []
    for kind, count in distribution.items():
        strategy_kind = resolve_kind(kind)
        if count < 0:
            raise ConfigurationError(f"Agent count for {strategy_kind.value} must be non-negative, got {count}")
        for _ in range(count):
            agents.append(Agent(len(agents), strategy_kind, rng=rng))
    return agents


def count_by_kind(agents: Sequence[Agent]) -> dict[StrategyKind, int]:
    """Number of agents per strategy kind, with zero for absent kinds."""
    counts = Counter(agent.kind for agent in agents)
    return {kind: counts.get(kind, 0) for kind in StrategyKind}


__all__ = [
    "DEFAULT_DISTRIBUTION",
    "create_population",
    "count_by_kind",
]
