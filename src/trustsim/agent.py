"""Agents for trustsim.

An agent couples a strategy with the state it accumulates while playing:
its own and its opponent's move history for the current match, the
strategy's match memory, and a running score.
"""

from __future__ import annotations

import random
from typing import Optional

from trustsim.models.moves import Move
from trustsim.strategies.base import MatchMemory, Strategy, StrategyKind, get_strategy


class Agent:
    """A strategy-bearing participant in matches and tournaments.

    The strategy kind is fixed for the agent's lifetime. Histories and
    memory belong to the current match; score accumulates until reset_all().

    Attributes:
        agent_id: Identity of this agent within its population
        strategy: The decision policy
        own_history: This agent's moves in the current match
        opponent_history: The current opponent's moves in the current match
        score: Running total across rounds and matches
        memory: Strategy scratch state for the current match
    """

    def __init__(
        self,
        agent_id: int,
        kind: StrategyKind | str,
        rng: Optional[random.Random] = None,
    ):
        """Initialize agent.

        Args:
            agent_id: Identity of this agent
            kind: Strategy kind (enum member or name)
            rng: Random source for stochastic strategies

        Raises:
            ConfigurationError: If the strategy kind is unknown
        """
        self.agent_id = agent_id
        self.strategy: Strategy = get_strategy(kind, rng=rng)
        self._rng = rng
        self.own_history: list[Move] = []
        self.opponent_history: list[Move] = []
        self.score: float = 0.0
        self.memory = MatchMemory()

    @property
    def kind(self) -> StrategyKind:
        """The agent's strategy kind."""
        return self.strategy.kind

    def play(self) -> Move:
        """Choose the next move from the current histories and memory."""
        return self.strategy.decide(self.own_history, self.opponent_history, self.memory)

    def remember(self, own_move: Move, other_move: Move, payoff: float) -> None:
        """Record a completed round.

        Args:
            own_move: Move this agent played
            other_move: Move the opponent played
            payoff: This agent's payoff for the round
        """
        self.own_history.append(own_move)
        self.opponent_history.append(other_move)
        self.memory = self.strategy.remember(own_move, other_move, self.memory)
        self.score += payoff

    def reset_match_state(self) -> None:
        """Clear histories and memory before a new pairing. Score is kept."""
        self.own_history = []
        self.opponent_history = []
        self.memory = MatchMemory()

    def reset_all(self) -> None:
        """Clear histories, memory and score."""
        self.reset_match_state()
        self.score = 0.0

    def clone(self, agent_id: int) -> "Agent":
        """Create a fresh agent with the same strategy kind.

        The clone does not inherit score, history or memory.
        """
        return Agent(agent_id, self.kind, rng=self._rng)

    def __repr__(self) -> str:
        return f"Agent(id={self.agent_id}, kind={self.kind.value}, score={self.score})"


__all__ = ["Agent"]
