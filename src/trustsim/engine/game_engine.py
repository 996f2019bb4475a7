"""Core game engine for trustsim.

Plays the three levels of the Iterated Prisoner's Dilemma:

1. ROUND - both agents decide, optional noise flips, payoffs, both remember
2. MATCH - a fixed number of rounds between one pair, histories persist
3. TOURNAMENT - every unordered pair of a population plays one match

Noise models a communication error. After an agent decides, its move is
flipped with probability `noise`. The flipped move replaces the intended one
everywhere: it is scored, the opponent sees it, and the actor's own history
records it.

Scores accumulate into each Agent's running score. Nothing here resets
scores; callers that want a fresh tally call Agent.reset_all() first.
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Sequence

from trustsim.agent import Agent
from trustsim.errors import ConfigurationError, InvariantViolation
from trustsim.models.moves import Move, format_moves
from trustsim.models.payoffs import PayoffMatrix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundResult:
    """Outcome of a single round.

    Attributes:
        move_a: Move agent A actually played (after noise)
        move_b: Move agent B actually played (after noise)
        score_a: Payoff to agent A
        score_b: Payoff to agent B
        intended_a: Move agent A decided on (before noise)
        intended_b: Move agent B decided on (before noise)
    """

    move_a: Move
    move_b: Move
    score_a: float
    score_b: float
    intended_a: Move
    intended_b: Move

    @property
    def outcome_code(self) -> str:
        """Two-letter outcome code, e.g. "CD" (A cooperated, B defected)."""
        return f"{self.move_a.value}{self.move_b.value}"

    @property
    def flipped_a(self) -> bool:
        return self.move_a is not self.intended_a

    @property
    def flipped_b(self) -> bool:
        return self.move_b is not self.intended_b


@dataclass
class MatchResult:
    """Outcome of a repeated game between two agents.

    Attributes:
        agent_a_id: ID of agent A
        agent_b_id: ID of agent B
        rounds: Every round in order
        total_a: Agent A's total payoff for this match
        total_b: Agent B's total payoff for this match
    """

    agent_a_id: int
    agent_b_id: int
    rounds: list[RoundResult] = field(default_factory=list)
    total_a: float = 0.0
    total_b: float = 0.0

    @property
    def moves_a(self) -> list[Move]:
        return [r.move_a for r in self.rounds]

    @property
    def moves_b(self) -> list[Move]:
        return [r.move_b for r in self.rounds]


@dataclass
class TournamentResult:
    """Outcome of a round-robin tournament.

    Attributes:
        agent_ids: Agent IDs in population order
        scores: Cumulative score per agent ID after the tournament
        pairings: (agent_a_id, agent_b_id) for every match played
        matches: Match results in the order they were played
    """

    agent_ids: list[int]
    scores: dict[int, float]
    pairings: list[tuple[int, int]] = field(default_factory=list)
    matches: list[MatchResult] = field(default_factory=list)

    def ranking(self) -> list[int]:
        """Agent IDs by descending score, ties broken by population order."""
        order = range(len(self.agent_ids))
        ranked = sorted(order, key=lambda i: (-self.scores[self.agent_ids[i]], i))
        return [self.agent_ids[i] for i in ranked]

    def ranked_scores(self) -> list[tuple[int, float]]:
        """(agent_id, score) pairs in ranking order."""
        return [(agent_id, self.scores[agent_id]) for agent_id in self.ranking()]


def validate_noise(noise: float) -> float:
    """Check that noise is a probability.

    Raises:
        ConfigurationError: If noise is outside [0, 1]
    """
    if not 0.0 <= noise <= 1.0:
        raise ConfigurationError(f"noise must be in [0, 1], got {noise}")
    return noise


def _apply_noise(move: Move, noise: float, rng: random.Random) -> Move:
    """Flip a move with probability noise."""
    if noise > 0.0 and rng.random() < noise:
        return move.opposite
    return move


def play_one_round(
    agent_a: Agent,
    agent_b: Agent,
    payoffs: Optional[PayoffMatrix] = None,
    noise: float = 0.0,
    rng: Optional[random.Random] = None,
) -> RoundResult:
    """Play a single round between two agents.

    Both agents decide from their current state, noise is applied to each
    decision independently, then both agents are scored and remember the
    (possibly flipped) moves.

    Args:
        agent_a: First agent
        agent_b: Second agent
        payoffs: Payoff matrix (default payoffs if None)
        noise: Probability of flipping each agent's move
        rng: Random source for noise

    Returns:
        RoundResult for the round

    Raises:
        InvariantViolation: If an agent is paired with itself
        ConfigurationError: If noise is outside [0, 1]
    """
    if agent_a is agent_b:
        raise InvariantViolation(f"Agent {agent_a.agent_id} cannot play against itself")
    validate_noise(noise)
    if payoffs is None:
        payoffs = PayoffMatrix()
    if rng is None:
        rng = random.Random()

    intended_a = agent_a.play()
    intended_b = agent_b.play()

    move_a = _apply_noise(intended_a, noise, rng)
    move_b = _apply_noise(intended_b, noise, rng)

    score_a = payoffs.score(move_a, move_b)
    score_b = payoffs.score(move_b, move_a)

    agent_a.remember(move_a, move_b, score_a)
    agent_b.remember(move_b, move_a, score_b)

    return RoundResult(
        move_a=move_a,
        move_b=move_b,
        score_a=score_a,
        score_b=score_b,
        intended_a=intended_a,
        intended_b=intended_b,
    )


def play_repeated_game(
    agent_a: Agent,
    agent_b: Agent,
    turns: int,
    noise: float = 0.0,
    payoffs: Optional[PayoffMatrix] = None,
    rng: Optional[random.Random] = None,
) -> MatchResult:
    """Play `turns` rounds between two agents.

    Histories persist across all rounds of the match. This function does not
    reset match state; the caller resets at the start of a fresh pairing.

    Args:
        agent_a: First agent
        agent_b: Second agent
        turns: Number of rounds
        noise: Probability of flipping each agent's move
        payoffs: Payoff matrix (default payoffs if None)
        rng: Random source for noise

    Returns:
        MatchResult with every round and both totals

    Raises:
        InvariantViolation: If turns is negative or an agent is paired with itself
        ConfigurationError: If noise is outside [0, 1]
    """
    if turns < 0:
        raise InvariantViolation(f"turns must be non-negative, got {turns}")
    if agent_a is agent_b:
        raise InvariantViolation(f"Agent {agent_a.agent_id} cannot play against itself")
    validate_noise(noise)
    if payoffs is None:
        payoffs = PayoffMatrix()
    if rng is None:
        rng = random.Random()

    result = MatchResult(agent_a_id=agent_a.agent_id, agent_b_id=agent_b.agent_id)
    for _ in range(turns):
        round_result = play_one_round(agent_a, agent_b, payoffs=payoffs, noise=noise, rng=rng)
        result.rounds.append(round_result)
        result.total_a += round_result.score_a
        result.total_b += round_result.score_b

    logger.debug(
        f"Match {agent_a.kind.value}#{agent_a.agent_id} vs {agent_b.kind.value}#{agent_b.agent_id}: "
        f"{format_moves(result.moves_a)}/{format_moves(result.moves_b)} "
        f"-> {result.total_a}/{result.total_b}"
    )
    return result


def play_one_tournament(
    agents: Sequence[Agent],
    turns: int,
    noise: float = 0.0,
    payoffs: Optional[PayoffMatrix] = None,
    rng: Optional[random.Random] = None,
) -> TournamentResult:
    """Play a round-robin tournament over a population.

    Every unordered pair of distinct agents plays exactly one match. Match
    state is reset before each pairing; match totals accumulate into each
    agent's running score.

    Args:
        agents: The population
        turns: Rounds per match
        noise: Probability of flipping each agent's move
        payoffs: Payoff matrix (default payoffs if None)
        rng: Random source for noise

    Returns:
        TournamentResult with scores, pairings and matches

    Raises:
        InvariantViolation: If an agent or agent ID appears twice, or turns is negative
        ConfigurationError: If noise is outside [0, 1]
    """
    if turns < 0:
        raise InvariantViolation(f"turns must be non-negative, got {turns}")
    if len({id(agent) for agent in agents}) != len(agents):
        raise InvariantViolation("Population contains the same agent more than once")
    if len({agent.agent_id for agent in agents}) != len(agents):
        raise InvariantViolation("Population contains duplicate agent IDs")
    validate_noise(noise)
    if payoffs is None:
        payoffs = PayoffMatrix()
    if rng is None:
        rng = random.Random()

    result = TournamentResult(
        agent_ids=[agent.agent_id for agent in agents],
        scores={},
    )

    for agent_a, agent_b in itertools.combinations(agents, 2):
        agent_a.reset_match_state()
        agent_b.reset_match_state()
        match = play_repeated_game(agent_a, agent_b, turns, noise=noise, payoffs=payoffs, rng=rng)
        result.pairings.append((agent_a.agent_id, agent_b.agent_id))
        result.matches.append(match)

    result.scores = {agent.agent_id: agent.score for agent in agents}

    logger.debug(
        f"Tournament complete: {len(agents)} agents, {len(result.pairings)} pairings, "
        f"{turns} turns, noise={noise}"
    )
    return result


__all__ = [
    "RoundResult",
    "MatchResult",
    "TournamentResult",
    "validate_noise",
    "play_one_round",
    "play_repeated_game",
    "play_one_tournament",
]
