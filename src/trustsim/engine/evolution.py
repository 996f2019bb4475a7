"""Evolution engine for trustsim.

Iterates a population over generations. Each generation is two steps:

1. IDLE -> SCORED: reset every agent's score and play a round-robin tournament
2. SCORED -> IDLE: cull the lowest scorers, clone the highest scorers,
   advance the generation counter

There is no terminal state and no internal timer. The caller drives step()
from whatever loop it owns (an animation frame, a timer, a script) and stops
by not calling it again.

Ranking is by descending score, with ties broken by population order, so
agents created earlier win ties and a run is fully determined by its inputs
and seed.

The engine is not reentrant: step() must not be called while another
step() on the same engine is running.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence

from pydantic import ValidationError

from trustsim.agent import Agent
from trustsim.config import SimulationConfig
from trustsim.engine.game_engine import TournamentResult, play_one_tournament
from trustsim.engine.population import count_by_kind, create_population
from trustsim.errors import ConfigurationError, InvariantViolation
from trustsim.models.payoffs import PayoffMatrix
from trustsim.strategies.base import StrategyKind

logger = logging.getLogger(__name__)


class EvolutionPhase(Enum):
    """Where the engine is within the current generation."""

    IDLE = "idle"  # Population exists, no tournament yet this generation
    SCORED = "scored"  # Tournament complete, scores available


class EvolutionEvent(Enum):
    """Notifications sent to listeners after each step."""

    TOURNAMENT_COMPLETE = "tournament_complete"
    GENERATION_ADVANCED = "generation_advanced"


@dataclass(frozen=True)
class AgentSnapshot:
    """One agent as seen by the host."""

    agent_id: int
    kind: StrategyKind
    score: float


@dataclass
class PopulationSnapshot:
    """Ordered view of the population at a point in time.

    Attributes:
        generation: Generation counter when the snapshot was taken
        phase: Engine phase when the snapshot was taken
        agents: Agents in population order
    """

    generation: int
    phase: EvolutionPhase
    agents: list[AgentSnapshot] = field(default_factory=list)

    @property
    def counts(self) -> dict[StrategyKind, int]:
        """Number of agents per strategy kind."""
        counts = {kind: 0 for kind in StrategyKind}
        for agent in self.agents:
            counts[agent.kind] += 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "generation": self.generation,
            "phase": self.phase.value,
            "agents": [
                {"agent_id": a.agent_id, "kind": a.kind.value, "score": a.score}
                for a in self.agents
            ],
            "counts": {kind.value: count for kind, count in self.counts.items()},
        }


@dataclass
class StepResult:
    """Result of a single step().

    Attributes:
        event: What the step did
        generation: Generation counter after the step
        snapshot: Population after the step
        tournament: Tournament result (tournament steps only)
        eliminated: IDs of culled agents (evolution steps only)
        clones: (parent_id, clone_id) pairs (evolution steps only)
    """

    event: EvolutionEvent
    generation: int
    snapshot: PopulationSnapshot
    tournament: Optional[TournamentResult] = None
    eliminated: list[int] = field(default_factory=list)
    clones: list[tuple[int, int]] = field(default_factory=list)


Listener = Callable[[EvolutionEvent, StepResult], None]


def rank_agents(agents: Sequence[Agent]) -> list[int]:
    """Population indices by descending score, ties by ascending index."""
    return sorted(range(len(agents)), key=lambda i: (-agents[i].score, i))


def select_and_reproduce(
    agents: Sequence[Agent],
    elimination_count: int,
    next_id: int,
) -> tuple[list[Agent], list[int], list[tuple[int, int]]]:
    """Cull the lowest scorers and clone the highest scorers.

    Survivors keep their relative order; clones are appended in rank order
    and receive sequential IDs starting at next_id. Clones inherit the
    strategy kind only.

    Args:
        agents: Scored population
        elimination_count: Number of agents to remove and to clone
        next_id: First ID to hand out to clones

    Returns:
        Tuple of (new population, eliminated IDs, (parent_id, clone_id) pairs)

    Raises:
        ConfigurationError: If elimination_count cannot restore the population size
    """
    size = len(agents)
    if elimination_count < 0 or elimination_count > size // 2:
        raise ConfigurationError(
            f"elimination_count must be between 0 and {size // 2} for a population of {size}, "
            f"got {elimination_count}"
        )

    ranked = rank_agents(agents)
    losers = set(ranked[size - elimination_count:]) if elimination_count else set()
    winners = ranked[:elimination_count]

    survivors = [agent for i, agent in enumerate(agents) if i not in losers]
    eliminated = [agents[i].agent_id for i in sorted(losers)]

    clones: list[Agent] = []
    lineage: list[tuple[int, int]] = []
    for offset, i in enumerate(winners):
        parent = agents[i]
        child = parent.clone(next_id + offset)
        clones.append(child)
        lineage.append((parent.agent_id, child.agent_id))

    return survivors + clones, eliminated, lineage


class EvolutionEngine:
    """Drives tournaments, selection and reproduction over generations.

    Attributes:
        population: Current population, in display order
        config: Simulation parameters
        payoffs: Payoff matrix shared by every match (edit it in place)
        generation: Completed generations
        phase: Current phase within the generation
        last_tournament: Result of the most recent tournament (None before the first)
    """

    def __init__(
        self,
        population: Sequence[Agent],
        config: Optional[SimulationConfig] = None,
        payoffs: Optional[PayoffMatrix] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the engine with an existing population.

        Args:
            population: Agents for generation 0
            config: Simulation parameters (sized to the population if None)
            payoffs: Payoff matrix (default payoffs if None)
            rng: Random source for noise (seeded from config.seed if None)

        Raises:
            ConfigurationError: If the population does not match config.population_size
        """
        if config is None:
            try:
                config = SimulationConfig(
                    population_size=len(population),
                    elimination_count=min(SimulationConfig().elimination_count, len(population) // 2),
                )
            except ValidationError as e:
                raise ConfigurationError(f"Invalid population for evolution: {e}") from e

        self.config = config
        self.payoffs = payoffs if payoffs is not None else PayoffMatrix()
        self._random = rng or random.Random(config.seed)
        self._listeners: list[Listener] = []
        self._stepping = False

        self.population: list[Agent] = []
        self.generation = 0
        self.phase = EvolutionPhase.IDLE
        self.last_tournament: Optional[TournamentResult] = None
        self._next_id = 0
        self.reset(population)

    @classmethod
    def from_distribution(
        cls,
        distribution: Optional[Mapping[StrategyKind | str, int]] = None,
        config: Optional[SimulationConfig] = None,
        payoffs: Optional[PayoffMatrix] = None,
        rng: Optional[random.Random] = None,
    ) -> "EvolutionEngine":
        """Create an engine with a fresh population built from a strategy mix.

        The same random source drives noise and the RANDOM strategy, so a
        seeded run is reproducible end to end.
        """
        if rng is None:
            rng = random.Random(config.seed if config is not None else None)
        population = create_population(distribution, rng=rng)
        return cls(population, config=config, payoffs=payoffs, rng=rng)

    def reset(self, population: Sequence[Agent]) -> None:
        """Replace the population and return to generation 0.

        Raises:
            ConfigurationError: If the population does not match config.population_size
        """
        if len(population) != self.config.population_size:
            raise ConfigurationError(
                f"Population has {len(population)} agents, "
                f"config.population_size is {self.config.population_size}"
            )

        self.population = list(population)
        for agent in self.population:
            agent.reset_all()
        self.generation = 0
        self.phase = EvolutionPhase.IDLE
        self.last_tournament = None
        self._next_id = max((agent.agent_id for agent in self.population), default=-1) + 1

    def update_config(self, **changes: Any) -> SimulationConfig:
        """Change turns, noise, elimination_count or seed between steps.

        A new seed re-seeds the shared random source in place, so the agents
        holding it (RANDOM strategies) follow the new stream too.

        Raises:
            ConfigurationError: If the new values are invalid or change population_size
        """
        if "population_size" in changes and changes["population_size"] != self.config.population_size:
            raise ConfigurationError("population_size cannot change without reset()")

        try:
            self.config = SimulationConfig(**{**self.config.model_dump(), **changes})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid simulation configuration: {e}") from e

        if "seed" in changes:
            self._random.seed(self.config.seed)
        return self.config

    def add_listener(self, listener: Listener) -> None:
        """Register a callback invoked after every step."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unregister a callback."""
        self._listeners.remove(listener)

    def snapshot(self) -> PopulationSnapshot:
        """Ordered view of the current population."""
        return PopulationSnapshot(
            generation=self.generation,
            phase=self.phase,
            agents=[AgentSnapshot(a.agent_id, a.kind, a.score) for a in self.population],
        )

    def counts(self) -> dict[StrategyKind, int]:
        """Number of agents per strategy kind in the current population."""
        return count_by_kind(self.population)

    def step(self) -> StepResult:
        """Advance the engine by one phase.

        IDLE: play a tournament and move to SCORED.
        SCORED: select and reproduce, advance the generation, move to IDLE.

        Returns:
            StepResult describing what happened

        Raises:
            InvariantViolation: If called while another step is running
            ConfigurationError: If reproduction does not restore the population size
        """
        if self._stepping:
            raise InvariantViolation("EvolutionEngine.step() is not reentrant")

        self._stepping = True
        try:
            if self.phase is EvolutionPhase.IDLE:
                result = self._run_tournament()
            else:
                result = self._advance_generation()
        finally:
            self._stepping = False

        for listener in list(self._listeners):
            listener(result.event, result)
        return result

    def run(self, generations: int) -> list[PopulationSnapshot]:
        """Step until `generations` more generations have completed.

        Returns:
            Snapshot after each completed generation
        """
        if generations < 0:
            raise InvariantViolation(f"generations must be non-negative, got {generations}")

        snapshots: list[PopulationSnapshot] = []
        target = self.generation + generations
        while self.generation < target:
            result = self.step()
            if result.event is EvolutionEvent.GENERATION_ADVANCED:
                snapshots.append(result.snapshot)
        return snapshots

    def _run_tournament(self) -> StepResult:
        for agent in self.population:
            agent.reset_all()

        tournament = play_one_tournament(
            self.population,
            turns=self.config.turns,
            noise=self.config.noise,
            payoffs=self.payoffs,
            rng=self._random,
        )
        self.last_tournament = tournament
        self.phase = EvolutionPhase.SCORED

        best_id, best_score = tournament.ranked_scores()[0]
        logger.debug(
            f"Generation {self.generation}: tournament scored, "
            f"leader #{best_id} with {best_score}"
        )
        return StepResult(
            event=EvolutionEvent.TOURNAMENT_COMPLETE,
            generation=self.generation,
            snapshot=self.snapshot(),
            tournament=tournament,
        )

    def _advance_generation(self) -> StepResult:
        size_before = len(self.population)
        population, eliminated, clones = select_and_reproduce(
            self.population,
            self.config.elimination_count,
            self._next_id,
        )
        if len(population) != size_before:
            raise ConfigurationError(
                f"Population size changed from {size_before} to {len(population)} during reproduction"
            )

        self.population = population
        self._next_id += len(clones)
        self.generation += 1
        self.phase = EvolutionPhase.IDLE

        counts = {kind.value: n for kind, n in self.counts().items() if n}
        logger.info(f"Generation {self.generation}: {counts}")

        return StepResult(
            event=EvolutionEvent.GENERATION_ADVANCED,
            generation=self.generation,
            snapshot=self.snapshot(),
            eliminated=eliminated,
            clones=clones,
        )


__all__ = [
    "EvolutionPhase",
    "EvolutionEvent",
    "AgentSnapshot",
    "PopulationSnapshot",
    "StepResult",
    "Listener",
    "rank_agents",
    "select_and_reproduce",
    "EvolutionEngine",
]
