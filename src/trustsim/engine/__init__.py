"""Simulation engine for trustsim.

This module contains the core simulation logic:
- game_engine: rounds, repeated games and round-robin tournaments
- population: building populations from a strategy mix
- evolution: generation loop with selection and reproduction

Usage:
    from trustsim.engine import EvolutionEngine
    from trustsim.config import build_config

    engine = EvolutionEngine.from_distribution(
        {"tit_for_tat": 5, "always_defect": 5, "always_cooperate": 15},
        config=build_config(seed=42),
    )

    # Tournament, then selection + reproduction
    engine.step()
    result = engine.step()
    print(result.snapshot.counts)
"""

from trustsim.engine.evolution import (
    AgentSnapshot,
    EvolutionEngine,
    EvolutionEvent,
    EvolutionPhase,
    Listener,
    PopulationSnapshot,
    StepResult,
    rank_agents,
    select_and_reproduce,
)
from trustsim.engine.game_engine import (
    MatchResult,
    RoundResult,
    TournamentResult,
    play_one_round,
    play_one_tournament,
    play_repeated_game,
    validate_noise,
)
from trustsim.engine.population import (
    DEFAULT_DISTRIBUTION,
    count_by_kind,
    create_population,
)

__all__ = [
    # Game engine
    "RoundResult",
    "MatchResult",
    "TournamentResult",
    "play_one_round",
    "play_repeated_game",
    "play_one_tournament",
    "validate_noise",
    # Population
    "DEFAULT_DISTRIBUTION",
    "create_population",
    "count_by_kind",
    # Evolution
    "EvolutionEngine",
    "EvolutionPhase",
    "EvolutionEvent",
    "AgentSnapshot",
    "PopulationSnapshot",
    "StepResult",
    "Listener",
    "rank_agents",
    "select_and_reproduce",
]
