"""trustsim - an Iterated Prisoner's Dilemma simulation core.

Agents carrying one of eight classic strategies play repeated games,
round-robin tournaments score a population, and an evolutionary loop culls
the worst and clones the best, generation after generation.
"""

from trustsim.agent import Agent
from trustsim.config import SimulationConfig, build_config
from trustsim.engine import (
    EvolutionEngine,
    EvolutionEvent,
    EvolutionPhase,
    MatchResult,
    PopulationSnapshot,
    RoundResult,
    StepResult,
    TournamentResult,
    create_population,
    play_one_round,
    play_one_tournament,
    play_repeated_game,
)
from trustsim.errors import ConfigurationError, InvariantViolation, TrustSimError
from trustsim.models import Move, PayoffMatrix
from trustsim.strategies import StrategyKind, get_strategy

__version__ = "0.1.0"

__all__ = [
    "Agent",
    "Move",
    "PayoffMatrix",
    "StrategyKind",
    "get_strategy",
    "SimulationConfig",
    "build_config",
    "RoundResult",
    "MatchResult",
    "TournamentResult",
    "play_one_round",
    "play_repeated_game",
    "play_one_tournament",
    "create_population",
    "EvolutionEngine",
    "EvolutionEvent",
    "EvolutionPhase",
    "PopulationSnapshot",
    "StepResult",
    "TrustSimError",
    "ConfigurationError",
    "InvariantViolation",
]
