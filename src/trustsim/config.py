"""Simulation configuration for trustsim.

This module provides the SimulationConfig model and helpers that read
defaults from the environment, so a host or script can tune a run without
code changes.

Environment variables:
    TRUSTSIM_POPULATION_SIZE: agents per generation (default 25)
    TRUSTSIM_ELIMINATION_COUNT: agents culled and cloned per generation (default 5)
    TRUSTSIM_TURNS: rounds per match (default 10)
    TRUSTSIM_NOISE: probability of a flipped move (default 0.05)
    TRUSTSIM_SEED: random seed (unset for a nondeterministic run)
"""

from __future__ import annotations

import os
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from trustsim.errors import ConfigurationError

# Default configuration (can be overridden via environment variables)
DEFAULT_POPULATION_SIZE = 25
DEFAULT_ELIMINATION_COUNT = 5
DEFAULT_TURNS = 10
DEFAULT_NOISE = 0.05


class SimulationConfig(BaseModel):
    """Tunable parameters for tournaments and evolution.

    Attributes:
        population_size: Agents per generation (fixed across generations)
        elimination_count: Agents removed and cloned each generation
        turns: Rounds per match
        noise: Probability that a resolved move is flipped (0-1)
        seed: Seed for the shared random source (None for nondeterministic)
    """

    model_config = ConfigDict(frozen=True)

    population_size: int = Field(default=DEFAULT_POPULATION_SIZE, ge=2)
    elimination_count: int = Field(default=DEFAULT_ELIMINATION_COUNT, ge=0)
    turns: int = Field(default=DEFAULT_TURNS, ge=0)
    noise: float = Field(default=DEFAULT_NOISE, ge=0.0, le=1.0)
    seed: Optional[int] = None

    @model_validator(mode="after")
    def validate_elimination_restores_size(self) -> "SimulationConfig":
        # Cloning the top k must not reach into the bottom k being removed
        if self.elimination_count > self.population_size // 2:
            raise ValueError(
                f"elimination_count must be at most half the population "
                f"({self.population_size // 2}), got {self.elimination_count}"
            )
        return self


def get_population_size() -> int:
    """Get configured population size from environment."""
    return int(os.environ.get("TRUSTSIM_POPULATION_SIZE", DEFAULT_POPULATION_SIZE))


def get_elimination_count() -> int:
    """Get configured elimination count from environment."""
    return int(os.environ.get("TRUSTSIM_ELIMINATION_COUNT", DEFAULT_ELIMINATION_COUNT))


def get_turns() -> int:
    """Get configured turns per match from environment."""
    return int(os.environ.get("TRUSTSIM_TURNS", DEFAULT_TURNS))


def get_noise() -> float:
    """Get configured noise probability from environment."""
    return float(os.environ.get("TRUSTSIM_NOISE", DEFAULT_NOISE))


def get_seed() -> Optional[int]:
    """Get configured random seed from environment."""
    seed = os.environ.get("TRUSTSIM_SEED")
    if seed is None or seed == "":
        return None
    return int(seed)


def build_config(**overrides: Any) -> SimulationConfig:
    """Build a SimulationConfig from environment defaults and overrides.

    Overrides whose value is None fall back to the environment.

    Args:
        **overrides: Any SimulationConfig field

    Returns:
        Validated SimulationConfig

    Raises:
        ConfigurationError: If a value is invalid or an environment variable is malformed
    """
    try:
        values: dict[str, Any] = {
            "population_size": get_population_size(),
            "elimination_count": get_elimination_count(),
            "turns": get_turns(),
            "noise": get_noise(),
            "seed": get_seed(),
        }
    except ValueError as e:
        raise ConfigurationError(f"Malformed TRUSTSIM_* environment variable: {e}") from e

    values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return SimulationConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid simulation configuration: {e}") from e


__all__ = [
    "DEFAULT_POPULATION_SIZE",
    "DEFAULT_ELIMINATION_COUNT",
    "DEFAULT_TURNS",
    "DEFAULT_NOISE",
    "SimulationConfig",
    "build_config",
    "get_population_size",
    "get_elimination_count",
    "get_turns",
    "get_noise",
    "get_seed",
]
