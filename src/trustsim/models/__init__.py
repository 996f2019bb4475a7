"""trustsim models.

This module exports the core value types for the simulation.
"""

from .moves import COOPERATE, DEFECT, Move, format_moves
from .payoffs import DEFAULT_PAYOFFS, PayoffMatrix

__all__ = [
    # Moves
    "Move",
    "COOPERATE",
    "DEFECT",
    "format_moves",
    # Payoffs
    "DEFAULT_PAYOFFS",
    "PayoffMatrix",
]
