"""Move definitions for the Iterated Prisoner's Dilemma."""

from enum import Enum


class Move(Enum):
    """A single agent's choice in one round."""

    COOPERATE = "C"
    DEFECT = "D"

    @property
    def opposite(self) -> "Move":
        """The other move (used for noise flips and win-stay/lose-shift)."""
        if self is Move.COOPERATE:
            return Move.DEFECT
        return Move.COOPERATE


COOPERATE = Move.COOPERATE
DEFECT = Move.DEFECT


def format_moves(moves: list[Move]) -> str:
    """Render a move sequence as a compact string, e.g. "CDDC"."""
    return "".join(m.value for m in moves)


__all__ = [
    "Move",
    "COOPERATE",
    "DEFECT",
    "format_moves",
]
