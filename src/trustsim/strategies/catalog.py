"""The strategy catalog.

Eight classic Iterated Prisoner's Dilemma strategies. All are deterministic
functions of move history and match memory except RandomStrategy, which
draws from the random source it was constructed with.
"""

from __future__ import annotations

from typing import ClassVar, Sequence

from trustsim.models.moves import Move
from trustsim.strategies.base import MatchMemory, Strategy, StrategyKind


class TitForTat(Strategy):
    """Reciprocator - Axelrod's famous strategy.

    Cooperate on the first move, then mirror the opponent's last move.

    Key properties:
    - Nice: never defects first
    - Retaliatory: responds to defection with defection
    - Forgiving: returns to cooperation if the opponent does
    """

    kind: ClassVar[StrategyKind] = StrategyKind.TIT_FOR_TAT
    name: ClassVar[str] = "Tit for Tat"
    description: ClassVar[str] = "Cooperates first, then copies the opponent's last move."

    def decide(
        self,
        own_history: Sequence[Move],
        opponent_history: Sequence[Move],
        memory: MatchMemory,
    ) -> Move:
        if not opponent_history:
            return Move.COOPERATE
        return opponent_history[-1]


class AlwaysDefect(Strategy):
    """Defects every round."""

    kind: ClassVar[StrategyKind] = StrategyKind.ALWAYS_DEFECT
    name: ClassVar[str] = "Always Defect"
    description: ClassVar[str] = "Defects every round."

    def decide(
        self,
        own_history: Sequence[Move],
        opponent_history: Sequence[Move],
        memory: MatchMemory,
    ) -> Move:
        return Move.DEFECT


class AlwaysCooperate(Strategy):
    """Cooperates every round."""

    kind: ClassVar[StrategyKind] = StrategyKind.ALWAYS_COOPERATE
    name: ClassVar[str] = "Always Cooperate"
    description: ClassVar[str] = "Cooperates every round."

    def decide(
        self,
        own_history: Sequence[Move],
        opponent_history: Sequence[Move],
        memory: MatchMemory,
    ) -> Move:
        return Move.COOPERATE


class Grudge(Strategy):
    """Punisher - cooperates until betrayed, then defects for the rest of the match.

    Once the opponent defects, there is no forgiveness within the match.
    The flag lives in match memory, so a new pairing starts trusting again.
    """

    kind: ClassVar[StrategyKind] = StrategyKind.GRUDGE
    name: ClassVar[str] = "Grudge"
    description: ClassVar[str] = "Cooperates until the opponent defects once, then always defects."

    def decide(
        self,
        own_history: Sequence[Move],
        opponent_history: Sequence[Move],
        memory: MatchMemory,
    ) -> Move:
        if memory.betrayed:
            return Move.DEFECT
        return Move.COOPERATE


class Prober(Strategy):
    """Opens with a fixed probe, then commits to a mode for the rest of the match.

    Strategic pattern:
    - Rounds 1-4: Cooperate, Defect, Cooperate, Cooperate
    - Opponent defected during rounds 2-4: always defect from round 5
    - Otherwise: tit for tat from round 5
    """

    kind: ClassVar[StrategyKind] = StrategyKind.PROBER
    name: ClassVar[str] = "Prober"
    description: ClassVar[str] = "Probes with C, D, C, C, then defects forever or plays tit for tat."

    OPENING: ClassVar[tuple[Move, ...]] = (
        Move.COOPERATE,
        Move.DEFECT,
        Move.COOPERATE,
        Move.COOPERATE,
    )

    def decide(
        self,
        own_history: Sequence[Move],
        opponent_history: Sequence[Move],
        memory: MatchMemory,
    ) -> Move:
        turn = len(own_history)
        if turn < len(self.OPENING):
            return self.OPENING[turn]

        if memory.probe_retaliated:
            return Move.DEFECT
        return opponent_history[-1]

    def remember(self, own_move: Move, opponent_move: Move, memory: MatchMemory) -> MatchMemory:
        memory = super().remember(own_move, opponent_move, memory)
        # rounds_played is now the 1-indexed number of the round just played
        if 2 <= memory.rounds_played <= len(self.OPENING) and opponent_move is Move.DEFECT:
            memory.probe_retaliated = True
        return memory


class TitForTwoTats(Strategy):
    """A more forgiving tit for tat: retaliates only after two defections in a row."""

    kind: ClassVar[StrategyKind] = StrategyKind.TIT_FOR_TWO_TATS
    name: ClassVar[str] = "Tit for Two Tats"
    description: ClassVar[str] = "Defects only if the opponent defected in both of the last two rounds."

    def decide(
        self,
        own_history: Sequence[Move],
        opponent_history: Sequence[Move],
        memory: MatchMemory,
    ) -> Move:
        if len(opponent_history) >= 2 and opponent_history[-1] is Move.DEFECT and opponent_history[-2] is Move.DEFECT:
            return Move.DEFECT
        return Move.COOPERATE


class Pavlov(Strategy):
    """Win-stay, lose-shift.

    A round is a "win" when the opponent cooperated (mutual cooperation or a
    successful defection). After a win, repeat the previous move; after a
    loss, switch to the other move. First move: cooperate.
    """

    kind: ClassVar[StrategyKind] = StrategyKind.PAVLOV
    name: ClassVar[str] = "Pavlov"
    description: ClassVar[str] = "Repeats its last move after a good outcome, switches after a bad one."

    def decide(
        self,
        own_history: Sequence[Move],
        opponent_history: Sequence[Move],
        memory: MatchMemory,
    ) -> Move:
        if not own_history:
            return Move.COOPERATE

        last_own = own_history[-1]
        if opponent_history[-1] is Move.COOPERATE:
            return last_own
        return last_own.opposite


class RandomStrategy(Strategy):
    """Uniformly random: cooperates or defects with equal probability."""

    kind: ClassVar[StrategyKind] = StrategyKind.RANDOM
    name: ClassVar[str] = "Random"
    description: ClassVar[str] = "Cooperates or defects at random."

    def decide(
        self,
        own_history: Sequence[Move],
        opponent_history: Sequence[Move],
        memory: MatchMemory,
    ) -> Move:
        return self._random.choice((Move.COOPERATE, Move.DEFECT))


# Lookup table from kind to implementation
STRATEGIES: dict[StrategyKind, type[Strategy]] = {
    StrategyKind.TIT_FOR_TAT: TitForTat,
    StrategyKind.ALWAYS_DEFECT: AlwaysDefect,
    StrategyKind.ALWAYS_COOPERATE: AlwaysCooperate,
    StrategyKind.GRUDGE: Grudge,
    StrategyKind.PROBER: Prober,
    StrategyKind.TIT_FOR_TWO_TATS: TitForTwoTats,
    StrategyKind.PAVLOV: Pavlov,
    StrategyKind.RANDOM: RandomStrategy,
}


__all__ = [
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
