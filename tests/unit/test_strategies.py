"""Unit tests for the strategy catalog.

Tests cover:
- Registry: every StrategyKind has an implementation, lookup by name
- Each decision rule, including first moves and memory handling
- RandomStrategy reproducibility with a seeded random source
"""

import random

import pytest

from trustsim.agent import Agent
from trustsim.engine.game_engine import play_repeated_game
from trustsim.errors import ConfigurationError
from trustsim.models.moves import Move, format_moves
from trustsim.strategies import (
    STRATEGIES,
    AlwaysCooperate,
    AlwaysDefect,
    Grudge,
    MatchMemory,
    Pavlov,
    Prober,
    RandomStrategy,
    StrategyKind,
    TitForTat,
    TitForTwoTats,
    get_strategy,
    list_strategy_kinds,
)

C = Move.COOPERATE
D = Move.DEFECT


def play_moves(kind_a, kind_b, turns):
    """Play a noiseless match and return both move strings."""
    agent_a = Agent(0, kind_a)
    agent_b = Agent(1, kind_b)
    match = play_repeated_game(agent_a, agent_b, turns)
    return format_moves(match.moves_a), format_moves(match.moves_b)


# =============================================================================
# Registry Tests
# =============================================================================


class TestRegistry:
    """Tests for the STRATEGIES lookup table and get_strategy."""

    def test_all_eight_kinds_registered(self):
        assert set(STRATEGIES) == set(StrategyKind)
        assert len(StrategyKind) == 8

    def test_registered_classes_report_their_kind(self):
        for kind, strategy_cls in STRATEGIES.items():
            assert strategy_cls.kind is kind

    def test_lookup_by_loose_name(self):
        assert isinstance(get_strategy("tit_for_tat"), TitForTat)
        assert isinstance(get_strategy("Tit-For-Tat"), TitForTat)
        assert isinstance(get_strategy("titfortat"), TitForTat)
        assert isinstance(get_strategy("always defect"), AlwaysDefect)
        assert isinstance(get_strategy(StrategyKind.PAVLOV), Pavlov)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_strategy("sneaky")
        assert "Unknown strategy kind" in str(exc_info.value)

    def test_list_strategy_kinds(self):
        assert "grudge" in list_strategy_kinds()
        assert len(list_strategy_kinds()) == 8

    @pytest.mark.parametrize("kind", list(StrategyKind))
    def test_every_strategy_opens_with_a_legal_move(self, kind):
        strategy = get_strategy(kind, rng=random.Random(0))
        assert strategy.decide([], [], MatchMemory()) in (C, D)


# =============================================================================
# Decision Rule Tests
# =============================================================================


class TestTitForTat:
    def test_cooperates_first(self):
        assert TitForTat().decide([], [], MatchMemory()) is C

    def test_mirrors_last_opponent_move(self):
        strategy = TitForTat()
        assert strategy.decide([C], [D], MatchMemory()) is D
        assert strategy.decide([C, D], [D, C], MatchMemory()) is C


class TestConstantStrategies:
    def test_always_defect(self):
        assert AlwaysDefect().decide([], [], MatchMemory()) is D
        assert AlwaysDefect().decide([D], [C], MatchMemory()) is D

    def test_always_cooperate(self):
        assert AlwaysCooperate().decide([], [], MatchMemory()) is C
        assert AlwaysCooperate().decide([C], [D], MatchMemory()) is C


class TestGrudge:
    def test_cooperates_until_betrayed_then_defects_forever(self):
        strategy = Grudge()
        memory = MatchMemory()
        assert strategy.decide([], [], memory) is C

        memory = strategy.remember(C, C, memory)
        assert strategy.decide([C], [C], memory) is C

        memory = strategy.remember(C, D, memory)
        assert memory.betrayed
        assert strategy.decide([C, C], [C, D], memory) is D

        # Opponent returning to cooperation does not restore trust
        memory = strategy.remember(D, C, memory)
        assert strategy.decide([C, C, D], [C, D, C], memory) is D

    def test_fresh_memory_trusts_again(self):
        assert Grudge().decide([], [], MatchMemory()) is C


class TestProber:
    def test_opening_against_cooperator_then_tit_for_tat(self):
        prober, _ = play_moves(StrategyKind.PROBER, StrategyKind.ALWAYS_COOPERATE, 6)
        assert prober == "CDCCCC"

    def test_defects_forever_after_retaliation(self):
        """Tit for tat answers the round 2 probe in round 3."""
        prober, tft = play_moves(StrategyKind.PROBER, StrategyKind.TIT_FOR_TAT, 6)
        assert tft == "CCDCCD"
        assert prober == "CDCCDD"

    def test_against_always_defect(self):
        prober, _ = play_moves(StrategyKind.PROBER, StrategyKind.ALWAYS_DEFECT, 6)
        assert prober == "CDCCDD"

    def test_round_one_defection_does_not_count(self):
        strategy = Prober()
        memory = MatchMemory()
        rounds = [(C, D), (D, C), (C, C), (C, C)]
        for own, other in rounds:
            memory = strategy.remember(own, other, memory)

        assert not memory.probe_retaliated
        assert strategy.decide([C, D, C, C], [D, C, C, C], memory) is C


class TestTitForTwoTats:
    def test_forgives_single_defection(self):
        strategy = TitForTwoTats()
        assert strategy.decide([], [], MatchMemory()) is C
        assert strategy.decide([C], [D], MatchMemory()) is C
        assert strategy.decide([C, C], [C, D], MatchMemory()) is C

    def test_defects_after_two_defections(self):
        strategy = TitForTwoTats()
        assert strategy.decide([C, C], [D, D], MatchMemory()) is D
        assert strategy.decide([C, C, D], [D, D, C], MatchMemory()) is C


class TestPavlov:
    def test_cooperates_first(self):
        assert Pavlov().decide([], [], MatchMemory()) is C

    @pytest.mark.parametrize(
        "own_last,opponent_last,expected",
        [
            (C, C, C),  # reward: stay
            (D, C, D),  # temptation: stay
            (C, D, D),  # sucker: shift
            (D, D, C),  # punishment: shift
        ],
    )
    def test_win_stay_lose_shift(self, own_last, opponent_last, expected):
        assert Pavlov().decide([own_last], [opponent_last], MatchMemory()) is expected


class TestRandomStrategy:
    def test_same_seed_same_moves(self):
        a = RandomStrategy(rng=random.Random(7))
        b = RandomStrategy(rng=random.Random(7))
        moves_a = [a.decide([], [], MatchMemory()) for _ in range(50)]
        moves_b = [b.decide([], [], MatchMemory()) for _ in range(50)]
        assert moves_a == moves_b

    def test_produces_both_moves(self, seeded_rng):
        strategy = RandomStrategy(rng=seeded_rng)
        moves = {strategy.decide([], [], MatchMemory()) for _ in range(200)}
        assert moves == {C, D}
