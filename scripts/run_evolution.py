#!/usr/bin/env python3
"""
Evolution Simulation for trustsim

Runs the evolutionary loop from a starting strategy mix and prints how the
population composition changes generation by generation.

Each generation:
    1. Every pair of agents plays a repeated game of --turns rounds
    2. The --elimination lowest scorers are removed
    3. The --elimination highest scorers are cloned

Examples:
    uv run python scripts/run_evolution.py
    uv run python scripts/run_evolution.py --generations 30 --noise 0.1 --seed 7
    uv run python scripts/run_evolution.py --mix tit_for_tat=10,always_defect=10,pavlov=5
"""

import argparse
import logging
import sys
from pathlib import Path

from trustsim.config import build_config
from trustsim.engine import DEFAULT_DISTRIBUTION, EvolutionEngine
from trustsim.errors import TrustSimError
from trustsim.strategies import StrategyKind, resolve_kind
from trustsim.trace import TraceRecorder


def parse_mix(text: str) -> dict[StrategyKind, int]:
    """Parse "kind=count,kind=count" into a distribution."""
    distribution: dict[StrategyKind, int] = {}
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        name, _, count = item.partition("=")
        distribution[resolve_kind(name)] = int(count)
    return distribution


def format_counts(counts: dict[StrategyKind, int]) -> str:
    return "  ".join(f"{kind.value}={n}" for kind, n in counts.items() if n)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Run the Iterated Prisoner's Dilemma evolution loop",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--generations", type=int, default=20,
                        help="Number of generations to run (default: 20)")
    parser.add_argument("--mix", type=str, default=None,
                        help="Starting mix as kind=count pairs (default: 15 cooperate, 5 defect, 5 tit for tat)")
    parser.add_argument("--turns", type=int, default=None,
                        help="Rounds per match (default: TRUSTSIM_TURNS or 10)")
    parser.add_argument("--noise", type=float, default=None,
                        help="Probability of a flipped move (default: TRUSTSIM_NOISE or 0.05)")
    parser.add_argument("--elimination", type=int, default=None,
                        help="Agents culled and cloned per generation (default: TRUSTSIM_ELIMINATION_COUNT or 5)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducibility")
    parser.add_argument("--trace", type=Path, default=None,
                        help="Write a JSON trace of the run to this file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        distribution = parse_mix(args.mix) if args.mix else DEFAULT_DISTRIBUTION
        config = build_config(
            population_size=sum(distribution.values()),
            elimination_count=args.elimination,
            turns=args.turns,
            noise=args.noise,
            seed=args.seed,
        )
        engine = EvolutionEngine.from_distribution(distribution, config=config)
    except (TrustSimError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    recorder = TraceRecorder(engine) if args.trace else None

    print(f"Generation   0: {format_counts(engine.counts())}")
    for snapshot in engine.run(args.generations):
        print(f"Generation {snapshot.generation:3d}: {format_counts(snapshot.counts)}")

    if recorder is not None:
        path = recorder.save(args.trace)
        print(f"Trace written to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
