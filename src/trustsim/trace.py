"""Evolution trace recording for trustsim.

Records the observable outputs of an evolution run for debugging and
offline analysis:
- Tournament rankings
- Population composition after each generation
- Which agents were culled and cloned
"""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from trustsim.engine.evolution import EvolutionEngine, EvolutionEvent, StepResult


@dataclass
class TournamentRecord:
    """Ranking produced by one tournament."""

    generation: int
    ranking: list[tuple[int, float]]
    pairings: int


@dataclass
class GenerationRecord:
    """Population composition after one selection + reproduction step."""

    generation: int
    counts: dict[str, int]
    eliminated: list[int]
    clones: list[tuple[int, int]]


@dataclass
class EvolutionTrace:
    """Complete trace of an evolution run."""

    run_id: str
    config: dict[str, Any]
    payoffs: dict[str, float]
    start_time: str
    initial_counts: dict[str, int] = field(default_factory=dict)
    tournaments: list[TournamentRecord] = field(default_factory=list)
    generations: list[GenerationRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "run_id": self.run_id,
            "config": self.config,
            "payoffs": self.payoffs,
            "start_time": self.start_time,
            "initial_counts": self.initial_counts,
            "tournaments": [asdict(t) for t in self.tournaments],
            "generations": [asdict(g) for g in self.generations],
        }


class TraceRecorder:
    """Listener that records every step of an EvolutionEngine."""

    def __init__(self, engine: EvolutionEngine, run_id: Optional[str] = None):
        """Attach a recorder to an engine.

        Args:
            engine: Engine to record
            run_id: Identifier for the run (default: timestamp)
        """
        self.engine = engine
        if run_id is None:
            run_id = f"evolution_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

        self.trace = EvolutionTrace(
            run_id=run_id,
            config=engine.config.model_dump(),
            payoffs=engine.payoffs.as_dict(),
            start_time=datetime.now().isoformat(),
            initial_counts={kind.value: n for kind, n in engine.counts().items()},
        )
        engine.add_listener(self.record)

    def record(self, event: EvolutionEvent, result: StepResult) -> None:
        """Record one step result."""
        if event is EvolutionEvent.TOURNAMENT_COMPLETE and result.tournament is not None:
            self.trace.tournaments.append(
                TournamentRecord(
                    generation=result.generation,
                    ranking=result.tournament.ranked_scores(),
                    pairings=len(result.tournament.pairings),
                )
            )
        elif event is EvolutionEvent.GENERATION_ADVANCED:
            self.trace.generations.append(
                GenerationRecord(
                    generation=result.generation,
                    counts={kind.value: n for kind, n in result.snapshot.counts.items()},
                    eliminated=list(result.eliminated),
                    clones=list(result.clones),
                )
            )

    def detach(self) -> None:
        """Stop recording."""
        self.engine.remove_listener(self.record)

    def save(self, output_path: Path) -> Path:
        """Write the trace as JSON.

        Args:
            output_path: File to write (parent directories are created)

        Returns:
            The path written
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(self.trace.to_dict(), f, indent=2)
        return output_path


__all__ = [
    "TournamentRecord",
    "GenerationRecord",
    "EvolutionTrace",
    "TraceRecorder",
]
