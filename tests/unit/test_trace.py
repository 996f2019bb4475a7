"""Unit tests for trustsim.trace."""

import json

from trustsim.config import SimulationConfig
from trustsim.engine.evolution import EvolutionEngine
from trustsim.trace import TraceRecorder


def make_engine():
    config = SimulationConfig(population_size=6, elimination_count=1, turns=5, noise=0.0, seed=1)
    return EvolutionEngine.from_distribution(
        {"always_cooperate": 3, "always_defect": 3},
        config=config,
    )


class TestTraceRecorder:
    def test_records_tournaments_and_generations(self):
        engine = make_engine()
        recorder = TraceRecorder(engine, run_id="test_run")
        engine.run(2)

        trace = recorder.trace
        assert trace.run_id == "test_run"
        assert trace.initial_counts["always_cooperate"] == 3
        assert len(trace.tournaments) == 2
        assert len(trace.generations) == 2
        assert trace.tournaments[0].pairings == 15
        assert trace.generations[0].counts["always_defect"] == 4
        assert trace.generations[0].eliminated == [2]

    def test_detach_stops_recording(self):
        engine = make_engine()
        recorder = TraceRecorder(engine)
        engine.step()
        recorder.detach()
        engine.step()

        assert len(recorder.trace.tournaments) == 1
        assert recorder.trace.generations == []

    def test_save_writes_json(self, tmp_path):
        engine = make_engine()
        recorder = TraceRecorder(engine, run_id="saved")
        engine.run(1)

        path = recorder.save(tmp_path / "traces" / "run.json")
        data = json.loads(path.read_text())

        assert data["run_id"] == "saved"
        assert data["payoffs"] == {"P": 0.0, "S": -1.0, "R": 2.0, "T": 3.0}
        assert data["config"]["population_size"] == 6
        assert len(data["generations"]) == 1
