"""
Tests for the Collector in monitools.collector.

Tests cover:
- Series length for repeated and single-shot probes
- Sleep cadence between repetitions
- Failure samples recorded in place
- Exactly one outcome per run, success or failure
"""

import json

import pytest

from monitools.collector import Collector
from monitools.errors import ConfigurationError, SinkIOError
from monitools.models import NumericSample, PairSample, QueryFailed, SampleKind, TargetAbsent
from monitools.sinks import JsonSink, sink_for
from tests.fixtures import ScriptedProbe, blob_probe, numeric_probe


def make_collector(probe, path, reps=3, nap=0, logger=None, sleeps=None):
    recorded = sleeps if sleeps is not None else []
    return Collector(probe, sink_for(probe.kind, str(path)), reps=reps, nap=nap,
                     logger=logger, sleep=recorded.append)


class TestCollectorSampling:

    def test_cpu_scenario_records_sentinels(self, tmp_path, capturing_logger):
        probe = ScriptedProbe("cpu", SampleKind.NUMERIC,
                              [NumericSample(12.5), QueryFailed("top failed"), TargetAbsent("no qemu")])
        path = tmp_path / "cpu.json"

        outcome = make_collector(probe, path, reps=3, logger=capturing_logger).run()

        assert outcome.success
        assert outcome.samples_recorded == 3
        assert outcome.failed_samples == 2
        assert json.loads(path.read_text()) == [12.5, -1.0, -2.0]

    @pytest.mark.parametrize("reps", [0, 1, 5])
    def test_repeated_series_length_equals_reps(self, tmp_path, capturing_logger, reps):
        probe = numeric_probe(values=[1.0])
        collector = make_collector(probe, tmp_path / "cpu.json", reps=reps, logger=capturing_logger)

        collector.run()

        assert len(collector.series) == reps
        assert probe.invocations == reps

    def test_single_shot_probe_invoked_once(self, tmp_path, capturing_logger):
        probe = blob_probe(data=b'{"stats": []}')
        path = tmp_path / "crictl-stats.json"
        collector = make_collector(probe, path, reps=5, nap=1, logger=capturing_logger)

        outcome = collector.run()

        assert outcome.success
        assert probe.invocations == 1
        assert len(collector.series) == 1
        assert path.read_bytes() == b'{"stats": []}'

    def test_sleeps_between_repetitions_only(self, tmp_path, capturing_logger):
        sleeps = []
        collector = make_collector(numeric_probe(), tmp_path / "cpu.json", reps=4, nap=2,
                                   logger=capturing_logger, sleeps=sleeps)
        collector.run()
        assert sleeps == [2, 2, 2]

    def test_no_sleep_when_nap_is_zero(self, tmp_path, capturing_logger):
        sleeps = []
        collector = make_collector(numeric_probe(), tmp_path / "cpu.json", reps=3, nap=0,
                                   logger=capturing_logger, sleeps=sleeps)
        collector.run()
        assert sleeps == []

    def test_series_is_frozen_after_run(self, tmp_path, capturing_logger):
        collector = make_collector(numeric_probe(), tmp_path / "cpu.json", reps=2, logger=capturing_logger)
        assert collector.series is None
        collector.run()
        assert collector.series.frozen

    def test_raising_probe_recorded_as_query_failed(self, tmp_path, capturing_logger):
        probe = ScriptedProbe("traffic", SampleKind.PAIR,
                              [PairSample(1.0, 2.0), RuntimeError("boom"), PairSample(3.0, 4.0)])
        path = tmp_path / "traffic.json"

        outcome = make_collector(probe, path, reps=3, logger=capturing_logger).run()

        assert outcome.success
        assert outcome.failed_samples == 1
        assert json.loads(path.read_text()) == [[1.0, 2.0], [0.0, 0.0], [3.0, 4.0]]
        capturing_logger.assert_logged('warning', 'boom')

    def test_failed_samples_logged_as_warning(self, tmp_path, capturing_logger):
        probe = ScriptedProbe("cpu", SampleKind.NUMERIC, [QueryFailed("x")])
        make_collector(probe, tmp_path / "cpu.json", reps=2, logger=capturing_logger).run()
        capturing_logger.assert_logged('warning', '2 of 2 sample(s) failed')


class TestCollectorOutcome:

    def test_missing_directory_is_failure_outcome(self, tmp_path, capturing_logger):
        path = tmp_path / "gone" / "cpu.json"
        outcome = make_collector(numeric_probe(), path, reps=2, logger=capturing_logger).run()

        assert not outcome.success
        assert outcome.collector == "cpu"
        assert outcome.sink_path == str(path)
        assert isinstance(outcome.error, SinkIOError)
        assert str(path) in outcome.reason
        capturing_logger.assert_logged('error', 'cpu')

    def test_run_never_raises_on_serialization_error(self, tmp_path, capturing_logger):
        # A blob series handed to a JSON sink cannot be serialized
        probe = blob_probe()
        collector = Collector(probe, JsonSink(str(tmp_path / "node.json")), reps=1, nap=0,
                              logger=capturing_logger)

        outcome = collector.run()

        assert not outcome.success
        assert isinstance(outcome.error, TypeError)

    def test_outcome_names_the_probe(self, tmp_path, capturing_logger):
        collector = make_collector(numeric_probe(name="traffic_probe"), tmp_path / "t.json",
                                   logger=capturing_logger)
        assert collector.name == "traffic_probe"
        assert collector.run().collector == "traffic_probe"


class TestCollectorValidation:

    def test_negative_reps_rejected(self, tmp_path, capturing_logger):
        with pytest.raises(ConfigurationError):
            make_collector(numeric_probe(), tmp_path / "cpu.json", reps=-1, logger=capturing_logger)

    def test_negative_nap_rejected(self, tmp_path, capturing_logger):
        with pytest.raises(ConfigurationError):
            make_collector(numeric_probe(), tmp_path / "cpu.json", nap=-0.5, logger=capturing_logger)
