"""
Collector: drives one probe on a fixed cadence and writes one sink.

A repeated probe is invoked ``reps`` times with ``nap`` seconds of sleep
between invocations (none after the last one); a single-shot probe is
invoked exactly once. Failed observations are recorded as failure samples so
the series always has one entry per invocation. The finished series is
frozen and written to the sink once.

``run()`` never raises. It returns exactly one ``CollectionOutcome``:
failure only when the series could not be written (or something unexpected
broke the loop), success otherwise, however many samples failed.
"""

import time
from typing import Callable

from monitools.errors import ConfigurationError, SinkIOError
from monitools.interfaces.collector import CollectionOutcome, CollectorInterface
from monitools.interfaces.probe import ProbeInterface
from monitools.models import QueryFailed, Sample, Series, is_failure
from monitools.sinks import Sink


class Collector(CollectorInterface):
    """Runs a probe and owns its series and sink.

    Attributes:
        probe: The probe to invoke.
        sink: Destination for the finished series.
        reps: Number of invocations for repeated probes (ignored for single-shot probes).
        nap: Seconds to sleep between invocations.
        logger: Logger for per-sample and outcome messages.
    """

    def __init__(self, probe: ProbeInterface, sink: Sink, reps: int, nap: float, logger,
                 sleep: Callable[[float], None] = time.sleep):
        if reps < 0:
            raise ConfigurationError("Repetition count must not be negative",
                                     parameter="reps", expected=">= 0", actual=reps)
        if nap < 0:
            raise ConfigurationError("Sleep between repetitions must not be negative",
                                     parameter="nap", expected=">= 0", actual=nap)
        self.probe = probe
        self.sink = sink
        self.reps = reps
        self.nap = nap
        self.logger = logger
        self._sleep = sleep
        self._series = None

    @property
    def name(self) -> str:
        return self.probe.name

    @property
    def invocations(self) -> int:
        return 1 if self.probe.single_shot else self.reps

    @property
    def series(self):
        """The frozen series of the last run, or None before ``run()`` finished collecting."""
        return self._series

    def _invoke(self, index: int) -> Sample:
        try:
            return self.probe.invoke()
        except Exception as e:
            # Probes should not raise, but one bad sample must not end the series.
            self.logger.warning(f"[{self.name}] sample {index + 1} raised {type(e).__name__}: {e}")
            return QueryFailed(reason=str(e))

    def collect(self) -> Series:
        """Run the sampling loop and return the frozen series."""
        count = self.invocations
        series = Series(self.name, self.probe.kind, capacity=count)

        for i in range(count):
            sample = self._invoke(i)
            series.append(sample)
            if is_failure(sample):
                self.logger.verbose(f"[{self.name}] sample {i + 1}/{count} recorded as "
                                    f"{type(sample).__name__}: {sample.reason}")
            else:
                self.logger.ridiculous(f"[{self.name}] sample {i + 1}/{count}: {sample}")

            if i < count - 1 and self.nap > 0:
                self._sleep(self.nap)

        return series.freeze()

    def run(self) -> CollectionOutcome:
        self.logger.debug(f"[{self.name}] collecting {self.invocations} sample(s) into {self.sink.path}")

        try:
            series = self.collect()
        except Exception as e:
            self.logger.error(f"[{self.name}] collection loop failed: {e}")
            return CollectionOutcome.failed(self.name, reason=f"collection loop failed: {e}",
                                            sink_path=self.sink.path, error=e)
        self._series = series

        try:
            self.sink.write(series)
        except SinkIOError as e:
            self.logger.error(f"[{self.name}] {e.message}")
            return CollectionOutcome.failed(self.name, reason=e.message, sink_path=self.sink.path,
                                            samples_recorded=len(series),
                                            failed_samples=series.failure_count, error=e)
        except Exception as e:
            self.logger.error(f"[{self.name}] could not serialize series to {self.sink.path}: {e}")
            return CollectionOutcome.failed(self.name, reason=f"could not serialize series: {e}",
                                            sink_path=self.sink.path, samples_recorded=len(series),
                                            failed_samples=series.failure_count, error=e)

        if series.failure_count:
            self.logger.warning(f"[{self.name}] {series.failure_count} of {len(series)} sample(s) failed")
        self.logger.debug(f"[{self.name}] wrote {len(series)} sample(s) to {self.sink.path}")
        return CollectionOutcome.succeeded(self.name, sink_path=self.sink.path,
                                           samples_recorded=len(series),
                                           failed_samples=series.failure_count)
