"""
Cluster start latency.

One invocation is one full lifecycle cycle: ``crc start`` with the pull
secret and bundle, a ``crc status`` check that the VM is running, then
``crc delete -f``. The sample is the time from issuing the start until the
status check confirmed the VM is running. The delete always runs, also when
the start failed, so the next cycle begins from a clean state.
"""

import time

from monitools.config import DEFAULT_LIFECYCLE_TIMEOUT
from monitools.errors import ProbeTransientError
from monitools.models import DurationSample, SampleKind
from monitools.probes.base import BaseProbe
from monitools.probes.crc import is_crc_running, run_crc_command


class StartLatencyProbe(BaseProbe):
    name = "start_times"
    kind = SampleKind.DURATION
    single_shot = False

    def __init__(self, logger, pull_secret_path: str, bundle_path: str, executor=None,
                 timeout: float = DEFAULT_LIFECYCLE_TIMEOUT, clock=time.monotonic):
        super().__init__(logger, executor=executor, timeout=timeout)
        self.pull_secret_path = pull_secret_path
        self.bundle_path = bundle_path
        self.clock = clock

    def start_args(self):
        return ["start", "-p", self.pull_secret_path, "-b", self.bundle_path]

    def observe(self) -> DurationSample:
        try:
            started_at = self.clock()
            if not run_crc_command(self.executor, self.start_args(), self.logger, timeout=self.timeout):
                raise ProbeTransientError("`crc start` failed", probe=self.name)
            if not is_crc_running(self.executor):
                raise ProbeTransientError("CRC VM is not running after `crc start`", probe=self.name)
            elapsed = self.clock() - started_at
        finally:
            if not run_crc_command(self.executor, ["delete", "-f"], self.logger, timeout=self.timeout):
                self.logger.warning(f"[{self.name}] `crc delete -f` failed, next start may be affected")

        self.logger.verbose(f"[{self.name}] cluster started in {elapsed:.1f}s")
        return DurationSample(round(elapsed, 3))
