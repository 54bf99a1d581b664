"""
Orchestrator: runs one collection campaign.

The orchestrator picks the collector set for the run mode, starts every
collector on its own worker thread and then joins them one by one in a fixed
declared order (not completion order). Each worker's ``Future`` is its
report channel and carries exactly one ``CollectionOutcome``.

State machine::

    IDLE -> LAUNCHING -> AWAITING_RESULTS -> DONE
                 \\               \\
                  +-> FAILED       +-> FAILED

Preconditions (cluster running, lifecycle inputs present, executables on
PATH) are checked while IDLE; a failure raises ``PreconditionError`` or
``DependencyError`` and nothing is launched. The first failed outcome during
the join stops the join and raises ``CollectorFailure``. Collectors still
running are not cancelled and finish writing their own files.
"""

import enum
import os
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Tuple

from monitools.collector import Collector
from monitools.config import (
    CPU_FILE,
    CRICTL_STATS_PREFIX,
    DATETIME_STR,
    DEFAULT_LIFECYCLE_TIMEOUT,
    DEFAULT_NAP_SECONDS,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_REPEATS,
    NODE_FILE,
    RUN_MODE,
    START_TIMES_FILE,
    TRAFFIC_FILE,
)
from monitools.dependency_check import validate_campaign_dependencies
from monitools.error_messages import format_error
from monitools.errors import CollectorFailure, ErrorCode, MonitoolsException, PreconditionError
from monitools.interfaces.collector import CollectionOutcome
from monitools.probes import (
    HostCPUProbe,
    NodeDescriptionProbe,
    RuntimeStatsProbe,
    StartLatencyProbe,
    TrafficProbe,
)
from monitools.probes.crc import get_crc_status
from monitools.progress import create_stage_progress
from monitools.sinks import sink_for
from monitools.utils import CommandExecutor


class CampaignState(enum.Enum):
    IDLE = "idle"
    LAUNCHING = "launching"
    AWAITING_RESULTS = "awaiting_results"
    DONE = "done"
    FAILED = "failed"


ALLOWED_TRANSITIONS = {
    CampaignState.IDLE: {CampaignState.LAUNCHING},
    CampaignState.LAUNCHING: {CampaignState.AWAITING_RESULTS, CampaignState.FAILED},
    CampaignState.AWAITING_RESULTS: {CampaignState.DONE, CampaignState.FAILED},
    CampaignState.DONE: set(),
    CampaignState.FAILED: set(),
}


@dataclass
class CampaignSettings:
    """Everything one campaign needs to know.

    Attributes:
        data_dir: Directory the sink files are written to (must exist).
        repeats: Samples per repeated collector, or start/delete cycles in lifecycle mode.
        nap: Seconds between samples of repeated steady-state collectors.
        run_mode: Which collector set to run.
        pull_secret: Pull secret file passed to ``crc start`` (lifecycle mode).
        bundle: CRC bundle passed to ``crc start`` (lifecycle mode).
        probe_timeout: Timeout for the external queries of the steady-state probes.
        lifecycle_timeout: Timeout for each ``crc start`` / ``crc delete``.
        check_dependencies: Look up required executables before launching.
        datetime_str: Run timestamp, used in the crictl stats file name.
    """
    data_dir: str
    repeats: int = DEFAULT_REPEATS
    nap: float = DEFAULT_NAP_SECONDS
    run_mode: RUN_MODE = RUN_MODE.STEADY_STATE
    pull_secret: Optional[str] = None
    bundle: Optional[str] = None
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    lifecycle_timeout: float = DEFAULT_LIFECYCLE_TIMEOUT
    check_dependencies: bool = True
    datetime_str: str = DATETIME_STR


# (collector, success message) in join order
LaunchPlan = List[Tuple[Collector, str]]


class Orchestrator:

    def __init__(self, settings: CampaignSettings, logger, executor: Optional[CommandExecutor] = None):
        self.settings = settings
        self.logger = logger
        self.executor = executor or CommandExecutor(logger, default_timeout=settings.probe_timeout)
        self.state = CampaignState.IDLE
        self.outcomes: List[CollectionOutcome] = []
        self.launched: List[str] = []

    def _transition(self, new_state: CampaignState) -> None:
        if new_state not in ALLOWED_TRANSITIONS[self.state]:
            raise MonitoolsException(
                f"Invalid campaign state transition {self.state.value} -> {new_state.value}",
                code=ErrorCode.COLLECTOR_STATE,
            )
        self.logger.debug(f"Campaign state: {self.state.value} -> {new_state.value}")
        self.state = new_state

    # ------------------------------------------------------------------
    # Preconditions
    # ------------------------------------------------------------------

    def check_preconditions(self) -> None:
        """Raise if the campaign cannot start.

        Raises:
            DependencyError: A required executable is missing.
            PreconditionError: The cluster is not running (steady state) or the
                pull secret / bundle are missing (lifecycle).
        """
        s = self.settings
        if s.check_dependencies:
            validate_campaign_dependencies(s.run_mode, logger=self.logger)

        if s.run_mode is RUN_MODE.LIFECYCLE_REPEAT:
            for what, flag, path in (("pull secret", "-p", s.pull_secret), ("CRC bundle", "-b", s.bundle)):
                if not path:
                    raise PreconditionError(
                        format_error('LIFECYCLE_INPUT_MISSING', what=what, flag=flag),
                        code=ErrorCode.LIFECYCLE_INPUT_MISSING,
                    )
                if not os.path.isfile(path):
                    raise PreconditionError(
                        format_error('LIFECYCLE_INPUT_NOT_FOUND', what=what, path=path),
                        code=ErrorCode.LIFECYCLE_INPUT_MISSING,
                    )
            return

        status = get_crc_status(self.executor)
        if status.get("crcStatus") != "Running":
            raise PreconditionError(
                format_error('CLUSTER_NOT_RUNNING', status=status.get("crcStatus", "unknown")),
                code=ErrorCode.CLUSTER_NOT_RUNNING,
                details=status.get("error", ""),
            )

    # ------------------------------------------------------------------
    # Collector set
    # ------------------------------------------------------------------

    def _collector(self, probe, filename: str) -> Collector:
        path = os.path.join(self.settings.data_dir, filename)
        return Collector(probe, sink_for(probe.kind, path), reps=self.settings.repeats,
                         nap=self.settings.nap, logger=self.logger)

    def build_collectors(self) -> LaunchPlan:
        """Collectors for the configured run mode, in join order."""
        s = self.settings
        log = self.logger

        if s.run_mode is RUN_MODE.LIFECYCLE_REPEAT:
            probe = StartLatencyProbe(log, s.pull_secret, s.bundle, executor=self.executor,
                                      timeout=s.lifecycle_timeout)
            collector = Collector(probe, sink_for(probe.kind, os.path.join(s.data_dir, START_TIMES_FILE)),
                                  reps=s.repeats, nap=0, logger=log)
            return [(collector, f"recorded start duration {s.repeats} times")]

        crictl_file = f"{CRICTL_STATS_PREFIX}{s.datetime_str}.json"
        return [
            (self._collector(TrafficProbe(log, executor=self.executor, timeout=s.probe_timeout), TRAFFIC_FILE),
             f"recorded traffic (RX/TX) {s.repeats} times at {s.nap} sec intervals"),
            (self._collector(HostCPUProbe(log), CPU_FILE),
             f"recorded CPU usage percentage {s.repeats} times at {s.nap} sec intervals"),
            (self._collector(RuntimeStatsProbe(log, executor=self.executor, timeout=s.probe_timeout), crictl_file),
             "crictl stats successfully retrieved"),
            (self._collector(NodeDescriptionProbe(log, executor=self.executor, timeout=s.probe_timeout), NODE_FILE),
             "node description successfully retrieved"),
        ]

    # ------------------------------------------------------------------
    # Launch and join
    # ------------------------------------------------------------------

    def launch(self, plan: LaunchPlan, pool: ThreadPoolExecutor) -> List[Tuple[Collector, str, Future]]:
        launched = []
        for collector, message in plan:
            future = pool.submit(collector.run)
            self.logger.verbose(f"going to record {collector.name} into {collector.sink.path}")
            launched.append((collector, message, future))
            self.launched.append(collector.name)
        return launched

    def _receive(self, collector: Collector, future: Future) -> CollectionOutcome:
        # Blocks until this collector's single outcome arrives.
        try:
            return future.result()
        except Exception as e:
            return CollectionOutcome.failed(collector.name, reason=f"collector raised {type(e).__name__}: {e}",
                                            sink_path=collector.sink.path, error=e)

    def join(self, launched: List[Tuple[Collector, str, Future]]) -> List[CollectionOutcome]:
        stages = [f"Waiting for {collector.name}" for collector, _, _ in launched]
        with create_stage_progress(stages, logger=self.logger) as advance_stage:
            for collector, message, future in launched:
                outcome = self._receive(collector, future)
                self.outcomes.append(outcome)

                if not outcome.success:
                    self._transition(CampaignState.FAILED)
                    self.logger.error(format_error('COLLECTOR_FAILED', collector=outcome.collector,
                                                   reason=outcome.reason))
                    raise CollectorFailure(
                        f"failed to record {outcome.collector}",
                        collector=outcome.collector,
                        sink_path=outcome.sink_path,
                        reason=outcome.reason,
                    )

                if outcome.failed_samples:
                    message = f"{message} ({outcome.failed_samples} failed sample(s))"
                self.logger.status(message)
                advance_stage()

        if len(self.outcomes) != len(self.launched):
            raise MonitoolsException(
                f"Received {len(self.outcomes)} outcome(s) for {len(self.launched)} collector(s)",
                code=ErrorCode.COLLECTOR_STATE,
            )
        self._transition(CampaignState.DONE)
        return self.outcomes

    def run(self) -> List[CollectionOutcome]:
        """Run the campaign and return the outcomes in join order.

        Raises:
            PreconditionError, DependencyError: Before anything is launched.
            CollectorFailure: On the first failed outcome during the join.
        """
        self.check_preconditions()

        self._transition(CampaignState.LAUNCHING)
        try:
            plan = self.build_collectors()
        except Exception:
            self._transition(CampaignState.FAILED)
            raise

        pool = ThreadPoolExecutor(max_workers=len(plan), thread_name_prefix="collector")
        try:
            launched = self.launch(plan, pool)
            self._transition(CampaignState.AWAITING_RESULTS)
            return self.join(launched)
        finally:
            # Running collectors are left to finish and write their files.
            pool.shutdown(wait=False)
