"""
CPU usage of the hypervisor process on the host.

The CRC VM runs as a ``qemu`` process (owned by the ``qemu`` user on most
distributions). Each sample is the CPU percentage of all matching processes,
measured over ``sample_interval`` seconds with psutil.

Failure encoding in the cpu.json file:
    -1  the process table could not be queried
    -2  no hypervisor process exists
"""

from typing import List

import psutil

from monitools.config import HYPERVISOR_PROCESS
from monitools.errors import ProbeAbsentTargetError, ProbeTransientError
from monitools.models import NumericSample, SampleKind
from monitools.probes.base import BaseProbe


class HostCPUProbe(BaseProbe):
    name = "cpu"
    kind = SampleKind.NUMERIC
    single_shot = False

    def __init__(self, logger, process_name: str = HYPERVISOR_PROCESS, sample_interval: float = 0.5):
        super().__init__(logger)
        self.process_name = process_name
        self.sample_interval = sample_interval

    def _matches(self, proc: psutil.Process) -> bool:
        info = proc.info
        name = info.get('name') or ''
        username = info.get('username') or ''
        return username == self.process_name or name.startswith(self.process_name)

    def find_processes(self) -> List[psutil.Process]:
        try:
            return [p for p in psutil.process_iter(['name', 'username']) if self._matches(p)]
        except psutil.Error as e:
            raise ProbeTransientError(f"could not list processes: {e}", probe=self.name)

    def observe(self) -> NumericSample:
        processes = self.find_processes()
        if not processes:
            raise ProbeAbsentTargetError(
                f"there is no `{self.process_name}` process",
                probe=self.name,
                target=self.process_name,
            )

        total = 0.0
        measured = 0
        for proc in processes:
            try:
                total += proc.cpu_percent(interval=self.sample_interval)
                measured += 1
            except psutil.NoSuchProcess:
                self.logger.debug(f"[{self.name}] pid {proc.pid} exited while sampling")
            except psutil.Error as e:
                raise ProbeTransientError(
                    f"could not read CPU usage of pid {proc.pid}: {e}", probe=self.name
                )

        if measured == 0:
            raise ProbeAbsentTargetError(
                f"all `{self.process_name}` processes exited while sampling",
                probe=self.name,
                target=self.process_name,
            )
        return NumericSample(round(total, 2))
