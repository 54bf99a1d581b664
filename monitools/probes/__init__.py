"""
Concrete probes for monitools.

Steady-state probes:
    - HostCPUProbe: CPU % of the hypervisor process (repeated)
    - TrafficProbe: RX/TX MiB on the VM interface (repeated)
    - RuntimeStatsProbe: crictl stats from inside the VM (single-shot)
    - NodeDescriptionProbe: node resource description (single-shot)

Lifecycle probe:
    - StartLatencyProbe: duration of one start/verify/delete cycle (repeated)
"""

from monitools.probes.base import BaseProbe
from monitools.probes.cpu import HostCPUProbe
from monitools.probes.lifecycle import StartLatencyProbe
from monitools.probes.node import NodeDescriptionProbe
from monitools.probes.runtime_stats import RuntimeStatsProbe
from monitools.probes.traffic import TrafficProbe

__all__ = [
    'BaseProbe',
    'HostCPUProbe',
    'TrafficProbe',
    'RuntimeStatsProbe',
    'NodeDescriptionProbe',
    'StartLatencyProbe',
]
