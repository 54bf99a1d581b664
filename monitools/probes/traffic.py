"""
Received/transmitted MiB on the VM's network interface.

The counters come from ``ifconfig <interface>``; if ifconfig is not installed
the same counters are read from /proc/net/dev. Each sample is a pair
``(rx_mib, tx_mib)`` of cumulative totals.
"""

import re
from typing import Optional, Tuple

from monitools.config import IFCONFIG_BIN, VM_INTERFACE
from monitools.errors import ProbeTransientError
from monitools.models import PairSample, SampleKind
from monitools.probes.base import BaseProbe

MIB = 1024 * 1024
PROC_NET_DEV = "/proc/net/dev"

# net-tools >= 2.0: "RX packets 1234  bytes 5678 (5.5 KiB)"
# net-tools 1.x:    "RX bytes:5678 (5.5 KiB)  TX bytes:910 (910.0 B)"
RE_RX_BYTES = re.compile(r'RX (?:packets \d+\s+)?bytes[\s:]+(\d+)')
RE_TX_BYTES = re.compile(r'TX (?:packets \d+\s+)?bytes[\s:]+(\d+)')


def parse_ifconfig_bytes(output: str) -> Tuple[Optional[int], Optional[int]]:
    """Extract the RX and TX byte counters from ifconfig output.

    Returns:
        (rx_bytes, tx_bytes); a side that cannot be found is None.

    Example:
        >>> parse_ifconfig_bytes("RX packets 10  bytes 2097152 (2.0 MiB)\\n"
        ...                      "TX packets 5  bytes 1048576 (1.0 MiB)")
        (2097152, 1048576)
    """
    rx_match = RE_RX_BYTES.search(output)
    tx_match = RE_TX_BYTES.search(output)
    rx = int(rx_match.group(1)) if rx_match else None
    tx = int(tx_match.group(1)) if tx_match else None
    return rx, tx


def parse_proc_net_dev_bytes(content: str, interface: str) -> Tuple[Optional[int], Optional[int]]:
    """Extract RX/TX byte counters of one interface from /proc/net/dev."""
    # Skip the two header lines
    for line in content.strip().split('\n')[2:]:
        if ':' not in line:
            continue
        name, stats = line.split(':', 1)
        if name.strip() != interface:
            continue
        fields = stats.split()
        if len(fields) < 9:
            return None, None
        try:
            return int(fields[0]), int(fields[8])
        except ValueError:
            return None, None
    return None, None


def bytes_to_mib(value: int) -> float:
    return round(value / MIB, 2)


class TrafficProbe(BaseProbe):
    name = "traffic"
    kind = SampleKind.PAIR
    single_shot = False

    def __init__(self, logger, executor=None, timeout=None, interface: str = VM_INTERFACE,
                 proc_net_dev: str = PROC_NET_DEV):
        super().__init__(logger, executor=executor, timeout=timeout)
        self.interface = interface
        self.proc_net_dev = proc_net_dev

    def _read_counters(self) -> Tuple[Optional[int], Optional[int]]:
        command = [IFCONFIG_BIN, self.interface]
        stdout, stderr, return_code = self.executor.execute(command, timeout=self.timeout)
        if return_code == 0:
            return parse_ifconfig_bytes(stdout)
        if return_code == 127:
            self.logger.debug(f"[{self.name}] ifconfig not available, reading {self.proc_net_dev}")
            try:
                with open(self.proc_net_dev, 'r') as f:
                    counters = parse_proc_net_dev_bytes(f.read(), self.interface)
            except OSError as e:
                raise ProbeTransientError(f"could not read {self.proc_net_dev}: {e}", probe=self.name)
            if counters == (None, None):
                raise ProbeTransientError(
                    f"interface `{self.interface}` not found in {self.proc_net_dev}", probe=self.name
                )
            return counters
        raise ProbeTransientError(
            f"could not capture output of the `ifconfig {self.interface}` command",
            probe=self.name,
            command=" ".join(command),
            stderr=(stderr or "").strip(),
            timed_out=return_code is None,
        )

    def observe(self) -> PairSample:
        rx, tx = self._read_counters()
        if rx is None:
            self.logger.warning(f"[{self.name}] could not parse RX, recording 0")
        if tx is None:
            self.logger.warning(f"[{self.name}] could not parse TX, recording 0")
        return PairSample(
            rx=bytes_to_mib(rx) if rx is not None else 0.0,
            tx=bytes_to_mib(tx) if tx is not None else 0.0,
        )
