"""
CRI-O container stats from inside the CRC VM.

Runs ``sudo crictl stats -o json`` over SSH and captures the raw output.
"""

import os
from typing import List

from monitools.config import VM_SSH_HOST, VM_SSH_KEY, VM_SSH_USER, SSH_BIN
from monitools.models import BlobSample, SampleKind
from monitools.probes.base import BaseProbe


class RuntimeStatsProbe(BaseProbe):
    name = "crictl_stats"
    kind = SampleKind.BLOB
    single_shot = True

    def __init__(self, logger, executor=None, timeout=None, ssh_key: str = VM_SSH_KEY,
                 ssh_user: str = VM_SSH_USER, ssh_host: str = VM_SSH_HOST):
        super().__init__(logger, executor=executor, timeout=timeout)
        self.ssh_key = os.path.expanduser(ssh_key)
        self.ssh_user = ssh_user
        self.ssh_host = ssh_host

    def build_command(self) -> List[str]:
        cmd = [
            SSH_BIN,
            '-i', self.ssh_key,
            '-o', 'BatchMode=yes',
            '-o', 'StrictHostKeyChecking=no',
            '-o', 'UserKnownHostsFile=/dev/null',
        ]
        if self.timeout:
            cmd.extend(['-o', f'ConnectTimeout={int(self.timeout)}'])
        cmd.extend([f'{self.ssh_user}@{self.ssh_host}', 'sudo', 'crictl', 'stats', '-o', 'json'])
        return cmd

    def observe(self) -> BlobSample:
        return BlobSample(self.run_command(self.build_command(), text=False))
