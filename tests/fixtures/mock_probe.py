"""
Scripted probes for testing collectors and the orchestrator.

Each probe returns a predefined sequence of samples, so tests control
exactly what a collector records without touching the host.
"""

import threading
from typing import List, Optional, Sequence

from monitools.interfaces.probe import ProbeInterface
from monitools.models import BlobSample, NumericSample, Sample, SampleKind


class ScriptedProbe(ProbeInterface):
    """
    Probe returning ``samples`` one per invocation.

    Once the script is exhausted the last sample repeats. An Exception
    instance in the script is raised instead of returned.

    Example:
        probe = ScriptedProbe("cpu", SampleKind.NUMERIC,
                              [NumericSample(12.5), QueryFailed(), TargetAbsent()])
    """

    def __init__(self, name: str, kind: SampleKind, samples: Sequence, single_shot: bool = False,
                 started: Optional[threading.Event] = None, release: Optional[threading.Event] = None):
        self.name = name
        self.kind = kind
        self.single_shot = single_shot
        self.samples: List = list(samples)
        self.invocations = 0
        self.started = started
        self.release = release

    def invoke(self) -> Sample:
        if self.started is not None:
            self.started.set()
        if self.release is not None:
            self.release.wait(timeout=5)
        index = min(self.invocations, len(self.samples) - 1)
        self.invocations += 1
        sample = self.samples[index]
        if isinstance(sample, Exception):
            raise sample
        return sample


def numeric_probe(name: str = "cpu", values: Sequence[float] = (1.0,)) -> ScriptedProbe:
    return ScriptedProbe(name, SampleKind.NUMERIC, [NumericSample(v) for v in values])


def blob_probe(name: str = "node_description", data: bytes = b'{"items": []}') -> ScriptedProbe:
    return ScriptedProbe(name, SampleKind.BLOB, [BlobSample(data)], single_shot=True)
