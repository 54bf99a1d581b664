"""
Probe interface definitions for monitools.

A probe is the leaf capability the collection core drives: each call to
``invoke()`` makes one observation and returns one Sample. How the value is
obtained (local process table, ifconfig, an SSH session, crc commands) is
private to the probe.
"""

from abc import ABC, abstractmethod

from monitools.models import Sample, SampleKind


class ProbeInterface(ABC):
    """Interface for metric probes.

    Contract:
    - ``invoke()`` is synchronous and may be called repeatedly.
    - It returns a failure marker sample (``QueryFailed``/``TargetAbsent``)
      instead of raising when an observation cannot be made.
    - Single-shot probes are invoked once per collector run regardless of
      the repetition count.

    Example:
        class ConstantProbe(ProbeInterface):
            name = "constant"
            kind = SampleKind.NUMERIC

            def invoke(self):
                return NumericSample(1.0)
    """

    #: Short identifier used in log messages and outcomes.
    name: str = "probe"
    #: The successful sample type produced by this probe.
    kind: SampleKind = SampleKind.NUMERIC
    #: True when one invocation captures the whole metric.
    single_shot: bool = False

    @abstractmethod
    def invoke(self) -> Sample:
        """Make one observation.

        Returns:
            A successful sample of ``self.kind`` or a failure marker.
        """
        pass
