"""
Data model for collected metrics.

A probe invocation produces exactly one Sample. Successful observations are
``NumericSample``, ``PairSample``, ``BlobSample`` or ``DurationSample``;
failed ones are the markers ``QueryFailed`` and ``TargetAbsent``. Markers are
kept as tagged values in memory and only turned into the numeric sentinels
(-1, -2, a zero pair) when a sink serializes the series.

A Series is the ordered, bounded sequence of samples owned by one collector.
Once the collection loop ends the collector freezes it and nothing may be
appended afterwards.
"""

import enum
from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union


class SampleKind(enum.Enum):
    NUMERIC = "numeric"
    PAIR = "pair"
    BLOB = "blob"
    DURATION = "duration"


@dataclass(frozen=True)
class NumericSample:
    """A single float, e.g. CPU %."""
    value: float


@dataclass(frozen=True)
class PairSample:
    """Received / transmitted MiB on an interface."""
    rx: float
    tx: float


@dataclass(frozen=True)
class BlobSample:
    """Raw bytes, e.g. a JSON dump from a remote command."""
    data: bytes


@dataclass(frozen=True)
class DurationSample:
    """Elapsed wall-clock time in seconds."""
    seconds: float


@dataclass(frozen=True)
class QueryFailed:
    """The query behind this sample failed."""
    reason: str = ""


@dataclass(frozen=True)
class TargetAbsent:
    """The monitored entity did not exist when the sample was taken."""
    reason: str = ""


Sample = Union[NumericSample, PairSample, BlobSample, DurationSample, QueryFailed, TargetAbsent]

FAILURE_SAMPLE_TYPES = (QueryFailed, TargetAbsent)

VALUE_TYPE_FOR_KIND = {
    SampleKind.NUMERIC: NumericSample,
    SampleKind.PAIR: PairSample,
    SampleKind.BLOB: BlobSample,
    SampleKind.DURATION: DurationSample,
}


def is_failure(sample: Sample) -> bool:
    return isinstance(sample, FAILURE_SAMPLE_TYPES)


class Series:
    """Ordered samples of one kind with a fixed maximum length.

    Attributes:
        name: Name of the metric stream (used in log messages).
        kind: The successful sample type this series accepts.
        capacity: Maximum number of samples (the requested repetition count).
    """

    def __init__(self, name: str, kind: SampleKind, capacity: int):
        if capacity < 0:
            raise ValueError(f"Series capacity must be >= 0, got {capacity}")
        self.name = name
        self.kind = kind
        self.capacity = capacity
        self._samples: List[Sample] = []
        self._frozen = False

    def append(self, sample: Sample) -> None:
        """Add the next sample in temporal order.

        Raises:
            RuntimeError: If the series is frozen or already at capacity.
            TypeError: If the sample does not match the series kind.
        """
        if self._frozen:
            raise RuntimeError(f"Series '{self.name}' is frozen")
        if len(self._samples) >= self.capacity:
            raise RuntimeError(f"Series '{self.name}' is full ({self.capacity} samples)")
        if not is_failure(sample) and not isinstance(sample, VALUE_TYPE_FOR_KIND[self.kind]):
            raise TypeError(
                f"Series '{self.name}' holds {self.kind.value} samples, got {type(sample).__name__}"
            )
        self._samples.append(sample)

    def freeze(self) -> "Series":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def samples(self) -> Tuple[Sample, ...]:
        return tuple(self._samples)

    @property
    def failure_count(self) -> int:
        return sum(1 for s in self._samples if is_failure(s))

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(tuple(self._samples))

    def __getitem__(self, index):
        return self._samples[index]

    def __repr__(self) -> str:
        return (f"Series(name={self.name!r}, kind={self.kind.value}, "
                f"len={len(self._samples)}, capacity={self.capacity}, frozen={self._frozen})")
