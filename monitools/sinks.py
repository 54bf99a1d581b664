"""
Sinks: the files a collector writes its series to.

Every sink is written at most once. The data goes to a temporary file next to
the destination which is then renamed over it, so a reader never sees a half
written file; a failed write leaves no destination file behind.

Serialized forms:
    numeric  -> indented JSON array of floats, failures as -1 (query failed)
                and -2 (target absent)
    duration -> indented JSON array of seconds, same failure encoding
    pair     -> indented JSON array of [rx, tx] arrays, failures as [0, 0]
    blob     -> the raw bytes, failures as an empty file
"""

import json
import os
from abc import ABC, abstractmethod
from typing import Any, List, Union

from monitools.config import QUERY_FAILED_VALUE, TARGET_ABSENT_VALUE
from monitools.errors import ErrorCode, SinkIOError
from monitools.error_messages import format_error
from monitools.models import (
    BlobSample,
    DurationSample,
    NumericSample,
    PairSample,
    QueryFailed,
    Sample,
    SampleKind,
    Series,
    TargetAbsent,
)

JSON_INDENT = 1


def encode_sample(kind: SampleKind, sample: Sample) -> Any:
    """Encode one sample for the sink file of a series of ``kind``."""
    if kind is SampleKind.PAIR:
        if isinstance(sample, PairSample):
            return [sample.rx, sample.tx]
        return [0.0, 0.0]

    if kind is SampleKind.BLOB:
        return sample.data if isinstance(sample, BlobSample) else b""

    if isinstance(sample, QueryFailed):
        return QUERY_FAILED_VALUE
    if isinstance(sample, TargetAbsent):
        return TARGET_ABSENT_VALUE
    if isinstance(sample, NumericSample):
        return sample.value
    if isinstance(sample, DurationSample):
        return sample.seconds
    raise TypeError(f"Cannot encode {type(sample).__name__} in a {kind.value} series")


def encode_series(series: Series) -> List[Any]:
    return [encode_sample(series.kind, sample) for sample in series]


class Sink(ABC):
    """A destination file receiving exactly one serialized series."""

    binary = False

    def __init__(self, path: str):
        self.path = path
        self._written = False

    @property
    def written(self) -> bool:
        return self._written

    @abstractmethod
    def serialize(self, series: Series) -> Union[str, bytes]:
        """Render the whole series as the file payload."""
        pass

    def write(self, series: Series) -> None:
        """Serialize ``series`` to the sink file.

        Raises:
            SinkIOError: If the sink was already written, or the file cannot be
                created or written.
        """
        if self._written:
            raise SinkIOError(
                f"Sink {self.path} was already written",
                path=self.path,
                operation="write",
                code=ErrorCode.SINK_ALREADY_WRITTEN,
            )
        # Only one attempt is allowed per sink, successful or not.
        self._written = True

        payload = self.serialize(series)
        tmp_path = f"{self.path}.tmp"
        mode = 'wb' if self.binary else 'w'

        try:
            f = open(tmp_path, mode)
        except OSError as e:
            raise SinkIOError(
                format_error('SINK_CREATE_FAILED', path=self.path, error=e.strerror or e),
                path=self.path,
                operation="create",
                os_error=str(e),
                code=ErrorCode.SINK_CREATE_FAILED,
            ) from e

        try:
            with f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            try:
                os.remove(tmp_path)
            except OSError:
                pass
            raise SinkIOError(
                format_error('SINK_WRITE_FAILED', path=self.path, error=e.strerror or e),
                path=self.path,
                operation="write",
                os_error=str(e),
                code=ErrorCode.SINK_WRITE_FAILED,
            ) from e

    @abstractmethod
    def load(self):
        """Read the written file back."""
        pass


class JsonSink(Sink):
    """Numeric, duration and pair series as an indented JSON array."""

    def serialize(self, series: Series) -> str:
        if series.kind is SampleKind.BLOB:
            raise TypeError("Blob series are written with BlobSink")
        return json.dumps(encode_series(series), indent=JSON_INDENT)

    def load(self) -> List[Any]:
        with open(self.path, 'r') as f:
            return json.load(f)


class BlobSink(Sink):
    """Raw bytes of a blob series (normally a single sample)."""

    binary = True

    def serialize(self, series: Series) -> bytes:
        if series.kind is not SampleKind.BLOB:
            raise TypeError(f"BlobSink cannot write a {series.kind.value} series")
        return b"".join(encode_series(series))

    def load(self) -> bytes:
        with open(self.path, 'rb') as f:
            return f.read()


def sink_for(kind: SampleKind, path: str) -> Sink:
    """Choose the sink type matching a series kind."""
    if kind is SampleKind.BLOB:
        return BlobSink(path)
    return JsonSink(path)
