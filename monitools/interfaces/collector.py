"""
Collector interface definitions for monitools.

A collector drives one probe for a bounded number of repetitions, writes the
resulting series to its sink and reports a single ``CollectionOutcome``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class CollectionOutcome:
    """Result a collector reports to the orchestrator.

    Attributes:
        collector: Name of the collector that produced this outcome.
        success: False only when the series could not be written to the sink.
        sink_path: Path of the file the series was (or should have been) written to.
        samples_recorded: Number of samples in the series, failures included.
        failed_samples: How many of those samples are failure markers.
        reason: Human readable cause of a failed outcome.
        error: The exception behind a failed outcome, if any.
    """
    collector: str
    success: bool
    sink_path: Optional[str] = None
    samples_recorded: int = 0
    failed_samples: int = 0
    reason: Optional[str] = None
    error: Optional[Exception] = field(default=None, compare=False, repr=False)

    @classmethod
    def succeeded(cls, collector: str, sink_path: str, samples_recorded: int,
                  failed_samples: int = 0) -> 'CollectionOutcome':
        return cls(collector=collector, success=True, sink_path=sink_path,
                   samples_recorded=samples_recorded, failed_samples=failed_samples)

    @classmethod
    def failed(cls, collector: str, reason: str, sink_path: Optional[str] = None,
               samples_recorded: int = 0, failed_samples: int = 0,
               error: Optional[Exception] = None) -> 'CollectionOutcome':
        return cls(collector=collector, success=False, sink_path=sink_path,
                   samples_recorded=samples_recorded, failed_samples=failed_samples,
                   reason=reason, error=error)


class CollectorInterface(ABC):
    """Interface for collectors.

    Implementations must return exactly one outcome from ``run()`` and must
    not raise: every failure is expressed in the returned outcome.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier used in log messages and in the outcome."""
        pass

    @abstractmethod
    def run(self) -> CollectionOutcome:
        """Collect, write the sink and return the outcome."""
        pass
