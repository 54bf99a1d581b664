"""
Interface definitions for monitools.

Probe Interfaces:
    - ProbeInterface: one observation per ``invoke()`` call

Collector Interfaces:
    - CollectorInterface: drives a probe and reports one outcome
    - CollectionOutcome: success/failure value reported to the orchestrator
"""

from monitools.interfaces.probe import ProbeInterface

from monitools.interfaces.collector import (
    CollectorInterface,
    CollectionOutcome,
)

__all__ = [
    'ProbeInterface',
    'CollectorInterface',
    'CollectionOutcome',
]
