"""
Test fixtures package for monitools tests.

This package provides reusable mock classes for testing probes,
collectors and the orchestrator.
"""

from tests.fixtures.mock_logger import MockLogger, create_mock_logger
from tests.fixtures.mock_executor import MockCommandExecutor
from tests.fixtures.mock_probe import ScriptedProbe, blob_probe, numeric_probe
from tests.fixtures.sample_data import (
    SAMPLE_CRC_STATUS_RUNNING,
    SAMPLE_CRC_STATUS_STOPPED,
    SAMPLE_IFCONFIG_NEW,
    SAMPLE_IFCONFIG_OLD,
    SAMPLE_PROC_NET_DEV,
    SAMPLE_CRICTL_STATS,
    SAMPLE_NODES,
)

__all__ = [
    # Mock classes
    'MockLogger',
    'create_mock_logger',
    'MockCommandExecutor',
    'ScriptedProbe',
    'numeric_probe',
    'blob_probe',
    # Sample data
    'SAMPLE_CRC_STATUS_RUNNING',
    'SAMPLE_CRC_STATUS_STOPPED',
    'SAMPLE_IFCONFIG_NEW',
    'SAMPLE_IFCONFIG_OLD',
    'SAMPLE_PROC_NET_DEV',
    'SAMPLE_CRICTL_STATS',
    'SAMPLE_NODES',
]
