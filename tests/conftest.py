"""
Shared pytest fixtures for monitools tests.

These fixtures provide loggers, scripted command executors and campaign
settings so tests run without a CRC host, ssh or oc.
"""

from argparse import Namespace
from unittest.mock import MagicMock

import pytest

from monitools.config import RUN_MODE
from monitools.orchestrator import CampaignSettings
from tests.fixtures import MockCommandExecutor, MockLogger
from tests.fixtures.sample_data import (
    SAMPLE_CRC_STATUS_RUNNING,
    SAMPLE_CRICTL_STATS,
    SAMPLE_IFCONFIG_NEW,
    SAMPLE_NODES,
)


# =============================================================================
# Logger Fixtures
# =============================================================================

@pytest.fixture
def mock_logger():
    """
    Create a mock logger that records calls.

    Usage:
        def test_something(mock_logger):
            some_function(logger=mock_logger)
            mock_logger.error.assert_called_once()
    """
    logger = MagicMock()
    for level in ['debug', 'info', 'warning', 'error', 'critical',
                  'status', 'verbose', 'verboser', 'ridiculous', 'result']:
        setattr(logger, level, MagicMock())
    return logger


@pytest.fixture
def capturing_logger():
    """
    Logger that captures messages per level.

    Usage:
        def test_something(capturing_logger):
            collector = Collector(..., logger=capturing_logger)
            collector.run()
            capturing_logger.assert_logged('warning', 'failed')
    """
    return MockLogger()


# =============================================================================
# Command Executor Fixtures
# =============================================================================

@pytest.fixture
def steady_state_executor():
    """Executor answering every steady-state command of a running cluster."""
    return MockCommandExecutor({
        r'^crc status': (SAMPLE_CRC_STATUS_RUNNING, '', 0),
        r'^ifconfig crc': (SAMPLE_IFCONFIG_NEW, '', 0),
        r'crictl stats': (SAMPLE_CRICTL_STATS.decode(), '', 0),
        r'^oc get nodes': (SAMPLE_NODES.decode(), '', 0),
    })


@pytest.fixture
def lifecycle_executor():
    """Executor for successful start/status/delete cycles."""
    return MockCommandExecutor({
        r'^crc start': ('Started the OpenShift cluster.', '', 0),
        r'^crc status': (SAMPLE_CRC_STATUS_RUNNING, '', 0),
        r'^crc delete': ('Deleted the instance', '', 0),
    })


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def steady_settings(tmp_path):
    """Steady-state campaign settings writing into a temporary directory."""
    return CampaignSettings(
        data_dir=str(tmp_path),
        repeats=3,
        nap=0,
        run_mode=RUN_MODE.STEADY_STATE,
        check_dependencies=False,
        datetime_str="20240102030405",
    )


@pytest.fixture
def lifecycle_inputs(tmp_path):
    """Existing pull secret and bundle files."""
    pull_secret = tmp_path / "pull-secret.txt"
    pull_secret.write_text('{"auths": {}}')
    bundle = tmp_path / "crc_libvirt_4.14.8_amd64.crcbundle"
    bundle.write_bytes(b"bundle")
    return str(pull_secret), str(bundle)


@pytest.fixture
def lifecycle_settings(tmp_path, lifecycle_inputs):
    pull_secret, bundle = lifecycle_inputs
    return CampaignSettings(
        data_dir=str(tmp_path),
        repeats=2,
        nap=0,
        run_mode=RUN_MODE.LIFECYCLE_REPEAT,
        pull_secret=pull_secret,
        bundle=bundle,
        check_dependencies=False,
        datetime_str="20240102030405",
    )


# =============================================================================
# Args Fixtures (Namespace objects for CLI simulation)
# =============================================================================

@pytest.fixture
def base_args(tmp_path) -> Namespace:
    """Resolved args as produced by parse_arguments()."""
    return Namespace(
        data_dir=str(tmp_path / "data"),
        repeats=2,
        sleep=0,
        repeat_starts=False,
        run_mode=RUN_MODE.STEADY_STATE,
        pull_secret=None,
        bundle=None,
        probe_timeout=30,
        skip_dependency_check=True,
        config_file=None,
        log_dir=str(tmp_path / "logs"),
        debug=False,
        verbose=False,
        stream_log_level=None,
    )
