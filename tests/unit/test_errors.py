"""
Tests for structured errors in monitools.errors and monitools.error_messages.

Tests cover:
- Error codes, details and suggestions
- Probe, sink and collector error attributes
- Message templates
"""

import pytest

from monitools.error_messages import ERROR_MESSAGES, format_error, get_error_template
from monitools.errors import (
    CollectorFailure,
    ConfigurationError,
    DependencyError,
    ErrorCode,
    MonitoolsException,
    PreconditionError,
    ProbeAbsentTargetError,
    ProbeTransientError,
    SinkIOError,
)


class TestMonitoolsException:

    def test_str_contains_code_details_and_suggestion(self):
        error = MonitoolsException("boom", code=ErrorCode.INTERNAL_ERROR,
                                   details="stack", suggestion="retry")
        text = str(error)
        assert text.startswith("[E901] boom")
        assert "Details: stack" in text
        assert "Suggestion: retry" in text

    def test_properties(self):
        error = MonitoolsException("boom", code=ErrorCode.COLLECTOR_STATE)
        assert error.code == ErrorCode.COLLECTOR_STATE
        assert error.message == "boom"
        assert error.suggestion == ""

    @pytest.mark.parametrize("cls", [
        ConfigurationError, ProbeTransientError, ProbeAbsentTargetError, SinkIOError,
        CollectorFailure, PreconditionError, DependencyError,
    ])
    def test_all_derive_from_base(self, cls):
        assert issubclass(cls, MonitoolsException)


class TestConfigurationError:

    def test_details_and_default_suggestion(self):
        error = ConfigurationError("bad repeats", parameter="repeats", expected=">= 0", actual=-1)
        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "Parameter: repeats" in str(error)
        assert "Actual: -1" in str(error)
        assert error.suggestion == "Check the option value and correct it"

    def test_every_config_code_is_in_use(self):
        config_codes = {code for code in ErrorCode if code.name.startswith("CONFIG_")}
        assert config_codes == {ErrorCode.CONFIG_INVALID_VALUE, ErrorCode.CONFIG_FILE_NOT_FOUND,
                                ErrorCode.CONFIG_PARSE_ERROR}


class TestProbeErrors:

    def test_transient_error_code(self):
        assert ProbeTransientError("x").code == ErrorCode.PROBE_QUERY_FAILED
        assert ProbeTransientError("x", timed_out=True).code == ErrorCode.PROBE_TIMEOUT

    def test_transient_error_truncates_stderr(self):
        error = ProbeTransientError("x", probe="traffic", command="ifconfig crc", stderr="e" * 600)
        assert "Command: ifconfig crc" in str(error)
        assert "e" * 500 + "..." in str(error)
        assert "e" * 501 not in str(error)

    def test_absent_target(self):
        error = ProbeAbsentTargetError("no qemu", probe="cpu", target="qemu")
        assert error.code == ErrorCode.PROBE_TARGET_ABSENT
        assert error.target == "qemu"
        assert "qemu" in error.suggestion


class TestSinkAndCollectorErrors:

    def test_sink_error(self):
        error = SinkIOError("cannot create", path="/data/cpu.json", operation="create",
                            os_error="[Errno 2] No such file", code=ErrorCode.SINK_CREATE_FAILED)
        assert error.path == "/data/cpu.json"
        assert "Operation: create" in str(error)
        assert "writable" in error.suggestion

    def test_collector_failure(self):
        error = CollectorFailure("failed to record cpu", collector="cpu",
                                 sink_path="/data/cpu.json", reason="disk full")
        assert error.collector == "cpu"
        assert error.code == ErrorCode.COLLECTOR_FAILED
        assert "Cause: disk full" in str(error)

    def test_precondition_default_suggestion(self):
        error = PreconditionError("not running")
        assert error.code == ErrorCode.CLUSTER_NOT_RUNNING
        assert "crc start" in error.suggestion

    def test_dependency_error(self):
        error = DependencyError("no oc", dependency="oc")
        assert error.dependency == "oc"
        assert "Missing: oc" in str(error)


class TestErrorMessages:

    def test_format_known_template(self):
        message = format_error('CLUSTER_NOT_RUNNING', status='Stopped')
        assert "status: Stopped" in message

    def test_missing_parameter_does_not_raise(self):
        message = format_error('COLLECTOR_FAILED', collector='cpu')
        assert "Missing format parameter" in message

    def test_unknown_key(self):
        assert format_error('NOPE', a=1).startswith("Unknown error: NOPE")

    def test_get_error_template(self):
        assert get_error_template('SINK_WRITE_FAILED') == ERROR_MESSAGES['SINK_WRITE_FAILED']
        assert get_error_template('NOPE') is None
