"""
Custom exceptions for monitools.

Every exception carries a machine-readable error code, a user-facing message,
technical details and a suggestion. Only ``main()`` turns these into process
exit codes; inside the collection core probe errors are converted to failure
samples and sink errors are carried in the collector's outcome.
"""

from dataclasses import dataclass, field
from typing import Optional, Any
from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes for monitools errors."""
    # Configuration errors (1xx)
    CONFIG_INVALID_VALUE = "E102"
    CONFIG_FILE_NOT_FOUND = "E103"
    CONFIG_PARSE_ERROR = "E104"

    # Probe errors (2xx)
    PROBE_QUERY_FAILED = "E201"
    PROBE_TARGET_ABSENT = "E202"
    PROBE_TIMEOUT = "E203"

    # Collector errors (3xx)
    COLLECTOR_FAILED = "E301"
    COLLECTOR_STATE = "E302"

    # Sink / file system errors (4xx)
    SINK_CREATE_FAILED = "E401"
    SINK_WRITE_FAILED = "E402"
    SINK_ALREADY_WRITTEN = "E403"

    # Cluster / environment errors (5xx)
    CLUSTER_NOT_RUNNING = "E501"
    DEPENDENCY_MISSING = "E502"
    LIFECYCLE_INPUT_MISSING = "E503"

    # Internal errors (9xx)
    INTERNAL_ERROR = "E901"


@dataclass
class MTError:
    """
    Structured error information.

    Attributes:
        code: Machine-readable error code.
        message: User-facing error message.
        details: Technical details for debugging.
        suggestion: How to fix the issue.
        context: Additional context information.
    """
    code: ErrorCode
    message: str
    details: str = ""
    suggestion: str = ""
    context: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"[{self.code.value}] {self.message}"]
        if self.details:
            lines.append(f"  Details: {self.details}")
        if self.suggestion:
            lines.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(lines)


class MonitoolsException(Exception):
    """Base exception class for monitools."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR,
                 details: str = "", suggestion: str = "", **context):
        self.error = MTError(
            code=code,
            message=message,
            details=details,
            suggestion=suggestion,
            context=context
        )
        super().__init__(str(self.error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def suggestion(self) -> str:
        return self.error.suggestion


class ConfigurationError(MonitoolsException):
    """
    Raised when command line options or the config file are invalid.

    Examples:
        - Negative repeat count or sleep length
        - Config file not found or not valid YAML
        - Unknown key in the config file
    """

    def __init__(self, message: str, parameter: str = None,
                 expected: Any = None, actual: Any = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.CONFIG_INVALID_VALUE):
        details_parts = []
        if parameter:
            details_parts.append(f"Parameter: {parameter}")
        if expected is not None:
            details_parts.append(f"Expected: {expected}")
        if actual is not None:
            details_parts.append(f"Actual: {actual}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts),
            suggestion=suggestion or self._default_suggestion(code),
            parameter=parameter,
            expected=expected,
            actual=actual
        )

    @staticmethod
    def _default_suggestion(code: ErrorCode) -> str:
        suggestions = {
            ErrorCode.CONFIG_INVALID_VALUE: "Check the option value and correct it",
            ErrorCode.CONFIG_FILE_NOT_FOUND: "Verify the config file path exists",
            ErrorCode.CONFIG_PARSE_ERROR: "Check config file syntax (YAML mapping expected)",
        }
        return suggestions.get(code, "Check the configuration and try again")


class ProbeError(MonitoolsException):
    """
    Raised inside a probe when a single observation cannot be made.

    Probes never let this escape ``invoke()``: it is turned into a failure
    sample so that the series keeps one entry per invocation.
    """

    def __init__(self, message: str, probe: str = None, command: str = None,
                 stderr: str = None, code: ErrorCode = ErrorCode.PROBE_QUERY_FAILED,
                 suggestion: str = ""):
        details_parts = []
        if probe:
            details_parts.append(f"Probe: {probe}")
        if command:
            cmd_display = command[:200] + "..." if len(command) > 200 else command
            details_parts.append(f"Command: {cmd_display}")
        if stderr:
            stderr_display = stderr[:500] + "..." if len(stderr) > 500 else stderr
            details_parts.append(f"Error output: {stderr_display}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts),
            suggestion=suggestion,
            probe=probe,
            command=command,
            stderr=stderr
        )


class ProbeTransientError(ProbeError):
    """The query behind one sample failed (command error, timeout, bad output)."""

    def __init__(self, message: str, probe: str = None, command: str = None,
                 stderr: str = None, timed_out: bool = False):
        super().__init__(
            message=message,
            probe=probe,
            command=command,
            stderr=stderr,
            code=ErrorCode.PROBE_TIMEOUT if timed_out else ErrorCode.PROBE_QUERY_FAILED,
        )


class ProbeAbsentTargetError(ProbeError):
    """The monitored entity (e.g. the hypervisor process) does not exist right now."""

    def __init__(self, message: str, probe: str = None, target: str = None):
        super().__init__(
            message=message,
            probe=probe,
            code=ErrorCode.PROBE_TARGET_ABSENT,
            suggestion=f"Check that '{target}' is running" if target else "",
        )
        self.target = target


class SinkIOError(MonitoolsException):
    """
    Raised by a sink when its file cannot be created or written.

    Collectors catch this and report it as the reason of a failed outcome.
    """

    def __init__(self, message: str, path: str = None, operation: str = None,
                 os_error: str = None, code: ErrorCode = ErrorCode.SINK_WRITE_FAILED):
        details_parts = []
        if path:
            details_parts.append(f"Path: {path}")
        if operation:
            details_parts.append(f"Operation: {operation}")
        if os_error:
            details_parts.append(f"Cause: {os_error}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts),
            suggestion=self._default_suggestion(code),
            path=path,
            operation=operation
        )
        self.path = path

    @staticmethod
    def _default_suggestion(code: ErrorCode) -> str:
        suggestions = {
            ErrorCode.SINK_CREATE_FAILED: "Verify the data directory exists and is writable",
            ErrorCode.SINK_WRITE_FAILED: "Check free disk space and file permissions",
            ErrorCode.SINK_ALREADY_WRITTEN: "Use a new sink for every collector run",
        }
        return suggestions.get(code, "Check the file system and try again")


class CollectorFailure(MonitoolsException):
    """A collector reported a failed outcome; fatal to the campaign."""

    def __init__(self, message: str, collector: str = None, sink_path: str = None,
                 reason: str = None):
        details_parts = []
        if collector:
            details_parts.append(f"Collector: {collector}")
        if sink_path:
            details_parts.append(f"File: {sink_path}")
        if reason:
            details_parts.append(f"Cause: {reason}")

        super().__init__(
            message=message,
            code=ErrorCode.COLLECTOR_FAILED,
            details="; ".join(details_parts),
            suggestion="Check the run log for the collector's errors; files from other collectors are kept",
            collector=collector,
            sink_path=sink_path,
            reason=reason
        )
        self.collector = collector


class PreconditionError(MonitoolsException):
    """Required external state is missing before any collector is launched."""

    def __init__(self, message: str, suggestion: str = None,
                 code: ErrorCode = ErrorCode.CLUSTER_NOT_RUNNING, details: str = ""):
        super().__init__(
            message=message,
            code=code,
            details=details,
            suggestion=suggestion or self._default_suggestion(code),
        )

    @staticmethod
    def _default_suggestion(code: ErrorCode) -> str:
        suggestions = {
            ErrorCode.CLUSTER_NOT_RUNNING: "Start the cluster with 'crc start' or use -r to record start times",
            ErrorCode.LIFECYCLE_INPUT_MISSING: "Pass the pull secret with -p and the bundle with -b",
        }
        return suggestions.get(code, "Check the cluster state and try again")


class DependencyError(MonitoolsException):
    """
    Raised when a required executable is missing.

    Examples:
        - crc not installed
        - ssh client not found
    """

    def __init__(self, message: str, dependency: str = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.DEPENDENCY_MISSING):
        super().__init__(
            message=message,
            code=code,
            details=f"Missing: {dependency}" if dependency else "",
            suggestion=suggestion or f"Install the required dependency: {dependency}",
            dependency=dependency
        )
        self.dependency = dependency
