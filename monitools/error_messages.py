"""
Error message templates for monitools.

Usage:
    from monitools.error_messages import format_error

    msg = format_error('CLUSTER_NOT_RUNNING', status='Stopped')
"""

from typing import Dict, Optional


ERROR_MESSAGES: Dict[str, str] = {
    # Configuration
    'CONFIG_INVALID_VALUE': (
        "Invalid value for option '{param}': {actual}\n"
        "Expected: {expected}"
    ),

    'CONFIG_FILE_NOT_FOUND': (
        "Configuration file not found: {path}\n"
        "Pass an existing file with --config-file <path>."
    ),

    'CONFIG_PARSE_ERROR': (
        "Failed to parse configuration file: {path}\n"
        "Error: {error}"
    ),

    'CONFIG_UNKNOWN_KEYS': (
        "Unknown keys in configuration file {path}: {keys}\n"
        "Valid keys: {valid_keys}"
    ),

    # Cluster preconditions
    'CLUSTER_NOT_RUNNING': (
        "CRC VM is not running (status: {status}).\n"
        "Steady-state monitoring needs a running cluster."
    ),

    'LIFECYCLE_INPUT_MISSING': (
        "Recording start times needs the {what}.\n"
        "Provide it with {flag} <path>."
    ),

    'LIFECYCLE_INPUT_NOT_FOUND': (
        "The {what} does not exist: {path}"
    ),

    # Dependencies
    'DEPENDENCY_MISSING': (
        "{friendly_name} not found on PATH ('{executable}').\n"
        "{install_hint}"
    ),

    # Collectors and sinks
    'COLLECTOR_FAILED': (
        "Collector '{collector}' failed: {reason}"
    ),

    'SINK_CREATE_FAILED': (
        "Could not create {path}: {error}"
    ),

    'SINK_WRITE_FAILED': (
        "Could not write data to {path}: {error}"
    ),

    'INTERNAL_ERROR': (
        "An internal error occurred: {error}\n"
        "Re-run with --debug and include the run log when reporting it."
    ),
}


def format_error(error_key: str, **kwargs) -> str:
    """
    Format an error message with the given parameters.

    Unknown keys and missing parameters do not raise; the message says what
    was missing instead, so error paths never fail while reporting.
    """
    template = ERROR_MESSAGES.get(error_key)
    if template is None:
        return f"Unknown error: {error_key}\nContext: {kwargs}"

    try:
        return template.format(**kwargs)
    except KeyError as e:
        return f"{template}\n(Missing format parameter: {e})"


def get_error_template(error_key: str) -> Optional[str]:
    return ERROR_MESSAGES.get(error_key)
