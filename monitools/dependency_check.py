"""
Dependency validation for monitools.

Fail-fast checks for the external executables the probes call, run before
any collector starts so a missing tool is reported once, with an install
hint, instead of as a failed sample in every series.

Public exports:
    check_executable_available: Generic PATH lookup with a DependencyError
    check_crc_available: crc command line tool
    check_ssh_available: OpenSSH client
    check_oc_available: OpenShift client
    validate_campaign_dependencies: All executables needed for a run mode
"""

import os
import shutil
from typing import Dict, List, Optional

from monitools.config import CRC_BIN, OC_BIN, RUN_MODE, SSH_BIN
from monitools.error_messages import format_error
from monitools.errors import DependencyError

CRC_INSTALL_HINT = (
    "Download CRC from https://console.redhat.com/openshift/create/local, "
    "put it on PATH and run 'crc setup'"
)
SSH_INSTALL_HINT = "Install the OpenSSH client (e.g. 'sudo dnf install openssh-clients')"
OC_INSTALL_HINT = "Run 'eval $(crc oc-env)' to put the bundled oc on PATH"


def check_executable_available(
    executable: str,
    friendly_name: str,
    install_suggestion: str,
    search_paths: Optional[List[str]] = None,
) -> str:
    """
    Check that an executable is available.

    Args:
        executable: Name of the executable to look up.
        friendly_name: Name used in the error message.
        install_suggestion: How to install it.
        search_paths: Extra directories to look in when it is not on PATH.

    Returns:
        Full path to the executable.

    Raises:
        DependencyError: If the executable is not found.
    """
    path = shutil.which(executable)
    if path:
        return path

    for directory in search_paths or []:
        candidate = os.path.join(directory, executable)
        if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
            return candidate

    raise DependencyError(
        message=format_error('DEPENDENCY_MISSING', friendly_name=friendly_name,
                             executable=executable, install_hint=install_suggestion),
        dependency=executable,
        suggestion=install_suggestion,
    )


def check_crc_available() -> str:
    return check_executable_available(CRC_BIN, "CRC command line tool", CRC_INSTALL_HINT)


def check_ssh_available() -> str:
    return check_executable_available(SSH_BIN, "SSH client", SSH_INSTALL_HINT)


def check_oc_available() -> str:
    return check_executable_available(OC_BIN, "OpenShift client (oc)", OC_INSTALL_HINT)


def validate_campaign_dependencies(run_mode: RUN_MODE, logger=None) -> Dict[str, str]:
    """
    Validate every executable a campaign in ``run_mode`` needs.

    Returns:
        Mapping of executable name to resolved path.

    Raises:
        DependencyError: For the first missing executable.
    """
    checks = {CRC_BIN: check_crc_available}
    if run_mode is RUN_MODE.STEADY_STATE:
        checks[SSH_BIN] = check_ssh_available
        checks[OC_BIN] = check_oc_available

    resolved = {}
    for name, check in checks.items():
        resolved[name] = check()
        if logger is not None:
            logger.debug(f"Found {name} at {resolved[name]}")
    return resolved
