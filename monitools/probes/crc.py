"""
Helpers around the ``crc`` command line tool.
"""

import json
from typing import Any, Dict, List, Optional

from monitools.config import CRC_BIN, CRC_STATUS_TIMEOUT
from monitools.utils import CommandExecutor, format_command


def run_crc_command(executor: CommandExecutor, args: List[str], logger,
                    timeout: Optional[float] = None) -> bool:
    """Run ``crc <args>``; log and return False if it does not succeed."""
    command = [CRC_BIN] + list(args)
    _, stderr, return_code = executor.execute(command, timeout=timeout)
    if return_code != 0:
        cause = "timed out" if return_code is None else f"exit code {return_code}"
        logger.error(f"could not successfully run the command: {format_command(command)} ({cause})")
        if stderr:
            logger.debug(f"stderr: {stderr.strip()}")
        return False
    return True


def get_crc_status(executor: CommandExecutor, timeout: float = CRC_STATUS_TIMEOUT) -> Dict[str, Any]:
    """Return the parsed output of ``crc status -o json``.

    An empty dict is returned when the command fails or prints something
    that is not a JSON object.
    """
    # crc status exits non-zero when the VM is stopped but still prints JSON,
    # so the return code is not checked.
    stdout, _, _ = executor.execute([CRC_BIN, "status", "-o", "json"], timeout=timeout)
    if not stdout:
        return {}
    try:
        status = json.loads(stdout)
    except json.JSONDecodeError:
        return {}
    return status if isinstance(status, dict) else {}


def is_crc_running(executor: CommandExecutor, timeout: float = CRC_STATUS_TIMEOUT) -> bool:
    """True when the CRC VM reports status ``Running``."""
    status = get_crc_status(executor, timeout=timeout)
    return status.get("crcStatus") == "Running"
