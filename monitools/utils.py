"""
Utility functions for monitools.

Classes:
    CommandExecutor: Run an external command with a timeout and capture its output.

Functions:
    read_config_from_file: Load a YAML configuration file.
    format_command: Render a command list for log messages.
"""

import logging
import os
import shlex
import subprocess
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml


def format_command(command: Union[str, List[str]]) -> str:
    if isinstance(command, str):
        return command
    return " ".join(shlex.quote(part) for part in command)


def read_config_from_file(config_path: str) -> Dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        Dictionary with the parsed configuration; an empty file gives ``{}``.

    Raises:
        FileNotFoundError: If the configuration file doesn't exist.
        yaml.YAMLError: If the file contains invalid YAML.
        ValueError: If the top level of the file is not a mapping.
    """
    if not os.path.isfile(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Expected a mapping at the top of {config_path}, got {type(config).__name__}")
    return config


class CommandExecutor:
    """
    Execute external commands in a subprocess and capture stdout/stderr.

    ``execute`` never raises for the ordinary ways a command can fail:
    - a non-zero exit status is returned as the return code,
    - a missing executable is reported with return code 127,
    - a timeout is reported with return code ``None``.
    """

    def __init__(self, logger: logging.Logger, default_timeout: Optional[float] = None):
        self.logger = logger
        self.default_timeout = default_timeout

    def execute(self,
                command: Union[str, List[str]],
                timeout: Optional[float] = None,
                text: bool = True) -> Tuple[Union[str, bytes], Union[str, bytes], Optional[int]]:
        """
        Execute a command and return its stdout, stderr, and return code.

        Args:
            command: The command to execute (string or list of strings)
            timeout: Seconds before the command is killed; defaults to ``default_timeout``
            text: Decode output as text. With False stdout/stderr are bytes.

        Returns:
            Tuple of (stdout, stderr, return_code); return_code is None on timeout.
        """
        cmd_args = shlex.split(command) if isinstance(command, str) else list(command)
        timeout = self.default_timeout if timeout is None else timeout
        empty = '' if text else b''
        # Undecodable output is replaced rather than raised.
        decoding = {'text': True, 'encoding': 'utf-8', 'errors': 'replace'} if text else {}

        self.logger.debug(f"Executing command: {format_command(cmd_args)}")

        try:
            completed = subprocess.run(
                cmd_args,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=timeout,
                **decoding,
            )
        except subprocess.TimeoutExpired as e:
            self.logger.debug(f"Command timed out after {timeout}s: {format_command(cmd_args)}")
            stdout = e.stdout if e.stdout is not None else empty
            if text and isinstance(stdout, bytes):
                stdout = stdout.decode(errors='replace')
            message = f"Command timed out after {timeout}s"
            return stdout, message if text else message.encode(), None
        except FileNotFoundError as e:
            message = f"Executable not found: {e.filename or cmd_args[0]}"
            return empty, message if text else message.encode(), 127
        except PermissionError as e:
            message = f"Permission denied: {e}"
            return empty, message if text else message.encode(), 126

        self.logger.ridiculous(f"Command returned {completed.returncode}: {format_command(cmd_args)}")
        return completed.stdout, completed.stderr, completed.returncode
