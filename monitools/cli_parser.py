"""
CLI argument parsing for monitools.

Precedence for every setting: command line flag, then the YAML file given
with ``--config-file``, then the built-in default from ``monitools.config``.
"""

import argparse

import yaml

from monitools import VERSION
from monitools.config import (
    CONFIG_FILE_KEYS,
    DEFAULT_LOG_DIR,
    DEFAULT_NAP_SECONDS,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_REPEATS,
    RUN_MODE,
    default_data_dir,
)
from monitools.error_messages import format_error
from monitools.errors import ConfigurationError, ErrorCode
from monitools.utils import read_config_from_file

HELP_MESSAGES = {
    'data_dir': "Destination directory for the collected data (default: data/data_<YYYY-mm-dd>).",
    'repeats': (
        "Number of samples of CPU load and traffic, or number of start/delete cycles "
        f"with -r (default: {DEFAULT_REPEATS})."
    ),
    'sleep': f"Sleep between repeats, in seconds (default: {DEFAULT_NAP_SECONDS}).",
    'repeat_starts': "Repeatedly start and delete the cluster and record the start times.",
    'pull_secret': "Path to the pull secret file [needed if -r is set].",
    'bundle': "Path to the CRC bundle [needed if -r is set].",
    'config_file': "YAML file with default values for the options above.",
    'log_dir': f"Directory for the run log file (default: {DEFAULT_LOG_DIR}).",
    'probe_timeout': (
        "Timeout in seconds for each external query (ifconfig, ssh, oc) "
        f"(default: {DEFAULT_PROBE_TIMEOUT})."
    ),
    'skip_dependency_check': "Do not check that crc, ssh and oc are on PATH before collecting.",
    'debug': "Enable debug mode (debug log level and call sites in console output).",
    'verbose': "Enable verbose console output.",
    'stream_log_level': "Log level for console output.",
}

DEFAULTS = {
    'repeats': DEFAULT_REPEATS,
    'sleep': DEFAULT_NAP_SECONDS,
    'repeat_starts': False,
    'pull_secret': None,
    'bundle': None,
    'log_dir': DEFAULT_LOG_DIR,
    'probe_timeout': DEFAULT_PROBE_TIMEOUT,
    'stream_log_level': None,
}


def build_parser():
    parser = argparse.ArgumentParser(
        prog="monitools",
        description="Record resource usage of a CodeReady Containers cluster"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

    # Settings default to None so a config file value can fill them in
    collection = parser.add_argument_group("Collection")
    collection.add_argument("-d", "--data-dir", dest="data_dir", default=None, help=HELP_MESSAGES['data_dir'])
    collection.add_argument("-n", "--repeats", dest="repeats", type=int, default=None, help=HELP_MESSAGES['repeats'])
    collection.add_argument("-s", "--sleep", dest="sleep", type=float, default=None, help=HELP_MESSAGES['sleep'])
    collection.add_argument("-r", "--repeat-starts", dest="repeat_starts", action="store_true", default=None,
                            help=HELP_MESSAGES['repeat_starts'])
    collection.add_argument("-p", "--pull-secret", dest="pull_secret", default=None,
                            help=HELP_MESSAGES['pull_secret'])
    collection.add_argument("-b", "--bundle", dest="bundle", default=None, help=HELP_MESSAGES['bundle'])
    collection.add_argument("--probe-timeout", dest="probe_timeout", type=float, default=None,
                            help=HELP_MESSAGES['probe_timeout'])
    collection.add_argument("--skip-dependency-check", action="store_true",
                            help=HELP_MESSAGES['skip_dependency_check'])
    collection.add_argument("--config-file", dest="config_file", default=None, help=HELP_MESSAGES['config_file'])

    logging_group = parser.add_argument_group("Logging")
    logging_group.add_argument("--log-dir", dest="log_dir", default=None, help=HELP_MESSAGES['log_dir'])
    logging_group.add_argument("--debug", action="store_true", help=HELP_MESSAGES['debug'])
    logging_group.add_argument("--verbose", "-v", action="store_true", help=HELP_MESSAGES['verbose'])
    logging_group.add_argument("--stream-log-level", dest="stream_log_level", default=None,
                               choices=["DEBUG", "VERBOSE", "INFO", "STATUS", "WARNING", "ERROR", "CRITICAL"],
                               type=str.upper, help=HELP_MESSAGES['stream_log_level'])
    return parser


def apply_config_file(args) -> None:
    """Fill options not given on the command line from ``args.config_file``.

    Raises:
        ConfigurationError: The file is missing, not valid YAML or has unknown keys.
    """
    path = args.config_file
    try:
        config = read_config_from_file(path)
    except FileNotFoundError:
        raise ConfigurationError(
            format_error('CONFIG_FILE_NOT_FOUND', path=path),
            parameter="config_file",
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
        )
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigurationError(
            format_error('CONFIG_PARSE_ERROR', path=path, error=e),
            parameter="config_file",
            code=ErrorCode.CONFIG_PARSE_ERROR,
        )

    unknown = sorted(set(config) - set(CONFIG_FILE_KEYS))
    if unknown:
        raise ConfigurationError(
            format_error('CONFIG_UNKNOWN_KEYS', path=path, keys=", ".join(unknown),
                         valid_keys=", ".join(sorted(CONFIG_FILE_KEYS))),
            parameter="config_file",
            code=ErrorCode.CONFIG_PARSE_ERROR,
        )

    for key, value in config.items():
        dest = CONFIG_FILE_KEYS[key]
        if getattr(args, dest, None) is None:
            setattr(args, dest, value)


def _check_number(args, dest, minimum, strictly_greater=False, integer=False):
    value = getattr(args, dest)
    expected = f"> {minimum}" if strictly_greater else f">= {minimum}"
    valid_type = (isinstance(value, int) if integer else isinstance(value, (int, float))) \
        and not isinstance(value, bool)
    if not valid_type or value < minimum or (strictly_greater and value == minimum):
        kind = "an integer" if integer else "a number"
        raise ConfigurationError(
            format_error('CONFIG_INVALID_VALUE', param=dest, actual=value, expected=f"{kind} {expected}"),
            parameter=dest,
            expected=expected,
            actual=value,
        )


def validate_args(args):
    """Check value ranges after defaults and config file have been applied."""
    _check_number(args, 'repeats', 0, integer=True)
    _check_number(args, 'sleep', 0)
    _check_number(args, 'probe_timeout', 0, strictly_greater=True)
    if not isinstance(args.repeat_starts, bool):
        raise ConfigurationError(
            format_error('CONFIG_INVALID_VALUE', param='repeat_starts', actual=args.repeat_starts,
                         expected="true or false"),
            parameter='repeat_starts',
            expected="true or false",
            actual=args.repeat_starts,
        )


def update_args(args):
    """Apply config file and defaults, validate, and derive ``run_mode``."""
    if args.config_file:
        apply_config_file(args)

    for dest, default in DEFAULTS.items():
        if getattr(args, dest, None) is None:
            setattr(args, dest, default)
    if args.data_dir is None:
        args.data_dir = default_data_dir()

    validate_args(args)
    args.run_mode = RUN_MODE.LIFECYCLE_REPEAT if args.repeat_starts else RUN_MODE.STEADY_STATE
    return args


def parse_arguments(argv=None):
    """Parse and resolve command-line arguments.

    Returns:
        argparse.Namespace with every setting filled in.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return update_args(args)
