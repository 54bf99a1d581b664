#!/usr/bin/env python3
"""
monitools - Main Entry Point

Parses the command line, sets up console and file logging, prepares the
destination directory and runs one collection campaign. Every error that
reaches this module is logged with its suggestion and turned into an
``EXIT_CODE``.
"""

import os
import signal
import sys
import traceback

from monitools import VERSION
from monitools.cli_parser import parse_arguments
from monitools.config import DATETIME_STR, EXIT_CODE, RUN_MODE
from monitools.error_messages import format_error
from monitools.errors import (
    CollectorFailure,
    ConfigurationError,
    DependencyError,
    ErrorCode,
    MonitoolsException,
    PreconditionError,
    SinkIOError,
)
from monitools.mt_logging import add_file_handler, apply_logging_options, setup_logging
from monitools.orchestrator import CampaignSettings, Orchestrator

logger = setup_logging("monitools")


def signal_handler(sig, frame):
    """Handle SIGINT (Ctrl+C) and SIGTERM."""
    signal_name = signal.Signals(sig).name
    logger.warning(f"Received signal {signal_name} ({sig})")
    logger.info("Exiting due to signal")
    # Collector threads are not joined; sink files are only ever renamed into
    # place complete, so nothing half written is left behind.
    for handler in logger.handlers:
        handler.flush()
        handler.close()
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(EXIT_CODE.INTERRUPTED)


def prepare_data_dir(data_dir):
    try:
        os.makedirs(data_dir, exist_ok=True)
    except OSError as e:
        raise SinkIOError(
            format_error('SINK_CREATE_FAILED', path=data_dir, error=e),
            path=data_dir,
            operation="mkdir",
            os_error=str(e),
            code=ErrorCode.SINK_CREATE_FAILED,
        )
    return data_dir


def settings_from_args(args, datetime_str=DATETIME_STR):
    return CampaignSettings(
        data_dir=args.data_dir,
        repeats=args.repeats,
        nap=args.sleep,
        run_mode=args.run_mode,
        pull_secret=args.pull_secret,
        bundle=args.bundle,
        probe_timeout=args.probe_timeout,
        check_dependencies=not args.skip_dependency_check,
        datetime_str=datetime_str,
    )


def log_settings_banner(settings, log_file_path):
    logger.status(f"monitools {VERSION}")
    logger.info(f"Data directory: {settings.data_dir}")
    logger.info(f"Run log: {log_file_path}")
    if settings.run_mode is RUN_MODE.LIFECYCLE_REPEAT:
        logger.info(f"Mode: recording start times, {settings.repeats} start/delete cycle(s)")
        logger.info(f"Pull secret: {settings.pull_secret}")
        logger.info(f"Bundle: {settings.bundle}")
    else:
        logger.info(f"Mode: steady state, {settings.repeats} sample(s) every {settings.nap} sec")
        logger.info(f"Probe timeout: {settings.probe_timeout} sec")


def _main_impl(argv=None):
    """
    Main implementation with error handling.

    This is the actual implementation of main(), separated out
    so that main() can wrap it with exception handling.
    """
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    args = parse_arguments(argv)
    apply_logging_options(logger, args)

    datetime_str = DATETIME_STR
    log_file_path = add_file_handler(logger, args.log_dir, datetime_str)

    settings = settings_from_args(args, datetime_str=datetime_str)
    if not settings.check_dependencies:
        logger.warning("Skipping dependency check (--skip-dependency-check flag)")
    prepare_data_dir(settings.data_dir)
    log_settings_banner(settings, log_file_path)

    orchestrator = Orchestrator(settings, logger)
    outcomes = orchestrator.run()

    failed_samples = sum(outcome.failed_samples for outcome in outcomes)
    if failed_samples:
        logger.warning(f"{failed_samples} sample(s) could not be recorded; see the run log")
    logger.result(f"Data written to {settings.data_dir}")
    return EXIT_CODE.SUCCESS


def _log_exception(e):
    logger.error(str(e))
    if e.suggestion:
        logger.info(f"Suggestion: {e.suggestion}")


def main(argv=None):
    """
    Main entry point with comprehensive error handling.

    This function wraps _main_impl() to catch and handle all
    exceptions with user-friendly error messages.
    """
    try:
        return _main_impl(argv)

    except ConfigurationError as e:
        _log_exception(e)
        return EXIT_CODE.CONFIG_ERROR

    except PreconditionError as e:
        _log_exception(e)
        return EXIT_CODE.PRECONDITION_FAILED

    except DependencyError as e:
        _log_exception(e)
        return EXIT_CODE.FAILURE

    except CollectorFailure as e:
        _log_exception(e)
        return EXIT_CODE.COLLECTOR_FAILED

    except SinkIOError as e:
        _log_exception(e)
        return EXIT_CODE.FAILURE

    except MonitoolsException as e:
        # Catch-all for any other custom exceptions
        _log_exception(e)
        return EXIT_CODE.FAILURE

    except OSError as e:
        # Log directory or log file could not be created
        logger.error(f"File system error: {e}")
        return EXIT_CODE.FAILURE

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return EXIT_CODE.INTERRUPTED

    except SystemExit:
        raise

    except Exception as e:
        logger.error(format_error('INTERNAL_ERROR', error=str(e)))
        # The run log keeps the stack trace; the console shows it with --debug
        logger.debug(traceback.format_exc())
        return EXIT_CODE.GENERAL_ERROR


if __name__ == "__main__":
    sys.exit(main())
