import datetime
import enum
import logging
import os
import sys

# Custom log levels
CRITICAL = logging.CRITICAL
FATAL = CRITICAL
ERROR = logging.ERROR
RESULT = 35
WARNING = logging.WARNING   # 30
WARN = WARNING
STATUS = 25
INFO = logging.INFO         # 20
VERBOSE = 19
VERBOSER = 18
VERBOSEST = 17
DEBUG = logging.DEBUG       # 10
RIDICULOUS = 7
NOTSET = logging.NOTSET

DEFAULT_STREAM_LOG_LEVEL = logging.INFO

custom_levels = {
    'RESULT': RESULT,
    'STATUS': STATUS,
    'VERBOSE': VERBOSE,
    'VERBOSER': VERBOSER,
    'VERBOSEST': VERBOSEST,
    'RIDICULOUS': RIDICULOUS,
}


class COLORS(enum.Enum):
    red = "\033[0;31m"
    green = "\033[0;32m"
    yellow = "\033[0;33m"
    igrey = "\033[0;90m"
    bred = "\033[1;31m"
    bblue = "\033[1;34m"
    normal = "\033[0m"


level_to_color_map = {
    ERROR: COLORS.bred,
    CRITICAL: COLORS.bred,
    WARNING: COLORS.yellow,
    RESULT: COLORS.green,
    STATUS: COLORS.bblue,
    RIDICULOUS: COLORS.igrey,
}


def get_level_color(level):
    return level_to_color_map.get(level, COLORS.normal).value


def log_level_factory(level_name):
    level_num = custom_levels.get(level_name, logging.NOTSET)

    def log_func(self, message, *args, **kwargs):
        if self.isEnabledFor(level_num):
            self._log(level_num, message, args, **kwargs)
    return log_func


class MonitoolsLogger(logging.Logger):
    def _log(self, level, msg, args, exc_info=None, extra=None, stack_info=False, stacklevel=3):
        # Calling super()._log() would make findCaller() report the custom level helper in this
        # file instead of the real call site, so the record is built here with a deeper stacklevel.
        fn, lno, func, sinfo = self.findCaller(stack_info, stacklevel)
        if exc_info:
            if isinstance(exc_info, BaseException):
                exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
            elif not isinstance(exc_info, tuple):
                exc_info = sys.exc_info()

        record = self.makeRecord(self.name, level, fn, lno, msg, args, exc_info, func, extra, sinfo)
        self.handle(record)


for custom_name, custom_num in custom_levels.items():
    logging.addLevelName(custom_num, custom_name)
    setattr(MonitoolsLogger, custom_name.lower(), log_level_factory(custom_name))


class ColoredStandardFormatter(logging.Formatter):
    def format(self, record):
        formatted_time = f"{datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"
        color = get_level_color(record.levelno)
        return f"{color}{formatted_time}|{record.levelname}: {record.getMessage()}{COLORS.normal.value}"


class ColoredDebugFormatter(logging.Formatter):
    def format(self, record):
        formatted_time = f"{datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"
        color = get_level_color(record.levelno)
        return f"{color}{formatted_time}|{record.levelname}:{record.threadName}:{record.module}:" \
               f"{record.lineno}: {record.getMessage()}{COLORS.normal.value}"


class PlainFileFormatter(logging.Formatter):
    """No colour codes in the run log file; thread name identifies the collector."""

    def __init__(self):
        super().__init__(fmt="%(asctime)s|%(levelname)s|%(threadName)s: %(message)s",
                         datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(name=__name__, stream_log_level=DEFAULT_STREAM_LOG_LEVEL):
    if isinstance(stream_log_level, str):
        stream_log_level = logging.getLevelName(stream_log_level.upper())

    _logger = MonitoolsLogger(name)
    _logger.setLevel(logging.DEBUG)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ColoredStandardFormatter())
    stream_handler.setLevel(stream_log_level)
    _logger.addHandler(stream_handler)

    return _logger


def add_file_handler(_logger, log_dir, datetime_str, file_log_level=DEBUG):
    """Attach the per-run log file ``<log_dir>/monitools_<datetime_str>.log``.

    Returns the path of the log file. The directory is created if needed;
    an OSError from creating it or opening the file propagates to the caller.
    """
    from monitools.config import LOG_FILE_PREFIX

    os.makedirs(log_dir, exist_ok=True)
    log_file_path = os.path.join(log_dir, f"{LOG_FILE_PREFIX}{datetime_str}.log")

    file_handler = logging.FileHandler(log_file_path, mode='a')
    file_handler.setFormatter(PlainFileFormatter())
    file_handler.setLevel(file_log_level)
    _logger.addHandler(file_handler)

    return log_file_path


def apply_logging_options(_logger, args):
    if args is None:
        return
    # File handlers always keep their own level; only the console is adjusted.
    stream_handlers = [h for h in _logger.handlers if not hasattr(h, 'baseFilename')]

    if hasattr(args, "verbose") and args.verbose:
        for stream_handler in stream_handlers:
            if stream_handler.level > VERBOSE:
                stream_handler.setLevel(VERBOSE)

    if hasattr(args, "debug") and args.debug:
        for stream_handler in stream_handlers:
            stream_handler.setFormatter(ColoredDebugFormatter())
            if stream_handler.level > DEBUG:
                stream_handler.setLevel(DEBUG)

    if hasattr(args, "stream_log_level") and args.stream_log_level:
        for stream_handler in stream_handlers:
            stream_handler.setLevel(args.stream_log_level.upper())
