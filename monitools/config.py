"""
Constants and defaults for monitools.

Values here are the defaults used when neither the command line nor a YAML
config file (``--config-file``) provides a setting.
"""

import datetime
import enum
import os


def get_datetime_string():
    return datetime.datetime.now().strftime("%Y%m%d%H%M%S")


def get_date_string():
    return datetime.datetime.now().strftime("%Y-%m-%d")


DATETIME_STR = get_datetime_string()


class EXIT_CODE(enum.IntEnum):
    SUCCESS = 0
    GENERAL_ERROR = 1
    FAILURE = 1
    INVALID_ARGUMENTS = 2  # argparse usage errors
    CONFIG_ERROR = 5
    COLLECTOR_FAILED = 6
    PRECONDITION_FAILED = 7
    INTERRUPTED = 130


class RUN_MODE(enum.Enum):
    STEADY_STATE = "steady_state"
    LIFECYCLE_REPEAT = "lifecycle_repeat"


# Campaign defaults
DEFAULT_REPEATS = 5
DEFAULT_NAP_SECONDS = 1
DEFAULT_DATA_ROOT = "data"
DEFAULT_LOG_DIR = "logs"
LOG_FILE_PREFIX = "monitools_"


def default_data_dir(data_root=DEFAULT_DATA_ROOT):
    """data/data_<YYYY-mm-dd>"""
    return os.path.join(data_root, f"data_{get_date_string()}")


# Sink file names, relative to the data directory
TRAFFIC_FILE = "traffic.json"
CPU_FILE = "cpu.json"
NODE_FILE = "node.json"
START_TIMES_FILE = "startTimes.json"
CRICTL_STATS_PREFIX = "crictl-stats-"

# Host / VM specifics
HYPERVISOR_PROCESS = "qemu"
VM_INTERFACE = "crc"
VM_SSH_USER = "core"
VM_SSH_HOST = "192.168.130.11"
VM_SSH_KEY = os.path.join("~", ".crc", "machines", "crc", "id_ecdsa")

# Executables
CRC_BIN = "crc"
SSH_BIN = "ssh"
OC_BIN = "oc"
IFCONFIG_BIN = "ifconfig"

# Timeouts in seconds for external commands run by the probes
DEFAULT_PROBE_TIMEOUT = 120
DEFAULT_LIFECYCLE_TIMEOUT = 1800
CRC_STATUS_TIMEOUT = 60

# Numeric encodings used in the sink files for failed samples
QUERY_FAILED_VALUE = -1.0
TARGET_ABSENT_VALUE = -2.0

# Keys accepted in a YAML config file, mapped to their argparse dest
CONFIG_FILE_KEYS = {
    "data_dir": "data_dir",
    "repeats": "repeats",
    "sleep": "sleep",
    "repeat_starts": "repeat_starts",
    "pull_secret": "pull_secret",
    "bundle": "bundle",
    "log_dir": "log_dir",
    "probe_timeout": "probe_timeout",
    "stream_log_level": "stream_log_level",
}
