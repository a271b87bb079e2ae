"""
Logging helpers for Fleetmatch.

Four verbosity levels are supported:

* ``QUIET``   – errors only
* ``NORMAL``  – progress and success messages
* ``VERBOSE`` – adds per-step details
* ``DEBUG``   – everything, including per-pair estimator output

The level can be set programmatically through :func:`setup_logging` or via the
``FLEETMATCH_LOG_LEVEL`` environment variable (``quiet``, ``normal``,
``verbose``, ``debug``).
"""

import logging
import os
import sys
from enum import Enum

from tqdm import tqdm


class LogLevel(Enum):
    """Verbosity levels understood by :class:`FleetmatchLogger`."""

    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


class Colors:
    """ANSI color codes for terminal output."""

    GRAY = "\033[90m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


class Symbols:
    """Unicode symbols for log messages."""

    CHECK = "✓"
    CROSS = "✗"
    ROCKET = "🚀"
    GEAR = "⚙"
    TRUCK = "🚛"
    WARNING = "⚠"
    INFO = "ℹ"


_LEVEL_COLORS = {
    "DEBUG": Colors.GRAY,
    "INFO": Colors.CYAN,
    "WARNING": Colors.YELLOW,
    "ERROR": Colors.RED,
    "CRITICAL": Colors.RED + Colors.BOLD,
}

_LOGGING_LEVELS = {
    LogLevel.QUIET: logging.ERROR,
    LogLevel.NORMAL: logging.INFO,
    LogLevel.VERBOSE: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


class SimpleFormatter(logging.Formatter):
    """Color the whole message according to the record's level."""

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelname, Colors.RESET)
        return f"{color}{record.getMessage()}{Colors.RESET}"


class FleetmatchLogger:
    """Process-wide logger registry with a shared verbosity level."""

    _current_level: LogLevel = LogLevel.NORMAL
    _loggers: dict[str, logging.Logger] = {}

    @classmethod
    def set_level(cls, level: LogLevel) -> None:
        cls._current_level = level
        for logger in cls._loggers.values():
            cls._configure_logger_level(logger, level)

    @classmethod
    def get_level(cls) -> LogLevel:
        return cls._current_level

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Return (and cache) a logger configured for the current level."""
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            cls._configure_logger_level(logger, cls._current_level)
            cls._loggers[name] = logger
        return cls._loggers[name]

    @classmethod
    def _configure_logger_level(cls, logger: logging.Logger, level: LogLevel) -> None:
        # Child processes inherit the effective level through the environment.
        env_level = os.environ.get("FLEETMATCH_EFFECTIVE_LOG_LEVEL")
        if env_level:
            try:
                level = LogLevel[env_level.upper()]
            except KeyError:
                pass
        logger.setLevel(_LOGGING_LEVELS.get(level, logging.INFO))

    @classmethod
    def progress(cls, message: str, symbol: str = Symbols.GEAR) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("fleetmatch.progress").info(
                f"{Colors.BLUE}{symbol} {message}{Colors.RESET}"
            )

    @classmethod
    def success(cls, message: str, symbol: str = Symbols.CHECK) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("fleetmatch.success").info(
                f"{Colors.GREEN}{symbol} {message}{Colors.RESET}"
            )

    @classmethod
    def info(cls, message: str, symbol: str = Symbols.INFO) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("fleetmatch.info").info(f"{symbol} {message}")

    @classmethod
    def detail(cls, message: str, prefix: str = "  ") -> None:
        if cls._current_level.value >= LogLevel.VERBOSE.value:
            cls.get_logger("fleetmatch.detail").info(f"{prefix} {message}")

    @classmethod
    def debug(cls, message: str, logger_name: str = "fleetmatch.debug") -> None:
        if cls._current_level.value >= LogLevel.DEBUG.value:
            cls.get_logger(logger_name).debug(message)

    @classmethod
    def warning(cls, message: str, symbol: str = Symbols.WARNING) -> None:
        if cls._current_level.value >= LogLevel.NORMAL.value:
            cls.get_logger("fleetmatch.warning").warning(
                f"{Colors.YELLOW}{symbol} {message}{Colors.RESET}"
            )

    @classmethod
    def error(cls, message: str, symbol: str = Symbols.CROSS) -> None:
        # Errors are shown at every level, QUIET included.
        cls.get_logger("fleetmatch.error").error(
            f"{Colors.RED}{symbol} {message}{Colors.RESET}"
        )


def suppress_third_party_logs() -> None:
    """Keep chatty dependencies out of the console."""
    for name in ("urllib3", "matplotlib", "numba", "openpyxl", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(level: LogLevel | None = None) -> None:
    """Configure the root handler and the shared Fleetmatch level.

    When ``level`` is None the ``FLEETMATCH_LOG_LEVEL`` environment variable is
    consulted, falling back to ``NORMAL``.
    """
    if level is None:
        env_value = os.environ.get("FLEETMATCH_LOG_LEVEL", "normal").lower()
        level = {
            "quiet": LogLevel.QUIET,
            "verbose": LogLevel.VERBOSE,
            "debug": LogLevel.DEBUG,
        }.get(env_value, LogLevel.NORMAL)

    FleetmatchLogger.set_level(level)
    os.environ["FLEETMATCH_EFFECTIVE_LOG_LEVEL"] = level.name

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(SimpleFormatter())
    if level == LogLevel.QUIET:
        handler.setLevel(logging.ERROR)
    elif level == LogLevel.DEBUG:
        handler.setLevel(logging.DEBUG)
    else:
        handler.setLevel(logging.INFO)

    root_logger.addHandler(handler)
    root_logger.setLevel(handler.level)
    suppress_third_party_logs()


class ProgressTracker:
    """Step-wise progress bar that stays silent in QUIET mode."""

    def __init__(self, steps: list[str]):
        self.steps = steps
        self.current = 0
        self.pbar = None
        if FleetmatchLogger.get_level().value >= LogLevel.NORMAL.value:
            self.pbar = tqdm(
                total=len(steps),
                desc=f"{Colors.BLUE}{Symbols.TRUCK} Evaluation Progress{Colors.RESET}",
                bar_format="{desc}: {percentage:3.0f}%|{bar}| {n_fmt}/{total_fmt}",
            )

    def advance(self, message: str | None = None, status: str = "success") -> None:
        if self.pbar is None:
            return
        if message:
            color = Colors.GREEN if status == "success" else Colors.YELLOW
            self.pbar.write(f"{color}{Symbols.CHECK} {message}{Colors.RESET}")
        self.pbar.update(1)
        self.current += 1

    def close(self) -> None:
        if self.pbar is None:
            return
        self.pbar.write(
            f"{Colors.GREEN}{Symbols.CHECK} Evaluation completed{Colors.RESET}"
        )
        self.pbar.close()


def log_progress(message: str) -> None:
    FleetmatchLogger.progress(message, Symbols.GEAR)


def log_success(message: str) -> None:
    FleetmatchLogger.success(message, Symbols.CHECK)


def log_info(message: str) -> None:
    FleetmatchLogger.info(message, Symbols.INFO)


def log_detail(message: str) -> None:
    FleetmatchLogger.detail(message, "  ")


def log_warning(message: str) -> None:
    FleetmatchLogger.warning(message, Symbols.WARNING)


def log_error(message: str) -> None:
    FleetmatchLogger.error(message, Symbols.CROSS)


def log_debug(message: str, logger_name: str = "fleetmatch.debug") -> None:
    FleetmatchLogger.debug(message, logger_name)
