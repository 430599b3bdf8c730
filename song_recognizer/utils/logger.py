"""
Logging for Song-Recognizer

Two audiences read the logs. The person running the CLI sees warnings,
errors and the few progress lines explicitly marked for them, colored with
colorama. The optional rotating log file receives every record with module,
level and function name, which is what provider misses are diagnosed from.
"""

import functools
import logging
import logging.handlers
import re
import sys
import time
from pathlib import Path
from typing import Optional

import colorama
from colorama import Fore, Back, Style

from ..config.settings import get_settings


colorama.init()

# Record attribute that marks an INFO message as meant for the terminal
USER_FACING_ATTR = 'console_output'

# HTTP stack loggers; at DEBUG they print every connection and header
QUIET_LOGGERS = [
    'urllib3', 'urllib3.connectionpool', 'requests', 'charset_normalizer',
]

FILE_FORMAT = '%(asctime)s | %(name)-36s | %(levelname)-8s | %(funcName)-20s | %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_SIZE_UNITS = {'B': 1, 'KB': 1024, 'MB': 1024 ** 2, 'GB': 1024 ** 3}
_SIZE_PATTERN = re.compile(r'^(\d+(?:\.\d+)?)\s*(B|KB|MB|GB)$')


class ConsoleMessageFilter(logging.Filter):
    """Let through WARNING+ and records flagged as user facing"""

    def filter(self, record):
        return record.levelno >= logging.WARNING or bool(getattr(record, USER_FACING_ATTR, False))


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the message by level"""

    LEVEL_COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Back.WHITE + Style.BRIGHT,
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt or '%(message)s')
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        # INFO lines are progress output and stay uncolored
        if not color or record.levelno == logging.INFO:
            return text
        return f"{color}{text}{Style.RESET_ALL}"


def parse_size(size_str: str) -> int:
    """
    Convert a human size such as "10MB" or "512 KB" to bytes

    Raises:
        ValueError: If the string is not a recognized size
    """
    match = _SIZE_PATTERN.match(size_str.strip().upper())
    if not match:
        raise ValueError(f"Invalid size format: {size_str}")
    number, unit = match.groups()
    return int(float(number) * _SIZE_UNITS[unit])


def _console_handler(colored_output: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    handler.addFilter(ConsoleMessageFilter())
    handler.setFormatter(ColoredFormatter(use_colors=colored_output))
    return handler


def _file_handler(log_file: str, level: int, max_size: str, backup_count: int) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=parse_size(max_size),
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console_output: bool = True,
    colored_output: bool = True,
    max_size: str = "10MB",
    backup_count: int = 3
) -> None:
    """
    Install console and file handlers on the root logger

    Calling it again replaces the handlers installed by a previous call.

    Args:
        level: Minimum level written to the log file
        log_file: Log file path, None for console only
        console_output: Show user-facing messages on stderr
        colored_output: Color console messages
        max_size: Rotation threshold such as "10MB"
        backup_count: Rotated files to keep
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if console_output:
        root.addHandler(_console_handler(colored_output))

    if log_file:
        file_level = getattr(logging, str(level).upper(), logging.INFO)
        root.addHandler(_file_handler(log_file, file_level, max_size, backup_count))

    for name in QUIET_LOGGERS:
        quiet = logging.getLogger(name)
        quiet.setLevel(logging.CRITICAL)
        quiet.propagate = False

    logging.getLogger('song_recognizer').debug(
        f"Logging ready (level={level}, console={console_output}, file={log_file})"
    )


def configure_from_settings() -> None:
    """Apply the logging section of the global settings"""
    config = get_settings().logging

    log_file = None
    if config.file:
        log_file = Path(config.file)
        if not log_file.is_absolute():
            log_file = get_settings().get_config_directory() / log_file

    setup_logging(
        level=config.level,
        log_file=str(log_file) if log_file else None,
        console_output=config.console_output,
        colored_output=config.colored_output,
        max_size=config.max_size,
        backup_count=config.backup_count
    )


def get_current_log_file() -> Optional[Path]:
    """Path of the active rotating log file, None when logging to console only"""
    for handler in logging.getLogger().handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            return Path(handler.baseFilename)
    return None


def get_logger(name: str) -> logging.Logger:
    """
    Module logger with an extra ``console_info`` method

    ``logger.console_info(msg)`` logs at INFO and flags the record so it is
    shown on the terminal as well as written to the log file.
    """
    logger = logging.getLogger(name)

    def console_info(message: str):
        logger.info(message, extra={USER_FACING_ATTR: True})

    logger.console_info = console_info
    return logger


class OperationLogger:
    """
    Times one multi-step operation, such as a recognition round or a lyrics search

    Usage:
        operation = OperationLogger(logger, "Song Recognition")
        operation.start()
        ...
        operation.complete("found via audd")
    """

    def __init__(self, logger: logging.Logger, operation_name: str):
        self.logger = logger
        self.operation_name = operation_name
        self.start_time: Optional[float] = None

    def start(self) -> None:
        self.start_time = time.time()
        self.logger.info(f"Operation started: {self.operation_name}")

    @property
    def elapsed(self) -> float:
        if self.start_time is None:
            return 0.0
        return time.time() - self.start_time

    def complete(self, message: Optional[str] = None) -> None:
        outcome = f" - {message}" if message else ""
        self.logger.info(f"Operation completed: {self.operation_name} in {self.elapsed:.2f}s{outcome}")

    def warning(self, message: str) -> None:
        self.logger.warning(f"{self.operation_name}: {message}")

    def error(self, message: str, exception: Optional[Exception] = None) -> None:
        self.logger.error(
            f"Operation failed: {self.operation_name} - {message}",
            exc_info=exception
        )


def log_performance(func):
    """Decorator writing the duration of each call to the debug log"""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)
        started = time.time()
        try:
            return func(*args, **kwargs)
        finally:
            logger.debug(f"{func.__qualname__} took {time.time() - started:.3f}s")

    return wrapper
