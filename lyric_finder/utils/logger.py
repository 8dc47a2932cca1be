"""
Logging configuration and utilities for Lyric-Finder
Provides colored console output and rotating file logging behind a background
queue listener, so emitting a record never blocks request handling
"""

import atexit
import functools
import inspect
import logging
import logging.handlers
import queue
import re
import sys
import time
from pathlib import Path
from typing import Optional
import colorama
from colorama import Fore, Back, Style

from ..config.settings import get_settings


# Initialize colorama for Windows compatibility
colorama.init()

# Listener draining the log queue into the real handlers (one per process)
_queue_listener: Optional[logging.handlers.QueueListener] = None

# Third-party loggers that are too chatty at INFO level
EXTERNAL_LIBS = [
    'aiohttp.access', 'urllib3', 'requests', 'lyricsgenius',
    'urllib3.connectionpool', 'asyncio'
]


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colored level names for console output"""

    # Color mapping for log levels
    COLORS = {
        'DEBUG': Fore.CYAN,
        'INFO': Fore.GREEN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.RED + Back.WHITE + Style.BRIGHT,
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True, datefmt: Optional[str] = None):
        """
        Initialize colored formatter

        Args:
            fmt: Log format string
            use_colors: Whether to use colored output
            datefmt: Date format for %(asctime)s
        """
        super().__init__(fmt or '%(asctime)s %(levelname)s %(message)s', datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors"""
        if self.use_colors and record.levelname in self.COLORS:
            # Create a copy of the record to avoid modifying the original,
            # other handlers format the same record
            record_copy = logging.makeLogRecord(record.__dict__)
            record_copy.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{Style.RESET_ALL}"
            return super().format(record_copy)
        return super().format(record)


class RequestLogAdapter(logging.LoggerAdapter):
    """
    Logger adapter that prefixes every message with a request id

    The lyrics pipeline receives one of these per inbound query, so all log
    lines of a lookup can be correlated without global state.
    """

    def __init__(self, logger: logging.Logger, request_id: str):
        super().__init__(logger, {'request_id': request_id})

    @property
    def request_id(self) -> str:
        return self.extra['request_id']

    def process(self, msg, kwargs):
        return f"[{self.extra['request_id']}] {msg}", kwargs


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console_output: bool = True,
    colored_output: bool = True,
    max_size: str = "10MB",
    backup_count: int = 3
) -> None:
    """
    Setup application logging configuration

    The root logger gets a single QueueHandler; a QueueListener thread hands
    records to the console and file handlers. Handler failures are reported
    through Handler.handleError and never propagate into the caller.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (None to disable file logging)
        console_output: Enable console logging
        colored_output: Enable colored console output
        max_size: Maximum log file size before rotation
        backup_count: Number of backup log files to keep
    """
    global _queue_listener

    # Convert level string to logging constant
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    # Stop a previous listener before replacing the handlers it drains
    shutdown_logging()

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    handlers = []

    # Console handler - timestamped, optionally colored
    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(ColoredFormatter(
            fmt='%(asctime)s %(levelname)s %(message)s',
            use_colors=colored_output,
            datefmt='%Y-%m-%dT%H:%M:%S'
        ))
        handlers.append(console_handler)

    # File handler with full detail logging
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=parse_size(max_size),
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)

        # Detailed formatter for file (technical details)
        file_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s | %(name)-30s | %(levelname)-8s | %(funcName)-20s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        handlers.append(file_handler)

    if handlers:
        log_queue = queue.SimpleQueue()
        root_logger.addHandler(logging.handlers.QueueHandler(log_queue))
        _queue_listener = logging.handlers.QueueListener(
            log_queue, *handlers, respect_handler_level=True
        )
        _queue_listener.start()

    for lib in EXTERNAL_LIBS:
        logging.getLogger(lib).setLevel(logging.WARNING)

    logger = logging.getLogger('lyric_finder')
    logger.debug(f"Logging initialized - Level: {level}, Console: {console_output}, File: {log_file}")


def shutdown_logging() -> None:
    """Stop the queue listener, flushing pending records to the handlers"""
    global _queue_listener
    if _queue_listener is not None:
        _queue_listener.stop()
        for handler in _queue_listener.handlers:
            handler.close()
        _queue_listener = None


atexit.register(shutdown_logging)


def get_current_log_file() -> Optional[Path]:
    """
    Get the current log file path from the active file handler

    Returns:
        Path to current log file or None if no file logging
    """
    if _queue_listener is None:
        return None
    for handler in _queue_listener.handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            return Path(handler.baseFilename)
    return None


def parse_size(size_str: str) -> int:
    """
    Parse size string to bytes

    Args:
        size_str: Size string like "10MB", "1GB", "500KB"

    Returns:
        Size in bytes

    Raises:
        ValueError: If the string is not a recognised size
    """
    size_str = size_str.upper().strip()

    multipliers = {
        'B': 1,
        'KB': 1024,
        'MB': 1024 ** 2,
        'GB': 1024 ** 3,
        'TB': 1024 ** 4,
    }

    match = re.match(r'^(\d+(?:\.\d+)?)\s*([KMGT]?B)$', size_str)
    if not match:
        raise ValueError(f"Invalid size format: {size_str}")

    number, unit = match.groups()
    return int(float(number) * multipliers[unit])


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for a module

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def get_request_logger(name: str, request_id: str) -> RequestLogAdapter:
    """
    Get a request-scoped logger

    Args:
        name: Logger name (typically __name__)
        request_id: Identifier prefixed to every message

    Returns:
        RequestLogAdapter wrapping the module logger
    """
    return RequestLogAdapter(get_logger(name), request_id)


def configure_from_settings() -> None:
    """Configure logging from application settings"""
    settings = get_settings()
    log_file_path = settings.get_log_file_path()

    setup_logging(
        level=settings.logging.level,
        log_file=str(log_file_path) if log_file_path else None,
        console_output=settings.logging.console_output,
        colored_output=settings.logging.colored_output,
        max_size=settings.logging.max_size,
        backup_count=settings.logging.backup_count
    )


def log_performance(func):
    """Decorator to log function duration at DEBUG level, sync or async"""

    if inspect.iscoroutinefunction(func):
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            logger = get_logger(func.__module__)
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
                logger.debug(f"{func.__name__} completed in {time.perf_counter() - start_time:.3f}s")
                return result
            except Exception as e:
                logger.debug(f"{func.__name__} failed after {time.perf_counter() - start_time:.3f}s: {e}")
                raise
        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
            logger.debug(f"{func.__name__} completed in {time.perf_counter() - start_time:.3f}s")
            return result
        except Exception as e:
            logger.debug(f"{func.__name__} failed after {time.perf_counter() - start_time:.3f}s: {e}")
            raise

    return wrapper
