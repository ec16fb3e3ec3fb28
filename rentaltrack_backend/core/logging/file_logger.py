"""
Rotating file output behind a log queue.

Records are handed to a ``QueueListener`` thread, so request handlers only
enqueue and never wait on the disk.
"""

import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

from .structured_logger import build_formatter

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Third-party loggers routed into the queue, with the level they run at
LIBRARY_LOG_LEVELS = {
    "sqlalchemy": logging.WARNING,
    "alembic": logging.INFO,
    "uvicorn": logging.INFO,
    "asyncmy": logging.INFO,
    "aiosqlite": logging.WARNING,
    "passlib": logging.WARNING,
}


class FileLogger:
    """A started queue listener plus the handler that feeds it."""

    def __init__(self, queue_handler: QueueHandler, listener: QueueListener):
        self.queue_handler = queue_handler
        self._listener: QueueListener | None = listener

    def stop(self) -> None:
        """Drain the queue and stop the listener thread."""
        if self._listener is not None:
            self._listener.stop()
            self._listener = None


def _handlers(
    log_file_path: str,
    level: int,
    use_json_format: bool,
    max_bytes: int,
    backup_count: int,
) -> list[logging.Handler]:
    path = Path(log_file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    file_handler.setFormatter(build_formatter(use_json_format))

    console = logging.StreamHandler(sys.stdout)
    if use_json_format:
        console.setFormatter(build_formatter(True))
    else:
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    for handler in (file_handler, console):
        handler.setLevel(level)
    return [console, file_handler]


def setup_file_logging(
    log_file_path: str,
    log_level: str,
    use_json_format: bool,
    max_bytes: int,
    backup_count: int,
) -> FileLogger:
    """Start a listener writing to stdout and a rotating file.

    Returns:
        The running FileLogger; call ``stop()`` on shutdown.
    """
    level = logging.getLevelName(log_level.upper())
    log_queue: queue.Queue = queue.Queue()

    listener = QueueListener(
        log_queue,
        *_handlers(log_file_path, level, use_json_format, max_bytes, backup_count),
        respect_handler_level=True,
    )
    listener.start()

    queue_handler = QueueHandler(log_queue)
    queue_handler.setLevel(level)
    return FileLogger(queue_handler, listener)


def route_to_queue(queue_handler: QueueHandler) -> None:
    """Point the root, library and ``py.warnings`` loggers at the queue."""
    root = logging.getLogger()
    root.handlers[:] = [queue_handler]
    root.setLevel(logging.INFO)

    for name, level in LIBRARY_LOG_LEVELS.items():
        library_logger = logging.getLogger(name)
        library_logger.handlers[:] = [queue_handler]
        library_logger.setLevel(level)
        library_logger.propagate = False

    # Consistency warnings from the rate engine land in the log file
    logging.captureWarnings(True)
    warnings_logger = logging.getLogger("py.warnings")
    warnings_logger.handlers[:] = [queue_handler]
    warnings_logger.propagate = False
