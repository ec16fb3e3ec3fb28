"""
Central logging configuration for RentalTrack.
Builds the handler tree from the ``log_*`` settings.
"""

import logging

from ...config import settings
from .context import TransactionIdFilter
from .file_logger import FileLogger, route_to_queue, setup_file_logging
from .structured_logger import setup_structured_logging

APP_LOGGER_NAME = "rentaltrack_backend"


class LoggingConfig:
    """Holds the running logging setup so it can be torn down on shutdown."""

    def __init__(self):
        self.file_logger: FileLogger | None = None
        self.transaction_filter = TransactionIdFilter()
        self._is_configured = False

    def setup(
        self,
        log_to_file: bool,
        log_level: str,
        log_file_path: str,
        use_json_format: bool,
        max_bytes: int,
        backup_count: int,
    ) -> logging.Logger:
        if self._is_configured:
            return get_logger()

        if log_to_file:
            self.file_logger = setup_file_logging(
                log_file_path=log_file_path,
                log_level=log_level,
                use_json_format=use_json_format,
                max_bytes=max_bytes,
                backup_count=backup_count,
            )
            queue_handler = self.file_logger.queue_handler
            queue_handler.addFilter(self.transaction_filter)
            route_to_queue(queue_handler)
            logging.getLogger(APP_LOGGER_NAME).setLevel(log_level.upper())
        else:
            logger = setup_structured_logging(log_level, use_json_format)
            for handler in logger.handlers:
                handler.addFilter(self.transaction_filter)

        self._is_configured = True
        return get_logger()

    def shutdown(self) -> None:
        if self.file_logger:
            self.file_logger.stop()
            self.file_logger = None
        self._is_configured = False


_logging_config = LoggingConfig()


def setup_logging() -> logging.Logger:
    """Configure logging from application settings.

    Returns:
        The application's root logger
    """
    return _logging_config.setup(
        log_to_file=settings.log_to_file,
        log_level=settings.log_level,
        log_file_path=settings.log_file_path,
        use_json_format=settings.log_format.lower() == "json",
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger under the application namespace.

    Module names already inside the package (``__name__``) are used as is.
    """
    if not name:
        return logging.getLogger(APP_LOGGER_NAME)
    if name == APP_LOGGER_NAME or name.startswith(f"{APP_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")


def shutdown_logging() -> None:
    _logging_config.shutdown()
