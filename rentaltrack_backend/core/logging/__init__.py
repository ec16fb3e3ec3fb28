"""Logging infrastructure for RentalTrack backend."""

from .context import TransactionIdFilter, get_transaction_id, set_transaction_id
from .logger_config import get_logger, setup_logging, shutdown_logging
from .middleware import AccessLogMiddleware, RequestIdMiddleware

__all__ = [
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    "AccessLogMiddleware",
    "RequestIdMiddleware",
    "TransactionIdFilter",
    "get_transaction_id",
    "set_transaction_id",
]
