# src/fx_inventory_engine/logging_utils.py
import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Optional
from pythonjsonlogger import jsonlogger

from . import config

# Holds the correlation ID of the report request currently being computed.
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="<not-set>")


class CorrelationIdFilter(logging.Filter):
    """
    A logging filter that injects the current correlation ID from a ContextVar
    into the log record.
    """
    def filter(self, record):
        record.correlation_id = correlation_id_var.get()
        record.service = config.SERVICE_NAME
        record.environment = config.ENVIRONMENT
        return True


def setup_logging(level: Optional[str] = None):
    """
    Configures the root logger for structured JSON logging so that every
    module logger of the engine, and of the embedding application, inherits it.
    """
    root_logger = logging.getLogger()

    # Clear any existing handlers to prevent duplicate logs
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.setLevel(level or config.LOG_LEVEL)

    handler = logging.StreamHandler(sys.stdout)
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s %(service)s %(environment)s %(correlation_id)s",
        rename_fields={
            "asctime": "timestamp",
            "levelname": "level",
            "name": "logger"
        }
    )
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())

    root_logger.addHandler(handler)


def generate_correlation_id(prefix: str) -> str:
    """
    Generates a new correlation ID with a caller-specific prefix.
    Args:
        prefix: A short code for the caller (e.g., 'UTIL').
    Returns:
        A formatted correlation ID string.
    """
    return f"{prefix}:{uuid.uuid4()}"
