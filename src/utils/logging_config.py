"""Logging setup for the serverless functions, driven by environment variables."""

import os
import logging
import sys
from contextvars import ContextVar
from typing import Optional
from pythonjsonlogger import jsonlogger

# Set per request by ``correlation_context``; read by every log record.
correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

# Client libraries that log each HTTP round trip at INFO.
NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "supabase",
    "storage3",
    "postgrest",
    "gotrue",
    "anthropic",
    "openai",
)


class RequestContextFilter(logging.Filter):
    """Stamp records with the service name and the active correlation ID.

    Plain ``logging.getLogger`` loggers in the endpoint modules get the same
    request fields the structured logger adds explicitly.
    """

    def __init__(self, service: str):
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        if not getattr(record, "correlation_id", None):
            record.correlation_id = correlation_id_var.get() or "-"
        return True


class LoggingConfig:
    """Centralized logging configuration."""

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "json").lower()
    LOG_SERVICE_NAME = os.environ.get("LOG_SERVICE_NAME", "marketplace-backend")
    LOG_MASK_SENSITIVE = os.environ.get("LOG_MASK_SENSITIVE", "true").lower() == "true"
    LOG_CORRELATION_ID_HEADER = os.environ.get("LOG_CORRELATION_ID_HEADER", "X-Correlation-ID")
    LOG_SLOW_OPERATION_THRESHOLD_MS = int(os.environ.get("LOG_SLOW_OPERATION_THRESHOLD_MS", "1000"))

    _configured = False

    @classmethod
    def setup_logging(cls, force: bool = False) -> None:
        """Install a single stdout handler on the root logger.

        Every endpoint module calls this at import time; only the first call
        configures anything unless ``force`` is set.
        """
        if cls._configured and not force:
            return

        level = getattr(logging, cls.LOG_LEVEL, logging.INFO)
        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        # stdout for serverless/Vercel
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.addFilter(RequestContextFilter(cls.LOG_SERVICE_NAME))

        if cls.LOG_FORMAT == "json":
            formatter = jsonlogger.JsonFormatter(
                "%(timestamp)s %(levelname)s %(name)s %(service)s %(correlation_id)s %(message)s",
                timestamp=True
            )
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s'
            )

        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

        cls._configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)
