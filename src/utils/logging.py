"""Structured logging helpers: correlation IDs, bound listing context, timing, PII masking."""

import logging
import time
import uuid
import re
import hashlib
from typing import Any, Optional, Dict
from contextlib import contextmanager
from datetime import datetime, timezone

from src.utils.logging_config import LoggingConfig, correlation_id_var, get_logger


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for request tracing."""
    return f"req_{uuid.uuid4().hex[:12]}"


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get()


@contextmanager
def correlation_context(correlation_id: Optional[str] = None):
    """Bind a correlation ID (client supplied or fresh) for the duration of a request."""
    if not correlation_id:
        correlation_id = generate_correlation_id()

    token = correlation_id_var.set(correlation_id)
    try:
        yield correlation_id
    finally:
        correlation_id_var.reset(token)


_SENSITIVE_PATTERNS = (
    (re.compile(r'[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}', re.IGNORECASE), '[REDACTED_EMAIL]'),
    (re.compile(r'\b\+?\d[\d\s().-]{7,}\b'), '[REDACTED_PHONE]'),
    (re.compile(r'(?i)(api[_-]?key|token|secret|password|auth)[\s:=]+([A-Za-z0-9_-]{20,})'), r'\1=[REDACTED]'),
    (re.compile(r'eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+'), '[REDACTED_JWT]'),
)

# Seller contact columns that never go to the logs verbatim.
CONTACT_FIELDS = ("name", "email", "phone")


def mask_sensitive_data(text: str) -> str:
    """Mask emails, phone numbers, keys and Supabase JWTs in free text."""
    if not text or not LoggingConfig.LOG_MASK_SENSITIVE:
        return text

    for pattern, replacement in _SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def mask_email(email: Optional[str]) -> Optional[str]:
    """Mask an email address for logging, keeping the domain."""
    if not LoggingConfig.LOG_MASK_SENSITIVE or not email or "@" not in email:
        return email

    local, domain = email.split("@", 1)
    hashed = hashlib.sha256(local.encode()).hexdigest()[:8]
    return f"{local[:1]}...{hashed}@{domain}"


def sanitize_message_text(text: str, max_length: int = 200) -> Optional[str]:
    """Sanitize free text (inquiries, descriptions) for logging."""
    if not text:
        return None

    if len(text) > max_length:
        text = text[:max_length] + "..."

    return mask_sensitive_data(text)


def mask_listing_payload(payload: Dict[str, Any], max_text_length: int = 80) -> Dict[str, Any]:
    """Copy of a listing payload that is safe to log."""
    masked = {}
    for key, value in payload.items():
        if key == "email":
            masked[key] = mask_email(value) if isinstance(value, str) else value
        elif key in CONTACT_FIELDS and value and LoggingConfig.LOG_MASK_SENSITIVE:
            masked[key] = "[REDACTED]"
        elif isinstance(value, str):
            masked[key] = sanitize_message_text(value, max_length=max_text_length) or value
        else:
            masked[key] = value
    return masked


class StructuredLogger:
    """Logger wrapper that turns keyword arguments into structured fields.

    ``bind`` returns a child that repeats the given fields (a draft or
    listing id, say) on every record it emits.
    """

    def __init__(self, logger: logging.Logger, fields: Optional[Dict[str, Any]] = None):
        self.logger = logger
        self.fields = dict(fields or {})

    def bind(self, **fields: Any) -> "StructuredLogger":
        return StructuredLogger(self.logger, {**self.fields, **fields})

    def _get_extra(self, **kwargs: Any) -> Dict[str, Any]:
        extra = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            extra["correlation_id"] = correlation_id

        extra.update(self.fields)
        extra.update(kwargs)

        return extra

    def debug(self, message: str, **kwargs: Any) -> None:
        self.logger.debug(message, extra=self._get_extra(**kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self.logger.info(message, extra=self._get_extra(**kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self.logger.warning(message, extra=self._get_extra(**kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self.logger.error(message, extra=self._get_extra(**kwargs), exc_info=exc_info)


def get_structured_logger(name: str) -> StructuredLogger:
    return StructuredLogger(get_logger(name))


@contextmanager
def log_timing(operation_name: str, logger: Optional[StructuredLogger] = None, **context: Any):
    """Log how long the block took, with a warning past the slow-operation threshold.

    The completion record is written even when the block raises.
    """
    if logger is None:
        logger = get_structured_logger(__name__)

    start_time = time.perf_counter()
    logger.debug(f"Starting {operation_name}", operation=operation_name, **context)

    try:
        yield
    finally:
        elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
        logger.info(
            f"Completed {operation_name}",
            operation=operation_name,
            processing_time_ms=elapsed_ms,
            **context
        )

        threshold_ms = LoggingConfig.LOG_SLOW_OPERATION_THRESHOLD_MS
        if elapsed_ms > threshold_ms:
            logger.warning(
                f"Slow operation detected: {operation_name}",
                operation=operation_name,
                processing_time_ms=elapsed_ms,
                threshold_ms=threshold_ms,
                **context
            )
