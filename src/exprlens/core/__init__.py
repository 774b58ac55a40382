"""Core module exports."""

from exprlens.core.errors import (
    ConfigError,
    DocumentError,
    ErrorCode,
    ExprLensError,
    InternalError,
    SpanError,
)
from exprlens.core.logging import (
    clear_request_id,
    configure_logging,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ExprLensError",
    "ErrorCode",
    "ConfigError",
    "SpanError",
    "DocumentError",
    "InternalError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_request_id",
    "set_request_id",
]
