"""exprlens error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Expression / span contract
- 4xxx: Template document
- 9xxx: Internal

Resolution queries never raise for well-formed input: "nothing to offer here"
is a ``None`` result, not an error. Errors in this module signal upstream
contract violations (malformed spans, unreadable documents, bad config).
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Expression (3xxx)
    SPAN_INVERTED = 3001
    SPAN_NOT_CONTAINED = 3002

    # Document (4xxx)
    DOCUMENT_NOT_FOUND = 4001
    DOCUMENT_PARSE_ERROR = 4002
    DOCUMENT_INVALID = 4003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class ExprLensError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SPAN_INVERTED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ExprLensError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class SpanError(ExprLensError):
    """Malformed span handed over by the parser."""

    @classmethod
    def inverted(cls, start: int, end: int) -> "SpanError":
        return cls(
            code=ErrorCode.SPAN_INVERTED,
            message=f"Span start {start} is after its end {end}",
            details={"start": start, "end": end},
        )

    @classmethod
    def not_contained(
        cls, what: str, inner: tuple[int, int], outer: tuple[int, int]
    ) -> "SpanError":
        return cls(
            code=ErrorCode.SPAN_NOT_CONTAINED,
            message=f"{what} [{inner[0]}, {inner[1]}) lies outside [{outer[0]}, {outer[1]})",
            details={"what": what, "inner": list(inner), "outer": list(outer)},
        )


class DocumentError(ExprLensError):
    """Template document loading errors."""

    @classmethod
    def not_found(cls, path: str) -> "DocumentError":
        return cls(
            code=ErrorCode.DOCUMENT_NOT_FOUND,
            message=f"Template document not found: {path}",
            details={"path": path},
        )

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "DocumentError":
        return cls(
            code=ErrorCode.DOCUMENT_PARSE_ERROR,
            message=f"Failed to parse template document at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid(cls, location: str, reason: str) -> "DocumentError":
        return cls(
            code=ErrorCode.DOCUMENT_INVALID,
            message=f"Invalid template document at '{location}': {reason}",
            details={"location": location, "reason": reason},
        )


class InternalError(ExprLensError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
