"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (EXPRLENS__SECTION__KEY)
3. Project YAML (.exprlens/config.yaml)
4. Global YAML (~/.config/exprlens/config.yaml)
5. Built-in defaults (this file)

Examples:
    EXPRLENS__LOGGING__LEVEL=DEBUG
    EXPRLENS__RESOLVER__STRICT_SPANS=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        EXPRLENS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every resolved query.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ResolverConfig(BaseModel):
    """Expression resolver configuration.

    Env vars:
        EXPRLENS__RESOLVER__STRICT_SPANS: Raise on malformed name spans
    """

    strict_spans: bool = Field(
        default=True,
        description="Raise SpanError when a name span lies outside its node's span. "
        "When false the query logs a warning and yields no result.",
    )


class ExprLensConfig(BaseModel):
    """Root configuration for exprlens."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
