"""Config module exports."""

from exprlens.config.loader import ExprLensSettings, load_config
from exprlens.config.models import (
    ExprLensConfig,
    LoggingConfig,
    LogOutputConfig,
    ResolverConfig,
)

__all__ = [
    "load_config",
    "ExprLensConfig",
    "ExprLensSettings",
    "LoggingConfig",
    "LogOutputConfig",
    "ResolverConfig",
]
