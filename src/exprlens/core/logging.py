"""structlog setup for exprlens.

Every output in ``LoggingConfig.outputs`` becomes one stdlib handler with its
own level and renderer, so resolver debug events can go to a JSON file while
the console only shows warnings. Events logged while a query id is set carry
it as ``request_id``; the CLI sets one per invocation.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from exprlens.config.models import LoggingConfig, LogOutputConfig

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_CONSOLE_DESTINATIONS = ("stderr", "stdout")


def get_request_id() -> str | None:
    return _request_id.get()


def set_request_id(request_id: str | None = None) -> str:
    """Set the query id, generating a short one when none is given."""
    rid = request_id or uuid4().hex[:12]
    _request_id.set(rid)
    return rid


def clear_request_id() -> None:
    _request_id.set(None)


def _add_request_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if rid := get_request_id():
        event_dict["request_id"] = rid
    return event_dict


def _level(name: str | None, fallback: int) -> int:
    if name is None:
        return fallback
    return _LEVELS.get(name.upper(), fallback)


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Configure structlog and the root logger.

    Args:
        config: Logging configuration; when given, ``json_format`` and
            ``level`` are ignored.
        json_format: Render the single stderr output as JSON.
        level: Level of the single stderr output.
    """
    from exprlens.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _level(config.level, logging.INFO)
    shared: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _add_request_id,  # type: ignore[list-item]
    ]

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration (tests, --verbose) must take effect on existing loggers
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    for output in config.outputs:
        handler = _handler_for(output.destination)
        handler.setLevel(_level(output.level, root_level))
        handler.setFormatter(_formatter_for(output, shared))
        root.addHandler(handler)


def _handler_for(destination: str) -> logging.Handler:
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    if destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def _formatter_for(
    output: LogOutputConfig, shared: list[structlog.types.Processor]
) -> logging.Formatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=output.destination in _CONSOLE_DESTINATIONS and sys.stderr.isatty(),
            pad_event_to=0,
            pad_level=False,
        )
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)
