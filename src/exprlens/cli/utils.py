"""CLI utilities."""

import json
from pathlib import Path
from typing import NoReturn

import click
import structlog

from exprlens.core.errors import ExprLensError
from exprlens.document import TemplateDocument, load_document
from exprlens.language.symbols import Symbol

log = structlog.get_logger(__name__)


def fail(error: ExprLensError, as_json: bool) -> NoReturn:
    """Stop the command with exit code 1.

    With ``--json`` the error is written to stdout as ``{"error": {...}}`` so
    callers parsing the output get a structured failure instead of prose.
    """
    log.warning("command_error", error_code=error.code.value, error=error.message)
    if as_json:
        click.echo(json.dumps({"error": error.to_dict()}))
        raise click.exceptions.Exit(1)
    raise click.ClickException(str(error)) from error


def open_document(path: Path, as_json: bool = False) -> TemplateDocument:
    """Load a template document, reporting failures as CLI errors."""
    try:
        return load_document(path)
    except ExprLensError as e:
        fail(e, as_json)


def describe_symbol(symbol: Symbol) -> dict[str, object]:
    """JSON-friendly summary of a symbol."""
    return {
        "name": symbol.name,
        "kind": symbol.kind,
        "type": symbol.type.name if symbol.type else None,
        "callable": symbol.callable,
    }
