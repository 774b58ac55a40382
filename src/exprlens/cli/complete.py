"""exprlens complete command - list completion candidates at an offset."""

import json
from pathlib import Path

import click

from exprlens.cli.utils import describe_symbol, open_document
from exprlens.language.completions import get_expression_completions


@click.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--offset", type=int, required=True, help="Absolute cursor offset")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def complete_command(document: Path, offset: int, as_json: bool) -> None:
    """List the symbols offered for completion at OFFSET.

    DOCUMENT is a YAML or JSON template document.
    """
    doc = open_document(document, as_json)
    symbols = get_expression_completions(doc.scope, doc.ast, offset, doc.template)
    ordered = sorted(symbols, key=lambda s: s.name) if symbols is not None else None

    if as_json:
        payload = [describe_symbol(s) for s in ordered] if ordered is not None else None
        click.echo(json.dumps({"offset": offset, "completions": payload}))
        return

    if ordered is None:
        click.echo("No completions")
        return
    for symbol in ordered:
        click.echo(f"{symbol.name}\t{symbol.kind}")
