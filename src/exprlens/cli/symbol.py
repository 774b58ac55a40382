"""exprlens symbol command - show the symbol under an offset."""

import json
from pathlib import Path

import click

from exprlens.cli.utils import describe_symbol, fail, open_document
from exprlens.core.errors import ExprLensError
from exprlens.language.symbol_at import get_expression_symbol


@click.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--offset", type=int, required=True, help="Absolute cursor offset")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def symbol_command(ctx: click.Context, document: Path, offset: int, as_json: bool) -> None:
    """Show the symbol under OFFSET and its expression-relative span.

    DOCUMENT is a YAML or JSON template document.
    """
    config = ctx.obj["config"]
    doc = open_document(document, as_json)
    try:
        result = get_expression_symbol(
            doc.scope,
            doc.ast,
            offset,
            doc.template,
            strict_spans=config.resolver.strict_spans,
        )
    except ExprLensError as e:
        fail(e, as_json)

    if as_json:
        payload = None
        if result is not None:
            payload = {**describe_symbol(result.symbol), "span": list(result.span.as_tuple())}
        click.echo(json.dumps({"offset": offset, "symbol": payload}))
        return

    if result is None:
        click.echo("No symbol")
        return
    span = result.span
    click.echo(f"{result.symbol.name}\t{result.symbol.kind}\t[{span.start}, {span.end})")
