"""exprlens path command - show the nodes enclosing an offset."""

import json
from pathlib import Path

import click

from exprlens.cli.utils import open_document
from exprlens.language.path_finder import find_path


@click.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--offset", type=int, required=True, help="Absolute cursor offset")
@click.option("--exclude-empty", is_flag=True, help="Skip zero-width nodes")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def path_command(document: Path, offset: int, exclude_empty: bool, as_json: bool) -> None:
    """Print the path from the expression root to the node under OFFSET.

    DOCUMENT is a YAML or JSON template document.
    """
    doc = open_document(document, as_json)
    path = find_path(doc.ast, offset, exclude_empty=exclude_empty)

    if as_json:
        nodes = [
            {"kind": node.kind.value, "source_span": list(node.source_span.as_tuple())}
            for node in path
        ]
        click.echo(json.dumps({"offset": offset, "path": nodes}))
        return

    if path.empty:
        click.echo(f"No expression node at offset {offset}")
        return
    for depth, node in enumerate(path):
        span = node.source_span
        click.echo(f"{'  ' * depth}{node.kind.value} [{span.start}, {span.end})")
