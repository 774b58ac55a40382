"""exprlens CLI - inspect expression-position queries against a template document."""

import click

from exprlens.cli.complete import complete_command
from exprlens.cli.path import path_command
from exprlens.cli.symbol import symbol_command
from exprlens.config.loader import load_config
from exprlens.core.errors import ConfigError
from exprlens.core.logging import clear_request_id, configure_logging, set_request_id


@click.group()
@click.version_option(version="0.1.0", prog_name="exprlens")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """exprlens - completions and symbol lookup for template expressions."""
    ctx.ensure_object(dict)
    try:
        config = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    set_request_id()
    ctx.call_on_close(clear_request_id)

    ctx.obj["config"] = config


cli.add_command(path_command, name="path")
cli.add_command(complete_command, name="complete")
cli.add_command(symbol_command, name="symbol")


if __name__ == "__main__":
    cli()
