"""Create the main Typer CLI app."""

import typer

from doclinks import __version__
from doclinks.cli.cache import cache
from doclinks.cli.link import link


def _create_app() -> typer.Typer:
    """Create and configure the main CLI Typer app."""
    app = typer.Typer(
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        help="doclinks - check the links in a documentation tree",
        context_settings={"help_option_names": ["-h", "--help"]},
        invoke_without_command=True,
    )

    app.add_typer(link(), name="link")
    app.add_typer(cache(), name="cache")

    @app.callback(invoke_without_command=True)
    def main_callback(
        ctx: typer.Context,
        display: str = typer.Option("yaml", "--display", "-d", help="Output format: json or yaml"),
        version: bool = typer.Option(False, "--version", help="Show version and exit"),
    ) -> None:
        if version:
            typer.echo(f"doclinks {__version__}")
            raise typer.Exit()

        if display not in ("json", "yaml"):
            typer.echo(f"Error: --display must be 'json' or 'yaml', got '{display}'", err=True)
            raise typer.Exit(1)

        ctx.ensure_object(dict)
        ctx.obj["display_format"] = display

        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())
            raise typer.Exit()

    return app
