"""Cache Typer app factory."""

import typer

from doclinks.api.cache.cmd_clear import cmd_clear
from doclinks.api.cache.cmd_prune import cmd_prune
from doclinks.api.cache.cmd_status import cmd_status
from doclinks.cli._handle_stage_result import _handle_stage_result


def cache() -> typer.Typer:
    """Create and configure the cache Typer app."""
    app = typer.Typer(
        name="cache",
        help="Inspect and maintain the link result cache",
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        context_settings={"help_option_names": ["-h", "--help"]},
        invoke_without_command=True,
    )

    @app.callback(invoke_without_command=True)
    def callback(ctx: typer.Context) -> None:
        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help(), err=True)
            raise typer.Exit()

    @app.command(name="status")
    def status_cmd(
        cache_path: str | None = typer.Option(None, "--cache", help="Cache file path"),
        max_cache_age: str | None = typer.Option(None, "--max-cache-age", help="Freshness limit (e.g. 1d)"),
    ) -> None:
        """Show cache size and freshness."""
        _handle_stage_result(cmd_status)(cache_path=cache_path, max_cache_age=max_cache_age)

    @app.command(name="prune")
    def prune_cmd(
        cache_path: str | None = typer.Option(None, "--cache", help="Cache file path"),
        max_cache_age: str | None = typer.Option(None, "--max-cache-age", help="Freshness limit (e.g. 1d)"),
    ) -> None:
        """Remove expired results."""
        _handle_stage_result(cmd_prune)(cache_path=cache_path, max_cache_age=max_cache_age)

    @app.command(name="clear")
    def clear_cmd(
        cache_path: str | None = typer.Option(None, "--cache", help="Cache file path"),
    ) -> None:
        """Remove every cached result."""
        _handle_stage_result(cmd_clear)(cache_path=cache_path)

    return app
