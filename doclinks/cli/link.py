"""Link Typer app factory."""

import typer

from doclinks.api.link.cmd_check import cmd_check
from doclinks.api.link.cmd_extract import cmd_extract
from doclinks.cli._handle_stage_result import _handle_stage_result


def link() -> typer.Typer:
    """Create and configure the link Typer app."""
    app = typer.Typer(
        name="link",
        help="Extract and validate document links",
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

    @app.command(name="check")
    def check_cmd(
        root: str = typer.Argument(".", help="Directory or file to scan"),
        exclude: list[str] = typer.Option([], "--exclude", "-x", help="Regex of targets to skip (repeatable)"),
        cache: str | None = typer.Option(None, "--cache", help="Cache file path"),
        max_cache_age: str | None = typer.Option(None, "--max-cache-age", help="Reuse results younger than this (e.g. 1d)"),
        concurrency: int | None = typer.Option(None, "--concurrency", "-j", help="Maximum checks in flight"),
        timeout: float | None = typer.Option(None, "--timeout", help="Per-request timeout in seconds"),
        run_timeout: float | None = typer.Option(
            None,
            "--run-timeout",
            help="Timeout for the whole run in seconds; checks already running still finish before exit",
        ),
        base: str | None = typer.Option(None, "--base", help="Directory that root-relative links resolve against"),
        extension: list[str] = typer.Option([], "--extension", "-e", help="Document suffix to scan (repeatable)"),
        report: str | None = typer.Option(None, "--report", "-o", help="Write a Markdown report here"),
        no_cache: bool = typer.Option(False, "--no-cache", help="Neither read nor write the cache"),
        config: str | None = typer.Option(None, "--config", help="Config file (default $DOCLINKS_HOME/config.json)"),
    ) -> None:
        """Check every link under ROOT; exit 1 if any is broken."""
        _handle_stage_result(cmd_check)(
            root=root,
            exclude=exclude,
            cache_path=cache,
            max_cache_age=max_cache_age,
            concurrency=concurrency,
            timeout=timeout,
            run_timeout=run_timeout,
            base=base,
            extensions=extension,
            report_path=report,
            no_cache=no_cache,
            config_path=config,
        )

    @app.command(name="extract")
    def extract_cmd(
        root: str = typer.Argument(".", help="Directory or file to scan"),
        extension: list[str] = typer.Option([], "--extension", "-e", help="Document suffix to scan (repeatable)"),
        config: str | None = typer.Option(None, "--config", help="Config file (default $DOCLINKS_HOME/config.json)"),
    ) -> None:
        """List links under ROOT without checking them."""
        _handle_stage_result(cmd_extract)(root=root, extensions=extension, config_path=config)

    return app
