"""Typer application and CLI entry point for pokedexcli.

Running ``pokedexcli`` with no sub-command starts the interactive shell;
``pokedexcli shell`` does the same explicitly.  Global flags configure
output, logging, the API root URL and the cache TTL.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler, invokes the Typer app,
maps :class:`~pokedexcli.exceptions.PokedexError` to its exit code, and
writes a crash log under the data directory for anything unexpected.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from pokedexcli import __version__
from pokedexcli.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED

app = typer.Typer(
    name="pokedexcli",
    help="An interactive Pokedex backed by the public PokeAPI.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"pokedexcli {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="PokeAPI root URL."
    ),
    cache_ttl: Optional[float] = typer.Option(
        None, "--cache-ttl", help="Seconds to keep API responses cached."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~pokedexcli.output.OutputManager`,
    configures logging, and stores the flag overrides in ``ctx.obj``.
    Starts the shell when no sub-command was given.
    """
    from pokedexcli.log import configure_logging
    from pokedexcli.output import OutputManager, set_output

    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))
    configure_logging(verbose=verbose, no_color=no_color)

    ctx.ensure_object(dict)
    ctx.obj["base_url"] = base_url
    ctx.obj["cache_ttl"] = cache_ttl

    if ctx.invoked_subcommand is None:
        ctx.invoke(shell, ctx)


@app.command()
def shell(ctx: typer.Context) -> None:
    """Start the interactive Pokedex shell."""
    from pokedexcli.cache import TTLCache
    from pokedexcli.client import PokeAPIClient
    from pokedexcli.config import resolve_config
    from pokedexcli.output import debug
    from pokedexcli.repl import Session, build_registry, run_repl

    obj = ctx.obj or {}
    config = resolve_config(
        cli_base_url=obj.get("base_url"),
        cli_cache_ttl=obj.get("cache_ttl"),
    )

    with TTLCache(config.cache.ttl_seconds) as cache, PokeAPIClient(config, cache) as client:
        session = Session(client=client, registry=build_registry())
        code = run_repl(session, sys.stdin)
        debug("Cache stats: " + ", ".join(f"{k}={v}" for k, v in cache.stats().items()))

    raise typer.Exit(code)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from pokedexcli.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``pokedexcli`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from pokedexcli.exceptions import PokedexError
        from pokedexcli.output import error

        if isinstance(exc, PokedexError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
