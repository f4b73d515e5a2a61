"""Typer application and CLI entry point for catalogcli.

This module wires together the top-level Typer application and registers
the sub-commands (``products``, ``categories``, ``shell``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler, invokes the Typer app,
maps :class:`~catalogcli.exceptions.CatalogError` to its exit code and
writes a crash log for anything unexpected.

See Also:
    :mod:`catalogcli.config`: configuration resolution used in :func:`main_callback`.
    :mod:`catalogcli.output`: output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from catalogcli import __version__
from catalogcli.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED


app = typer.Typer(
    name="catalogcli",
    help="Browse the DummyJSON product catalog from the terminal.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

from catalogcli.commands.config import config_app  # noqa: E402
from catalogcli.commands.products import list_categories, products_app  # noqa: E402
from catalogcli.commands.shell import shell_command  # noqa: E402

app.add_typer(products_app, name="products", help="Query products.")
app.command("categories")(list_categories)
app.command("shell")(shell_command)
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"catalogcli {__version__}")
        raise typer.Exit()


@app.callback()
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
        None, "--base-url", help="Catalog API root (overrides config and env)."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show requests and cache hits/misses."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Resolves the effective configuration, installs the global
    :class:`~catalogcli.output.OutputManager`, and stores the configuration
    in ``ctx.obj["config"]`` for the sub-commands.
    """
    from catalogcli.config import resolve_config
    from catalogcli.exceptions import CatalogError
    from catalogcli.output import OutputFormat, OutputManager, error, set_output

    cli_format: Optional[str] = None
    if json_output:
        cli_format = OutputFormat.JSON.value
    elif plain_output:
        cli_format = OutputFormat.PLAIN.value

    try:
        config = resolve_config(cli_base_url=base_url, cli_format=cli_format)
    except CatalogError as exc:
        set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    try:
        fmt = OutputFormat(config.output.format)
    except ValueError:
        fmt = OutputFormat.AUTO

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback to the data directory and return its path."""
    from catalogcli.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``catalogcli`` console script.

    Unhandled :class:`~catalogcli.exceptions.CatalogError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.

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
        from catalogcli.exceptions import CatalogError
        from catalogcli.output import error

        if isinstance(exc, CatalogError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
