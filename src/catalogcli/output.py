"""Terminal output for catalogcli.

Catalog data (product tables, detail records, JSON) is written to stdout
and nothing else is. Status lines, cache hit/miss traces, warnings and
errors go to stderr, so ``catalogcli --json products list | jq`` always
receives clean JSON.

The format is chosen once per process:

* ``rich`` -- Rich tables and highlighted JSON, used when stdout is a
  terminal and colour is allowed;
* ``plain`` -- tab-separated lines, used when stdout is piped;
* ``json`` -- machine-readable output, selected with ``--json``.

Colour is disabled by ``--no-color``, by ``NO_COLOR`` (any value) and by
``TERM=dumb``.

:func:`~catalogcli.app.main_callback` installs one :class:`OutputManager`
with :func:`set_output`. Library code (the HTTP client, the repository)
reports through the module-level :func:`debug`, :func:`info` and friends
and never receives a manager explicitly.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# level -> (plain-text prefix, rich markup template, hidden by --quiet)
_LEVELS = {
    "info": ("", "{}", True),
    "success": ("", "[green]{}[/green]", True),
    "warning": ("Warning: ", "[yellow]Warning:[/yellow] {}", False),
    "error": ("Error: ", "[bold red]Error:[/bold red] {}", False),
    "debug": ("[debug] ", "[dim]\\[debug] {}[/dim]", False),
}


class OutputManager:
    """Formats data for stdout and diagnostics for stderr.

    Args:
        format: Requested format; ``AUTO`` picks ``RICH`` on a colour TTY
            and ``PLAIN`` otherwise.
        no_color: Strip colour and markup.
        quiet: Drop ``info`` and ``success`` lines.
        verbose: Show ``debug`` lines (requests, retries, cache hits).
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format != OutputFormat.AUTO:
            self._format = format
        elif _is_tty() and not self._no_color:
            self._format = OutputFormat.RICH
        else:
            self._format = OutputFormat.PLAIN

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=self._format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # ------------------------------------------------------------------ #
    # stdout
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def format_response(self, data: Any) -> None:
        """Write a JSON-compatible value (dict, list, scalar) in the active format."""
        if self._format == OutputFormat.PLAIN:
            self._print_plain(data)
            return
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self._format == OutputFormat.JSON:
            self.print_data(text)
        else:
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
        caption: Optional[str] = None,
    ) -> None:
        """Write rows under *headers*.

        JSON mode emits a list of objects keyed by header, plain mode one
        tab-separated line per row (header first). *title* and *caption*
        are only shown by Rich.
        """
        if self._format == OutputFormat.JSON:
            self.print_data(
                json.dumps([dict(zip(headers, row)) for row in rows], indent=2, ensure_ascii=False)
            )
            return
        if self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
            return

        table = Table(title=title, caption=caption, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        self._stdout.print(table)

    def print_record(self, title: str, fields: dict[str, Any]) -> None:
        """Write one labelled record, such as a product's detail view.

        Fields whose value is ``None`` are left out, except in JSON mode
        where they appear as ``null``.
        """
        if self._format == OutputFormat.JSON:
            self.print_data(json.dumps(fields, indent=2, ensure_ascii=False, default=str))
            return

        present = [(k, _flatten(v)) for k, v in fields.items() if v is not None]
        if self._format == OutputFormat.PLAIN:
            for key, value in present:
                self.print_data(f"{key}\t{value}")
            return

        table = Table(title=title, show_header=False, box=None)
        table.add_column(style="bold")
        table.add_column()
        for key, value in present:
            table.add_row(key, escape(value))
        self._stdout.print(table)

    def _print_plain(self, data: Any) -> None:
        if isinstance(data, dict):
            for key, value in data.items():
                self.print_data(f"{key}\t{_flatten(value)}")
        elif isinstance(data, list):
            for item in data:
                values = item.values() if isinstance(item, dict) else [item]
                self.print_data("\t".join(_flatten(v) for v in values))
        else:
            self.print_data(str(data))

    # ------------------------------------------------------------------ #
    # stderr
    # ------------------------------------------------------------------ #

    def _emit(self, level: str, message: str) -> None:
        prefix, markup, quiet_hides = _LEVELS[level]
        if quiet_hides and self._quiet:
            return
        if self._no_color:
            print(f"{prefix}{message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup.format(escape(message)))

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        """Always shown, even with ``--quiet``."""
        self._emit("error", message)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._emit("debug", message)


def _flatten(value: Any) -> str:
    """One-line rendering: sequences comma-joined, mappings as JSON."""
    if isinstance(value, (list, tuple)):
        return ", ".join(_flatten(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide manager
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests swap stdout between cases)."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
    caption: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title, caption)


def print_record(title: str, fields: dict[str, Any]) -> None:
    get_output().print_record(title, fields)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
