"""Terminal rendering for the ``swaggerlite`` command line.

Response bodies and the operations table go to **stdout**; the HTTP status
line, errors and ``--verbose`` debug lines go to **stderr**, so piping
``swaggerlite execute ...`` into ``jq`` only ever sees the body.

Three formats are supported: ``json`` (indented JSON), ``plain``
(tab-separated lines) and ``rich`` (highlighted JSON and tables).  ``auto``
picks ``rich`` on an interactive terminal and ``plain`` otherwise.  Colour is
off with ``--no-color``, ``NO_COLOR`` (any value) or ``TERM=dumb``.

The library never prints.  It logs through :mod:`logging`, and with
``--verbose`` the command line installs :class:`OutputLogHandler` so those
records show up as debug lines here.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Writes bodies, tables and diagnostics in one resolved format.

    Args:
        format: Requested format; ``AUTO`` is resolved at construction.
        no_color: Disable colour and markup on both streams.
        quiet: Drop the status line (errors are always shown).
        verbose: Show debug lines.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _color_disabled_by_env()
        self._quiet = quiet
        self._verbose = verbose

        if format is OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format is OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # ------------------------------------------------------------------ #
    # stdout
    # ------------------------------------------------------------------ #

    def format_response(self, data: Any, content_type: str = "application/json") -> None:
        """Write a decoded response body.

        A string body is decoded as JSON first when the format is ``json``
        or *content_type* says JSON; if that fails it is written as-is.
        """
        if isinstance(data, str) and (
            self._format is OutputFormat.JSON or "json" in content_type
        ):
            data = _loads_or_keep(data)

        if self._format is OutputFormat.JSON:
            self._write(data if isinstance(data, str) else _dumps(data))
        elif self._format is OutputFormat.PLAIN:
            for line in _plain_lines(data):
                self._write(line)
        elif isinstance(data, (dict, list)):
            self._stdout.print(Syntax(_dumps(data), "json", theme="monokai", word_wrap=True))
        else:
            self._stdout.print(str(data), markup=False)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Write rows as a Rich table, a JSON array of objects, or TSV.

        *title* is only shown in ``rich`` format.
        """
        if self._format is OutputFormat.JSON:
            self._write(_dumps([dict(zip(headers, row)) for row in rows]))
            return
        if self._format is OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self._write("\t".join(line))
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # stderr
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        """Write the status line. Suppressed by ``--quiet``."""
        if not self._quiet:
            self._diagnostic(message)

    def error(self, message: str) -> None:
        self._diagnostic(message, label="Error:", style="bold red")

    def debug(self, message: str) -> None:
        """Write a debug line. Only shown with ``--verbose``."""
        if self._verbose:
            self._diagnostic(message, label="[debug]", style="dim")

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _write(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def _diagnostic(self, message: str, label: str = "", style: str = "") -> None:
        if self._no_color:
            text = f"{label} {message}" if label else message
            print(text, file=sys.stderr, flush=True)
        elif label:
            self._stderr.print(f"[{style}]{escape(label)}[/{style}] {escape(message)}")
        else:
            self._stderr.print(message, markup=False, highlight=False)


class OutputLogHandler(logging.Handler):
    """Forward library log records to the global output manager's debug channel."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            get_output().debug(f"{record.name}: {record.getMessage()}")
        except Exception:
            self.handleError(record)


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _loads_or_keep(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _plain_lines(data: Any) -> Iterator[str]:
    """Flatten a body into tab-separated lines: ``key<TAB>value`` for objects,
    one line per item for arrays (object items as their values)."""
    if isinstance(data, dict):
        for key, value in data.items():
            yield f"{key}\t{value}"
    elif isinstance(data, list):
        for item in data:
            if isinstance(item, dict):
                yield "\t".join(str(value) for value in item.values())
            else:
                yield str(item)
    else:
        yield str(data)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _color_disabled_by_env() -> bool:
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Drop the global :class:`OutputManager`; the next :func:`get_output` builds a fresh one."""
    global _output
    _output = None


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
