"""Typer application and console entry point for swaggerlite.

Commands::

    swaggerlite --spec petstore.json operations
    swaggerlite --spec petstore.json execute getPetById -P petId=7
    swaggerlite --spec petstore.json request get /pet/findByStatus -P status=sold

Global options select the document and override its ``scheme``, ``host``
and ``basePath``; every option also has a ``SWAGGERLITE_*`` environment
variable (see :mod:`swaggerlite.config`).  Errors are printed to stderr and
mapped to the exit codes in :mod:`swaggerlite.exit_codes`.
"""

from __future__ import annotations

import json
import logging
import signal
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import httpx
import typer

from swaggerlite import __version__
from swaggerlite.exit_codes import EXIT_CONNECTION_ERROR, EXIT_INVALID_USAGE
from swaggerlite.models import RAW_OPTIONS_KEY


app = typer.Typer(
    name="swaggerlite",
    help="Call Swagger 2.0 JSON services straight from their API document.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"swaggerlite {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True,
        help="Show version and exit.",
    ),
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="Path or URL of the Swagger document."
    ),
    scheme: Optional[str] = typer.Option(
        None, "--scheme", help="Scheme to use; must be allowed by the document."
    ),
    host: Optional[str] = typer.Option(
        None, "--host", help="Override the document's host."
    ),
    base_path: Optional[str] = typer.Option(
        None, "--base-path", help="Override the document's basePath."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Full base URL; skips scheme/host/basePath."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Request timeout in seconds."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Set up output and stash client settings for the sub-command."""
    from swaggerlite.output import OutputFormat, OutputLogHandler, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    if verbose:
        package_logger = logging.getLogger("swaggerlite")
        if not any(isinstance(h, OutputLogHandler) for h in package_logger.handlers):
            package_logger.addHandler(OutputLogHandler())
        package_logger.setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = {
        "cli_spec": spec,
        "cli_scheme": scheme,
        "cli_host": host,
        "cli_base_path": base_path,
        "cli_base_url": base_url,
        "cli_timeout": timeout,
    }


# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Print library errors and exit with the matching code."""
    from swaggerlite.exceptions import SwaggerLiteError
    from swaggerlite.output import error

    try:
        yield
    except SwaggerLiteError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    except httpx.TransportError as exc:
        error(f"Request failed: {exc}")
        raise typer.Exit(code=EXIT_CONNECTION_ERROR) from None


def _build_client(ctx: typer.Context):  # noqa: ANN202
    from swaggerlite.client import SwaggerClient
    from swaggerlite.config import resolve_config

    settings = (ctx.obj or {}).get("settings", {})
    return SwaggerClient(resolve_config(**settings))


def _parse_value(raw: str) -> Any:  # noqa: ANN401
    """Decode *raw* as JSON when possible, otherwise keep the string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _parse_pairs(pairs: Optional[list[str]], decode: bool) -> dict[str, Any]:
    """Turn ``name=value`` strings into a dict.

    Raises:
        typer.Exit: With :data:`EXIT_INVALID_USAGE` for an item without ``=``.
    """
    from swaggerlite.output import error

    result: dict[str, Any] = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            error(f"Expected name=value, got {pair!r}")
            raise typer.Exit(code=EXIT_INVALID_USAGE)
        result[name] = _parse_value(value) if decode else value
    return result


def _build_input(
    params: Optional[list[str]],
    headers: Optional[list[str]],
) -> dict[str, Any]:
    values = _parse_pairs(params, decode=True)
    raw_headers = _parse_pairs(headers, decode=False)
    if raw_headers:
        values[RAW_OPTIONS_KEY] = {"headers": raw_headers}
    return values


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #


@app.command("operations")
def operations_command(ctx: typer.Context) -> None:
    """List every operation in the document."""
    from swaggerlite.output import debug, get_output

    with _handle_errors():
        with _build_client(ctx) as client:
            debug(f"Base URL: {client.base_url}")
            rows = [
                [target.method.upper(), target.path, operation_id or "-"]
                for target, operation_id in client.operations()
            ]
            title = client.store.get("info", "title", default="API")

    get_output().print_table(
        ["Method", "Path", "Operation"], rows, title=f"{title} -- Operations ({len(rows)})"
    )


@app.command("request")
def request_command(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="HTTP method, e.g. get."),
    path: str = typer.Argument("/", help="Path template as written in the document."),
    param: Optional[list[str]] = typer.Option(
        None, "--param", "-P", help="Parameter as name=value (JSON values are decoded)."
    ),
    header: Optional[list[str]] = typer.Option(
        None, "--header", "-H", help="Extra raw header as name=value."
    ),
) -> None:
    """Send METHOD to a documented PATH."""
    from swaggerlite.client.response import format_api_response

    values = _build_input(param, header)
    with _handle_errors():
        with _build_client(ctx) as client:
            response = client.request(method, path, values)
    format_api_response(response)


@app.command("execute")
def execute_command(
    ctx: typer.Context,
    operation_id: str = typer.Argument(..., help="The operation's operationId."),
    param: Optional[list[str]] = typer.Option(
        None, "--param", "-P", help="Parameter as name=value (JSON values are decoded)."
    ),
    header: Optional[list[str]] = typer.Option(
        None, "--header", "-H", help="Extra raw header as name=value."
    ),
) -> None:
    """Execute an operation by its operationId."""
    from swaggerlite.client.response import format_api_response

    values = _build_input(param, header)
    with _handle_errors():
        with _build_client(ctx) as client:
            response = client.execute(operation_id, values)
    format_api_response(response)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """Console-script entry point."""
    _setup_signal_handlers()
    app()
