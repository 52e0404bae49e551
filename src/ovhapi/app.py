"""Typer application and CLI entry point for ovhapi.

A thin command line surface over :class:`~ovhapi.client.Client`, mostly
useful to check credentials and clock skew, or to poke at an endpoint::

    ovhapi endpoints
    ovhapi time
    ovhapi call GET /me
    ovhapi call POST /domain/zone/example.com/refresh --expect 200 --expect 204

Credentials come from :func:`~ovhapi.config.resolve_client_config`
(``ovh.conf`` files and ``OVH_*`` variables); ``--endpoint`` overrides the
configured endpoint.

See Also:
    :mod:`ovhapi.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import json
import signal
import sys
from typing import TYPE_CHECKING, Any, NoReturn, Optional

import typer

from ovhapi import __version__
from ovhapi.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INVALID_USAGE

if TYPE_CHECKING:
    from ovhapi.client import Client
    from ovhapi.exceptions import OvhError


app = typer.Typer(
    name="ovhapi",
    help="Signed requests against the OVH API family.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"ovhapi {__version__}")
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
    endpoint: Optional[str] = typer.Option(
        None, "--endpoint", "-e", help="Endpoint name or base URL."
    ),
    timeout: float = typer.Option(
        180.0, "--timeout", help="Per-call timeout in seconds."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~ovhapi.output.OutputManager` and stores the
    connection options in ``ctx.obj`` for the sub-commands.
    """
    from ovhapi.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    output.configure_logging()
    set_output(output)

    ctx.ensure_object(dict)
    ctx.obj["endpoint"] = endpoint
    ctx.obj["timeout"] = timeout


def _fail(exc: OvhError) -> NoReturn:
    """Report *exc* and exit with the code of its error kind."""
    from ovhapi.exceptions import APIError
    from ovhapi.output import error, info

    error(str(exc))
    if isinstance(exc, APIError) and exc.error_code:
        info(f"errorCode: {exc.error_code}")
    raise typer.Exit(code=exc.exit_code)


def _create_client(ctx: typer.Context) -> Client:
    from ovhapi.client import Client
    from ovhapi.config import resolve_client_config

    config = resolve_client_config(
        endpoint=ctx.obj.get("endpoint"), timeout=ctx.obj.get("timeout", 180.0)
    )
    return Client.from_config(config)


@app.command("endpoints")
def endpoints_command() -> None:
    """List the known endpoint names and their base URLs."""
    from ovhapi.endpoints import list_endpoints
    from ovhapi.output import get_output

    rows = [[name, url] for name, url in list_endpoints()]
    get_output().print_table(["name", "url"], rows, title="Endpoints")


@app.command("time")
def time_command(ctx: typer.Context) -> None:
    """Show the server time and the local clock offset."""
    from ovhapi.auth.clock import fetch_server_time
    from ovhapi.exceptions import OvhError
    from ovhapi.output import format_response

    try:
        with _create_client(ctx) as client:
            server_time = fetch_server_time(client)
            format_response(
                {
                    "endpoint": client.endpoint,
                    "server_time": server_time,
                    "time_delta": client.time_delta,
                }
            )
    except OvhError as exc:
        _fail(exc)


@app.command("call")
def call_command(
    ctx: typer.Context,
    method: str = typer.Argument(help="HTTP method (GET, POST, PUT, DELETE)."),
    path: str = typer.Argument(help="Path relative to the endpoint, e.g. /me."),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="JSON request body."),
    no_auth: bool = typer.Option(False, "--no-auth", help="Send the call unsigned."),
    expect: Optional[list[int]] = typer.Option(
        None, "--expect", help="Expected status code (repeatable, default 200)."
    ),
) -> None:
    """Perform one API call and print the response body."""
    from ovhapi.exceptions import OvhError
    from ovhapi.output import debug, error, format_response, info

    payload: Any = None
    if data is not None:
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as exc:
            error(f"--data is not valid JSON: {exc}")
            raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    expected = tuple(expect) if expect else (200,)
    try:
        with _create_client(ctx) as client:
            debug(f"Clock offset: {client.time_delta:+d}s")
            response = client.call(method.upper(), path, payload, not no_auth)
        info(f"HTTP {response.status_code} {response.status}")
        response.raise_for_status(expected)
    except OvhError as exc:
        _fail(exc)

    try:
        format_response(response.json())
    except ValueError:
        format_response(response.body.decode("utf-8", errors="replace"))


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``ovhapi`` console script.

    Errors raised by the library are reported by the commands themselves
    with the exit code of their kind; anything else is reported here as a
    generic failure.

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
        sys.exit(130)
    except Exception as exc:
        from ovhapi.output import error

        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
