"""CLI commands for otrsrpc.

``otrs-rpc call MODULE OPERATION KEY=VALUE...`` runs one remote operation;
``otrs-rpc settings`` shows what a call would connect with.
"""

from __future__ import annotations

import json
import sys
from typing import Any

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from otrsrpc import __version__
from otrsrpc.cli.arg_utils import parse_assignments, render_value
from otrsrpc.cli.logging_utils import ensure_rotating_log_file
from otrsrpc.config import get_rpc_options, set_rpc_suffix, set_trace
from otrsrpc.config.schema import DEFAULT_URI, ClientSettings
from otrsrpc.errors import OtrsRpcError, sanitize_error_message
from otrsrpc.operations import client_for

app = typer.Typer(
    name="otrs-rpc",
    help="otrs-rpc - call OTRS operations through the generic Dispatch interface",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"otrs-rpc v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """otrs-rpc - OTRS Dispatch RPC client."""
    pass


def _configure_logging(logs: bool, debug: bool) -> None:
    if debug:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG", format="<dim>{time:HH:mm:ss.SSS}</dim> | <level>{level: <8}</level> | <level>{message}</level>")
        logger.enable("otrsrpc")
        ensure_rotating_log_file("call", level="DEBUG")
    elif logs:
        logger.enable("otrsrpc")
        ensure_rotating_log_file("call", level="INFO")
    else:
        logger.disable("otrsrpc")


def _print_result(result: dict[str, Any], as_json: bool) -> None:
    if as_json:
        console.print_json(json.dumps(result, ensure_ascii=False, default=str))
        return
    if not result:
        console.print("[dim]No data returned[/dim]")
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in result.items():
        table.add_row(Text(str(key)), Text(render_value(value)))
    console.print(table)


def _print_exchange(request_text: str | None, response_text: str | None, secret: str) -> None:
    for label, text in (("request", request_text), ("response", response_text)):
        if text:
            console.print(f"[dim]--- {label} ---[/dim]")
            console.print(sanitize_error_message(text, secrets=(secret,)), markup=False, highlight=False)


@app.command("call")
def call_command(
    module: str = typer.Argument(..., help="Remote object without the Object suffix, e.g. Ticket"),
    operation: str = typer.Argument(..., help="Operation name, e.g. TicketGet"),
    arguments: list[str] = typer.Argument(None, help="KEY=VALUE pairs; integers become ints, {...} and [...] are JSON, anything else is text"),
    location: str = typer.Option(None, "--location", help="Base URL ending with '/', default $OTRS_API_LOCATION"),
    uri: str = typer.Option(None, "--uri", help="RPC namespace, default $OTRS_API_URI or Core"),
    username: str = typer.Option(None, "--username", "-u", help="SOAP user, default $OTRS_API_USERNAME"),
    password: str = typer.Option(None, "--password", "-p", help="SOAP password, default $OTRS_API_PASSWORD"),
    rpc: str = typer.Option(None, "--rpc", help="RPC path appended to the location (default rpc.pl)"),
    trace: bool = typer.Option(False, "--trace", help="Print the raw SOAP exchange"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    logs: bool = typer.Option(False, "--logs/--no-logs", help="Show otrsrpc runtime logs"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Debug mode: log every connect and dispatch"),
) -> None:
    """Run one remote operation and print the reply."""
    _configure_logging(logs, debug)
    try:
        args = parse_assignments(arguments or [])
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if rpc:
        set_rpc_suffix(rpc)
    if trace:
        set_trace(True)

    settings = ClientSettings()
    secret = password or settings.password
    client = client_for(
        module,
        location=location,
        uri=uri,
        username=username,
        password=password,
        settings=settings,
    )
    try:
        with client:
            result = client.call(operation, args)
    except OtrsRpcError as e:
        console.print(f"[red]{escape(sanitize_error_message(str(e), secrets=(secret,)))}[/red]")
        if trace:
            _print_exchange(client.last_request(), client.last_response(), secret)
        raise typer.Exit(1)

    if trace:
        _print_exchange(client.last_request(), client.last_response(), secret)
    _print_result(result, as_json)


@app.command("settings")
def settings_command() -> None:
    """Show the effective connection settings (password masked)."""
    settings = ClientSettings()
    options = get_rpc_options()
    table = Table(title="otrs-rpc settings", show_header=True, header_style="bold")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("location", escape(settings.location) if settings.location else "[dim]not set[/dim]")
    table.add_row("uri", escape(settings.uri) if settings.uri else f"{DEFAULT_URI} [dim](default)[/dim]")
    table.add_row("username", escape(settings.username) if settings.username else "[dim]not set[/dim]")
    table.add_row("password", "[green]✓ set[/green]" if settings.password else "[dim]not set[/dim]")
    table.add_row("rpc", escape(options.rpc_suffix))
    table.add_row("endpoint", escape(settings.location + options.rpc_suffix) if settings.location else "[dim]n/a[/dim]")
    table.add_row("trace", str(options.trace).lower())
    table.add_row("timeout", f"{options.timeout_seconds:g}s")
    console.print(table)
