"""CLI `ton-api` (Typer + Rich).

Por qué una CLI:
- Permite probar cualquier operación del catálogo sin escribir código.
- Es el único lugar que configura logging y traduce errores a exit codes.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import dumps_payload, export_payload_json
from cli import doctor
from cli.ui_components import build_operations_table, build_response_panel, print_banner
from core.config import AppSettings
from core.domain.models import Operation, ParamValue
from core.domain.operations import OPERATIONS, get_operation
from core.errors import HTTPError, TonApiError
from core.services.client import TonApiClient

app = typer.Typer(no_args_is_help=True, help="Client for the TON blockchain data API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def build_client(settings: AppSettings) -> TonApiClient:
    return TonApiClient.from_settings(settings)


def parse_params(operation: Operation, raw: list[str]) -> dict[str, ParamValue]:
    """Convierte `name=value` según el tipo declarado del parámetro."""

    out: dict[str, ParamValue] = {}
    for item in raw:
        if "=" not in item:
            raise typer.BadParameter(f"Expected name=value, got {item!r}", param_hint="--param")
        name, value = item.split("=", 1)
        name = name.strip()
        spec = operation.parameter(name)
        if spec is not None and spec.type == "integer":
            try:
                out[name] = int(value)
            except ValueError:
                raise typer.BadParameter(f"{name} must be an integer", param_hint="--param") from None
        elif spec is not None and spec.type == "boolean":
            out[name] = value.strip().lower() in ("1", "true", "yes", "y")
        else:
            out[name] = value
    return out


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr."),
) -> None:
    configure_logging(verbose)


@app.command()
def operations(
    banner: bool = typer.Option(False, "--banner", help="Print the banner first."),
) -> None:
    """List every operation of the API catalog."""

    if banner:
        print_banner(_console)
    _console.print(build_operations_table(OPERATIONS))


@app.command()
def call(
    operation_id: str = typer.Argument(..., help="Operation id, e.g. getAddressBalance."),
    param: List[str] = typer.Option([], "--param", "-p", help="Parameter as name=value (repeatable)."),
    timeout: Optional[int] = typer.Option(None, "--timeout", help="Timeout in milliseconds."),
    server: Optional[str] = typer.Option(None, "--server", help="Base URL (or template) override."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="API key override."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the JSON response to a file."),
    raw: bool = typer.Option(False, "--raw", help="Print plain JSON instead of a panel."),
) -> None:
    """Call one operation and print its decoded response."""

    try:
        operation = get_operation(operation_id)
    except TonApiError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from None

    metadata = parse_params(operation, param)
    settings = AppSettings()
    client = build_client(settings)

    try:
        if timeout is not None:
            client.configure(timeout=timeout)
        if api_key:
            client.auth(api_key)
        if server:
            client.server(server, {"network": settings.network})
        payload: Any = asyncio.run(client.call(operation.operation_id, metadata))
    except HTTPError as exc:
        _console.print(f"[red]HTTP {exc.status_code}[/red] {operation.operation_id}")
        if exc.body is not None:
            _console.print(build_response_panel(operation.operation_id, exc.body))
        raise typer.Exit(code=1) from None
    except TonApiError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from None

    if output is not None:
        path = export_payload_json(payload=payload, output_path=output)
        _console.print(f"[green]Saved response to:[/green] {path}")
    if raw:
        typer.echo(dumps_payload(payload))
    else:
        _console.print(build_response_panel(operation.operation_id, payload))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
