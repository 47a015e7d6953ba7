"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from core.config import AppSettings, get_user_env_file, read_user_env_vars, write_user_env_vars
from core.errors import TonApiError
from core.services.client import TonApiClient

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(client: TonApiClient) -> tuple[bool, str]:
    try:
        payload = await client.get_masterchain_info()
    except TonApiError as exc:
        return False, str(exc)
    result = payload.get("result") if isinstance(payload, dict) else None
    if isinstance(result, dict):
        last = result.get("last") or {}
        seqno = last.get("seqno", "?") if isinstance(last, dict) else "?"
        return True, f"last seqno {seqno}"
    return True, "OK"


def build_client(settings: AppSettings) -> TonApiClient:
    return TonApiClient.from_settings(settings)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="TON API Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.api_key:
        table.add_row("API key", "OK", "x-api-key header will be sent")
    else:
        table.add_row("API key", "MISSING", "Run `ton-api doctor setup-auth` or set TON_API_API_KEY")
    table.add_row("Server", "OK", settings.server_url or f"declared server ({settings.network})")
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds}s")
    stored = read_user_env_vars()
    table.add_row("User .env", "OK" if stored else "EMPTY", f"{get_user_env_file()} ({len(stored)} keys)")

    client = build_client(settings)
    ok_api, detail_api = asyncio.run(_check_api(client))
    table.add_row("getMasterchainInfo", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)
    if not ok_api:
        raise typer.Exit(code=1)


@app.command(name="setup-auth")
def setup_auth() -> None:
    """Interactive API key setup (stores config in the user config .env)."""

    network = typer.prompt("Network", default="ton-mainnet", show_default=True).strip()
    api_key = typer.prompt("API key", hide_input=True, confirmation_prompt=False).strip()
    if not api_key:
        raise typer.BadParameter("API key is required")

    env_path = write_user_env_vars(
        {
            "TON_API_API_KEY": api_key,
            "TON_API_NETWORK": network,
        }
    )
    _console.print(f"[green]Saved API config to:[/green] {env_path}")
