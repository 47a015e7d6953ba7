"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `operations`, `call` y `doctor`.
"""

from __future__ import annotations

from typing import Any, Iterable

from rich.align import Align
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from adapters.json_exporter import dumps_payload
from core.domain.models import Operation


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("TON API", style="bold cyan")
    subtitle = Text("Cuentas • Bloques • Transacciones", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_operations_table(operations: Iterable[Operation]) -> Table:
    table = Table(title="TON API operations")
    table.add_column("Operation", style="cyan", no_wrap=True)
    table.add_column("Method", style="green")
    table.add_column("Path", style="magenta")
    table.add_column("Parameters", style="white")
    table.add_column("Summary", style="dim")
    for op in operations:
        params = ", ".join(f"{p.name}*" if p.required else p.name for p in op.parameters)
        table.add_row(op.operation_id, op.method, op.path, params or "-", op.summary)
    return table


def build_response_panel(operation_id: str, payload: Any) -> Panel:
    """Panel con la respuesta decodificada (JSON coloreado o texto plano)."""

    title = Text(operation_id, style="bold green")
    if isinstance(payload, (dict, list)):
        body: Any = JSON(dumps_payload(payload))
    else:
        body = Text(str(payload))
    return Panel(body, title=title, border_style="green")
