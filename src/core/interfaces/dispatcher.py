"""Contrato del núcleo genérico de fetch.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- La fachada solo conoce `fetch(operation, metadata, configuration)`; el
  adaptador HTTP concreto vive en `adapters.http_client`.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from core.domain.models import ClientConfiguration, Operation, ParamValue


@runtime_checkable
class RequestDispatcher(Protocol):
    """Ejecuta un request para un descriptor de operación.

    Reglas de diseño:
    - `fetch` es asíncrono porque hace I/O (HTTP).
    - Lee `configuration`, nunca la modifica.
    - Lanza errores de `core.errors`; no reintenta.
    """

    async def fetch(
        self,
        operation: Operation,
        metadata: Mapping[str, ParamValue],
        configuration: ClientConfiguration,
    ) -> Any:
        ...
