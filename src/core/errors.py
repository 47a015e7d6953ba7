"""Errores del SDK.

Por qué una jerarquía propia:
- El llamador captura `TonApiError` sin conocer httpx.
- Cada error conserva el `operation_id` para trazabilidad.
"""

from __future__ import annotations

from typing import Any


class TonApiError(Exception):
    """Base de todos los errores del cliente."""


class ConfigurationError(TonApiError, ValueError):
    """Opciones, credenciales o plantilla de servidor inválidas."""


class UnknownOperationError(TonApiError, KeyError):
    def __init__(self, operation_id: str) -> None:
        super().__init__(operation_id)
        self.operation_id = operation_id

    def __str__(self) -> str:
        return f"Unknown operation: {self.operation_id!r}"


class TransportError(TonApiError):
    """Fallo de red (DNS, conexión, TLS) antes de recibir respuesta."""

    def __init__(self, operation_id: str, message: str) -> None:
        super().__init__(message)
        self.operation_id = operation_id
        self.message = message

    def __str__(self) -> str:
        return f"{type(self).__name__}(operation={self.operation_id}, message={self.message!r})"


class RequestTimeoutError(TransportError):
    """El timeout configurado expiró sin respuesta."""


class HTTPError(TonApiError):
    """Respuesta no-2xx del servidor."""

    def __init__(self, operation_id: str, status_code: int, body: Any = None) -> None:
        super().__init__(f"HTTP {status_code}")
        self.operation_id = operation_id
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        return f"HTTPError(operation={self.operation_id}, status={self.status_code}, body={self.body!r})"
