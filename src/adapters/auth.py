"""Aplicación de credenciales según el esquema de seguridad declarado.

Reglas (no se valida la forma de las credenciales; el servidor decide):
- apiKey: el primer valor va al header o query declarado.
- http basic: (usuario, password); con un solo valor el password es "".
- http bearer: `Authorization: Bearer <primer valor>`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from core.domain.models import ParameterLocation, SecurityKind, SecurityScheme

logger = logging.getLogger(__name__)


@dataclass
class AuthParts:
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    auth: httpx.Auth | None = None


def build_auth(scheme: SecurityScheme | None, credentials: tuple[str, ...]) -> AuthParts:
    parts = AuthParts()
    if scheme is None or not credentials:
        return parts

    if scheme.kind == SecurityKind.API_KEY:
        if len(credentials) > 1:
            logger.debug("apiKey scheme uses one credential; ignoring %d extra", len(credentials) - 1)
        name = scheme.name or "x-api-key"
        if scheme.location == ParameterLocation.QUERY:
            parts.params[name] = credentials[0]
        else:
            parts.headers[name] = credentials[0]
        return parts

    if scheme.scheme == "basic":
        username = credentials[0]
        password = credentials[1] if len(credentials) > 1 else ""
        parts.auth = httpx.BasicAuth(username, password)
        return parts

    parts.headers["Authorization"] = f"Bearer {credentials[0]}"
    return parts
