"""Resolución de URLs de servidor con plantilla (`https://{region}.host/{basePath}`).

Política para placeholders:
1) valor explícito en `variables`;
2) default de una variable declarada por la API con el mismo nombre;
3) si aún falta alguno -> `ConfigurationError` (nunca se envía una URL con
   `{...}` sin resolver).

Las variables sobrantes se ignoran.
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from core.domain.models import ServerSpec
from core.errors import ConfigurationError

_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")


def template_variables(template: str) -> list[str]:
    """Nombres de placeholders en orden de aparición (sin duplicados)."""

    seen: list[str] = []
    for name in _PLACEHOLDER_RE.findall(template):
        if name not in seen:
            seen.append(name)
    return seen


def declared_defaults(servers: Iterable[ServerSpec]) -> dict[str, str]:
    defaults: dict[str, str] = {}
    for server in servers:
        for name, variable in server.variables.items():
            defaults.setdefault(name, variable.default)
    return defaults


def resolve_server_url(
    template: str,
    variables: Mapping[str, object] | None = None,
    *,
    servers: Iterable[ServerSpec] = (),
) -> str:
    if not template or not template.strip():
        raise ConfigurationError("Server URL must not be empty.")

    provided = {k: str(v) for k, v in (variables or {}).items() if v is not None}
    defaults = declared_defaults(servers)

    missing = [name for name in template_variables(template) if name not in provided and name not in defaults]
    if missing:
        raise ConfigurationError(
            f"Unresolved server variables {missing} in {template!r}; pass them in `variables`."
        )

    def _sub(match: re.Match[str]) -> str:
        name = match.group(1)
        return provided.get(name, defaults.get(name, ""))

    url = _PLACEHOLDER_RE.sub(_sub, template.strip())
    return url.rstrip("/")


def default_server_url(servers: tuple[ServerSpec, ...], variables: Mapping[str, object] | None = None) -> str:
    """URL del primer servidor declarado, con sus defaults."""

    if not servers:
        raise ConfigurationError("The API declares no servers; call `server()` first.")
    return resolve_server_url(servers[0].url, variables, servers=servers)
