"""Wrapper de httpx: el núcleo genérico de fetch.

Por qué un wrapper:
- Estandariza timeouts, headers, auth y mapeo de errores para las 21
  operaciones.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.

No hay reintentos, caché ni pooling: un `AsyncClient` por request.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping
from urllib.parse import quote

import httpx

from adapters.auth import build_auth
from core.domain.models import (
    ClientConfiguration,
    Operation,
    ParameterLocation,
    ParamValue,
    SecurityScheme,
    ServerSpec,
)
from core.domain.operations import SECURITY, SERVERS
from core.domain.servers import default_server_url, template_variables
from core.errors import ConfigurationError, HTTPError, RequestTimeoutError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "ton-api-sdk/0.1"


def build_async_client(
    *,
    timeout_seconds: float | None,
    user_agent: str = DEFAULT_USER_AGENT,
    extra_headers: dict[str, str] | None = None,
    auth: httpx.Auth | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeout/headers para que todas las operaciones se comporten igual.
    - `transport` permite sustituir la red en tests.
    """

    headers: dict[str, str] = {
        "User-Agent": user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        follow_redirects=True,
        headers=headers,
        auth=auth,
        transport=transport,
    )


def _to_str(value: ParamValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def decode_body(response: httpx.Response) -> Any:
    """JSON si el servidor lo declara (y parsea); texto en otro caso."""

    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


class HttpDispatcher:
    """Implementación httpx de `core.interfaces.dispatcher.RequestDispatcher`."""

    def __init__(
        self,
        *,
        servers: tuple[ServerSpec, ...] = SERVERS,
        security: SecurityScheme | None = SECURITY,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._servers = servers
        self._security = security
        self._user_agent = user_agent
        self._transport = transport

    @property
    def servers(self) -> tuple[ServerSpec, ...]:
        return self._servers

    def base_url(self, configuration: ClientConfiguration) -> str:
        if configuration.server_url:
            return configuration.server_url
        return default_server_url(self._servers, configuration.server_variables)

    def build_request_parts(
        self,
        operation: Operation,
        metadata: Mapping[str, ParamValue],
    ) -> tuple[str, dict[str, str], dict[str, str]]:
        """Reparte la metadata en (path, query, headers) según el esquema.

        Los parámetros no declarados viajan como query.
        """

        path = operation.path
        params: dict[str, str] = {}
        headers: dict[str, str] = {}

        for name, value in metadata.items():
            if value is None:
                continue
            spec = operation.parameter(name)
            location = spec.location if spec else ParameterLocation.QUERY
            if location == ParameterLocation.PATH:
                path = path.replace("{" + name + "}", quote(_to_str(value), safe=""))
            elif location == ParameterLocation.HEADER:
                headers[name] = _to_str(value)
            else:
                params[name] = _to_str(value)

        unresolved = template_variables(path)
        if unresolved:
            raise ConfigurationError(
                f"{operation.operation_id}: missing path parameters {unresolved}."
            )
        return path, params, headers

    async def fetch(
        self,
        operation: Operation,
        metadata: Mapping[str, ParamValue],
        configuration: ClientConfiguration,
    ) -> Any:
        path, params, headers = self.build_request_parts(operation, metadata)
        url = self.base_url(configuration) + path

        auth = build_auth(self._security, configuration.credentials)
        params.update(auth.params)
        headers.update(auth.headers)

        timeout = configuration.timeout_seconds
        logger.debug("%s %s params=%s timeout=%s", operation.method, url, sorted(params), timeout)

        try:
            async with build_async_client(
                timeout_seconds=timeout,
                user_agent=self._user_agent,
                auth=auth.auth,
                transport=self._transport,
            ) as client:
                # Plazo total del request; httpx solo limita cada fase (connect/read/write).
                response = await asyncio.wait_for(
                    client.request(operation.method, url, params=params, headers=headers),
                    timeout,
                )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            logger.warning("%s timed out after %ss", operation.operation_id, timeout)
            raise RequestTimeoutError(
                operation.operation_id,
                f"Request timed out after {timeout}s",
            ) from exc
        except httpx.TransportError as exc:
            logger.warning("%s transport failure: %s", operation.operation_id, exc)
            raise TransportError(operation.operation_id, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            logger.warning("%s failed with HTTP %s", operation.operation_id, response.status_code)
            raise HTTPError(operation.operation_id, response.status_code, decode_body(response))

        if not configuration.options.parse_response:
            return response
        return decode_body(response)
