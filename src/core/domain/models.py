"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los descriptores de operación son inmutables (`frozen`) y se validan una
  sola vez al importar el catálogo.
- La configuración del cliente valida sus opciones en el borde (setters) y no
  en cada request.

Nota:
- Estos modelos describen *qué* es una operación o una configuración, no
  *cómo* se envía el request (eso vive en `adapters`).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

ParamValue = Union[str, int, float, bool, None]
Metadata = Mapping[str, ParamValue]

DEFAULT_TIMEOUT_MS = 30_000


class ParameterLocation(str, Enum):
    QUERY = "query"
    PATH = "path"
    HEADER = "header"


class ParameterSpec(BaseModel):
    """Un parámetro declarado por el esquema de una operación."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    location: ParameterLocation = Field(default=ParameterLocation.QUERY)
    required: bool = Field(default=False)
    type: str = Field(
        default="string",
        pattern=r"^(string|integer|boolean)$",
        description="Tipo JSON Schema declarado (solo informativo, el servidor valida).",
    )
    description: str = Field(default="")


class Operation(BaseModel):
    """Descriptor inmutable de un endpoint REST.

    Por qué existe:
    - Es la única fuente de verdad de path/verbo/parámetros; la fachada y la
      CLI lo consultan en lugar de repetir strings.
    """

    model_config = ConfigDict(frozen=True)

    operation_id: str = Field(..., min_length=1)
    path: str = Field(..., pattern=r"^/")
    method: str = Field(default="GET", pattern=r"^(GET|POST|PUT|PATCH|DELETE)$")
    summary: str = Field(default="")
    tags: tuple[str, ...] = Field(default=())
    parameters: tuple[ParameterSpec, ...] = Field(default=())

    def parameter(self, name: str) -> ParameterSpec | None:
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    @property
    def required_parameters(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.parameters if p.required)


class ServerVariable(BaseModel):
    model_config = ConfigDict(frozen=True)

    default: str
    enum: tuple[str, ...] = Field(default=())
    description: str = Field(default="")


class ServerSpec(BaseModel):
    """Servidor declarado por la API (URL con placeholders `{name}`)."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1)
    variables: dict[str, ServerVariable] = Field(default_factory=dict)
    description: str = Field(default="")


class SecurityKind(str, Enum):
    API_KEY = "apiKey"
    HTTP = "http"


class SecurityScheme(BaseModel):
    """Esquema de seguridad declarado.

    - `apiKey`: un valor en header o query (`name`, `location`).
    - `http`: `basic` (usuario + password) o `bearer` (token).
    """

    model_config = ConfigDict(frozen=True)

    kind: SecurityKind
    scheme: str | None = Field(default=None, pattern=r"^(basic|bearer)$")
    name: str | None = None
    location: ParameterLocation | None = None


class ClientOptions(BaseModel):
    """Opciones aceptadas por `configure`.

    `extra="forbid"`: una clave desconocida es un error de configuración, no
    algo que se ignore en silencio.
    """

    model_config = ConfigDict(extra="forbid")

    timeout: int | None = Field(
        default=DEFAULT_TIMEOUT_MS,
        gt=0,
        description="Timeout por request en milisegundos; None lo desactiva de forma explícita.",
    )
    parse_response: bool = Field(
        default=True,
        description="Si es False, las llamadas devuelven el `httpx.Response` crudo.",
    )


class ClientConfiguration(BaseModel):
    """Estado mutable de una instancia de la fachada.

    Se muta solo desde los setters de la fachada y se lee (nunca se escribe)
    durante una llamada.
    """

    options: ClientOptions = Field(default_factory=ClientOptions)
    credentials: tuple[str, ...] = Field(default=(), max_length=2)
    server_url: str | None = Field(
        default=None,
        description="URL base ya resuelta (sin placeholders). None = servidor declarado.",
    )
    server_variables: dict[str, str] = Field(default_factory=dict)

    @property
    def timeout_seconds(self) -> float | None:
        if self.options.timeout is None:
            return None
        return self.options.timeout / 1000.0


def coerce_metadata(metadata: Metadata | None, params: Mapping[str, Any]) -> dict[str, ParamValue]:
    """Une metadata explícita y kwargs; los kwargs ganan y los `None` se descartan."""

    merged: dict[str, ParamValue] = {}
    if metadata:
        merged.update(metadata)
    merged.update(params)
    return {k: v for k, v in merged.items() if v is not None}
