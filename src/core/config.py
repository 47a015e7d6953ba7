"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- `TonApiClient.from_settings` y la CLI leen la misma configuración.

La fachada no depende de `AppSettings`: un cliente construido a mano solo
usa lo que se le pasa por `configure`/`auth`/`server`.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import dotenv_values, set_key
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


_APP_DIR = "ton-api"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario.

    `TON_API_CONFIG_DIR` gana siempre; si no, la convención de cada SO.
    """

    override = os.environ.get("TON_API_CONFIG_DIR", "").strip()
    if override:
        return Path(override)
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA") or Path.home()) / _APP_DIR
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / _APP_DIR
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / _APP_DIR


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def read_user_env_vars(env_path: Path | None = None) -> dict[str, str]:
    """Variables guardadas en el .env del usuario (vacío si no existe)."""

    env_path = env_path or get_user_env_file()
    if not env_path.exists():
        return {}
    return {k: v for k, v in dotenv_values(env_path).items() if v is not None}


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Actualiza claves en el .env del usuario sin tocar el resto del archivo."""

    env_path = env_path or get_user_env_file()
    if not env_path.exists():
        env_path.parent.mkdir(parents=True, exist_ok=True)
        env_path.write_text("# ton-api user config (.env)\n", encoding="utf-8")

    for key, value in values.items():
        if value is not None:
            set_key(str(env_path), key, value, quote_mode="never")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars `TON_API_*`).
    - Un único contrato de configuración para CLI y cliente.
    """

    model_config = SettingsConfigDict(
        env_prefix="TON_API_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float | None = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos). None = sin límite.",
    )
    user_agent: str = Field(
        default="ton-api-sdk/0.1",
        min_length=1,
        description="User-Agent enviado en cada request.",
    )
    api_key: str | None = Field(
        default=None,
        description="API key de Chainbase (header x-api-key).",
    )
    server_url: str | None = Field(
        default=None,
        description="URL base (o plantilla con {placeholders}) que reemplaza al servidor declarado.",
    )
    network: str = Field(
        default="ton-mainnet",
        min_length=1,
        description="Valor de la variable {network} del servidor declarado.",
    )
