"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (GitHub/HTTP) y servicios lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "protocol-xref"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "protocol-xref"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "protocol-xref"
    return Path.home() / ".config" / "protocol-xref"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# protocol-xref user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROTOCOL_XREF_",
        extra="ignore",
        case_sensitive=False,
        # El último fichero gana: el .env del proyecto sobrescribe el global de usuario.
        env_file=(str(get_user_env_file()), ".env"),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="protocol-xref/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para peticiones a GitHub.",
    )

    github_api_url: str = Field(
        default="https://api.github.com",
        min_length=8,
        description="Base URL de la API REST de GitHub (resolución de ramas).",
    )
    github_raw_url: str = Field(
        default="https://raw.githubusercontent.com",
        min_length=8,
        description="Base URL de contenido raw (ficheros en un commit).",
    )
    github_token: str | None = Field(
        default=None,
        description="Token opcional para la API de GitHub (sube el rate limit).",
    )

    implementation_name: str | None = Field(
        default=None,
        description="Nombre mostrado en la atribución (p.ej. 'Hermes'); sin valor = nombre del repositorio.",
    )
    repo_owner: str = Field(default="facebook", min_length=1)
    repo_name: str = Field(default="hermes", min_length=1)
    repo_branch: str = Field(
        default="main",
        min_length=1,
        description="Rama cuyo commit actual se fija una vez por sesión.",
    )

    handler_source_path: str = Field(
        default="API/hermes/inspector/chrome/CDPHandler.cpp",
        min_length=1,
        description="Fichero donde se buscan commands y events.",
    )
    message_types_path: str = Field(
        default="API/hermes/inspector/chrome/MessageTypes.h",
        min_length=1,
        description="Fichero donde se buscan types.",
    )

    verbose: bool = Field(default=False, description="Logs DEBUG en stderr.")
    log_json: bool = Field(default=False, description="Logs como líneas JSON.")
