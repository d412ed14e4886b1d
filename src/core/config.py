"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Separa los ajustes ambientales (`AppSettings`) de las opciones de una
  ejecución concreta (`CloneOptions`), que construye la CLI una sola vez.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, SecretStr
from pydantic.config import ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

__version__ = "0.1.0"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "orgclone"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "orgclone"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "orgclone"
    return Path.home() / ".config" / "orgclone"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class RepoType(str, Enum):
    """Valores aceptados por `GET /orgs/{org}/repos?type=...`."""

    ALL = "all"
    PUBLIC = "public"
    PRIVATE = "private"
    FORKS = "forks"
    SOURCES = "sources"
    MEMBER = "member"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="ORGCLONE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="https://api.github.com",
        min_length=8,
        description="Base URL de la API REST de GitHub (GitHub Enterprise: https://<host>/api/v3).",
    )
    api_token: SecretStr | None = Field(
        default=None,
        description="Token opcional para la API; sin token el listado es anónimo.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default=f"orgclone/{__version__}",
        min_length=1,
        description="User-Agent para la API (GitHub lo exige).",
    )
    per_page: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Tamaño de página para el listado de repositorios.",
    )
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging por defecto.",
    )


class CloneOptions(BaseModel):
    """Opciones de una ejecución de `clone`.

    Se construye una vez en la CLI y se pasa explícitamente a cada operación;
    es inmutable a partir de ese momento. La contraseña es `SecretStr`, de
    modo que loguear el objeto nunca la muestra en claro.
    """

    model_config = ConfigDict(frozen=True)

    proxy: str = Field(
        default="",
        description="Proxy http/https o socks5 (vacío = conexión directa).",
    )
    org: str = Field(
        default="",
        description="Organización de GitHub cuyos repositorios se clonan.",
    )
    path: Path = Field(
        default=Path("."),
        description="Directorio raíz donde se crea <path>/<repo>.",
    )
    username: str = Field(
        default="",
        description="Usuario para la autenticación del clone.",
    )
    password: SecretStr | None = Field(
        default=None,
        description="Contraseña/token para la autenticación del clone.",
    )
    repo_type: RepoType = Field(
        default=RepoType.ALL,
        description="Filtro `type` del endpoint de listado.",
    )
    recurse_submodules: bool = Field(
        default=True,
        description="Clonar también los submódulos de forma recursiva.",
    )
