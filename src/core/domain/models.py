"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Permite validar el JSON de la API de GitHub en el borde e ignorar campos
  que no usamos.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Repository(BaseModel):
    """Repositorio tal como lo devuelve `GET /orgs/{org}/repos`."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(
        ...,
        min_length=1,
        description="Nombre corto; también es el nombre del directorio local.",
    )
    full_name: str | None = Field(
        default=None,
        description="Nombre completo `<org>/<repo>`.",
    )
    clone_url: str = Field(
        ...,
        min_length=1,
        description="URL HTTPS usada para el clone.",
    )
    url: str | None = Field(
        default=None,
        description="URL canónica del recurso en la API.",
    )
    html_url: str | None = Field(
        default=None,
        description="URL pública del repositorio.",
    )
    private: bool = False
    archived: bool = False
    fork: bool = False


class CloneOutcome(BaseModel):
    """Resultado de un clone individual.

    Por qué existe:
    - Los fallos por repositorio no abortan el lote; en vez de quedar solo en
      el log se registran aquí para poder contarlos y mostrarlos.
    """

    repository: Repository
    path: Path = Field(
        ...,
        description="Destino `<path>/<repo>`.",
    )
    ok: bool = Field(
        default=True,
        description="True si el clone terminó sin error.",
    )
    error: str | None = Field(
        default=None,
        description="Mensaje del error cuando `ok` es False.",
    )


class CloneReport(BaseModel):
    """Agregado de una ejecución de clone por organización."""

    org: str = Field(
        ...,
        min_length=1,
        description="Organización procesada.",
    )
    outcomes: list[CloneOutcome] = Field(
        default_factory=list,
        description="Un resultado por repositorio, en el orden del listado.",
    )

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded

    @property
    def failures(self) -> list[CloneOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]
