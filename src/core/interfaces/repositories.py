"""Contratos de listado y clone de repositorios.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El servicio de clone depende de estas abstracciones; los adaptadores
  concretos (httpx, GitPython) y los dobles de test son intercambiables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from core.domain.models import Repository


@runtime_checkable
class RepositoryLister(Protocol):
    """Contrato mínimo para listar los repositorios de una organización.

    Reglas de diseño:
    - Devuelve la lista completa en el orden de las páginas de la API.
    - Si una página falla lanza `RepositoryListingError` con lo acumulado.
    """

    def list_repos_by_org(self, org: str, *, repo_type: str = "all") -> list[Repository]:
        ...


@runtime_checkable
class RepositoryCloner(Protocol):
    """Clona un repositorio en `destination`; lanza excepción si falla."""

    def clone(self, repository: Repository, destination: Path) -> None:
        ...
