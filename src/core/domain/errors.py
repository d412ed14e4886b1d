"""Errores del dominio.

Todos derivan de `OrgCloneError`: la CLI los trata como fatales (exit 1).
Los fallos de clone por repositorio no usan estas clases; se registran en
`CloneOutcome`.
"""

from __future__ import annotations

from core.domain.models import Repository


class OrgCloneError(Exception):
    """Error fatal: aborta el comando completo."""


class MissingOrganizationError(OrgCloneError):
    def __init__(self) -> None:
        super().__init__("must have one org")


class ClientNotInitializedError(OrgCloneError):
    def __init__(self) -> None:
        super().__init__("github client is not initialized")


class ProxyURLError(OrgCloneError):
    """La URL de proxy no se pudo interpretar."""


class RepositoryListingError(OrgCloneError):
    """El listado paginado no se completó.

    `repositories` contiene lo acumulado en las páginas anteriores a la que
    falló; aun así el listado debe considerarse incompleto.
    """

    def __init__(self, message: str, *, repositories: list[Repository], page: int) -> None:
        super().__init__(message)
        self.repositories = repositories
        self.page = page
