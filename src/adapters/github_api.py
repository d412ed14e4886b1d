"""Cliente de la API REST de GitHub (solo lo que necesitamos).

Está en adapters porque es I/O puro (HTTP). Implementa
`core.interfaces.repositories.RepositoryLister`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import ProxyRoute, build_client
from core.config import AppSettings
from core.domain.errors import RepositoryListingError
from core.domain.models import Repository

logger = logging.getLogger(__name__)


def next_page_number(response: httpx.Response) -> int:
    """Número de la siguiente página según la cabecera `Link` (0 = no hay más)."""

    link = response.links.get("next")
    if not link or not link.get("url"):
        return 0
    try:
        page = int(httpx.URL(link["url"]).params.get("page", "0"))
    except (httpx.InvalidURL, ValueError):
        return 0
    return max(page, 0)


class GitHubClient:
    """Cliente síncrono de la API compartido por listado y clone.

    Guarda también la `ProxyRoute` con la que se construyó, para que el
    transporte git use exactamente el mismo proxy.
    """

    def __init__(
        self,
        http: httpx.Client,
        *,
        route: ProxyRoute | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        self._http = http
        self.route = route or ProxyRoute()
        self._settings = settings or AppSettings()

    @classmethod
    def from_proxy(
        cls,
        proxy: str | None = None,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> "GitHubClient":
        """Construye el cliente; una URL de proxy inválida lanza `ProxyURLError`."""

        settings = settings or AppSettings()
        route = ProxyRoute.from_string(proxy)
        http = build_client(settings, route=route, transport=transport)
        return cls(http, route=route, settings=settings)

    @property
    def http(self) -> httpx.Client:
        return self._http

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_repos_page(self, org: str, *, page: int, per_page: int, repo_type: str) -> httpx.Response:
        response = self._http.get(
            f"/orgs/{org}/repos",
            params={"type": repo_type, "per_page": per_page, "page": page},
        )
        response.raise_for_status()
        return response

    def list_repos_by_org(
        self,
        org: str,
        *,
        repo_type: str = "all",
        per_page: int | None = None,
    ) -> list[Repository]:
        """Lista todos los repositorios de `org`, página a página.

        Reglas:
        - Empieza en la página 1 y sigue la cabecera `Link` hasta que no hay
          `rel="next"`: exactamente una request por página.
        - Cualquier fallo corta el bucle y lanza `RepositoryListingError` con
          lo acumulado hasta la página anterior.
        - Sin reintentos.
        """

        per_page = per_page or self._settings.per_page
        repositories: list[Repository] = []
        page = 1

        while True:
            try:
                response = self._get_repos_page(org, page=page, per_page=per_page, repo_type=repo_type)
                batch = self._parse_batch(response.json())
            except (httpx.HTTPError, ValueError) as exc:
                logger.error("list repos of %s failed on page %d: %s", org, page, exc)
                raise RepositoryListingError(
                    f"list repos of org {org!r} failed on page {page}: {exc}",
                    repositories=repositories,
                    page=page,
                ) from exc

            repositories.extend(batch)
            logger.debug("page %d of %s: %d repos", page, org, len(batch))

            page = next_page_number(response)
            if page == 0:
                break

        return repositories

    @staticmethod
    def _parse_batch(data: Any) -> list[Repository]:
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")
        try:
            return [Repository.model_validate(item) for item in data]
        except ValidationError as exc:
            raise ValueError(f"unexpected repository payload: {exc}") from exc
