from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from adapters.github_api import GitHubClient
from core.config import AppSettings

API = "https://api.github.com"


def repo_payload(name: str, org: str = "acme") -> dict[str, Any]:
    return {
        "id": abs(hash(name)) % 10_000,
        "name": name,
        "full_name": f"{org}/{name}",
        "clone_url": f"https://github.com/{org}/{name}.git",
        "url": f"{API}/repos/{org}/{name}",
        "html_url": f"https://github.com/{org}/{name}",
        "private": False,
        "owner": {"login": org},
    }


def paged_handler(
    pages: list[list[dict[str, Any]]],
    *,
    org: str = "acme",
    fail_on: int | None = None,
    calls: list[httpx.Request] | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Serve `pages` (1-based) with GitHub-style `Link` headers."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        page = int(request.url.params.get("page", "1"))
        if fail_on is not None and page == fail_on:
            return httpx.Response(502, json={"message": "Bad Gateway"})
        headers = {}
        if page < len(pages):
            nxt = f"{API}/organizations/1/repos?type=all&per_page=100&page={page + 1}"
            last = f"{API}/organizations/1/repos?type=all&per_page=100&page={len(pages)}"
            headers["Link"] = f'<{nxt}>; rel="next", <{last}>; rel="last"'
        return httpx.Response(200, json=pages[page - 1], headers=headers)

    return handler


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> AppSettings:
    for var in ("ORGCLONE_API_TOKEN", "ORGCLONE_API_BASE_URL", "ORGCLONE_PER_PAGE"):
        monkeypatch.delenv(var, raising=False)
    return AppSettings(_env_file=None)


@pytest.fixture
def make_client(settings: AppSettings) -> Callable[..., GitHubClient]:
    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> GitHubClient:
        return GitHubClient.from_proxy("", settings, transport=httpx.MockTransport(handler))

    return factory
