"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y la política de proxy.
- La misma decisión de proxy (`ProxyRoute`) se aplica a la API (httpx) y al
  transporte git (config `http.proxy`), así ambos tráficos salen por el
  mismo sitio.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from core.config import AppSettings
from core.domain.errors import ProxyURLError

PROXY_SCHEMES = ("http", "https", "socks5", "socks5h")


def parse_proxy_url(raw: str | None) -> httpx.URL | None:
    """Interpreta `--proxy`.

    - Vacío → None (transporte directo).
    - Inválido, sin host o con esquema no soportado → `ProxyURLError`.
    """

    value = (raw or "").strip()
    if not value:
        return None

    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as exc:
        raise ProxyURLError(f"invalid proxy url {value!r}: {exc}") from exc

    if url.scheme not in PROXY_SCHEMES:
        raise ProxyURLError(
            f"invalid proxy url {value!r}: scheme must be one of {', '.join(PROXY_SCHEMES)}"
        )
    if not url.host:
        raise ProxyURLError(f"invalid proxy url {value!r}: missing host")
    return url


@dataclass(frozen=True)
class ProxyRoute:
    """Decisión de proxy compartida por la API y por git."""

    proxy: httpx.URL | None = None

    @classmethod
    def from_string(cls, raw: str | None) -> "ProxyRoute":
        return cls(proxy=parse_proxy_url(raw))

    @property
    def enabled(self) -> bool:
        return self.proxy is not None

    def mounts(self) -> dict[str, httpx.BaseTransport] | None:
        """Transportes httpx instalados para `http://` y `https://`."""

        if self.proxy is None:
            return None
        transport = httpx.HTTPTransport(proxy=httpx.Proxy(self.proxy))
        return {"http://": transport, "https://": transport}

    def git_config(self) -> list[tuple[str, str]]:
        """Pares de config git equivalentes (aplican a http y https)."""

        if self.proxy is None:
            return []
        return [("http.proxy", str(self.proxy))]

    def display(self) -> str:
        """Representación apta para logs (sin credenciales)."""

        if self.proxy is None:
            return ""
        if not self.proxy.userinfo:
            return str(self.proxy)
        port = f":{self.proxy.port}" if self.proxy.port else ""
        return f"{self.proxy.scheme}://***@{self.proxy.host}{port}"


def build_client(
    settings: AppSettings | None = None,
    *,
    route: ProxyRoute | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros para la API de GitHub.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - Con proxy, el mismo transporte se monta para `http://` y `https://`.
    """

    settings = settings or AppSettings()
    route = route or ProxyRoute()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if settings.api_token is not None:
        headers["Authorization"] = f"Bearer {settings.api_token.get_secret_value()}"
    if extra_headers:
        headers.update(extra_headers)

    return httpx.Client(
        base_url=settings.api_base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
        mounts=None if transport is not None else route.mounts(),
    )
