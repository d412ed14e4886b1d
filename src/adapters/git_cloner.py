"""Clone de repositorios con GitPython.

Implementa `core.interfaces.repositories.RepositoryCloner`.

Notas:
- Proxy y credenciales se pasan a git como configuración del proceso
  (`GIT_CONFIG_COUNT`/`GIT_CONFIG_KEY_n`/`GIT_CONFIG_VALUE_n`), no como
  `git clone -c`, para que no acaben escritas en `.git/config`.
- Requiere git >= 2.31 para la config por variables de entorno.
"""

from __future__ import annotations

import base64
import sys
from pathlib import Path
from typing import TextIO

from git import RemoteProgress, Repo
from pydantic import SecretStr

from adapters.http_client import ProxyRoute
from core.domain.models import Repository


class StdoutProgress(RemoteProgress):
    """Vuelca el progreso de `git clone` en un stream (stdout por defecto)."""

    _STAGES = {
        RemoteProgress.COUNTING: "Counting objects",
        RemoteProgress.COMPRESSING: "Compressing objects",
        RemoteProgress.WRITING: "Writing objects",
        RemoteProgress.RECEIVING: "Receiving objects",
        RemoteProgress.RESOLVING: "Resolving deltas",
        RemoteProgress.FINDING_SOURCES: "Finding sources",
        RemoteProgress.CHECKING_OUT: "Checking out files",
    }

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self._stream = stream or sys.stdout

    def update(
        self,
        op_code: int,
        cur_count: str | float,
        max_count: str | float | None = None,
        message: str = "",
    ) -> None:
        stage = self._STAGES.get(op_code & self.OP_MASK, "Progress")
        if max_count:
            line = f"{stage}: {int(float(cur_count))}/{int(float(max_count))}"
        else:
            line = f"{stage}: {int(float(cur_count))}"
        if message:
            line = f"{line} {message}"
        end = "\n" if op_code & self.END else "\r"
        self._stream.write(line + end)
        self._stream.flush()


def basic_auth_header(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Authorization: Basic {token}"


class GitCloner:
    """Clona repositorios por HTTPS, con auth básica y proxy opcionales."""

    def __init__(
        self,
        *,
        route: ProxyRoute | None = None,
        username: str = "",
        password: SecretStr | None = None,
        recurse_submodules: bool = True,
        progress_stream: TextIO | None = None,
    ) -> None:
        self._route = route or ProxyRoute()
        self._username = username
        self._password = password
        self._recurse_submodules = recurse_submodules
        self._progress_stream = progress_stream

    def git_config(self) -> list[tuple[str, str]]:
        config = list(self._route.git_config())
        secret = self._password.get_secret_value() if self._password is not None else ""
        if self._username or secret:
            config.append(("http.extraHeader", basic_auth_header(self._username, secret)))
        return config

    def environment(self) -> dict[str, str]:
        """Variables de entorno para el proceso git."""

        env = {"GIT_TERMINAL_PROMPT": "0"}
        config = self.git_config()
        if config:
            env["GIT_CONFIG_COUNT"] = str(len(config))
            for index, (key, value) in enumerate(config):
                env[f"GIT_CONFIG_KEY_{index}"] = key
                env[f"GIT_CONFIG_VALUE_{index}"] = value
        return env

    def clone(self, repository: Repository, destination: Path) -> None:
        """Clona `repository` en `destination`; los errores de git se propagan."""

        multi_options = ["--recurse-submodules"] if self._recurse_submodules else None
        Repo.clone_from(
            repository.clone_url,
            destination,
            progress=StdoutProgress(self._progress_stream),
            env=self.environment(),
            multi_options=multi_options,
        )
