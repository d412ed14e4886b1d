from __future__ import annotations

from pathlib import Path

import pytest
from git import GitCommandError
from typer.testing import CliRunner

from adapters import git_cloner
from adapters.github_api import GitHubClient
from cli.main import app
from conftest import repo_payload
from core.domain.errors import RepositoryListingError
from core.domain.models import Repository

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for var in ("ORGCLONE_API_TOKEN", "ORGCLONE_PASSWORD", "ORGCLONE_API_BASE_URL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def listed(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    calls: list[str] = []
    repos = [Repository.model_validate(repo_payload(name)) for name in ("one", "two", "three")]

    def fake_list(self, org, *, repo_type="all", per_page=None):
        calls.append(org)
        return repos

    monkeypatch.setattr(GitHubClient, "list_repos_by_org", fake_list)
    return calls


@pytest.fixture
def cloned(monkeypatch: pytest.MonkeyPatch) -> list[dict]:
    calls: list[dict] = []

    def fake_clone_from(url, to_path, progress=None, env=None, multi_options=None, **kwargs):
        calls.append({"url": url, "to_path": Path(to_path), "env": env})
        if url.endswith("/two.git"):
            raise GitCommandError(["git", "clone", url], 128, "fatal: could not read Username")

    monkeypatch.setattr(git_cloner.Repo, "clone_from", fake_clone_from)
    return calls


def test_missing_org_exits_1_without_network(listed, cloned) -> None:
    result = runner.invoke(app, ["clone"])

    assert result.exit_code == 1
    assert listed == []
    assert cloned == []


def test_malformed_proxy_exits_1(listed, cloned) -> None:
    result = runner.invoke(app, ["--proxy", "ftp://proxy.internal", "clone", "--org", "acme"])

    assert result.exit_code == 1
    assert listed == []
    assert cloned == []


def test_clone_failures_do_not_change_exit_code(listed, cloned, tmp_path: Path) -> None:
    result = runner.invoke(app, ["clone", "--org", "acme", "--path", str(tmp_path / "out")])

    assert result.exit_code == 0, result.output
    assert listed == ["acme"]
    assert [c["url"].rsplit("/", 1)[-1] for c in cloned] == ["one.git", "two.git", "three.git"]
    assert [c["to_path"] for c in cloned] == [tmp_path / "out" / n for n in ("one", "two", "three")]
    assert "2/3 cloned" in result.output


def test_listing_failure_exits_1(monkeypatch: pytest.MonkeyPatch, cloned) -> None:
    def failing_list(self, org, *, repo_type="all", per_page=None):
        raise RepositoryListingError("list repos failed on page 2", repositories=[], page=2)

    monkeypatch.setattr(GitHubClient, "list_repos_by_org", failing_list)

    result = runner.invoke(app, ["clone", "--org", "acme"])

    assert result.exit_code == 1
    assert cloned == []


def test_proxy_reaches_git_transport(listed, cloned) -> None:
    result = runner.invoke(
        app,
        ["--proxy", "socks5://127.0.0.1:1080", "clone", "--org", "acme", "--username", "alice", "--password", "pw"],
    )

    assert result.exit_code == 0, result.output
    for call in cloned:
        env = call["env"]
        keys = {env[f"GIT_CONFIG_KEY_{i}"]: env[f"GIT_CONFIG_VALUE_{i}"] for i in range(int(env["GIT_CONFIG_COUNT"]))}
        assert keys["http.proxy"] == "socks5://127.0.0.1:1080"
        assert keys["http.extraHeader"].startswith("Authorization: Basic ")


def test_password_from_env(monkeypatch: pytest.MonkeyPatch, listed, cloned) -> None:
    monkeypatch.setenv("ORGCLONE_PASSWORD", "from-env")

    result = runner.invoke(app, ["clone", "--org", "acme", "--no-recurse-submodules"])

    assert result.exit_code == 0, result.output
    env = cloned[0]["env"]
    assert env["GIT_CONFIG_KEY_0"] == "http.extraHeader"
