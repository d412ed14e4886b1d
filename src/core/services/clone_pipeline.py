"""Org clone orchestration.

The CLI delegates the whole "list then clone" flow to `clone_repos_by_org`,
which keeps side-effects (tables, progress bars) out of the core logic. UI
layers follow progress through `PipelineHooks`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from core.config import CloneOptions
from core.domain.errors import ClientNotInitializedError, MissingOrganizationError
from core.domain.models import CloneOutcome, CloneReport, Repository
from core.interfaces.repositories import RepositoryCloner, RepositoryLister

if TYPE_CHECKING:
    from adapters.http_client import ProxyRoute

logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers."""

    listed: Callable[[list[Repository]], None] | None = None
    clone_start: Callable[[Repository, int, int], None] | None = None
    clone_done: Callable[[CloneOutcome], None] | None = None


def _default_cloner(options: CloneOptions, route: ProxyRoute | None) -> RepositoryCloner:
    # Imported lazily so the core does not import GitPython unless it clones.
    from adapters.git_cloner import GitCloner  # noqa: PLC0415
    from adapters.http_client import ProxyRoute  # noqa: PLC0415

    # Without an explicit route git follows `options.proxy`, same as the API client.
    return GitCloner(
        route=route or ProxyRoute.from_string(options.proxy),
        username=options.username,
        password=options.password,
        recurse_submodules=options.recurse_submodules,
    )


def clone_repos_by_org(
    options: CloneOptions,
    client: RepositoryLister | None,
    *,
    route: ProxyRoute | None = None,
    cloner: RepositoryCloner | None = None,
    hooks: PipelineHooks | None = None,
) -> CloneReport:
    """Clone every repository of `options.org` under `options.path`.

    Fatal (raised): missing org, missing client, listing failure.
    Per-repository clone failures are logged and recorded in the report;
    the loop always attempts every repository.

    `route` is the proxy decision the API client was built with; the default
    cloner sends git traffic through it. Ignored when `cloner` is given.
    """

    if not options.org:
        raise MissingOrganizationError()
    if client is None:
        raise ClientNotInitializedError()

    hooks = hooks or PipelineHooks()
    repos = client.list_repos_by_org(options.org, repo_type=options.repo_type.value)
    logger.info("found %d repos in org %s", len(repos), options.org)
    if hooks.listed:
        hooks.listed(repos)

    cloner = cloner or _default_cloner(options, route)
    report = CloneReport(org=options.org)

    total = len(repos)
    for index, repo in enumerate(repos, start=1):
        destination = options.path / repo.name
        logger.info("begin clone repo %s %s", repo.name, repo.url or repo.clone_url)
        if hooks.clone_start:
            hooks.clone_start(repo, index, total)

        try:
            cloner.clone(repo, destination)
            outcome = CloneOutcome(repository=repo, path=destination)
        except Exception as exc:
            logger.error("clone repo %s err: %s", repo.name, exc)
            outcome = CloneOutcome(repository=repo, path=destination, ok=False, error=str(exc))

        report.outcomes.append(outcome)
        if hooks.clone_done:
            hooks.clone_done(outcome)

    logger.info(
        "org %s: %d/%d repos cloned, %d failed",
        options.org,
        report.succeeded,
        report.attempted,
        report.failed,
    )
    # Credentials (password, proxy userinfo) are never logged.
    logger.info("options: %s", options.model_dump(mode="json", exclude={"password", "proxy"}))
    return report
