"""Driver dispatch — build a GitService from configuration.

The concrete adapter is chosen once, here; callers only ever see the
``GitService`` port.  Supporting a new backend means writing its adapter and
adding one entry to ``_BUILDERS`` and ``DEFAULT_ENDPOINTS``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

import httpx

from scm_driver.domain.exceptions import ConfigurationError
from scm_driver.domain.ports.git_service import GitService
from scm_driver.infrastructure.gitea_adapter import GiteaAdapter
from scm_driver.infrastructure.github_rest_adapter import GitHubRestAdapter

logger = logging.getLogger(__name__)


class DriverKind(str, Enum):
    """Supported hosting backends."""

    GITEA = "gitea"
    GITHUB = "github"


DEFAULT_ENDPOINTS: dict[DriverKind, str] = {
    DriverKind.GITEA: "https://gitea.com",
    DriverKind.GITHUB: "https://api.github.com",
}

_Builder = Callable[..., GitService]

_BUILDERS: dict[DriverKind, _Builder] = {
    DriverKind.GITEA: GiteaAdapter,
    DriverKind.GITHUB: GitHubRestAdapter,
}


def parse_kind(kind: str | DriverKind) -> DriverKind:
    """Resolve a driver tag, raising ConfigurationError for unknown ones."""
    if isinstance(kind, DriverKind):
        return kind
    try:
        return DriverKind(kind.strip().lower())
    except ValueError as exc:
        supported = ", ".join(k.value for k in DriverKind)
        raise ConfigurationError(
            f"Unknown SCM driver '{kind}'. Supported drivers: {supported}"
        ) from exc


def _validate_endpoint(endpoint: str) -> str:
    try:
        url = httpx.URL(endpoint)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"Invalid SCM endpoint '{endpoint}': {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(
            f"Invalid SCM endpoint '{endpoint}'. Expected an http(s) URL with a host."
        )
    return endpoint.rstrip("/")


def new_git_service(
    kind: str | DriverKind,
    client: httpx.AsyncClient,
    url: str | None = None,
    token: str | None = None,
    username: str | None = None,
) -> GitService:
    """Return a GitService for ``kind``.

    ``url`` defaults to the backend's hosted endpoint.  ``client`` is shared,
    not owned: closing it is the caller's job.
    """
    driver = parse_kind(kind)
    endpoint = _validate_endpoint(url or DEFAULT_ENDPOINTS[driver])
    logger.info(
        "Using %s driver at %s (%s)",
        driver.value,
        endpoint,
        "authenticated" if token else "anonymous",
    )
    return _BUILDERS[driver](client, endpoint, token, username)
