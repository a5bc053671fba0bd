"""GitHub REST API adapter — implements the GitService port."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from scm_driver.domain.entities import Commit, PageOptions, Reference, Tree
from scm_driver.domain.exceptions import RateLimitedError
from scm_driver.domain.ports.git_service import Capability
from scm_driver.domain.value_objects import RepoName
from scm_driver.infrastructure import github_wire as wire
from scm_driver.infrastructure.http_client import (
    AuthScheme,
    HttpClient,
    decode,
    parse_retry_after,
    raise_for_status,
)
from scm_driver.infrastructure.pagination import (
    collect_pages,
    has_next_page,
    page_number,
    unique_by_name,
)

logger = logging.getLogger(__name__)

_DEFAULT_PAGE_SIZE = 100
# 409: the repository is empty.  422: no commit matches the ref.
_MISSING = frozenset({404, 409, 422})


class GitHubRestAdapter:
    """Concrete GitService backed by the GitHub v3 REST API."""

    capabilities = frozenset({Capability.RECURSIVE_TREE, Capability.PAGE_PAGINATION})

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        token: str | None = None,
        username: str | None = None,
    ) -> None:
        self._http = HttpClient(
            client,
            base_url,
            token,
            scheme=AuthScheme.BEARER,
            username=username,
            accept="application/vnd.github.v3+json",
        )

    async def list_branches(
        self, repo: str | RepoName, opts: PageOptions | None = None
    ) -> list[Reference]:
        """GET /repos/{owner}/{repo}/branches → [Reference]."""
        return await self._list_refs(
            repo, opts, "list_branches", "branches", list[wire.Branch], wire.normalize_branch
        )

    async def list_tags(
        self, repo: str | RepoName, opts: PageOptions | None = None
    ) -> list[Reference]:
        """GET /repos/{owner}/{repo}/tags → [Reference]."""
        return await self._list_refs(
            repo, opts, "list_tags", "tags", list[wire.Tag], wire.normalize_tag
        )

    async def find_commit(self, repo: str | RepoName, ref: str) -> Commit | None:
        """GET /repos/{owner}/{repo}/commits/{ref} → Commit."""
        name = RepoName.parse(repo)
        resp = await self._http.get(f"/repos/{name.full_name}/commits/{quote(ref, safe='')}")
        if resp.status_code in _MISSING:
            logger.debug("Commit %s not found in %s", ref, name)
            return None
        self._check(resp, "find_commit", name)
        payload = decode(resp, wire.CommitResponse, operation="find_commit", repo=name.full_name)
        return wire.normalize_commit(payload)

    async def get_tree(
        self, repo: str | RepoName, tree_sha: str, recursive: bool | None = None
    ) -> Tree | None:
        """GET /repos/{owner}/{repo}/git/trees/{sha}[?recursive=1] → Tree."""
        name = RepoName.parse(repo)
        # GitHub treats any value of ``recursive`` as true, so omit it instead.
        params = {"recursive": "1"} if recursive else None
        resp = await self._http.get(
            f"/repos/{name.full_name}/git/trees/{quote(tree_sha, safe='')}",
            params=params,
        )
        if resp.status_code in _MISSING:
            logger.debug("Tree %s not found in %s", tree_sha, name)
            return None
        self._check(resp, "get_tree", name)
        payload = decode(resp, wire.TreeResponse, operation="get_tree", repo=name.full_name)
        return wire.normalize_tree(payload)

    async def _list_refs(
        self,
        repo: str | RepoName,
        opts: PageOptions | None,
        operation: str,
        resource: str,
        wire_type: Any,
        normalize: Callable[[Any], Reference],
    ) -> list[Reference]:
        name = RepoName.parse(repo)
        opts = opts or PageOptions()
        per_page = opts.size or _DEFAULT_PAGE_SIZE
        path = f"/repos/{name.full_name}/{resource}"

        async def fetch(page: int) -> tuple[list[Reference], bool]:
            resp = await self._http.get(path, params={"page": str(page), "per_page": str(per_page)})
            if resp.status_code in (404, 409):
                return [], False
            self._check(resp, operation, name)
            items = decode(resp, wire_type, operation=operation, repo=name.full_name)
            refs = [normalize(item) for item in items]
            return refs, has_next_page(resp, len(items), per_page)

        page = page_number(opts, operation=operation)
        if page is not None:
            refs, _ = await fetch(page)
            return unique_by_name(refs)
        return await collect_pages(fetch, operation=operation, repo=name.full_name)

    @staticmethod
    def _check(resp: httpx.Response, operation: str, name: RepoName) -> None:
        """GitHub signals rate limits as 403 as well as 429.

        An exhausted primary quota has ``x-ratelimit-remaining: 0``; a
        secondary limit keeps quota left but sends ``retry-after``.
        """
        if resp.status_code == 403 and resp.headers.get("x-ratelimit-remaining", "") == "0":
            reset_raw = resp.headers.get("x-ratelimit-reset", "")
            try:
                reset_at: datetime | None = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc)
            except (ValueError, OSError):
                reset_at = None
            raise RateLimitedError(
                f"GitHub API rate limit exceeded during {operation} on {name}",
                retry_after=parse_retry_after(resp),
                reset_at=reset_at,
            )
        if resp.status_code == 403 and "retry-after" in resp.headers:
            raise RateLimitedError(
                f"GitHub API secondary rate limit hit during {operation} on {name}",
                retry_after=parse_retry_after(resp),
            )
        raise_for_status(resp, operation=operation, repo=name.full_name)
