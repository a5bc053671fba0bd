"""Gitea REST API adapter — implements the GitService port."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

import httpx

from scm_driver.domain.entities import Commit, PageOptions, Reference, Tree
from scm_driver.domain.ports.git_service import Capability
from scm_driver.domain.value_objects import RepoName
from scm_driver.infrastructure import gitea_wire as wire
from scm_driver.infrastructure.http_client import AuthScheme, HttpClient, decode, raise_for_status
from scm_driver.infrastructure.pagination import (
    collect_pages,
    has_next_page,
    page_number,
    unique_by_name,
)

logger = logging.getLogger(__name__)

_API_PREFIX = "/api/v1"
_DEFAULT_PAGE_SIZE = 50
_TREE_PAGE_SIZE = 1000
# Gitea answers 422 for refs that are not even a valid ref pattern.
_MISSING = frozenset({404, 422})


class GiteaAdapter:
    """Concrete GitService backed by the Gitea v1 REST API."""

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
            scheme=AuthScheme.TOKEN,
            username=username,
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
        """GET /repos/{owner}/{repo}/git/commits/{ref} → Commit."""
        name = RepoName.parse(repo)
        resp = await self._http.get(
            f"{self._repo_path(name)}/git/commits/{quote(ref, safe='')}",
            params={"stat": "false", "verification": "false", "files": "false"},
        )
        if resp.status_code in _MISSING:
            logger.debug("Commit %s not found in %s", ref, name)
            return None
        raise_for_status(resp, operation="find_commit", repo=name.full_name)
        payload = decode(resp, wire.GitCommit, operation="find_commit", repo=name.full_name)
        return wire.normalize_commit(payload)

    async def get_tree(
        self, repo: str | RepoName, tree_sha: str, recursive: bool | None = None
    ) -> Tree | None:
        """GET /repos/{owner}/{repo}/git/trees/{sha} → Tree (first page)."""
        name = RepoName.parse(repo)
        params = {"page": "1", "per_page": str(_TREE_PAGE_SIZE)}
        if recursive:
            params["recursive"] = "true"
        resp = await self._http.get(
            f"{self._repo_path(name)}/git/trees/{quote(tree_sha, safe='')}",
            params=params,
        )
        if resp.status_code in _MISSING:
            logger.debug("Tree %s not found in %s", tree_sha, name)
            return None
        raise_for_status(resp, operation="get_tree", repo=name.full_name)
        payload = decode(resp, wire.GitTreeResponse, operation="get_tree", repo=name.full_name)
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
        limit = opts.size or _DEFAULT_PAGE_SIZE
        path = f"{self._repo_path(name)}/{resource}"

        async def fetch(page: int) -> tuple[list[Reference], bool]:
            resp = await self._http.get(path, params={"page": str(page), "limit": str(limit)})
            if resp.status_code == 404:
                return [], False
            raise_for_status(resp, operation=operation, repo=name.full_name)
            items = decode(resp, wire_type, operation=operation, repo=name.full_name)
            refs = [normalize(item) for item in items]
            return refs, has_next_page(resp, len(items), limit)

        page = page_number(opts, operation=operation)
        if page is not None:
            refs, _ = await fetch(page)
            return unique_by_name(refs)
        return await collect_pages(fetch, operation=operation, repo=name.full_name)

    @staticmethod
    def _repo_path(name: RepoName) -> str:
        return f"{_API_PREFIX}/repos/{name.owner}/{name.name}"
