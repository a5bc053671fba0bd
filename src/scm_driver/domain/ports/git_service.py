"""Port: git service — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from scm_driver.domain.entities import Commit, PageOptions, Reference, Tree
from scm_driver.domain.value_objects import RepoName


class Capability(str, Enum):
    """Optional backend features an adapter may or may not offer."""

    RECURSIVE_TREE = "recursive_tree"
    PAGE_PAGINATION = "page_pagination"
    CURSOR_PAGINATION = "cursor_pagination"


@runtime_checkable
class GitService(Protocol):
    """Read-only contract every hosting backend adapter satisfies.

    ``capabilities`` lists the optional features the backend supports;
    calling into a missing one raises :class:`UnsupportedError`.
    """

    capabilities: frozenset[Capability]

    async def list_branches(
        self, repo: str | RepoName, opts: PageOptions | None = None
    ) -> list[Reference]:
        """Return the repository's branches; empty when there are none."""
        ...

    async def list_tags(
        self, repo: str | RepoName, opts: PageOptions | None = None
    ) -> list[Reference]:
        """Return the repository's tags; empty when there are none."""
        ...

    async def find_commit(self, repo: str | RepoName, ref: str) -> Commit | None:
        """Return the commit a ref or sha points at, or ``None`` if missing."""
        ...

    async def get_tree(
        self, repo: str | RepoName, tree_sha: str, recursive: bool | None = None
    ) -> Tree | None:
        """Return the tree for a sha or ref name, or ``None`` if missing."""
        ...
