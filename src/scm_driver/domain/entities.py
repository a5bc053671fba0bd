"""Domain entities — normalized, backend-agnostic git metadata."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Reference:
    """A branch or tag pointing at a commit."""

    name: str
    path: str  # fully qualified, e.g. "refs/heads/main"
    sha: str


@dataclass(frozen=True, slots=True)
class Signature:
    """Author or committer identity attached to a commit.

    ``login`` and ``avatar`` are only set when the backend resolved the
    identity to a registered account.
    """

    name: str
    email: str
    date: str  # RFC3339, UTC
    login: str | None = None
    avatar: str | None = None


@dataclass(frozen=True, slots=True)
class Commit:
    """A repository commit."""

    sha: str
    message: str
    author: Signature
    committer: Signature
    link: str  # web URL for humans, not an API endpoint


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """A single file or directory inside a tree."""

    path: str
    mode: str
    type: str  # "blob", "tree" or "commit"
    sha: str
    url: str
    size: int | None = None


@dataclass(frozen=True, slots=True)
class Tree:
    """A listing of entries at a given revision."""

    sha: str
    url: str
    entries: tuple[TreeEntry, ...]
    truncated: bool


@dataclass(frozen=True, slots=True)
class PageOptions:
    """Pagination request; each adapter encodes it into its own parameters."""

    page: int | None = None
    size: int | None = None
    cursor: str | None = None

    def __post_init__(self) -> None:
        if self.page is not None and self.page < 1:
            msg = f"page must be >= 1, got {self.page}"
            raise ValueError(msg)
        if self.size is not None and self.size < 1:
            msg = f"size must be >= 1, got {self.size}"
            raise ValueError(msg)

    @property
    def is_explicit(self) -> bool:
        """True when the caller asked for one specific page."""
        return self.page is not None or self.cursor is not None
