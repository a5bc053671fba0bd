"""Gitea REST v1 payloads.

Only the fields the adapter reads are declared; everything else in the
response is ignored.  Each model also carries the pure mapping onto the
domain model, so normalization can be exercised with fixture payloads.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from scm_driver.domain.entities import Commit, Reference, Signature, Tree, TreeEntry
from scm_driver.infrastructure.wire_common import NonEmptyStr, format_timestamp, optional_str


class PayloadCommit(BaseModel):
    """Commit summary embedded in a branch."""

    id: NonEmptyStr


class Branch(BaseModel):
    """API response item for ``GET /repos/{owner}/{repo}/branches``."""

    name: NonEmptyStr
    commit: PayloadCommit


class CommitMeta(BaseModel):
    """Commit pointer embedded in a tag."""

    sha: NonEmptyStr


class Tag(BaseModel):
    """API response item for ``GET /repos/{owner}/{repo}/tags``."""

    name: NonEmptyStr
    commit: CommitMeta


class User(BaseModel):
    """A registered Gitea account."""

    login: str = ""
    avatar_url: str = ""


class CommitUser(BaseModel):
    """Git-level author or committer of a commit."""

    name: str
    email: str
    date: datetime


class RepoCommit(BaseModel):
    """Git-level data of a commit."""

    message: str
    author: CommitUser
    committer: CommitUser


class GitCommit(BaseModel):
    """API response for ``GET /repos/{owner}/{repo}/git/commits/{sha}``."""

    sha: NonEmptyStr
    html_url: str = ""
    commit: RepoCommit
    author: User | None = None
    committer: User | None = None


class GitEntry(BaseModel):
    """An entry in a Git tree."""

    path: str
    mode: str
    type: str
    sha: NonEmptyStr
    url: str = ""
    size: int | None = None


class GitTreeResponse(BaseModel):
    """API response for ``GET /repos/{owner}/{repo}/git/trees/{sha}``."""

    sha: NonEmptyStr
    url: str = ""
    tree: list[GitEntry] | None = None
    truncated: bool | None = None
    page: int | None = None
    total_count: int | None = None


def normalize_branch(branch: Branch) -> Reference:
    return Reference(
        name=branch.name,
        path=f"refs/heads/{branch.name}",
        sha=branch.commit.id,
    )


def normalize_tag(tag: Tag) -> Reference:
    return Reference(
        name=tag.name,
        path=f"refs/tags/{tag.name}",
        sha=tag.commit.sha,
    )


def _signature(user: CommitUser, account: User | None) -> Signature:
    return Signature(
        name=user.name,
        email=user.email,
        date=format_timestamp(user.date),
        login=optional_str(account.login) if account else None,
        avatar=optional_str(account.avatar_url) if account else None,
    )


def normalize_commit(payload: GitCommit) -> Commit:
    return Commit(
        sha=payload.sha,
        message=payload.commit.message,
        author=_signature(payload.commit.author, payload.author),
        committer=_signature(payload.commit.committer, payload.committer),
        link=payload.html_url,
    )


def normalize_tree(payload: GitTreeResponse) -> Tree:
    """Map a tree page onto the domain model.

    Gitea pages tree listings.  The result counts as complete only when the
    payload says so explicitly or its ``total_count`` shows every entry was
    delivered; with no signal at all it is reported as truncated.
    """
    entries = tuple(
        TreeEntry(
            path=entry.path,
            mode=entry.mode,
            type=entry.type,
            sha=entry.sha,
            url=entry.url,
            size=entry.size if entry.type == "blob" else None,
        )
        for entry in payload.tree or ()
    )

    if payload.truncated:
        truncated = True
    elif payload.total_count is not None:
        truncated = payload.total_count > len(entries)
    else:
        truncated = payload.truncated is None

    return Tree(sha=payload.sha, url=payload.url, entries=entries, truncated=truncated)
