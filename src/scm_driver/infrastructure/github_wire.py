"""GitHub REST v3 payloads and their mapping onto the domain model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from scm_driver.domain.entities import Commit, Reference, Signature, Tree, TreeEntry
from scm_driver.infrastructure.wire_common import NonEmptyStr, format_timestamp, optional_str


class CommitPointer(BaseModel):
    sha: NonEmptyStr


class Branch(BaseModel):
    """Item of ``GET /repos/{owner}/{repo}/branches``."""

    name: NonEmptyStr
    commit: CommitPointer


class Tag(BaseModel):
    """Item of ``GET /repos/{owner}/{repo}/tags``."""

    name: NonEmptyStr
    commit: CommitPointer


class Account(BaseModel):
    login: str = ""
    avatar_url: str = ""


class GitActor(BaseModel):
    name: str
    email: str
    date: datetime


class GitCommitData(BaseModel):
    message: str
    author: GitActor
    committer: GitActor


class CommitResponse(BaseModel):
    """Response of ``GET /repos/{owner}/{repo}/commits/{ref}``.

    ``author`` / ``committer`` at the top level are GitHub accounts and are
    ``null`` when the git identity does not match a registered user.
    """

    sha: NonEmptyStr
    html_url: str = ""
    commit: GitCommitData
    author: Account | None = None
    committer: Account | None = None


class TreeItem(BaseModel):
    path: str
    mode: str
    type: str
    sha: NonEmptyStr
    url: str = ""
    size: int | None = None


class TreeResponse(BaseModel):
    """Response of ``GET /repos/{owner}/{repo}/git/trees/{sha}``."""

    sha: NonEmptyStr
    url: str = ""
    tree: list[TreeItem]
    truncated: bool | None = None


def normalize_branch(branch: Branch) -> Reference:
    return Reference(name=branch.name, path=f"refs/heads/{branch.name}", sha=branch.commit.sha)


def normalize_tag(tag: Tag) -> Reference:
    return Reference(name=tag.name, path=f"refs/tags/{tag.name}", sha=tag.commit.sha)


def _signature(actor: GitActor, account: Account | None) -> Signature:
    return Signature(
        name=actor.name,
        email=actor.email,
        date=format_timestamp(actor.date),
        login=optional_str(account.login) if account else None,
        avatar=optional_str(account.avatar_url) if account else None,
    )


def normalize_commit(payload: CommitResponse) -> Commit:
    return Commit(
        sha=payload.sha,
        message=payload.commit.message,
        author=_signature(payload.commit.author, payload.author),
        committer=_signature(payload.commit.committer, payload.committer),
        link=payload.html_url,
    )


def normalize_tree(payload: TreeResponse) -> Tree:
    """GitHub caps recursive listings and flags it; no flag means unknown, so truncated."""
    entries = tuple(
        TreeEntry(
            path=item.path,
            mode=item.mode,
            type=item.type,
            sha=item.sha,
            url=item.url,
            size=item.size if item.type == "blob" else None,
        )
        for item in payload.tree
    )
    truncated = True if payload.truncated is None else payload.truncated
    return Tree(sha=payload.sha, url=payload.url, entries=entries, truncated=truncated)
