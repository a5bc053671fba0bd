"""Pydantic response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _FromDomain(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ReferenceResponse(_FromDomain):
    name: str
    path: str
    sha: str


class SignatureResponse(_FromDomain):
    name: str
    email: str
    date: str
    login: str | None = None
    avatar: str | None = None


class CommitResponse(_FromDomain):
    sha: str
    message: str
    author: SignatureResponse
    committer: SignatureResponse
    link: str


class TreeEntryResponse(_FromDomain):
    path: str
    mode: str
    type: str
    size: int | None = None
    sha: str
    url: str


class TreeResponse(_FromDomain):
    sha: str
    url: str
    entries: list[TreeEntryResponse]
    truncated: bool


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
