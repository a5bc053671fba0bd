"""Domain exception hierarchy.

Adapters raise these verbatim; nothing between an adapter and the caller
translates or retries them.  Callers branch on :attr:`ScmError.kind`.
A backend reporting a missing entity is *not* an error: single-entity
lookups return ``None`` and listings return an empty list.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum


class ErrorKind(str, Enum):
    """Stable classification of failures surfaced by the driver layer."""

    AUTH = "auth"
    RATE_LIMITED = "rate_limited"
    TRANSPORT = "transport"
    DECODE = "decode"
    UNSUPPORTED = "unsupported"
    CONFIGURATION = "configuration"
    INVALID_INPUT = "invalid_input"


class ScmError(Exception):
    """Base exception for the entire driver layer."""

    kind: ErrorKind = ErrorKind.TRANSPORT


# ── Input / construction ────────────────────────────────────────────────────


class ConfigurationError(ScmError):
    """The driver could not be constructed from the supplied configuration."""

    kind = ErrorKind.CONFIGURATION


class InvalidRepoNameError(ScmError):
    """The repository identifier is not of the form ``owner/name``."""

    kind = ErrorKind.INVALID_INPUT


# ── Backend errors ──────────────────────────────────────────────────────────


class AuthError(ScmError):
    """The backend rejected the credential, or none was supplied (401/403)."""

    kind = ErrorKind.AUTH

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(ScmError):
    """The backend throttled the request.

    ``retry_after`` is the backend's hint in seconds, when it sent one;
    ``reset_at`` is the moment the quota resets, when known.
    """

    kind = ErrorKind.RATE_LIMITED

    def __init__(
        self,
        message: str,
        *,
        retry_after: int | None = None,
        reset_at: datetime | None = None,
    ) -> None:
        super().__init__(message)
        self.retry_after = retry_after
        self.reset_at = reset_at


class TransportError(ScmError):
    """Network failure, timeout, or an unexpected non-2xx status."""

    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body_excerpt: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_excerpt = body_excerpt


class DecodeError(ScmError):
    """The response body does not match the backend's expected shape."""

    kind = ErrorKind.DECODE

    def __init__(self, message: str, *, operation: str, repo: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.repo = repo


class UnsupportedError(ScmError):
    """The backend lacks a capability the call requires."""

    kind = ErrorKind.UNSUPPORTED

    def __init__(self, message: str, *, operation: str, capability: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.capability = capability
