"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from scm_driver.domain.exceptions import InvalidRepoNameError

_REPO_NAME_RE = re.compile(r"^(?P<owner>[A-Za-z0-9\-_.]+)/(?P<name>[A-Za-z0-9\-_.]+)$")


@dataclass(frozen=True, slots=True)
class RepoName:
    """Validated ``owner/name`` repository identifier."""

    owner: str
    name: str

    @classmethod
    def parse(cls, value: str | RepoName) -> RepoName:
        """Parse and validate a raw ``owner/name`` string."""
        if isinstance(value, RepoName):
            return value
        stripped = value.strip()
        match = _REPO_NAME_RE.match(stripped)
        if not match or match["owner"] in {".", ".."} or match["name"] in {".", ".."}:
            raise InvalidRepoNameError(
                f"Invalid repository identifier: '{value}'. Expected format: <owner>/<name>"
            )
        return cls(owner=match["owner"], name=match["name"])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name
