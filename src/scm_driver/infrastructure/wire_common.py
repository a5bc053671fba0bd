"""Helpers shared by the per-backend wire schemas."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from pydantic import Field

NonEmptyStr = Annotated[str, Field(min_length=1)]


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as UTC RFC3339 with second precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def optional_str(value: str | None) -> str | None:
    """Map empty backend strings to ``None``."""
    return value or None
