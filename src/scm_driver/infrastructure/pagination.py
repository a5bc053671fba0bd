"""Page-number pagination shared by page-numbered backends."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable

import httpx

from scm_driver.domain.entities import PageOptions, Reference
from scm_driver.domain.exceptions import UnsupportedError
from scm_driver.domain.ports.git_service import Capability

logger = logging.getLogger(__name__)

_MAX_PAGES = 1000
_MAX_STALE_PAGES = 3

PageFetcher = Callable[[int], Awaitable[tuple[list[Reference], bool]]]


def page_number(opts: PageOptions, *, operation: str) -> int | None:
    """Resolve the page a caller asked for, or None to walk every page.

    A cursor is accepted only when it is a page number; page-numbered
    backends have no opaque continuation tokens.
    """
    if not opts.is_explicit:
        return None
    if opts.page is not None:
        return opts.page
    cursor = (opts.cursor or "").strip()
    if cursor.isdigit() and int(cursor) >= 1:
        return int(cursor)
    raise UnsupportedError(
        f"Opaque cursor {opts.cursor!r} is not supported; this backend paginates by page number",
        operation=operation,
        capability=Capability.CURSOR_PAGINATION.value,
    )


def has_next_page(resp: httpx.Response, received: int, limit: int) -> bool:
    """Prefer the backend's ``Link: rel="next"``; fall back to a full-page check."""
    if "link" in resp.headers:
        return "next" in resp.links
    return received >= limit


def unique_by_name(refs: Iterable[Reference]) -> list[Reference]:
    """Drop repeated names, keeping the first occurrence and original order."""
    seen: dict[str, Reference] = {}
    for ref in refs:
        seen.setdefault(ref.name, ref)
    return list(seen.values())


async def collect_pages(
    fetch: PageFetcher,
    *,
    operation: str,
    repo: str,
    max_pages: int = _MAX_PAGES,
) -> list[Reference]:
    """Walk pages from 1 until the backend reports no more.

    A page that adds no new names is tolerated (the listing may have shifted
    under the walk), but ``_MAX_STALE_PAGES`` of them in a row end it, so a
    backend that ignores the page parameter cannot loop forever.
    ``max_pages`` bounds the walk outright.
    """
    seen: dict[str, Reference] = {}
    page = 0
    stale = 0
    more = True
    while more and page < max_pages:
        page += 1
        refs, more = await fetch(page)
        added = 0
        for ref in refs:
            if ref.name not in seen:
                seen[ref.name] = ref
                added += 1
        stale = stale + 1 if added == 0 else 0
        if more and stale >= _MAX_STALE_PAGES:
            logger.warning(
                "%s on %s: stopping after %d pages without new refs; result may be incomplete",
                operation,
                repo,
                stale,
            )
            break

    if more and page >= max_pages:
        logger.warning(
            "%s on %s: stopped at the %d page limit; result may be incomplete",
            operation,
            repo,
            max_pages,
        )

    logger.debug("%s on %s: %d refs across %d page(s)", operation, repo, len(seen), page)
    return list(seen.values())
