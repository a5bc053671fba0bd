"""Tests for the shared page-number walk."""

from __future__ import annotations

import logging

import pytest

from scm_driver.domain.entities import PageOptions, Reference
from scm_driver.domain.exceptions import UnsupportedError
from scm_driver.infrastructure.pagination import collect_pages, page_number


def _refs(*names: str) -> list[Reference]:
    return [Reference(name=n, path=f"refs/heads/{n}", sha="a" * 40) for n in names]


def _pages(*pages: list[Reference], more_after_last: bool = False):  # type: ignore[no-untyped-def]
    calls: list[int] = []

    async def fetch(page: int) -> tuple[list[Reference], bool]:
        calls.append(page)
        if page > len(pages):
            return [], False
        more = page < len(pages) or more_after_last
        return pages[page - 1], more

    return fetch, calls


class TestCollectPages:
    async def test_shifted_listing_keeps_walking(self) -> None:
        fetch, calls = _pages(_refs("a"), _refs("a"), _refs("b"))
        refs = await collect_pages(fetch, operation="list_branches", repo="octo/hello")
        assert [r.name for r in refs] == ["a", "b"]
        assert calls == [1, 2, 3]

    async def test_stale_pages_end_the_walk_with_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        stale = _refs("a")
        fetch, calls = _pages(stale, stale, stale, stale, stale, more_after_last=True)
        with caplog.at_level(logging.WARNING, logger="scm_driver.infrastructure.pagination"):
            refs = await collect_pages(fetch, operation="list_tags", repo="octo/hello")

        assert [r.name for r in refs] == ["a"]
        assert calls == [1, 2, 3, 4]
        assert "may be incomplete" in caplog.text

    async def test_page_limit_bounds_the_walk(self, caplog: pytest.LogCaptureFixture) -> None:
        fetch, calls = _pages(*(_refs(f"b{i}") for i in range(10)), more_after_last=True)
        with caplog.at_level(logging.WARNING, logger="scm_driver.infrastructure.pagination"):
            refs = await collect_pages(fetch, operation="list_branches", repo="octo/hello", max_pages=4)

        assert [r.name for r in refs] == ["b0", "b1", "b2", "b3"]
        assert calls == [1, 2, 3, 4]
        assert "page limit" in caplog.text

    async def test_complete_walk_logs_no_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        fetch, _ = _pages(_refs("a", "b"), _refs("c"))
        with caplog.at_level(logging.WARNING, logger="scm_driver.infrastructure.pagination"):
            refs = await collect_pages(fetch, operation="list_branches", repo="octo/hello")
        assert [r.name for r in refs] == ["a", "b", "c"]
        assert caplog.records == []


class TestPageNumber:
    def test_walk_when_nothing_explicit(self) -> None:
        assert page_number(PageOptions(size=5), operation="list_branches") is None

    def test_page_wins_over_cursor(self) -> None:
        assert page_number(PageOptions(page=2, cursor="9"), operation="list_branches") == 2

    def test_zero_cursor_is_unsupported(self) -> None:
        with pytest.raises(UnsupportedError):
            page_number(PageOptions(cursor="0"), operation="list_branches")
