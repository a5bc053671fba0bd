"""Tests for domain entities and value objects."""

from __future__ import annotations

import dataclasses

import pytest

from scm_driver.domain.entities import PageOptions, Reference, Tree, TreeEntry
from scm_driver.domain.exceptions import ErrorKind, InvalidRepoNameError
from scm_driver.domain.value_objects import RepoName


class TestPageOptions:
    def test_defaults_walk_every_page(self) -> None:
        opts = PageOptions()
        assert opts.page is None and opts.size is None and opts.cursor is None
        assert not opts.is_explicit

    def test_page_or_cursor_is_explicit(self) -> None:
        assert PageOptions(page=2).is_explicit
        assert PageOptions(cursor="2").is_explicit
        assert not PageOptions(size=10).is_explicit

    @pytest.mark.parametrize("kwargs", [{"page": 0}, {"size": 0}, {"page": -1}])
    def test_rejects_non_positive_values(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ValueError):
            PageOptions(**kwargs)


class TestImmutability:
    def test_reference_is_frozen(self) -> None:
        ref = Reference(name="main", path="refs/heads/main", sha="abc")
        with pytest.raises(dataclasses.FrozenInstanceError):
            ref.sha = "def"  # type: ignore[misc]

    def test_tree_entries_are_a_tuple(self) -> None:
        entry = TreeEntry(path="a", mode="100644", type="blob", sha="1", url="u", size=3)
        tree = Tree(sha="t", url="u", entries=(entry,), truncated=False)
        assert isinstance(tree.entries, tuple)
        assert tree == Tree(sha="t", url="u", entries=(entry,), truncated=False)


class TestRepoName:
    def test_parses_owner_and_name(self) -> None:
        name = RepoName.parse("  octo/hello-world.py ")
        assert name.owner == "octo"
        assert name.name == "hello-world.py"
        assert str(name) == "octo/hello-world.py"

    def test_passes_through_existing_instance(self) -> None:
        name = RepoName(owner="a", name="b")
        assert RepoName.parse(name) is name

    @pytest.mark.parametrize("raw", ["", "octo", "octo/", "/hello", "a/b/c", "a b/c", "../x"])
    def test_rejects_malformed(self, raw: str) -> None:
        with pytest.raises(InvalidRepoNameError) as info:
            RepoName.parse(raw)
        assert info.value.kind is ErrorKind.INVALID_INPUT
