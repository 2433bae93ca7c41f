"""Tests for the in-memory variable cache."""

from __future__ import annotations

from typedenv.services.variable_cache import InMemoryVariableCache


def test_variable_cache__starts_empty() -> None:
    """A new cache holds no keys."""
    cache = InMemoryVariableCache()

    assert len(cache) == 0
    assert cache.get("KEY") is None
    assert not cache.contains("KEY")
    assert not cache.is_unset("KEY")


def test_variable_cache__set_and_get() -> None:
    """Store and return resolved strings, empty strings included."""
    cache = InMemoryVariableCache()
    cache.set("A", "1")
    cache.set("B", "")

    assert cache.get("A") == "1"
    assert cache.get("B") == ""
    assert cache.contains("B")
    assert cache.snapshot() == {"A": "1", "B": ""}


def test_variable_cache__mark_unset() -> None:
    """An unset marker counts as resolved but holds no string."""
    cache = InMemoryVariableCache()
    cache.mark_unset("GONE")

    assert cache.contains("GONE")
    assert cache.is_unset("GONE")
    assert cache.get("GONE") is None
    assert "GONE" not in cache.snapshot()
    assert len(cache) == 1


def test_variable_cache__set_replaces_unset_marker() -> None:
    """Setting a value removes an earlier unset marker, and vice versa."""
    cache = InMemoryVariableCache()
    cache.mark_unset("KEY")
    cache.set("KEY", "value")

    assert not cache.is_unset("KEY")
    assert cache.get("KEY") == "value"

    cache.mark_unset("KEY")

    assert cache.get("KEY") is None
    assert len(cache) == 1


def test_variable_cache__clear_forgets_everything() -> None:
    """Clearing drops values and unset markers."""
    cache = InMemoryVariableCache()
    cache.set("A", "1")
    cache.mark_unset("B")

    cache.clear()

    assert len(cache) == 0
    assert not cache.contains("A")
    assert not cache.contains("B")


def test_variable_cache__snapshot_is_a_copy() -> None:
    """Mutating a snapshot does not affect the cache."""
    cache = InMemoryVariableCache()
    cache.set("A", "1")

    snapshot = cache.snapshot()
    snapshot["A"] = "changed"

    assert cache.get("A") == "1"
