"""Unit tests for the run-scoped negative cache."""

from __future__ import annotations

from reconcile.negative_cache import NegativeCache


def test_negative_cache_membership_grows() -> None:
    """Added groups are members; iteration is sorted and duplicates collapse."""
    cache = NegativeCache()
    cache.add("Parks")
    cache.add("Digital Services")
    cache.add("Parks")

    assert list(cache) == ["Digital Services", "Parks"] and len(cache) == 2 and "Parks" in cache


def test_new_cache_per_run_starts_empty() -> None:
    """Separate runs never share cached misses."""
    first = NegativeCache()
    first.add("Parks")

    second = NegativeCache()

    assert "Parks" not in second and len(second) == 0
