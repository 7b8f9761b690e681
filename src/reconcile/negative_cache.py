"""Run-scoped memo of editor groups with no matching gallery."""

from __future__ import annotations

from typing import Iterator


class NegativeCache:
    """Grow-only set of group names whose gallery lookup failed this run.

    Create one instance per traversal run. The cache is not synchronized;
    share it across threads only behind a lock.
    """

    def __init__(self) -> None:
        self._groups: set[str] = set()

    def __contains__(self, group_name: object) -> bool:
        return group_name in self._groups

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._groups))

    def __len__(self) -> int:
        return len(self._groups)

    def add(self, group_name: str) -> None:
        """Record a group proven to have no gallery."""
        self._groups.add(group_name)
