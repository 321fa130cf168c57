"""Deterministic identifier generation for matches and schedule entries."""

from collections import defaultdict
from typing import Protocol


class IdSource(Protocol):
    def next_id(self, prefix: str) -> str: ...


class SequentialIdSource:
    """Hands out ``<prefix>_<n>`` ids with one counter per prefix.

    A fresh instance per scheduling run makes two runs over the same event
    produce identical ids.
    """

    def __init__(self) -> None:
        self._counters: defaultdict[str, int] = defaultdict(int)

    def next_id(self, prefix: str) -> str:
        self._counters[prefix] += 1
        return f"{prefix}_{self._counters[prefix]}"
