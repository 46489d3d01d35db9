"""Primary keys emitted per table, used to satisfy foreign keys."""

import random
from typing import Any


class ReferencePool:
    """
    Ordered primary-key values emitted so far, per table.

    Entries are created lazily the first time a key is added for a table and
    only ever grow during a generation run.
    """

    def __init__(self):
        self._keys: dict[str, list[Any]] = {}

    def add(self, table: str, value: Any) -> None:
        """Append a primary-key value for a table (None is ignored)."""
        if value is None:
            return
        self._keys.setdefault(table, []).append(value)

    def get(self, table: str) -> list[Any]:
        """Copy of the keys recorded for a table (empty if unknown)."""
        return list(self._keys.get(table, []))

    def choice(self, table: str, rng: random.Random) -> Any | None:
        """
        Pick one recorded key uniformly at random.

        Returns:
            A key, or None if the table is unknown or has no keys yet
        """
        keys = self._keys.get(table)
        if not keys:
            return None
        return rng.choice(keys)

    def size(self, table: str) -> int:
        """Number of keys recorded for a table."""
        return len(self._keys.get(table, []))

    def __contains__(self, table: str) -> bool:
        return table in self._keys

    def tables(self) -> list[str]:
        """Tables with at least one recorded key, in first-seen order."""
        return list(self._keys)
