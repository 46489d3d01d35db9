"""Per-row memory shared between columns of the same row."""

from datetime import date

NULL_MARKER = "NULL"

# Keys denoting the start of something (contract signed, company established)
START_LIKE_KEYS = ("signed", "created", "established", "start", "launched")


def _normalize_key(key: str) -> str:
    return key.strip().lower()


class RowContext:
    """
    Values generated so far for one row.

    A fresh context is created for every row and discarded afterwards, so
    nothing written here is visible to other rows. NULL and empty values are
    never stored.

    Example:
        >>> ctx = RowContext()
        >>> ctx.set("first_name", "Ada")
        >>> ctx.get("FIRST_NAME")
        'Ada'
    """

    def __init__(self):
        self._values: dict[str, str] = {}
        self._dates: dict[str, date] = {}

    def set(self, key: str, value: object) -> None:
        """Store a value under a normalized key (NULL and empty are dropped)."""
        if value is None:
            return
        text = str(value)
        if not text or text == NULL_MARKER:
            return
        self._values[_normalize_key(key)] = text

    def get(self, key: str) -> str | None:
        """Get the last value written under a key."""
        return self._values.get(_normalize_key(key))

    def set_date(self, key: str, value: date | None) -> None:
        """Store a parsed calendar date under a normalized key."""
        if value is None:
            return
        self._dates[_normalize_key(key)] = value

    def get_date(self, key: str) -> date | None:
        """Get a parsed date stored under a key."""
        return self._dates.get(_normalize_key(key))

    def get_most_recent_start_date(self) -> date | None:
        """
        Get a date whose key denotes a start-like concept.

        Only one start-like date is expected per row; if several exist, any
        of them may be returned.
        """
        for key, value in self._dates.items():
            if any(word in key for word in START_LIKE_KEYS):
                return value
        return None

    def __contains__(self, key: str) -> bool:
        return _normalize_key(key) in self._values

    def __len__(self) -> int:
        return len(self._values)
