"""Value comparators accepted wherever a request matcher takes a literal.

A value missing from the request reaches comparators as ``None`` and never
matches.
"""

from __future__ import annotations

import re
import typing as t


class Comparator(t.Protocol):
    """Callable deciding whether one request value is acceptable."""

    def __call__(self, value: str | None) -> bool:
        """Return ``True`` if *value* is acceptable."""
        ...


class _ValueComparator:
    """Shared state and ``repr`` for comparators built from one argument."""

    def __init__(self, expected: str) -> None:
        self.expected = expected

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.expected!r})"


class Equals(_ValueComparator):
    """Accept exactly ``expected``."""

    def __call__(self, value: str | None) -> bool:
        return value == self.expected


class Contains(_ValueComparator):
    """Accept values that include ``expected``, e.g. a JSON body fragment."""

    def __call__(self, value: str | None) -> bool:
        return value is not None and self.expected in value


class Regex(_ValueComparator):
    """Accept values in which ``expected`` matches anywhere.

    Anchor the pattern to pin a whole URL, e.g. ``Regex(r"^/users/\\d+$")``.
    """

    def __init__(self, expected: str | re.Pattern[str]) -> None:
        pattern = re.compile(expected)
        super().__init__(pattern.pattern)
        self._pattern = pattern

    def __call__(self, value: str | None) -> bool:
        return value is not None and self._pattern.search(value) is not None


def as_comparator(expected: str | Comparator) -> Comparator:
    """Wrap plain strings in :class:`Equals`, passing comparators through."""
    if callable(expected):
        return expected
    return Equals(expected)


__all__ = ["Comparator", "Contains", "Equals", "Regex", "as_comparator"]
