"""Call-count contracts describing how often a request may be made."""

from __future__ import annotations

import dataclasses as dc

from .errors import ConfigurationError, ExhaustionError


def _validate_count(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{name} must be an integer, got {type(value).__name__}"
        raise ConfigurationError(msg)
    if value < 0:
        msg = f"{name} must be >= 0, got {value}"
        raise ConfigurationError(msg)
    return value


@dc.dataclass(slots=True, eq=False)
class CallCount:
    """Interval ``[min_required, max_allowed]`` of permitted calls.

    ``max_allowed`` of ``None`` stands for an unbounded upper limit. Use the
    named constructors rather than instantiating directly::

        CallCount.times(2)
        CallCount.at_least(1) & CallCount.at_most(3)

    Combining contracts never checks that the resulting interval is
    non-empty, so ``at_least(5) & at_most(2)`` yields a contract that can
    never be satisfied.
    """

    min_required: int = 0
    max_allowed: int | None = None
    calls: int = 0

    # ------------------------------------------------------------------
    # Named constructors
    # ------------------------------------------------------------------
    @classmethod
    def times(cls, count: int) -> CallCount:
        """Require exactly ``count`` calls."""
        _validate_count(count, "times")
        return cls(min_required=count, max_allowed=count)

    @classmethod
    def at_least(cls, count: int) -> CallCount:
        """Require at least ``count`` calls, allowing any number beyond."""
        return cls(min_required=_validate_count(count, "at_least"))

    @classmethod
    def at_most(cls, count: int) -> CallCount:
        """Allow up to ``count`` calls without requiring any."""
        return cls(max_allowed=_validate_count(count, "at_most"))

    @classmethod
    def at_least_once(cls) -> CallCount:
        """Require one or more calls."""
        return cls.at_least(1)

    @classmethod
    def never(cls) -> CallCount:
        """Forbid the call entirely."""
        return cls.at_most(0)

    @classmethod
    def any_number_of_times(cls) -> CallCount:
        """Allow the call any number of times, including zero."""
        return cls.at_least(0)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def more_calls_allowed(self) -> bool:
        """Return ``True`` while another call would stay within bounds."""
        return self.max_allowed is None or self.calls < self.max_allowed

    @property
    def more_calls_required(self) -> bool:
        """Return ``True`` while the minimum has not been reached."""
        return self.calls < self.min_required

    @property
    def extra_calls_allowed(self) -> bool:
        """Return ``True`` when the contract permits more than its minimum."""
        return self.max_allowed is None or self.max_allowed > self.min_required

    @property
    def required_calls_left(self) -> int:
        """Return how many calls are still needed to meet the minimum."""
        return max(0, self.min_required - self.calls)

    def count_new_call(self) -> None:
        """Record one call, failing if the contract allows no more."""
        if not self.more_calls_allowed:
            msg = f"No more calls expected: {self!r}"
            raise ExhaustionError(msg)
        self.calls += 1

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------
    def and_(self, other: CallCount) -> CallCount:
        """Return the intersection of this contract and *other*."""
        if self.max_allowed is None:
            max_allowed = other.max_allowed
        elif other.max_allowed is None:
            max_allowed = self.max_allowed
        else:
            max_allowed = min(self.max_allowed, other.max_allowed)
        return CallCount(
            min_required=max(self.min_required, other.min_required),
            max_allowed=max_allowed,
        )

    def or_(self, other: CallCount) -> CallCount:
        """Return the union of this contract and *other*."""
        if self.max_allowed is None or other.max_allowed is None:
            max_allowed = None
        else:
            max_allowed = max(self.max_allowed, other.max_allowed)
        return CallCount(
            min_required=min(self.min_required, other.min_required),
            max_allowed=max_allowed,
        )

    def __and__(self, other: object) -> CallCount:
        """Support ``a & b`` as an alias for :meth:`and_`."""
        if not isinstance(other, CallCount):
            return NotImplemented
        return self.and_(other)

    def __or__(self, other: object) -> CallCount:
        """Support ``a | b`` as an alias for :meth:`or_`."""
        if not isinstance(other, CallCount):
            return NotImplemented
        return self.or_(other)

    def bounds(self) -> tuple[int, int | None]:
        """Return ``(min_required, max_allowed)``."""
        return self.min_required, self.max_allowed

    def __repr__(self) -> str:
        """Return a stable representation used in diagnostics."""
        upper = "INF" if self.max_allowed is None else self.max_allowed
        return (
            f"CallCount(min_required={self.min_required}, "
            f"max_allowed={upper}, calls={self.calls})"
        )


__all__ = ["CallCount"]
