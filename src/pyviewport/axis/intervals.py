from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, TypeVar, Union

from pyviewport.errors import InvalidIntervalError, InvalidRangeError

Interval = TypeVar("Interval", "Range", "TimeInterval")


@dataclass(frozen=True)
class Range:
    """
    Closed numeric interval [minimum, maximum].

    Immutable value type; two ranges with the same bounds compare equal.

    Parameters
    ----------
    minimum : float
        Lower bound.
    maximum : float
        Upper bound.

    Raises
    ------
    InvalidRangeError
        If minimum > maximum, or either bound is NaN.
    """

    minimum: float
    maximum: float

    def __post_init__(self) -> None:
        minimum = float(self.minimum)
        maximum = float(self.maximum)
        # Written as a negated comparison so NaN bounds are rejected too
        if not minimum <= maximum:
            raise InvalidRangeError(
                f"Range minimum must not exceed maximum. Got min={minimum}, max={maximum}"
            )
        object.__setattr__(self, "minimum", minimum)
        object.__setattr__(self, "maximum", maximum)

    @property
    def lower(self) -> float:
        return self.minimum

    @property
    def upper(self) -> float:
        return self.maximum

    @property
    def length(self) -> float:
        """Width of the range; 0 for a degenerate range."""
        return self.maximum - self.minimum

    @property
    def is_degenerate(self) -> bool:
        return self.minimum == self.maximum

    def contains(self, other: Union[Range, float]) -> bool:
        """Check whether a value or another range lies entirely within this range."""
        if isinstance(other, Range):
            return self.minimum <= other.minimum and other.maximum <= self.maximum
        return self.minimum <= other <= self.maximum

    def normalize(self, value: float) -> float:
        """
        Position of `value` within the range, 0 at minimum and 1 at maximum.

        Values outside the range map outside [0, 1]. A degenerate range has no
        meaningful position and yields NaN.
        """
        if self.is_degenerate:
            return float("nan")
        return (value - self.minimum) / (self.maximum - self.minimum)

    def __str__(self) -> str:
        return f"[{self.minimum}, {self.maximum}]"

    @classmethod
    def _from_bounds(cls, lower: float, upper: float) -> Range:
        return cls(lower, upper)


@dataclass(frozen=True)
class TimeInterval:
    """
    Closed interval of timestamps [start, end].

    Timestamps can be any mutually orderable values that support subtraction,
    e.g. float seconds, ``numpy.datetime64`` or ``datetime``.

    Raises
    ------
    InvalidIntervalError
        If start > end.
    """

    start: Any
    end: Any

    def __post_init__(self) -> None:
        if not self.start <= self.end:
            raise InvalidIntervalError(
                f"TimeInterval start must not be after end. Got start={self.start}, end={self.end}"
            )

    @classmethod
    def between(cls, start: Any, end: Any) -> TimeInterval:
        return cls(start, end)

    @classmethod
    def after(cls, start: Any, duration: Any) -> TimeInterval:
        """Interval of `duration` beginning at `start`."""
        return cls(start, start + duration)

    @classmethod
    def before(cls, end: Any, duration: Any) -> TimeInterval:
        """Interval of `duration` ending at `end`."""
        return cls(end - duration, end)

    @classmethod
    def around(cls, center: Any, duration: Any) -> TimeInterval:
        """Interval of `duration` centred on `center`."""
        half = duration / 2
        return cls(center - half, center + half)

    @property
    def lower(self) -> Any:
        return self.start

    @property
    def upper(self) -> Any:
        return self.end

    @property
    def duration(self) -> Any:
        return self.end - self.start

    def contains(self, other: Union[TimeInterval, Any]) -> bool:
        if isinstance(other, TimeInterval):
            return self.start <= other.start and other.end <= self.end
        return self.start <= other <= self.end

    @classmethod
    def _from_bounds(cls, lower: Any, upper: Any) -> TimeInterval:
        return cls(lower, upper)


def union(a: Interval, b: Optional[Interval]) -> Interval:
    """
    Smallest interval containing both `a` and `b`.

    When one operand already contains the other, that operand is returned
    unchanged, so callers can detect a no-op update by identity. A missing
    `b` returns `a`.

    Parameters
    ----------
    a : Range | TimeInterval
        First interval.
    b : Range | TimeInterval | None
        Second interval, of the same type as `a`.

    Returns
    -------
    Range | TimeInterval
        The union, of the same type as `a`.
    """
    if b is None:
        return a
    if a.contains(b):
        return a
    if b.contains(a):
        return b
    return type(a)._from_bounds(min(a.lower, b.lower), max(a.upper, b.upper))


def intersection(a: Interval, b: Interval) -> Optional[Interval]:
    """Overlapping part of `a` and `b`, or None if they are disjoint."""
    lower = max(a.lower, b.lower)
    upper = min(a.upper, b.upper)
    if lower > upper:
        return None
    return type(a)._from_bounds(lower, upper)


def overlap_ratio(a: Interval, b: Interval) -> float:
    """
    Jaccard similarity of two intervals.

    Computed as ``length(intersection) / length(union)``. Returns 0.0 for
    disjoint intervals and 1.0 for equal intervals, including a single point
    or an unbounded interval. Two different intervals that are both unbounded
    have no finite ratio and yield 0.0.

    Returns
    -------
    float
        Similarity in [0, 1].
    """
    common = intersection(a, b)
    if common is None:
        return 0.0
    covered = union(a, b)
    if common == covered:
        return 1.0
    ratio = float((common.upper - common.lower) / (covered.upper - covered.lower))
    if math.isnan(ratio):
        # Both lengths infinite
        return 0.0
    return ratio
