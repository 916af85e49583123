from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger

from pyviewport.axis.intervals import Range, overlap_ratio, union

# Minimum overlap between accumulated and new data before the integrated
# policy discards its history
DEFAULT_INTEGRATED_THRESHOLD = 0.8


class AxisRangeKind(Enum):
    """The four axis range policies."""

    ABSOLUTE = "absolute"
    DATA = "data"
    INTEGRATED = "integrated"
    DISPLAY = "display"


@dataclass(frozen=True)
class AxisRangeStrategy:
    """
    Stateless description of how an axis chooses the range it displays.

    A strategy holds no per-consumer state and can be shared freely, including
    across threads. Each consumer obtains its own mutable state through
    :meth:`create_instance`.

    Use the module factories (:func:`absolute`, :func:`data`,
    :func:`display`, :func:`integrated`) rather than constructing directly.

    Parameters
    ----------
    kind : AxisRangeKind
        Which policy this strategy applies.
    absolute_range : Optional[Range], default=None
        Fixed range returned by the absolute policy. Required for ABSOLUTE.
    threshold : Optional[float], default=None
        Minimum overlap ratio for the integrated policy. Required for INTEGRATED.
    """

    kind: AxisRangeKind
    absolute_range: Optional[Range] = None
    threshold: Optional[float] = None

    def __post_init__(self) -> None:
        if self.kind is AxisRangeKind.ABSOLUTE and self.absolute_range is None:
            raise ValueError("Absolute axis range requires an absolute_range")
        if self.kind is AxisRangeKind.INTEGRATED:
            if self.threshold is None or not 0.0 <= self.threshold <= 1.0:
                raise ValueError(
                    f"Integrated threshold must be within [0, 1]. Got {self.threshold}"
                )

    def create_instance(self) -> AxisRangeInstance:
        """Create a fresh, independently owned instance of this policy."""
        return AxisRangeInstance(self)

    def __str__(self) -> str:
        if self.kind is AxisRangeKind.ABSOLUTE:
            return f"absolute({self.absolute_range.minimum}, {self.absolute_range.maximum})"
        if self.kind is AxisRangeKind.INTEGRATED:
            return f"integrated({self.threshold:.0%})"
        return self.kind.value


class AxisRangeInstance:
    """
    Per-consumer state of an axis range policy.

    Only the integrated policy carries state: the range it accumulated over
    previous calls. An instance must be updated by a single consumer only.
    """

    def __init__(self, strategy: AxisRangeStrategy):
        self.strategy = strategy
        self._aggregated_range: Optional[Range] = None

    @property
    def aggregated_range(self) -> Optional[Range]:
        """Range accumulated by the integrated policy, None before the first call."""
        return self._aggregated_range

    def axis_range(
        self, data_range: Range, display_range: Optional[Range] = None
    ) -> Range:
        """
        Decide the axis range for the current update.

        Parameters
        ----------
        data_range : Range
            Extent of the data currently available.
        display_range : Optional[Range], default=None
            Range currently displayed or requested by the caller.

        Returns
        -------
        Range
            The range the axis should show.
        """
        kind = self.strategy.kind
        if kind is AxisRangeKind.ABSOLUTE:
            return self.strategy.absolute_range
        elif kind is AxisRangeKind.DATA:
            return data_range
        elif kind is AxisRangeKind.DISPLAY:
            # A missing or zero-width display range carries no information
            if display_range is None or display_range.is_degenerate:
                return data_range
            return display_range
        else:
            return self._integrate(data_range)

    def _integrate(self, data_range: Range) -> Range:
        # On the first call there is no history and the union is data_range itself
        candidate = union(data_range, self._aggregated_range)
        ratio = overlap_ratio(candidate, data_range)
        if ratio < self.strategy.threshold:
            logger.debug(
                f"Integrated range {candidate} diverged from data {data_range} "
                f"(overlap={ratio:.3f} < {self.strategy.threshold}), resetting"
            )
            candidate = data_range
        self._aggregated_range = candidate
        return candidate

    def reset(self) -> None:
        """Forget any accumulated range."""
        self._aggregated_range = None

    def __repr__(self) -> str:
        return f"AxisRangeInstance({self.strategy})"


def absolute(minimum: float, maximum: float) -> AxisRangeStrategy:
    """
    Axis fixed to [minimum, maximum] regardless of data.

    Raises
    ------
    InvalidRangeError
        If minimum > maximum.
    """
    return AxisRangeStrategy(AxisRangeKind.ABSOLUTE, absolute_range=Range(minimum, maximum))


def data() -> AxisRangeStrategy:
    """Axis that always follows the current data extent."""
    return AxisRangeStrategy(AxisRangeKind.DATA)


# Older name for the data-driven policy
relative = data


def display() -> AxisRangeStrategy:
    """Axis that keeps the displayed range, falling back to data when there is none."""
    return AxisRangeStrategy(AxisRangeKind.DISPLAY)


def integrated(threshold: float = DEFAULT_INTEGRATED_THRESHOLD) -> AxisRangeStrategy:
    """
    Axis that grows to cover past data until the new data diverges.

    Parameters
    ----------
    threshold : float, default=0.8
        Minimum overlap ratio between the accumulated range and the new data
        range. Below it, the history is dropped and the axis snaps to the data.
    """
    return AxisRangeStrategy(AxisRangeKind.INTEGRATED, threshold=float(threshold))
