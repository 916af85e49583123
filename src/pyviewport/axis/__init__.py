"""
Axis range components for PyViewport.

This package contains the interval value types and the policies that decide
which range a plot axis displays on each update.
"""

from pyviewport.axis.axis_range import (
    DEFAULT_INTEGRATED_THRESHOLD,
    AxisRangeInstance,
    AxisRangeKind,
    AxisRangeStrategy,
    absolute,
    data,
    display,
    integrated,
    relative,
)
from pyviewport.axis.intervals import (
    Range,
    TimeInterval,
    intersection,
    overlap_ratio,
    union,
)
from pyviewport.axis.temporal import aggregate_time_interval, replace_time_window

__all__ = [
    "Range",
    "TimeInterval",
    "union",
    "intersection",
    "overlap_ratio",
    "AxisRangeKind",
    "AxisRangeStrategy",
    "AxisRangeInstance",
    "DEFAULT_INTEGRATED_THRESHOLD",
    "absolute",
    "data",
    "display",
    "integrated",
    "relative",
    "aggregate_time_interval",
    "replace_time_window",
]
