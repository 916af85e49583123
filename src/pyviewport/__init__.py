"""
PyViewport: axis ranges and rolling buffers for live plots

Decides, update after update, which value range and time window a real-time
plot should display, and keeps a bounded history of the streamed samples.
"""

# Import from axis subpackage
from pyviewport.axis import (
    AxisRangeInstance,
    AxisRangeStrategy,
    Range,
    TimeInterval,
    absolute,
    aggregate_time_interval,
    data,
    display,
    integrated,
    overlap_ratio,
    replace_time_window,
    union,
)
from pyviewport.errors import (
    InvalidCapacityError,
    InvalidIntervalError,
    InvalidRangeError,
    ViewportError,
)
from pyviewport.log import configure_logging

# Import from stream subpackage
from pyviewport.stream import (
    ArrayDataset,
    CircularSampleBuffer,
    LiveSeries,
    TimeAxisDisplay,
    ViewportController,
    uniform_dataset,
)

__all__ = [
    # Value types and axis policies
    "Range",
    "TimeInterval",
    "union",
    "overlap_ratio",
    "AxisRangeStrategy",
    "AxisRangeInstance",
    "absolute",
    "data",
    "display",
    "integrated",
    "aggregate_time_interval",
    "replace_time_window",
    # Streaming
    "CircularSampleBuffer",
    "ArrayDataset",
    "uniform_dataset",
    "ViewportController",
    "LiveSeries",
    "TimeAxisDisplay",
    # Errors and logging
    "ViewportError",
    "InvalidRangeError",
    "InvalidIntervalError",
    "InvalidCapacityError",
    "configure_logging",
]
