"""
Streaming components for PyViewport.

This package contains the rolling sample buffer and the per-viewport state
that turns a stream of samples into the ranges a renderer displays.
"""

from pyviewport.stream.datasets import ArrayDataset, uniform_dataset
from pyviewport.stream.live import LiveSeries
from pyviewport.stream.sample_buffer import (
    CircularSampleBuffer,
    SampleBufferUpdate,
    SampleWindow,
)
from pyviewport.stream.time_display import TimeAxisDisplay, time_axis_params
from pyviewport.stream.viewport import ViewportController

__all__ = [
    "CircularSampleBuffer",
    "SampleBufferUpdate",
    "SampleWindow",
    "ArrayDataset",
    "uniform_dataset",
    "ViewportController",
    "LiveSeries",
    "TimeAxisDisplay",
    "time_axis_params",
]
