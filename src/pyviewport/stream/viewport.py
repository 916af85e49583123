from typing import Optional

from loguru import logger

from pyviewport.axis.axis_range import AxisRangeStrategy, integrated
from pyviewport.axis.intervals import Range, TimeInterval
from pyviewport.axis.temporal import replace_time_window


class ViewportController:
    """
    Decides the value range and time window a renderer shows on each update.

    Owns one axis range instance for the value axis and the last time window
    for the time axis. Both are recomputed on every call to :meth:`on_update`
    and read by the renderer in between. A controller serves a single
    viewport and must not be updated from several threads.
    """

    def __init__(self, axis_range: Optional[AxisRangeStrategy] = None):
        """
        Initialise the controller.

        Parameters
        ----------
        axis_range : Optional[AxisRangeStrategy], default=None
            Policy for the value axis. If None, ``integrated()`` is used.
        """
        self._strategy = axis_range if axis_range is not None else integrated()
        self._instance = self._strategy.create_instance()

        self._plot_range: Optional[Range] = None
        self._plot_time_interval: Optional[TimeInterval] = None
        self._update_count = 0

    @property
    def axis_range_strategy(self) -> AxisRangeStrategy:
        return self._strategy

    @property
    def plot_range(self) -> Optional[Range]:
        """Value axis range decided by the last update, None before the first."""
        return self._plot_range

    @property
    def plot_time_interval(self) -> Optional[TimeInterval]:
        """Time window decided by the last update, None before the first."""
        return self._plot_time_interval

    @property
    def update_count(self) -> int:
        return self._update_count

    def on_update(self, data_range: Range, time_interval: TimeInterval) -> None:
        """
        Recompute both axes for a new frame.

        Parameters
        ----------
        data_range : Range
            Extent of the data available for this frame.
        time_interval : TimeInterval
            Time window requested for this frame.
        """
        previous_range = self._plot_range
        self._plot_range = self._instance.axis_range(data_range, previous_range)
        self._plot_time_interval = replace_time_window(
            self._plot_time_interval, time_interval
        )
        self._update_count += 1

        if self._plot_range != previous_range:
            logger.debug(
                f"Value axis ({self._strategy}) changed from {previous_range} to {self._plot_range}"
            )

    def reset(self) -> None:
        """Return to the state before the first update."""
        self._instance.reset()
        self._plot_range = None
        self._plot_time_interval = None
        self._update_count = 0

    def __repr__(self) -> str:
        return (
            f"ViewportController(axis_range={self._strategy}, "
            f"plot_range={self._plot_range}, updates={self._update_count})"
        )
