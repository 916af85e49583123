from typing import Iterable, Optional

from loguru import logger

from pyviewport.axis.axis_range import AxisRangeStrategy
from pyviewport.axis.intervals import Range, TimeInterval
from pyviewport.stream.sample_buffer import CircularSampleBuffer, SampleWindow
from pyviewport.stream.viewport import ViewportController


class LiveSeries:
    """
    A streamed series together with the viewport that displays it.

    Each worker drawing a live plot owns one LiveSeries; nothing in it is
    shared with other workers, except the (immutable) axis range strategy.
    """

    def __init__(self, capacity: int, axis_range: Optional[AxisRangeStrategy] = None):
        """
        Initialise the series.

        Parameters
        ----------
        capacity : int
            Number of most recent samples kept for display.
        axis_range : Optional[AxisRangeStrategy], default=None
            Value axis policy. If None, ``integrated()`` is used.
        """
        self.buffer = CircularSampleBuffer(capacity)
        self.viewport = ViewportController(axis_range)

    def push(
        self,
        samples: Iterable[float],
        time_interval: TimeInterval,
        clear: bool = False,
    ) -> None:
        """
        Ingest new samples and recompute the viewport.

        Parameters
        ----------
        samples : Iterable[float]
            New samples, oldest first.
        time_interval : TimeInterval
            Time window to display for this frame.
        clear : bool, default=False
            If True, drop previously retained samples first.
        """
        self.buffer.commit(samples, clear=clear)
        data_range = self.buffer.data_range()
        if data_range is None:
            logger.debug("No finite samples retained, viewport left unchanged")
            return
        self.viewport.on_update(data_range, time_interval)

    def values(self) -> SampleWindow:
        return self.buffer.values()

    @property
    def plot_range(self) -> Optional[Range]:
        return self.viewport.plot_range

    @property
    def plot_time_interval(self) -> Optional[TimeInterval]:
        return self.viewport.plot_time_interval
