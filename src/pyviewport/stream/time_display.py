from typing import NamedTuple, Optional, Tuple

from loguru import logger
from matplotlib.ticker import FuncFormatter

from pyviewport.axis.intervals import TimeInterval

# Time unit boundaries (hysteresis)
PICOSECOND_BOUNDARY = 0.8e-9
NANOSECOND_BOUNDARY = 0.8e-6
MICROSECOND_BOUNDARY = 0.8e-3
MILLISECOND_BOUNDARY = 0.8

# Offset thresholds
OFFSET_SPAN_MULTIPLIER = 10
OFFSET_TIME_THRESHOLD = 1e-3  # 1ms


class TimeAxisParams(NamedTuple):
    unit: str
    scale: float
    offset: Optional[float]
    offset_unit: Optional[str]


def time_unit_for_span(span: float) -> Tuple[str, float]:
    """
    Pick the display unit and scale factor for a time span in seconds.

    Parameters
    ----------
    span : float
        Visible time span in seconds.

    Returns
    -------
    Tuple[str, float]
        Unit string ("ps", "ns", "us", "ms" or "s") and the factor converting
        seconds to that unit.
    """
    if span < PICOSECOND_BOUNDARY:
        return "ps", 1e12
    elif span < NANOSECOND_BOUNDARY:
        return "ns", 1e9
    elif span < MICROSECOND_BOUNDARY:
        return "us", 1e6
    elif span < MILLISECOND_BOUNDARY:
        return "ms", 1e3
    else:
        return "s", 1.0


def time_axis_params(interval: TimeInterval) -> TimeAxisParams:
    """
    Display parameters for a time window given in float seconds.

    An offset is used when the window starts far from zero compared to its
    length and is shorter than a millisecond, so tick labels stay readable.
    """
    span = float(interval.end - interval.start)
    unit, scale = time_unit_for_span(span)

    start = float(interval.start)
    use_offset = abs(start) > OFFSET_SPAN_MULTIPLIER * span and span < OFFSET_TIME_THRESHOLD
    if not use_offset:
        return TimeAxisParams(unit, scale, None, None)

    if abs(start) >= 1.0:
        offset_unit = "s"
    elif abs(start) >= 1e-3:
        offset_unit = "ms"
    elif abs(start) >= 1e-6:
        offset_unit = "us"
    else:
        offset_unit = "ns"
    return TimeAxisParams(unit, scale, start, offset_unit)


def create_time_formatter(params: TimeAxisParams) -> FuncFormatter:
    """
    Create a FuncFormatter for time tick labels given in raw seconds.

    Ticks are shifted by the offset (if any), scaled to the display unit and
    printed with a precision matching that unit.
    """
    offset = params.offset if params.offset is not None else 0.0

    def formatter(t, pos):
        value = (t - offset) * params.scale
        if params.scale >= 1e6:  # microseconds or smaller
            return f"{value:.0f}"
        elif params.scale >= 1e3:
            return f"{value:.1f}"
        else:
            return f"{value:.3f}"

    return FuncFormatter(formatter)


def axis_label(params: TimeAxisParams) -> str:
    if params.offset is None:
        return f"Time ({params.unit})"
    offset_scale = {"s": 1.0, "ms": 1e3, "us": 1e6, "ns": 1e9}[params.offset_unit]
    return f"Time ({params.unit}) + {params.offset * offset_scale:.3f} {params.offset_unit}"


class TimeAxisDisplay:
    """
    Tracks the time axis display parameters across updates.

    Only reports a change when the unit or offset actually moves, so a
    renderer can skip re-creating tick formatters on every frame.
    """

    def __init__(self):
        self.params: Optional[TimeAxisParams] = None

    def update(self, interval: TimeInterval) -> bool:
        """
        Recompute parameters for a new time window.

        Returns
        -------
        bool
            True if the display parameters changed, False otherwise.
        """
        params = time_axis_params(interval)
        if params == self.params:
            return False
        logger.info(
            f"Time axis params changed: unit={params.unit}, scale={params.scale:.1e}, "
            f"offset={params.offset}, offset_unit={params.offset_unit}"
        )
        self.params = params
        return True

    def formatter(self) -> Optional[FuncFormatter]:
        if self.params is None:
            return None
        return create_time_formatter(self.params)

    def reset(self) -> None:
        self.params = None
