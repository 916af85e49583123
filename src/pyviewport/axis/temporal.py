from typing import Optional

from pyviewport.axis.intervals import TimeInterval, union


def aggregate_time_interval(
    a: Optional[TimeInterval], b: Optional[TimeInterval]
) -> Optional[TimeInterval]:
    """
    Accumulate two time intervals into the smallest interval covering both.

    If one interval fully contains the other, the containing object itself is
    returned. A missing operand yields the other one.

    Parameters
    ----------
    a : Optional[TimeInterval]
        First interval.
    b : Optional[TimeInterval]
        Second interval.

    Returns
    -------
    Optional[TimeInterval]
        Union of the two, or None if both are missing.
    """
    if a is None:
        return b
    return union(a, b)


def replace_time_window(
    previous: Optional[TimeInterval], incoming: TimeInterval
) -> TimeInterval:
    """
    Replace the displayed time window with the newly requested one.

    The time axis of a live view follows the latest requested window and does
    not accumulate history, so `previous` is ignored.
    """
    return incoming
