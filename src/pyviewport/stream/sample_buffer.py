import operator
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np
from loguru import logger
from numba import njit

from pyviewport.axis.intervals import Range
from pyviewport.errors import InvalidCapacityError


@njit
def _ring_extrema_numba(data: np.ndarray, start: int, count: int) -> Tuple[float, float]:
    """
    Numba-optimized min/max over the retained part of a ring.

    Parameters
    ----------
    data : np.ndarray
        Ring storage (float64).
    start : int
        Index of the oldest retained sample.
    count : int
        Number of retained samples.

    Returns
    -------
    Tuple[float, float]
        Minimum and maximum of the retained finite samples. NaN and infinite
        samples are skipped; (inf, -inf) is returned when none is finite.
    """
    capacity = len(data)
    min_val = np.inf
    max_val = -np.inf

    for i in range(count):
        val = data[(start + i) % capacity]
        if not np.isfinite(val):
            continue
        if val < min_val:
            min_val = val
        if val > max_val:
            max_val = val

    return min_val, max_val


def _as_sample_array(samples: Iterable[float]) -> np.ndarray:
    """Convert an array or any iterable of numbers to a flat float64 array."""
    if isinstance(samples, np.ndarray):
        return np.ascontiguousarray(samples, dtype=np.float64).ravel()
    return np.fromiter(samples, dtype=np.float64)


class SampleWindow:
    """
    Read-only view of retained samples, oldest first.

    Iterating restarts from the oldest sample every time. The underlying
    storage is a snapshot that later commits never modify.
    """

    def __init__(self, data: np.ndarray, start: int, count: int):
        self._data = data
        self._start = start
        self._count = count

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[float]:
        capacity = len(self._data)
        for i in range(self._count):
            yield float(self._data[(self._start + i) % capacity])

    def to_array(self) -> np.ndarray:
        """Return the samples as a new contiguous array in insertion order."""
        end = self._start + self._count
        if end <= len(self._data):
            return self._data[self._start : end].copy()
        return np.concatenate(
            (self._data[self._start :], self._data[: end - len(self._data)])
        )

    def __repr__(self) -> str:
        return f"SampleWindow(n={self._count})"


class _BufferState(NamedTuple):
    data: np.ndarray
    start: int
    count: int
    min_value: float
    max_value: float


class CircularSampleBuffer:
    """
    Fixed-capacity ring buffer of scalar samples.

    Keeps the most recent `capacity` samples, evicting the oldest one for each
    sample added while full, and tracks the extrema of what is retained.

    Every commit builds the new state aside and publishes it with a single
    assignment, so readers never observe a partially applied batch. The buffer
    is meant to be written by one thread only.
    """

    def __init__(self, capacity: int):
        """
        Initialise an empty buffer.

        Parameters
        ----------
        capacity : int
            Maximum number of retained samples.

        Raises
        ------
        InvalidCapacityError
            If capacity is not a positive integer.
        """
        try:
            n_slots = operator.index(capacity)
        except TypeError:
            raise InvalidCapacityError(
                f"Sample buffer capacity must be an integer. Got {capacity!r}"
            ) from None
        if n_slots <= 0:
            raise InvalidCapacityError(
                f"Sample buffer capacity must be positive. Got {capacity}"
            )
        self._capacity = n_slots
        self._state = _BufferState(
            np.zeros(self._capacity, dtype=np.float64), 0, 0, np.nan, np.nan
        )

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._state.count

    @property
    def is_full(self) -> bool:
        return self._state.count == self._capacity

    def values(self) -> SampleWindow:
        """Retained samples in insertion order."""
        state = self._state
        return SampleWindow(state.data, state.start, state.count)

    def min_value(self) -> float:
        """Smallest retained sample, NaN when empty."""
        return self._state.min_value

    def max_value(self) -> float:
        """Largest retained sample, NaN when empty."""
        return self._state.max_value

    def data_range(self) -> Optional[Range]:
        """Extent of the retained samples, or None if there is nothing to span."""
        state = self._state
        if np.isnan(state.min_value) or np.isnan(state.max_value):
            return None
        return Range(state.min_value, state.max_value)

    def update(self) -> "SampleBufferUpdate":
        """Start collecting a batch to be committed in one step."""
        return SampleBufferUpdate(self)

    def commit(self, samples: Iterable[float], clear: bool = False) -> None:
        """
        Append a batch of samples, optionally clearing the buffer first.

        Parameters
        ----------
        samples : Iterable[float]
            New samples, oldest first.
        clear : bool, default=False
            If True, discard everything retained before appending.
        """
        batch = _as_sample_array(samples)
        if batch.size == 0 and not clear:
            return

        if not np.all(np.isfinite(batch)):
            logger.warning(
                f"Committing {np.count_nonzero(~np.isfinite(batch))} non-finite samples; "
                "they are retained but ignored by the extrema"
            )

        state = self._state
        capacity = self._capacity
        start, count = (0, 0) if clear else (state.start, state.count)
        n_new = batch.size

        if n_new >= capacity:
            # The batch alone fills the ring; only its tail survives
            data = batch[-capacity:].copy()
            evicted = count + n_new - capacity
            start, count = 0, capacity
        else:
            data = state.data.copy()
            end = (start + count) % capacity
            first = min(n_new, capacity - end)
            data[end : end + first] = batch[:first]
            data[: n_new - first] = batch[first:]
            evicted = max(0, count + n_new - capacity)
            start = (start + evicted) % capacity
            count = min(capacity, count + n_new)

        if evicted:
            logger.debug(f"Evicted {evicted} samples (capacity={capacity})")

        min_value, max_value = self._extrema(data, start, count)
        self._state = _BufferState(data, start, count, min_value, max_value)

    @staticmethod
    def _extrema(data: np.ndarray, start: int, count: int) -> Tuple[float, float]:
        if count == 0:
            return np.nan, np.nan
        min_value, max_value = _ring_extrema_numba(data, start, count)
        if min_value > max_value:
            # Only non-finite samples retained
            return np.nan, np.nan
        return float(min_value), float(max_value)

    def __repr__(self) -> str:
        return f"CircularSampleBuffer(capacity={self._capacity}, n={len(self)})"


class SampleBufferUpdate:
    """
    Collects data for a :class:`CircularSampleBuffer` and applies it at once.

    Examples
    --------
    >>> buffer.update().clear_data().add_data([1.0, 2.0]).add_data([3.0]).commit()
    """

    def __init__(self, buffer: CircularSampleBuffer):
        self._buffer = buffer
        self._clear = False
        self._batches: List[np.ndarray] = []

    def clear_data(self) -> "SampleBufferUpdate":
        """Discard retained samples when committing."""
        self._clear = True
        return self

    def add_data(self, samples: Iterable[float]) -> "SampleBufferUpdate":
        """Queue samples to append, after any previously queued ones."""
        self._batches.append(_as_sample_array(samples))
        return self

    def commit(self) -> None:
        """Apply the queued data to the buffer as one atomic commit."""
        if self._batches:
            batch = np.concatenate(self._batches)
        else:
            batch = np.array([], dtype=np.float64)
        self._buffer.commit(batch, clear=self._clear)
