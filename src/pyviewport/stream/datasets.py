from typing import Iterable, Optional

import numpy as np

from pyviewport.axis.intervals import Range
from pyviewport.stream.sample_buffer import SampleWindow, _as_sample_array


class ArrayDataset:
    """
    Fixed set of samples exposing the same interface as a sample buffer.

    Useful to feed a viewport or a renderer with data that does not stream.
    """

    def __init__(self, values: Iterable[float]):
        self._data = _as_sample_array(values).copy()
        finite = self._data[np.isfinite(self._data)]
        if finite.size == 0:
            self._min_value = np.nan
            self._max_value = np.nan
        else:
            self._min_value = float(np.min(finite))
            self._max_value = float(np.max(finite))

    def __len__(self) -> int:
        return self._data.size

    def values(self) -> SampleWindow:
        return SampleWindow(self._data, 0, self._data.size)

    def min_value(self) -> float:
        return self._min_value

    def max_value(self) -> float:
        return self._max_value

    def data_range(self) -> Optional[Range]:
        if np.isnan(self._min_value):
            return None
        return Range(self._min_value, self._max_value)


def uniform_dataset(min_value: float, max_value: float, n_samples: int) -> ArrayDataset:
    """
    Dataset of `n_samples` evenly spaced values from min_value to max_value inclusive.

    Raises
    ------
    ValueError
        If n_samples is negative.
    """
    if n_samples < 0:
        raise ValueError(f"n_samples must be non-negative. Got {n_samples}")
    return ArrayDataset(np.linspace(min_value, max_value, n_samples, dtype=np.float64))
