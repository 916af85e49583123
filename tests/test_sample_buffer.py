from __future__ import annotations

import math

import numpy as np
import pytest

from pyviewport import ArrayDataset, CircularSampleBuffer, InvalidCapacityError, Range


@pytest.mark.parametrize("capacity", [0, -1])
def test_rejects_non_positive_capacity(capacity: int) -> None:
    with pytest.raises(InvalidCapacityError):
        CircularSampleBuffer(capacity)


@pytest.mark.parametrize("capacity", [2.7, 3.0, None, "3"])
def test_rejects_non_integer_capacity(capacity: object) -> None:
    with pytest.raises(InvalidCapacityError):
        CircularSampleBuffer(capacity)


def test_accepts_numpy_integer_capacity() -> None:
    buffer = CircularSampleBuffer(np.int64(3))
    buffer.commit([1.0, 2.0, 3.0, 4.0])
    assert buffer.capacity == 3
    assert list(buffer.values()) == [2.0, 3.0, 4.0]


def test_new_buffer_is_empty() -> None:
    buffer = CircularSampleBuffer(4)
    assert len(buffer) == 0
    assert buffer.capacity == 4
    assert list(buffer.values()) == []
    assert math.isnan(buffer.min_value())
    assert math.isnan(buffer.max_value())
    assert buffer.data_range() is None


def test_commit_below_capacity_keeps_everything() -> None:
    buffer = CircularSampleBuffer(5)
    buffer.commit([3.0, 1.0, 2.0])
    assert list(buffer.values()) == [3.0, 1.0, 2.0]
    assert buffer.min_value() == 1.0
    assert buffer.max_value() == 3.0
    assert buffer.data_range() == Range(1.0, 3.0)
    assert not buffer.is_full


def test_overflow_keeps_last_samples_in_order() -> None:
    buffer = CircularSampleBuffer(5)
    buffer.commit([1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0])
    assert list(buffer.values()) == [4.0, 5.0, 6.0, 7.0, 8.0]
    assert buffer.min_value() == 4.0
    assert buffer.max_value() == 8.0
    assert buffer.is_full


def test_overflow_across_batches() -> None:
    buffer = CircularSampleBuffer(5)
    buffer.commit([1.0, 2.0, 3.0])
    buffer.commit([4.0, 5.0, 6.0])
    buffer.commit([7.0, 8.0])
    assert list(buffer.values()) == [4.0, 5.0, 6.0, 7.0, 8.0]
    assert len(buffer) == 5


def test_extrema_forget_evicted_samples() -> None:
    buffer = CircularSampleBuffer(3)
    buffer.commit([100.0, 1.0, 2.0])
    assert buffer.max_value() == 100.0
    buffer.commit([3.0])
    assert list(buffer.values()) == [1.0, 2.0, 3.0]
    assert buffer.max_value() == 3.0

    buffer.commit([-50.0])
    assert buffer.min_value() == -50.0
    buffer.commit([4.0, 5.0, 6.0])
    assert buffer.min_value() == 4.0
    assert buffer.max_value() == 6.0


def test_wrapped_storage_is_returned_in_order() -> None:
    buffer = CircularSampleBuffer(4)
    buffer.commit([1.0, 2.0, 3.0])
    buffer.commit([4.0, 5.0])
    window = buffer.values()
    assert list(window) == [2.0, 3.0, 4.0, 5.0]
    np.testing.assert_array_equal(window.to_array(), [2.0, 3.0, 4.0, 5.0])


def test_clear_discards_previous_samples() -> None:
    buffer = CircularSampleBuffer(5)
    buffer.commit([1.0, 2.0, 3.0])
    buffer.commit([9.0, 8.0], clear=True)
    assert list(buffer.values()) == [9.0, 8.0]
    assert buffer.data_range() == Range(8.0, 9.0)


def test_clear_with_oversized_batch() -> None:
    buffer = CircularSampleBuffer(3)
    buffer.commit([-10.0, 10.0])
    buffer.commit([1.0, 2.0, 3.0, 4.0, 5.0], clear=True)
    assert list(buffer.values()) == [3.0, 4.0, 5.0]
    assert buffer.data_range() == Range(3.0, 5.0)


def test_clear_with_empty_batch_empties_buffer() -> None:
    buffer = CircularSampleBuffer(3)
    buffer.commit([1.0, 2.0])
    buffer.commit([], clear=True)
    assert len(buffer) == 0
    assert buffer.data_range() is None


def test_empty_commit_without_clear_is_a_no_op() -> None:
    buffer = CircularSampleBuffer(3)
    buffer.commit([1.0, 2.0])
    buffer.commit([])
    assert list(buffer.values()) == [1.0, 2.0]


def test_values_are_restartable() -> None:
    buffer = CircularSampleBuffer(3)
    buffer.commit([1.0, 2.0, 3.0, 4.0])
    window = buffer.values()
    assert list(window) == [2.0, 3.0, 4.0]
    assert list(window) == [2.0, 3.0, 4.0]
    assert len(window) == 3


def test_values_are_a_snapshot() -> None:
    buffer = CircularSampleBuffer(3)
    buffer.commit([1.0, 2.0, 3.0])
    window = buffer.values()
    buffer.commit([4.0, 5.0])
    assert list(window) == [1.0, 2.0, 3.0]
    assert list(buffer.values()) == [3.0, 4.0, 5.0]


def test_commit_accepts_generators_and_arrays() -> None:
    buffer = CircularSampleBuffer(10)
    buffer.commit(float(i) for i in range(3))
    buffer.commit(np.array([[3.0, 4.0]], dtype=np.float32))
    assert list(buffer.values()) == [0.0, 1.0, 2.0, 3.0, 4.0]


def test_update_builder_commits_batches_together() -> None:
    buffer = CircularSampleBuffer(4)
    buffer.commit([7.0, 8.0])
    buffer.update().clear_data().add_data([1.0, 2.0]).add_data([3.0]).commit()
    assert list(buffer.values()) == [1.0, 2.0, 3.0]

    buffer.update().add_data([4.0, 5.0]).commit()
    assert list(buffer.values()) == [2.0, 3.0, 4.0, 5.0]


def test_update_builder_without_data() -> None:
    buffer = CircularSampleBuffer(4)
    buffer.commit([1.0])
    buffer.update().commit()
    assert list(buffer.values()) == [1.0]
    buffer.update().clear_data().commit()
    assert len(buffer) == 0


def test_non_finite_samples_are_ignored_by_extrema(log_records) -> None:
    buffer = CircularSampleBuffer(4)
    buffer.commit([1.0, float("nan"), 3.0])
    assert len(buffer) == 3
    assert buffer.min_value() == 1.0
    assert buffer.max_value() == 3.0
    assert any(r["level"].name == "WARNING" for r in log_records)


def test_infinite_samples_are_ignored_by_extrema() -> None:
    samples = [1.0, float("inf"), 3.0, float("-inf")]
    buffer = CircularSampleBuffer(4)
    buffer.commit(samples)
    assert len(buffer) == 4
    assert buffer.min_value() == 1.0
    assert buffer.max_value() == 3.0
    assert buffer.data_range() == Range(1.0, 3.0)
    assert buffer.data_range() == ArrayDataset(samples).data_range()


def test_only_nan_samples_have_no_range() -> None:
    buffer = CircularSampleBuffer(2)
    buffer.commit([float("nan")])
    assert buffer.data_range() is None


def test_only_infinite_samples_have_no_range() -> None:
    buffer = CircularSampleBuffer(2)
    buffer.commit([float("inf"), float("-inf")])
    assert math.isnan(buffer.min_value())
    assert buffer.data_range() is None


@pytest.mark.parametrize("capacity", [1, 2, 7, 16])
def test_matches_reference_for_random_batches(capacity: int) -> None:
    rng = np.random.default_rng(capacity)
    buffer = CircularSampleBuffer(capacity)
    reference: list[float] = []
    for _ in range(40):
        batch = rng.normal(size=rng.integers(0, 2 * capacity + 2)).tolist()
        clear = bool(rng.random() < 0.1)
        buffer.commit(batch, clear=clear)
        if clear:
            reference = []
        reference = (reference + batch)[-capacity:]

        assert list(buffer.values()) == reference
        if reference:
            assert buffer.min_value() == min(reference)
            assert buffer.max_value() == max(reference)
        else:
            assert buffer.data_range() is None
