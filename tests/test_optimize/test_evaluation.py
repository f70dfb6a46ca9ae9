import numpy as np
import pytest

from numopt.optimize import (
    CacheState,
    LazyValue,
    UnsupportedCapabilityError,
    VectorEvaluation,
)


def test_lazy_value_computes_once():
    calls = []

    def compute():
        calls.append(1)
        return 42.0

    cell = LazyValue(compute)
    assert cell.state is CacheState.PENDING
    assert cell.get() == 42.0
    assert cell.get() == 42.0
    assert cell.state is CacheState.READY
    assert len(calls) == 1


def test_lazy_value_remembers_failure():
    calls = []

    def compute():
        calls.append(1)
        raise ZeroDivisionError("boom")

    cell = LazyValue(compute)
    with pytest.raises(ZeroDivisionError, match="boom"):
        cell.get()
    assert cell.state is CacheState.FAILED
    with pytest.raises(ZeroDivisionError, match="boom"):
        cell.get()
    assert len(calls) == 1


def test_ready_cell():
    cell = LazyValue.ready(3.5)
    assert cell.state is CacheState.READY
    assert cell.get() == 3.5


def test_copy_duplicates_arrays():
    arr = np.array([1.0, 2.0])
    cell = LazyValue.ready(arr)
    clone = cell.copy()
    assert clone.get() is not arr
    assert np.array_equal(clone.get(), arr)
    assert not clone.get().flags.writeable


def test_copy_of_pending_cell_computes_independently():
    calls = []
    cell = LazyValue(lambda: calls.append(1) or 7)
    clone = cell.copy()
    assert clone.get() == 7
    assert cell.state is CacheState.PENDING
    assert cell.get() == 7
    assert len(calls) == 2


def test_vector_evaluation_missing_cells_are_unsupported():
    record = VectorEvaluation(point=np.zeros(2), value_cell=LazyValue.ready(0.0))
    assert record.value == 0.0
    with pytest.raises(UnsupportedCapabilityError, match="Gradient"):
        record.gradient
    with pytest.raises(UnsupportedCapabilityError, match="Hessian"):
        record.hessian


def test_vector_evaluation_copy_is_deep():
    record = VectorEvaluation(
        point=np.array([1.0, 2.0]),
        value_cell=LazyValue.ready(1.0),
        gradient_cell=LazyValue.ready(np.array([0.5, 0.5])),
    )
    clone = record.copy()
    assert clone.point is not record.point
    assert clone.gradient is not record.gradient
    assert np.array_equal(clone.gradient, record.gradient)
    assert clone.hessian_cell is None
