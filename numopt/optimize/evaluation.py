"""Once-computed cells and the immutable per-point evaluation record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

import numpy as np

from .exceptions import UnsupportedCapabilityError

T = TypeVar("T")


class CacheState(Enum):
    """Lifecycle of a :class:`LazyValue`."""

    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


def frozen_array(values: Any) -> np.ndarray:
    """Return a read-only float copy of ``values``."""
    arr = np.array(values, dtype=float)
    arr.setflags(write=False)
    return arr


class LazyValue(Generic[T]):
    """A quantity computed on first access and memoized afterwards.

    A computation that raises is remembered as well: later reads re-raise the
    stored exception instead of calling ``compute`` again.
    """

    __slots__ = ("_compute", "_state", "_value", "_error")

    def __init__(self, compute: Optional[Callable[[], T]]):
        self._compute = compute
        self._state = CacheState.PENDING
        self._value: Optional[T] = None
        self._error: Optional[BaseException] = None

    @classmethod
    def ready(cls, value: T) -> "LazyValue[T]":
        cell: LazyValue[T] = cls(None)
        cell._state = CacheState.READY
        cell._value = value
        return cell

    @property
    def state(self) -> CacheState:
        return self._state

    def get(self) -> T:
        if self._state is CacheState.READY:
            return self._value  # type: ignore[return-value]
        if self._state is CacheState.FAILED:
            raise self._error  # type: ignore[misc]
        try:
            value = self._compute()  # type: ignore[misc]
        except Exception as exc:
            self._state = CacheState.FAILED
            self._error = exc
            self._compute = None
            raise
        self._value = value
        self._state = CacheState.READY
        self._compute = None
        return value

    def copy(self) -> "LazyValue[T]":
        """Return an independent cell in the same state.

        Ready arrays are duplicated; pending cells keep the same computation.
        """
        cell: LazyValue[T] = LazyValue(self._compute)
        cell._state = self._state
        cell._error = self._error
        if isinstance(self._value, np.ndarray):
            cell._value = frozen_array(self._value)  # type: ignore[assignment]
        else:
            cell._value = self._value
        return cell


@dataclass(frozen=True, eq=False)
class VectorEvaluation:
    """Snapshot of an objective at one point.

    A cell set to ``None`` marks a quantity the objective does not support.
    Records are never modified after construction; objectives replace them
    wholesale on every evaluation.
    """

    point: np.ndarray
    value_cell: Optional[LazyValue[float]]
    gradient_cell: Optional[LazyValue[np.ndarray]] = None
    hessian_cell: Optional[LazyValue[np.ndarray]] = None

    @property
    def value(self) -> float:
        if self.value_cell is None:
            raise UnsupportedCapabilityError("Value")
        return self.value_cell.get()

    @property
    def gradient(self) -> np.ndarray:
        if self.gradient_cell is None:
            raise UnsupportedCapabilityError("Gradient")
        return self.gradient_cell.get()

    @property
    def hessian(self) -> np.ndarray:
        if self.hessian_cell is None:
            raise UnsupportedCapabilityError("Hessian")
        return self.hessian_cell.get()

    def copy(self) -> "VectorEvaluation":
        return VectorEvaluation(
            point=frozen_array(self.point),
            value_cell=None if self.value_cell is None else self.value_cell.copy(),
            gradient_cell=None if self.gradient_cell is None else self.gradient_cell.copy(),
            hessian_cell=None if self.hessian_cell is None else self.hessian_cell.copy(),
        )


__all__ = ["CacheState", "LazyValue", "VectorEvaluation", "frozen_array"]
