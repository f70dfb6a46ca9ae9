"""Vector objective functions with value, gradient and Hessian.

An objective is either unevaluated or holds exactly one
:class:`~numopt.optimize.evaluation.VectorEvaluation` for its current point.
``evaluate`` swaps that record for a new one; records themselves never change.

Example
-------
>>> import numpy as np
>>> from numopt.optimize import objective_function
>>> obj = objective_function(lambda x: float(x @ x), grad=lambda x: 2 * x)
>>> obj.evaluate(np.array([1.0, 2.0]))
>>> obj.value
5.0
>>> snapshot = obj.fork()
>>> obj.evaluate(np.zeros(2))
>>> snapshot.value
5.0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import numpy as np

from .core import Array, Gradient, Hessian, Objective
from .evaluation import CacheState, LazyValue, VectorEvaluation, frozen_array
from .exceptions import ObjectiveNotEvaluatedError, UnsupportedCapabilityError


def _carry_cell(
    current: Optional[LazyValue[Any]], fresh: Optional[LazyValue[Any]]
) -> Optional[LazyValue[Any]]:
    if current is None or current.state is CacheState.PENDING:
        return fresh
    return current.copy()


def _as_point(point: Any) -> np.ndarray:
    arr = frozen_array(point)
    if arr.ndim != 1:
        raise ValueError(f"point must be a 1D vector, got shape {arr.shape}.")
    return arr


def _as_gradient(values: Any, point: np.ndarray) -> np.ndarray:
    grad = frozen_array(values)
    if grad.shape != point.shape:
        raise ValueError(
            f"gradient shape {grad.shape} does not match point shape {point.shape}."
        )
    return grad


def _as_hessian(values: Any, point: np.ndarray) -> np.ndarray:
    hess = frozen_array(values)
    n = point.size
    if hess.shape != (n, n):
        raise ValueError(f"Hessian must have shape ({n}, {n}), got {hess.shape}.")
    return hess


class ObjectiveFunction(ABC):
    """Objective over R^n with an explicit current evaluation.

    Subclasses declare their capabilities through ``is_gradient_supported``
    and ``is_hessian_supported`` and build one record per ``evaluate`` call.
    """

    is_gradient_supported: bool = False
    is_hessian_supported: bool = False

    def __init__(self) -> None:
        self._evaluation: Optional[VectorEvaluation] = None

    @abstractmethod
    def create_new(self) -> "ObjectiveFunction":
        """Return an unevaluated instance of the same mathematical function."""

    @abstractmethod
    def _build_evaluation(self, point: np.ndarray) -> VectorEvaluation:
        """Return the record describing the objective at ``point``."""

    def evaluate(self, point: Array) -> None:
        """Move this objective to ``point``, replacing the current record."""
        self._evaluation = self._build_evaluation(_as_point(point))

    def fork(self) -> "ObjectiveFunction":
        """Return an independent copy evaluated at the same point."""
        clone = self.create_new()
        if self._evaluation is not None:
            clone._evaluation = self._evaluation.copy()
        return clone

    @property
    def is_evaluated(self) -> bool:
        return self._evaluation is not None

    def _current(self) -> VectorEvaluation:
        if self._evaluation is None:
            raise ObjectiveNotEvaluatedError(
                "Objective function has not been evaluated yet."
            )
        return self._evaluation

    @property
    def point(self) -> np.ndarray:
        return self._current().point

    @property
    def value(self) -> float:
        return self._current().value

    @property
    def gradient(self) -> np.ndarray:
        if not self.is_gradient_supported:
            raise UnsupportedCapabilityError("Gradient")
        return self._current().gradient

    @property
    def hessian(self) -> np.ndarray:
        if not self.is_hessian_supported:
            raise UnsupportedCapabilityError("Hessian")
        return self._current().hessian

    def __repr__(self) -> str:
        state = f"point={self.point!r}" if self.is_evaluated else "unevaluated"
        return f"{type(self).__name__}({state})"


class ValueObjectiveFunction(ObjectiveFunction):
    """Objective providing only its value."""

    def __init__(self, function: Objective):
        super().__init__()
        self._function = function

    def create_new(self) -> "ValueObjectiveFunction":
        return ValueObjectiveFunction(self._function)

    def _build_evaluation(self, point: np.ndarray) -> VectorEvaluation:
        return VectorEvaluation(
            point=point,
            value_cell=LazyValue.ready(float(self._function(point))),
        )


class GradientObjectiveFunction(ObjectiveFunction):
    """Objective providing value and gradient.

    If ``gradient`` is omitted, ``function`` must return ``(value, gradient)``.
    """

    is_gradient_supported = True

    def __init__(self, function: Callable[[Array], Any], gradient: Optional[Gradient] = None):
        super().__init__()
        self._function = function
        self._gradient = gradient

    def create_new(self) -> "GradientObjectiveFunction":
        return GradientObjectiveFunction(self._function, self._gradient)

    def _build_evaluation(self, point: np.ndarray) -> VectorEvaluation:
        if self._gradient is None:
            value, grad = self._function(point)
        else:
            value = self._function(point)
            grad = self._gradient(point)
        return VectorEvaluation(
            point=point,
            value_cell=LazyValue.ready(float(value)),
            gradient_cell=LazyValue.ready(_as_gradient(grad, point)),
        )


class GradientHessianObjectiveFunction(ObjectiveFunction):
    """Objective providing value, gradient and Hessian.

    If ``gradient`` and ``hessian`` are omitted, ``function`` must return
    ``(value, gradient, hessian)``.
    """

    is_gradient_supported = True
    is_hessian_supported = True

    def __init__(
        self,
        function: Callable[[Array], Any],
        gradient: Optional[Gradient] = None,
        hessian: Optional[Hessian] = None,
    ):
        if (gradient is None) != (hessian is None):
            raise ValueError(
                "Provide both gradient and hessian, or neither for a combined function."
            )
        super().__init__()
        self._function = function
        self._gradient = gradient
        self._hessian = hessian

    def create_new(self) -> "GradientHessianObjectiveFunction":
        return GradientHessianObjectiveFunction(self._function, self._gradient, self._hessian)

    def _build_evaluation(self, point: np.ndarray) -> VectorEvaluation:
        if self._gradient is None:
            value, grad, hess = self._function(point)
        else:
            value = self._function(point)
            grad = self._gradient(point)
            hess = self._hessian(point)  # type: ignore[misc]
        return VectorEvaluation(
            point=point,
            value_cell=LazyValue.ready(float(value)),
            gradient_cell=LazyValue.ready(_as_gradient(grad, point)),
            hessian_cell=LazyValue.ready(_as_hessian(hess, point)),
        )


class LazyObjectiveFunction(ObjectiveFunction):
    """Base class for objectives that compute each quantity on demand.

    Subclasses implement ``_evaluate_value`` and, for each supported
    capability, ``_evaluate_gradient`` / ``_evaluate_hessian``. A quantity is
    computed at most once per evaluated point and only when it is read.
    """

    def __init__(self, gradient_supported: bool, hessian_supported: bool):
        super().__init__()
        self.is_gradient_supported = gradient_supported
        self.is_hessian_supported = hessian_supported

    @abstractmethod
    def _evaluate_value(self, point: np.ndarray) -> float:
        ...

    def _evaluate_gradient(self, point: np.ndarray) -> Array:
        raise UnsupportedCapabilityError("Gradient")

    def _evaluate_hessian(self, point: np.ndarray) -> Array:
        raise UnsupportedCapabilityError("Hessian")

    def fork(self) -> "LazyObjectiveFunction":
        """Return an independent copy evaluated at the same point.

        Quantities already computed are copied; pending ones are rebound to the
        copy so they are later computed by the copy, not by this instance.
        """
        clone = self.create_new()
        if self._evaluation is not None:
            current = self._evaluation
            fresh = clone._build_evaluation(frozen_array(current.point))
            clone._evaluation = VectorEvaluation(
                point=fresh.point,
                value_cell=_carry_cell(current.value_cell, fresh.value_cell),
                gradient_cell=_carry_cell(current.gradient_cell, fresh.gradient_cell),
                hessian_cell=_carry_cell(current.hessian_cell, fresh.hessian_cell),
            )
        return clone

    def _build_evaluation(self, point: np.ndarray) -> VectorEvaluation:
        gradient_cell = None
        hessian_cell = None
        if self.is_gradient_supported:
            gradient_cell = LazyValue(
                lambda: _as_gradient(self._evaluate_gradient(point), point)
            )
        if self.is_hessian_supported:
            hessian_cell = LazyValue(
                lambda: _as_hessian(self._evaluate_hessian(point), point)
            )
        return VectorEvaluation(
            point=point,
            value_cell=LazyValue(lambda: float(self._evaluate_value(point))),
            gradient_cell=gradient_cell,
            hessian_cell=hessian_cell,
        )


def objective_function(
    fun: Objective,
    grad: Optional[Gradient] = None,
    hess: Optional[Hessian] = None,
) -> ObjectiveFunction:
    """Wrap plain callables in the matching objective variant."""
    if hess is not None:
        if grad is None:
            raise ValueError("A Hessian requires a gradient as well.")
        return GradientHessianObjectiveFunction(fun, grad, hess)
    if grad is not None:
        return GradientObjectiveFunction(fun, grad)
    return ValueObjectiveFunction(fun)


__all__ = [
    "GradientHessianObjectiveFunction",
    "GradientObjectiveFunction",
    "LazyObjectiveFunction",
    "ObjectiveFunction",
    "ValueObjectiveFunction",
    "objective_function",
]
