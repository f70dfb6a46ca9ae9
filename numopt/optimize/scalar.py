"""Scalar objective functions with lazily cached derivatives.

Example
-------
>>> from numopt.optimize import ScalarObjectiveFunction
>>> obj = ScalarObjectiveFunction(lambda x: (x - 2.0) ** 2, lambda x: 2 * (x - 2.0))
>>> ev = obj.evaluate(3.0)
>>> ev.value, ev.derivative
(1.0, 2.0)
"""

from __future__ import annotations

from typing import Optional

from .core import ScalarFunction
from .evaluation import LazyValue
from .exceptions import UnsupportedCapabilityError


class ScalarObjectiveFunction:
    """Objective over the real line built from up to three unary callables.

    The callables are kept as ``value_function``, ``derivative_function`` and
    ``second_derivative_function``; the numbers they produce are read from
    the :class:`CachedEvaluation` returned by :meth:`evaluate`.
    """

    def __init__(
        self,
        function: ScalarFunction,
        derivative: Optional[ScalarFunction] = None,
        second_derivative: Optional[ScalarFunction] = None,
    ):
        self.value_function = function
        self.derivative_function = derivative
        self.second_derivative_function = second_derivative

    @property
    def derivative_supported(self) -> bool:
        return self.derivative_function is not None

    @property
    def second_derivative_supported(self) -> bool:
        return self.second_derivative_function is not None

    def evaluate(self, point: float) -> "CachedEvaluation":
        """Return a fresh evaluation bound to ``point``; nothing is computed yet."""
        return CachedEvaluation(self, point)


def _cell(func: Optional[ScalarFunction], point: float, name: str) -> LazyValue[float]:
    if func is None:

        def unsupported() -> float:
            raise UnsupportedCapabilityError(name)

        return LazyValue(unsupported)
    return LazyValue(lambda: float(func(point)))


class CachedEvaluation:
    """Evaluation of a :class:`ScalarObjectiveFunction` at a single point.

    Each quantity is computed on first read and reused afterwards. Reading
    an unsupported derivative raises
    :class:`~numopt.optimize.exceptions.UnsupportedCapabilityError`.
    """

    __slots__ = ("_point", "_value", "_derivative", "_second_derivative")

    def __init__(self, objective: ScalarObjectiveFunction, point: float):
        self._point = float(point)
        self._value = _cell(objective.value_function, self._point, "Value")
        self._derivative = _cell(objective.derivative_function, self._point, "Derivative")
        self._second_derivative = _cell(
            objective.second_derivative_function, self._point, "Second derivative"
        )

    @property
    def point(self) -> float:
        return self._point

    @property
    def value(self) -> float:
        return self._value.get()

    @property
    def derivative(self) -> float:
        return self._derivative.get()

    @property
    def second_derivative(self) -> float:
        return self._second_derivative.get()

    def __repr__(self) -> str:
        return f"CachedEvaluation(point={self._point!r})"


__all__ = ["CachedEvaluation", "ScalarObjectiveFunction"]
