"""Core types shared across the optimization algorithms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

import numpy as np

if TYPE_CHECKING:
    from .objective import ObjectiveFunction
    from .scalar import CachedEvaluation

Array = np.ndarray
Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]
Hessian = Callable[[Array], Array]
ScalarFunction = Callable[[float], float]


class ExitCondition(Enum):
    """Reason a minimization or line search terminated."""

    ABSOLUTE_GRADIENT = "absolute_gradient"
    WEAK_WOLFE_CRITERIA = "weak_wolfe_criteria"
    STRONG_WOLFE_CRITERIA = "strong_wolfe_criteria"
    LACK_OF_PROGRESS = "lack_of_progress"


@dataclass(frozen=True)
class NewtonConfig:
    """
    Settings for :class:`~numopt.optimize.newton.NewtonMinimizer`.

    Args:
        gradient_tolerance: Stop once the 2-norm of the gradient falls below
            this value. Must be positive.
        maximum_iterations: Budget of outer Newton steps. Zero is allowed and
            only succeeds when the initial guess already converged.
        use_line_search: Globalize every step with a line search instead of
            taking the full Newton step.
    """

    gradient_tolerance: float
    maximum_iterations: int
    use_line_search: bool = False

    def __post_init__(self) -> None:
        if not self.gradient_tolerance > 0:
            raise ValueError(
                f"gradient_tolerance must be positive, got {self.gradient_tolerance}."
            )
        if self.maximum_iterations < 0:
            raise ValueError(
                f"maximum_iterations must be >= 0, got {self.maximum_iterations}."
            )


@dataclass(frozen=True)
class MinimizationResult:
    """Outcome of a successful minimization.

    Attributes:
        function_info_at_minimum: Objective evaluated at the final point.
        iterations: Number of accepted outer steps.
        reason_for_exit: Why the run stopped.
    """

    function_info_at_minimum: "ObjectiveFunction"
    iterations: int
    reason_for_exit: ExitCondition

    @property
    def minimizing_point(self) -> np.ndarray:
        return self.function_info_at_minimum.point


@dataclass(frozen=True)
class MinimizationWithLineSearchResult(MinimizationResult):
    """Minimization result with aggregate line-search statistics."""

    total_line_search_iterations: int
    iterations_with_non_trivial_line_search: int


@dataclass(frozen=True)
class LineSearchResult(MinimizationResult):
    """Accepted point of a line search and the step length that reached it."""

    final_step: float


@dataclass(frozen=True)
class MinimizationResult1D:
    """Outcome of a one-dimensional minimization."""

    function_info_at_minimum: "CachedEvaluation"
    iterations: int
    reason_for_exit: ExitCondition

    @property
    def minimizing_point(self) -> float:
        return self.function_info_at_minimum.point


__all__ = [
    "Array",
    "ExitCondition",
    "Gradient",
    "Hessian",
    "LineSearchResult",
    "MinimizationResult",
    "MinimizationResult1D",
    "MinimizationWithLineSearchResult",
    "NewtonConfig",
    "Objective",
    "ScalarFunction",
]
