"""Error taxonomy for the optimization core.

Every error carries a ``kind`` tag so callers can branch on the failure
category without matching on exception classes.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional

if TYPE_CHECKING:
    from .objective import ObjectiveFunction


class OptimizationErrorKind(Enum):
    """Failure categories surfaced to callers of the minimizers."""

    INCOMPATIBLE_OBJECTIVE = "incompatible_objective"
    EVALUATION = "evaluation"
    UNSUPPORTED_CAPABILITY = "unsupported_capability"
    NOT_EVALUATED = "not_evaluated"
    LINE_SEARCH = "line_search"
    MAXIMUM_ITERATIONS = "maximum_iterations"


class OptimizationError(RuntimeError):
    """Base class for all optimization failures."""

    kind: ClassVar[OptimizationErrorKind]


class IncompatibleObjectiveError(OptimizationError):
    """The objective lacks a capability the algorithm requires."""

    kind = OptimizationErrorKind.INCOMPATIBLE_OBJECTIVE


class EvaluationError(OptimizationError):
    """An evaluated value, gradient or Hessian is not finite.

    Attributes:
        evaluation: Snapshot of the objective at the offending point.
    """

    kind = OptimizationErrorKind.EVALUATION

    def __init__(self, message: str, evaluation: Optional["ObjectiveFunction"] = None):
        super().__init__(message)
        self.evaluation = evaluation


class UnsupportedCapabilityError(OptimizationError, NotImplementedError):
    """A quantity was requested that the objective does not provide."""

    kind = OptimizationErrorKind.UNSUPPORTED_CAPABILITY

    def __init__(self, capability: str):
        super().__init__(f"{capability} is not supported by this objective function.")
        self.capability = capability


class ObjectiveNotEvaluatedError(OptimizationError):
    """The objective was read before any call to ``evaluate``."""

    kind = OptimizationErrorKind.NOT_EVALUATED


class LineSearchError(OptimizationError):
    """The line search failed while computing an outer step."""

    kind = OptimizationErrorKind.LINE_SEARCH


class MaximumIterationsError(OptimizationError):
    """The iteration budget ran out before convergence."""

    kind = OptimizationErrorKind.MAXIMUM_ITERATIONS

    def __init__(self, message: str, iterations: int):
        super().__init__(message)
        self.iterations = iterations


__all__ = [
    "EvaluationError",
    "IncompatibleObjectiveError",
    "LineSearchError",
    "MaximumIterationsError",
    "ObjectiveNotEvaluatedError",
    "OptimizationError",
    "OptimizationErrorKind",
    "UnsupportedCapabilityError",
]
