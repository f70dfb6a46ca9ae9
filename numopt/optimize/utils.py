"""Finiteness checks shared by the minimizer and the line searches."""

from __future__ import annotations

import math

import numpy as np

from .exceptions import EvaluationError
from .objective import ObjectiveFunction


def validate_value(objective: ObjectiveFunction) -> None:
    """Raise :class:`EvaluationError` if the objective value is NaN or infinite."""
    if not math.isfinite(objective.value):
        raise EvaluationError("Non-finite objective function returned.", objective.fork())


def validate_gradient(objective: ObjectiveFunction) -> None:
    """Raise :class:`EvaluationError` if any gradient component is not finite."""
    if not np.all(np.isfinite(objective.gradient)):
        raise EvaluationError("Non-finite gradient returned.", objective.fork())


def validate_hessian(objective: ObjectiveFunction) -> None:
    """Raise :class:`EvaluationError` if any Hessian entry is not finite."""
    if not np.all(np.isfinite(objective.hessian)):
        raise EvaluationError("Non-finite Hessian returned.", objective.fork())


__all__ = ["validate_gradient", "validate_hessian", "validate_value"]
