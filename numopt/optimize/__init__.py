"""Newton-type unconstrained minimization for numopt.

Example
-------
>>> import numpy as np
>>> from numopt.optimize import NewtonMinimizer, objective_function
>>> def rosen(x):
...     return (1 - x[0])**2 + 100 * (x[1] - x[0]**2)**2
>>> def rosen_grad(x):
...     return np.array([
...         -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
...         200 * (x[1] - x[0] ** 2),
...     ])
>>> def rosen_hess(x):
...     return np.array([
...         [1200 * x[0] ** 2 - 400 * x[1] + 2, -400 * x[0]],
...         [-400 * x[0], 200.0],
...     ])
>>> obj = objective_function(rosen, rosen_grad, rosen_hess)
>>> res = NewtonMinimizer(1e-5, 1000, use_line_search=True).find_minimum(obj, np.array([-1.2, 1.0]))
>>> np.round(res.minimizing_point, 3)
array([1., 1.])
"""

from .core import (
    ExitCondition,
    LineSearchResult,
    MinimizationResult,
    MinimizationResult1D,
    MinimizationWithLineSearchResult,
    NewtonConfig,
)
from .evaluation import CacheState, LazyValue, VectorEvaluation
from .exceptions import (
    EvaluationError,
    IncompatibleObjectiveError,
    LineSearchError,
    MaximumIterationsError,
    ObjectiveNotEvaluatedError,
    OptimizationError,
    OptimizationErrorKind,
    UnsupportedCapabilityError,
)
from .line_search import LineSearch, StrongWolfeLineSearch, WeakWolfeLineSearch
from .newton import NewtonMinimizer
from .objective import (
    GradientHessianObjectiveFunction,
    GradientObjectiveFunction,
    LazyObjectiveFunction,
    ObjectiveFunction,
    ValueObjectiveFunction,
    objective_function,
)
from .scalar import CachedEvaluation, ScalarObjectiveFunction
from .utils import validate_gradient, validate_hessian, validate_value

__all__ = [
    "CacheState",
    "CachedEvaluation",
    "EvaluationError",
    "ExitCondition",
    "GradientHessianObjectiveFunction",
    "GradientObjectiveFunction",
    "IncompatibleObjectiveError",
    "LazyObjectiveFunction",
    "LazyValue",
    "LineSearch",
    "LineSearchError",
    "LineSearchResult",
    "MaximumIterationsError",
    "MinimizationResult",
    "MinimizationResult1D",
    "MinimizationWithLineSearchResult",
    "NewtonConfig",
    "NewtonMinimizer",
    "ObjectiveFunction",
    "ObjectiveNotEvaluatedError",
    "OptimizationError",
    "OptimizationErrorKind",
    "ScalarObjectiveFunction",
    "StrongWolfeLineSearch",
    "UnsupportedCapabilityError",
    "ValueObjectiveFunction",
    "VectorEvaluation",
    "WeakWolfeLineSearch",
    "objective_function",
    "validate_gradient",
    "validate_hessian",
    "validate_value",
]
