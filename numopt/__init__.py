"""numopt - Newton-type unconstrained minimization on NumPy."""

__version__ = "0.1.0"

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Optimization core
from .optimize import (
    CachedEvaluation,
    EvaluationError,
    ExitCondition,
    GradientHessianObjectiveFunction,
    GradientObjectiveFunction,
    IncompatibleObjectiveError,
    LazyObjectiveFunction,
    LineSearchError,
    LineSearchResult,
    MaximumIterationsError,
    MinimizationResult,
    MinimizationResult1D,
    MinimizationWithLineSearchResult,
    NewtonConfig,
    NewtonMinimizer,
    ObjectiveFunction,
    OptimizationError,
    OptimizationErrorKind,
    ScalarObjectiveFunction,
    StrongWolfeLineSearch,
    UnsupportedCapabilityError,
    ValueObjectiveFunction,
    WeakWolfeLineSearch,
    objective_function,
)

__all__ = [
    "CachedEvaluation",
    "EvaluationError",
    "ExitCondition",
    "GradientHessianObjectiveFunction",
    "GradientObjectiveFunction",
    "IncompatibleObjectiveError",
    "LazyObjectiveFunction",
    "LineSearchError",
    "LineSearchResult",
    "MaximumIterationsError",
    "MinimizationResult",
    "MinimizationResult1D",
    "MinimizationWithLineSearchResult",
    "NewtonConfig",
    "NewtonMinimizer",
    "ObjectiveFunction",
    "OptimizationError",
    "OptimizationErrorKind",
    "ScalarObjectiveFunction",
    "StrongWolfeLineSearch",
    "UnsupportedCapabilityError",
    "ValueObjectiveFunction",
    "WeakWolfeLineSearch",
    "configure_logging",
    "get_logger",
    "set_log_level",
]
