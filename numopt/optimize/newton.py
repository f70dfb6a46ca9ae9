"""Newton's method with optional line-search globalization."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..logging import get_logger
from .core import (
    Array,
    ExitCondition,
    MinimizationResult,
    MinimizationWithLineSearchResult,
    NewtonConfig,
)
from .exceptions import IncompatibleObjectiveError, LineSearchError, MaximumIterationsError
from .line_search import LineSearch, WeakWolfeLineSearch
from .objective import ObjectiveFunction
from .utils import validate_gradient, validate_hessian

logger = get_logger(__name__)


class NewtonMinimizer:
    """Minimize an objective using Newton steps ``H d = -g``.

    When the Newton direction is not a descent direction the step falls back
    to steepest descent and is always line searched; that fallback applies to
    the current step only. With ``use_line_search`` every step is line
    searched, otherwise the full Newton step is taken.

    Parameters
    ----------
    gradient_tolerance:
        Converged once ``||gradient||_2 < gradient_tolerance``.
    maximum_iterations:
        Budget of outer steps.
    use_line_search:
        Line search every step instead of taking full Newton steps.
    line_search:
        Line search used for globalized steps. Defaults to
        :class:`~numopt.optimize.line_search.WeakWolfeLineSearch`.
    """

    def __init__(
        self,
        gradient_tolerance: float,
        maximum_iterations: int,
        use_line_search: bool = False,
        line_search: Optional[LineSearch] = None,
    ):
        config = NewtonConfig(gradient_tolerance, maximum_iterations, use_line_search)
        self.gradient_tolerance = config.gradient_tolerance
        self.maximum_iterations = config.maximum_iterations
        self.use_line_search = config.use_line_search
        self.line_search = line_search if line_search is not None else WeakWolfeLineSearch()

    @classmethod
    def from_config(
        cls, config: NewtonConfig, line_search: Optional[LineSearch] = None
    ) -> "NewtonMinimizer":
        return cls(
            config.gradient_tolerance,
            config.maximum_iterations,
            config.use_line_search,
            line_search,
        )

    def find_minimum(
        self, objective: ObjectiveFunction, initial_guess: Array
    ) -> MinimizationResult:
        """Run Newton's method from ``initial_guess``.

        The caller's ``objective`` is never evaluated; the search works on
        independent instances obtained from ``objective.create_new()``.

        Raises
        ------
        IncompatibleObjectiveError
            If the objective lacks gradient or Hessian support.
        EvaluationError
            If a gradient or Hessian along the way is not finite.
        LineSearchError
            If a line search fails; the original error is the ``__cause__``.
        MaximumIterationsError
            If the gradient criterion is not met within ``maximum_iterations``.
        numpy.linalg.LinAlgError
            If the Hessian is singular at an iterate.
        """
        if not objective.is_gradient_supported:
            raise IncompatibleObjectiveError(
                "Gradient not supported in objective function, but required for Newton minimization."
            )
        if not objective.is_hessian_supported:
            raise IncompatibleObjectiveError(
                "Hessian not supported in objective function, but required for Newton minimization."
            )

        current = objective.create_new()
        current.evaluate(initial_guess)
        validate_gradient(current)
        if self._exit_criteria_satisfied(current.gradient):
            logger.info("Initial guess already satisfies the gradient tolerance.")
            return MinimizationResult(current, 0, ExitCondition.ABSOLUTE_GRADIENT)

        iterations = 0
        total_line_search_steps = 0
        iterations_with_nontrivial_line_search = 0
        converged = False

        while iterations < self.maximum_iterations:
            validate_hessian(current)
            gradient = current.gradient
            direction = np.linalg.solve(current.hessian, -gradient)

            force_line_search = False
            if float(direction @ gradient) >= 0:
                logger.debug(
                    "Newton direction is not a descent direction at iteration %d; "
                    "falling back to steepest descent.",
                    iterations,
                )
                direction = -gradient
                force_line_search = True

            if self.use_line_search or force_line_search:
                try:
                    result = self.line_search.find_conforming_step(current, direction, 1.0)
                except Exception as exc:
                    raise LineSearchError("Line search failed.") from exc
                if result.iterations > 0:
                    iterations_with_nontrivial_line_search += 1
                total_line_search_steps += result.iterations
                current = result.function_info_at_minimum
                trials = result.iterations
            else:
                candidate = current.create_new()
                candidate.evaluate(current.point + direction)
                current = candidate
                trials = 0

            validate_gradient(current)
            iterations += 1

            grad_norm = float(np.linalg.norm(current.gradient))
            logger.debug(
                "iteration %d: |g|=%.6e line_search=%s trials=%d",
                iterations,
                grad_norm,
                self.use_line_search or force_line_search,
                trials,
            )
            if grad_norm < self.gradient_tolerance:
                converged = True
                break

        if not converged:
            raise MaximumIterationsError(
                f"Maximum iterations ({self.maximum_iterations}) reached.",
                self.maximum_iterations,
            )

        logger.info("Newton minimization converged after %d iterations.", iterations)
        return MinimizationWithLineSearchResult(
            function_info_at_minimum=current,
            iterations=iterations,
            reason_for_exit=ExitCondition.ABSOLUTE_GRADIENT,
            total_line_search_iterations=total_line_search_steps,
            iterations_with_non_trivial_line_search=iterations_with_nontrivial_line_search,
        )

    def _exit_criteria_satisfied(self, gradient: np.ndarray) -> bool:
        return float(np.linalg.norm(gradient)) < self.gradient_tolerance


__all__ = ["NewtonMinimizer"]
