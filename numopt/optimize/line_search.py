"""Line searches on objective functions following Nocedal & Wright.

Both searches evaluate trial points on fresh ``create_new()`` instances, so
the objective passed in keeps its current evaluation. The returned
``iterations`` counts trial steps rejected before the accepted one.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

import numpy as np

from ..logging import get_logger
from .core import Array, ExitCondition, LineSearchResult
from .exceptions import MaximumIterationsError
from .objective import ObjectiveFunction
from .utils import validate_gradient, validate_value

logger = get_logger(__name__)


class LineSearch(ABC):
    """Common validation and bookkeeping for Wolfe-type line searches."""

    def __init__(
        self,
        c1: float,
        c2: float,
        parameter_tolerance: float,
        maximum_iterations: int,
    ):
        if not (0 < c1 < c2 < 1):
            raise ValueError("Require 0 < c1 < c2 < 1 for Wolfe conditions.")
        if not parameter_tolerance > 0:
            raise ValueError("parameter_tolerance must be positive.")
        if maximum_iterations < 1:
            raise ValueError("maximum_iterations must be >= 1.")
        self.c1 = c1
        self.c2 = c2
        self.parameter_tolerance = parameter_tolerance
        self.maximum_iterations = maximum_iterations

    def find_conforming_step(
        self,
        objective: ObjectiveFunction,
        search_direction: Array,
        initial_step: float = 1.0,
        upper_bound: float = math.inf,
    ) -> LineSearchResult:
        """Find a step along ``search_direction`` satisfying the Wolfe conditions.

        Parameters
        ----------
        objective:
            Objective evaluated at the starting point. Must support gradients.
        search_direction:
            Descent direction at the starting point.
        initial_step:
            First trial step length.
        upper_bound:
            Largest step length the search may try.

        Raises
        ------
        ValueError
            If the direction is not a descent direction or the step is invalid.
        EvaluationError
            If a value or gradient along the way is not finite.
        MaximumIterationsError
            If no conforming step is found within ``maximum_iterations`` trials.
        """
        validate_value(objective)
        validate_gradient(objective)
        direction = np.asarray(search_direction, dtype=float)
        if direction.shape != objective.point.shape:
            raise ValueError(
                f"search direction shape {direction.shape} does not match "
                f"point shape {objective.point.shape}."
            )
        if not 0 < initial_step <= upper_bound:
            raise ValueError("initial_step must lie in (0, upper_bound].")
        initial_dd = float(direction @ objective.gradient)
        if initial_dd >= 0:
            raise ValueError("Search direction must be a descent direction.")
        return self._search(
            objective, direction, float(initial_step), float(upper_bound), initial_dd
        )

    @abstractmethod
    def _search(
        self,
        start: ObjectiveFunction,
        direction: np.ndarray,
        step: float,
        upper_bound: float,
        initial_dd: float,
    ) -> LineSearchResult:
        ...

    def _trial(
        self, start: ObjectiveFunction, direction: np.ndarray, step: float
    ) -> ObjectiveFunction:
        candidate = start.create_new()
        candidate.evaluate(start.point + step * direction)
        validate_value(candidate)
        validate_gradient(candidate)
        return candidate

    def _relative_width(
        self, direction: np.ndarray, point: np.ndarray, lower: float, upper: float
    ) -> float:
        """Largest change of any coordinate across the bracket, relative to its size."""
        scale = np.maximum(np.abs(point), 1.0)
        return float(np.max(np.abs(direction * (upper - lower)) / scale))

    def _accept(
        self,
        candidate: ObjectiveFunction,
        iterations: int,
        step: float,
        reason: ExitCondition,
    ) -> LineSearchResult:
        logger.debug(
            "%s accepted step %.6g after %d rejected trials (%s)",
            type(self).__name__,
            step,
            iterations,
            reason.value,
        )
        return LineSearchResult(
            function_info_at_minimum=candidate,
            iterations=iterations,
            reason_for_exit=reason,
            final_step=step,
        )


class WeakWolfeLineSearch(LineSearch):
    """Bisection/expansion search on the weak Wolfe conditions."""

    def __init__(
        self,
        c1: float = 1e-4,
        c2: float = 0.9,
        parameter_tolerance: float = 1e-4,
        maximum_iterations: int = 1000,
    ):
        super().__init__(c1, c2, parameter_tolerance, maximum_iterations)

    def _search(
        self,
        start: ObjectiveFunction,
        direction: np.ndarray,
        step: float,
        upper_bound: float,
        initial_dd: float,
    ) -> LineSearchResult:
        lower_bound = 0.0
        initial_value = start.value

        for iteration in range(self.maximum_iterations):
            trial_step = step
            candidate = self._trial(start, direction, trial_step)
            step_dd = float(direction @ candidate.gradient)

            if candidate.value > initial_value + self.c1 * trial_step * initial_dd:
                upper_bound = trial_step
                step = 0.5 * (lower_bound + upper_bound)
            elif step_dd < self.c2 * initial_dd:
                lower_bound = trial_step
                if math.isinf(upper_bound):
                    step = 2.0 * lower_bound
                else:
                    step = 0.5 * (lower_bound + upper_bound)
            else:
                return self._accept(
                    candidate, iteration, trial_step, ExitCondition.WEAK_WOLFE_CRITERIA
                )

            if not math.isinf(upper_bound):
                width = self._relative_width(
                    direction, candidate.point, lower_bound, upper_bound
                )
                if width < self.parameter_tolerance:
                    return self._accept(
                        candidate, iteration, trial_step, ExitCondition.LACK_OF_PROGRESS
                    )

        if math.isinf(upper_bound):
            raise MaximumIterationsError(
                f"Maximum iterations ({self.maximum_iterations}) reached. "
                "Function appears to be unbounded in search direction.",
                self.maximum_iterations,
            )
        raise MaximumIterationsError(
            f"Maximum iterations ({self.maximum_iterations}) reached.",
            self.maximum_iterations,
        )


class StrongWolfeLineSearch(LineSearch):
    """Bracketing and zoom search enforcing the strong Wolfe conditions."""

    def __init__(
        self,
        c1: float = 1e-4,
        c2: float = 0.9,
        parameter_tolerance: float = 1e-8,
        maximum_iterations: int = 100,
    ):
        super().__init__(c1, c2, parameter_tolerance, maximum_iterations)

    def _search(
        self,
        start: ObjectiveFunction,
        direction: np.ndarray,
        step: float,
        upper_bound: float,
        initial_dd: float,
    ) -> LineSearchResult:
        initial_value = start.value
        previous_step, previous = 0.0, start
        trials = 0

        while trials < self.maximum_iterations:
            candidate = self._trial(start, direction, step)
            trials += 1
            if candidate.value > initial_value + self.c1 * step * initial_dd or (
                trials > 1 and candidate.value >= previous.value
            ):
                return self._zoom(
                    start, direction, previous_step, previous, step, initial_dd, trials
                )
            step_dd = float(direction @ candidate.gradient)
            if abs(step_dd) <= -self.c2 * initial_dd:
                return self._accept(
                    candidate, trials - 1, step, ExitCondition.STRONG_WOLFE_CRITERIA
                )
            if step_dd >= 0:
                return self._zoom(
                    start, direction, step, candidate, previous_step, initial_dd, trials
                )
            previous_step, previous = step, candidate
            step = min(2.0 * step, upper_bound)
            if step == previous_step:
                return self._accept(
                    previous, trials - 1, previous_step, ExitCondition.LACK_OF_PROGRESS
                )

        raise MaximumIterationsError(
            f"Maximum iterations ({self.maximum_iterations}) reached.",
            self.maximum_iterations,
        )

    def _zoom(
        self,
        start: ObjectiveFunction,
        direction: np.ndarray,
        lo_step: float,
        lo: ObjectiveFunction,
        hi_step: float,
        initial_dd: float,
        trials: int,
    ) -> LineSearchResult:
        """Shrink ``[lo_step, hi_step]`` until a strong Wolfe step is found."""
        initial_value = start.value
        while trials < self.maximum_iterations:
            step = 0.5 * (lo_step + hi_step)
            candidate = self._trial(start, direction, step)
            trials += 1
            if (
                candidate.value > initial_value + self.c1 * step * initial_dd
                or candidate.value >= lo.value
            ):
                hi_step = step
            else:
                step_dd = float(direction @ candidate.gradient)
                if abs(step_dd) <= -self.c2 * initial_dd:
                    return self._accept(
                        candidate, trials - 1, step, ExitCondition.STRONG_WOLFE_CRITERIA
                    )
                if step_dd * (hi_step - lo_step) >= 0:
                    hi_step = lo_step
                lo_step, lo = step, candidate
            if self._relative_width(direction, lo.point, lo_step, hi_step) < self.parameter_tolerance:
                if lo is start:
                    lo = start.fork()
                return self._accept(lo, trials - 1, lo_step, ExitCondition.LACK_OF_PROGRESS)

        raise MaximumIterationsError(
            f"Maximum iterations ({self.maximum_iterations}) reached.",
            self.maximum_iterations,
        )


__all__ = ["LineSearch", "StrongWolfeLineSearch", "WeakWolfeLineSearch"]
