"""
Example: Newton minimization of the Rosenbrock function

Runs the Newton minimizer from the classic starting points, with and
without line-search globalization, and shows how failures are reported.
"""

import numpy as np

from numopt import (
    LazyObjectiveFunction,
    NewtonMinimizer,
    OptimizationError,
    objective_function,
)


def rosen(x):
    return (1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2


def rosen_grad(x):
    return np.array(
        [
            -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
            200 * (x[1] - x[0] ** 2),
        ]
    )


def rosen_hess(x):
    return np.array(
        [
            [1200 * x[0] ** 2 - 400 * x[1] + 2, -400 * x[0]],
            [-400 * x[0], 200.0],
        ]
    )


class LazyRosenbrock(LazyObjectiveFunction):
    """Rosenbrock objective computing each quantity only when read."""

    def __init__(self):
        super().__init__(gradient_supported=True, hessian_supported=True)

    def create_new(self):
        return LazyRosenbrock()

    def _evaluate_value(self, point):
        return rosen(point)

    def _evaluate_gradient(self, point):
        return rosen_grad(point)

    def _evaluate_hessian(self, point):
        return rosen_hess(point)


def example_full_newton_steps():
    """Example: pure Newton steps from an easy starting point."""
    print("=" * 60)
    print("Example 1: Newton steps from (1.2, 1.2)")
    print("=" * 60)

    obj = objective_function(rosen, rosen_grad, rosen_hess)
    result = NewtonMinimizer(1e-5, 1000).find_minimum(obj, np.array([1.2, 1.2]))
    print(f"Minimizing point: {result.minimizing_point}")
    print(f"Iterations: {result.iterations}")
    print(f"Exit condition: {result.reason_for_exit.value}")
    print()


def example_line_search():
    """Example: line-search globalization from harder starting points."""
    print("=" * 60)
    print("Example 2: Newton with line search")
    print("=" * 60)

    minimizer = NewtonMinimizer(1e-5, 1000, use_line_search=True)
    for start in ([-1.2, 1.0], [-0.9, -0.5]):
        result = minimizer.find_minimum(LazyRosenbrock(), np.array(start))
        print(f"Start {start}: minimum at {result.minimizing_point}")
        print(f"  Iterations: {result.iterations}")
        print(f"  Line search trials: {result.total_line_search_iterations}")
        print(
            "  Steps with non-trivial line search: "
            f"{result.iterations_with_non_trivial_line_search}"
        )
    print()


def example_failure_reporting():
    """Example: a budget that is too small raises instead of returning."""
    print("=" * 60)
    print("Example 3: Failure reporting")
    print("=" * 60)

    obj = objective_function(rosen, rosen_grad, rosen_hess)
    try:
        NewtonMinimizer(1e-5, 1).find_minimum(obj, np.array([-1.2, 1.0]))
    except OptimizationError as exc:
        print(f"{exc.kind.value}: {exc}")
    print()


if __name__ == "__main__":
    example_full_newton_steps()
    example_line_search()
    example_failure_reporting()
    print("All examples completed.")
