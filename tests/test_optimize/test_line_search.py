import numpy as np
import pytest

from numopt.optimize import (
    EvaluationError,
    ExitCondition,
    MaximumIterationsError,
    StrongWolfeLineSearch,
    WeakWolfeLineSearch,
    objective_function,
)


def quadratic(point) -> "object":
    obj = objective_function(lambda x: float(x @ x), lambda x: 2 * x)
    obj.evaluate(np.asarray(point, dtype=float))
    return obj


def rosen(x: np.ndarray) -> float:
    return (1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2


def rosen_grad(x: np.ndarray) -> np.ndarray:
    return np.array(
        [
            -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
            200 * (x[1] - x[0] ** 2),
        ]
    )


def test_weak_wolfe_accepts_unit_step_without_trials():
    start = quadratic([1.0, -2.0])
    res = WeakWolfeLineSearch().find_conforming_step(start, -start.point, 1.0)
    assert res.iterations == 0
    assert res.final_step == 1.0
    assert res.reason_for_exit is ExitCondition.WEAK_WOLFE_CRITERIA
    assert np.allclose(res.minimizing_point, np.zeros(2))


def test_weak_wolfe_bisects_on_insufficient_decrease():
    start = quadratic([1.0, -2.0])
    res = WeakWolfeLineSearch().find_conforming_step(start, -start.gradient, 1.0)
    assert res.iterations == 1
    assert res.final_step == 0.5
    assert res.reason_for_exit is ExitCondition.WEAK_WOLFE_CRITERIA
    assert res.function_info_at_minimum.value == pytest.approx(0.0)


def test_weak_wolfe_expands_short_steps():
    start = quadratic([1.0, -2.0])
    res = WeakWolfeLineSearch().find_conforming_step(start, -0.01 * start.point, 1.0)
    assert res.iterations == 4
    assert res.final_step == 16.0
    assert np.allclose(res.minimizing_point, 0.84 * start.point)


def test_line_search_leaves_start_untouched():
    start = quadratic([1.0, -2.0])
    WeakWolfeLineSearch().find_conforming_step(start, -start.gradient, 1.0)
    StrongWolfeLineSearch().find_conforming_step(start, -start.gradient, 1.0)
    assert np.array_equal(start.point, np.array([1.0, -2.0]))
    assert start.value == 5.0


def test_weak_wolfe_unbounded_direction_raises():
    obj = objective_function(lambda x: -float(x[0]), lambda x: np.array([-1.0, 0.0]))
    obj.evaluate(np.zeros(2))
    search = WeakWolfeLineSearch(maximum_iterations=20)
    with pytest.raises(MaximumIterationsError, match="unbounded") as info:
        search.find_conforming_step(obj, np.array([1.0, 0.0]), 1.0)
    assert info.value.iterations == 20


def test_non_descent_direction_raises():
    start = quadratic([1.0, -2.0])
    with pytest.raises(ValueError, match="descent direction"):
        WeakWolfeLineSearch().find_conforming_step(start, start.gradient, 1.0)
    with pytest.raises(ValueError, match="descent direction"):
        StrongWolfeLineSearch().find_conforming_step(start, start.gradient, 1.0)


def test_direction_shape_mismatch_raises():
    start = quadratic([1.0, -2.0])
    with pytest.raises(ValueError, match="shape"):
        WeakWolfeLineSearch().find_conforming_step(start, np.array([-1.0]), 1.0)


def test_non_finite_trial_value_raises():
    obj = objective_function(
        lambda x: float(x @ x) if abs(x[0]) <= 1.0 else np.nan,
        lambda x: 2 * x,
    )
    obj.evaluate(np.array([1.0, 0.0]))
    with pytest.raises(EvaluationError, match="Non-finite objective") as info:
        WeakWolfeLineSearch().find_conforming_step(obj, np.array([-4.0, 0.0]), 1.0)
    assert np.array_equal(info.value.evaluation.point, np.array([-3.0, 0.0]))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"c1": 0.9, "c2": 0.5},
        {"c1": 0.0},
        {"c2": 1.0},
        {"parameter_tolerance": 0.0},
        {"maximum_iterations": 0},
    ],
)
def test_invalid_parameters_raise(kwargs):
    with pytest.raises(ValueError):
        WeakWolfeLineSearch(**kwargs)


def test_strong_wolfe_conditions_rosenbrock():
    obj = objective_function(rosen, rosen_grad)
    obj.evaluate(np.array([-1.2, 1.0]))
    grad = obj.gradient
    direction = -grad
    res = StrongWolfeLineSearch().find_conforming_step(obj, direction, 1.0)
    alpha = res.final_step
    x_new = res.minimizing_point
    assert res.reason_for_exit is ExitCondition.STRONG_WOLFE_CRITERIA
    assert np.allclose(x_new, obj.point + alpha * direction)
    assert rosen(x_new) <= rosen(obj.point) + 1e-4 * alpha * (grad @ direction)
    assert abs(rosen_grad(x_new) @ direction) <= 0.9 * abs(grad @ direction)


def test_strong_wolfe_zoom_phase_triggered():
    obj = objective_function(rosen, rosen_grad)
    obj.evaluate(np.array([-1.2, 1.0]))
    res = StrongWolfeLineSearch().find_conforming_step(obj, -obj.gradient, 5.0)
    assert res.final_step < 1.0
    assert res.iterations > 0


def test_strong_wolfe_exact_step_needs_no_trials():
    start = quadratic([3.0, 4.0])
    res = StrongWolfeLineSearch().find_conforming_step(start, -start.point, 1.0)
    assert res.iterations == 0
    assert res.reason_for_exit is ExitCondition.STRONG_WOLFE_CRITERIA
    assert np.allclose(res.minimizing_point, np.zeros(2))


def test_weak_wolfe_stops_when_bracket_is_too_narrow():
    start = quadratic([1.0, -2.0])
    search = WeakWolfeLineSearch(parameter_tolerance=3.0)
    res = search.find_conforming_step(start, -start.gradient, 1.0)
    assert res.reason_for_exit is ExitCondition.LACK_OF_PROGRESS
    assert res.iterations == 0
    assert res.final_step == 1.0
    assert np.allclose(res.minimizing_point, [-1.0, 2.0])


def test_strong_wolfe_zoom_without_progress_returns_copy_of_start():
    start = quadratic([1.0, -2.0])
    search = StrongWolfeLineSearch(parameter_tolerance=3.0)
    res = search.find_conforming_step(start, -start.gradient, 2.0)
    assert res.reason_for_exit is ExitCondition.LACK_OF_PROGRESS
    assert res.iterations == 1
    assert res.final_step == 0.0
    assert np.array_equal(res.minimizing_point, start.point)
    assert res.function_info_at_minimum is not start
    assert res.function_info_at_minimum.value == start.value
