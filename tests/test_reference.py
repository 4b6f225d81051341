import math

import pytest

from quadlab import EvaluationBudgetError, InvalidIntervalError, reference_value, scipy_reference


def test_reference_square_on_unit_interval() -> None:
    assert abs(reference_value(lambda x: x ** 2, 0.0, 1.0) - 1.0 / 3.0) <= 1e-12


@pytest.mark.parametrize(
    "f, a, b, exact",
    [
        (math.sin, 0.0, math.pi, 2.0),
        (math.exp, 0.0, 1.0, math.e - 1.0),
        (lambda x: 1.0 / (1.0 + x * x), -1.0, 1.0, math.pi / 2),
        (math.cos, -3.0, 5.0, math.sin(5.0) - math.sin(-3.0)),
    ],
)
def test_reference_smooth_functions(f, a, b, exact) -> None:
    assert abs(reference_value(f, a, b) - exact) <= 1e-12


def test_reference_agrees_with_scipy_quad() -> None:
    f = lambda x: math.exp(-x * x)
    val, err = scipy_reference(f, -2.0, 2.0)
    assert val is not None and err is not None
    assert reference_value(f, -2.0, 2.0) == pytest.approx(val, abs=1e-10)


def test_reference_budget() -> None:
    with pytest.raises(EvaluationBudgetError):
        reference_value(math.sin, 0.0, 10.0, max_evaluations=4)
    # generous budget behaves like the unbounded call
    assert reference_value(math.sin, 0.0, math.pi, max_evaluations=1_000_000) == reference_value(math.sin, 0.0, math.pi)


def test_reference_non_finite_does_not_refine_forever() -> None:
    assert math.isnan(reference_value(lambda x: math.nan, 0.0, 1.0))


def test_reference_rejects_bad_interval() -> None:
    with pytest.raises(InvalidIntervalError):
        reference_value(math.sin, 1.0, 0.0)


def test_scipy_reference_failure_returns_none() -> None:
    def boom(x):
        raise RuntimeError("no")

    assert scipy_reference(boom, 0.0, 1.0) == (None, None)
