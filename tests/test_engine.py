import math

import numpy as np
import pytest

from quadlab import (
    InvalidIntervalError,
    Method,
    OutOfRangeError,
    UnknownMethodError,
    estimate_error,
    evaluate,
    evaluate_many,
    map_node,
    map_weight,
)


def test_map_node_and_weight_endpoints() -> None:
    assert map_node(-1.0, 2.0, 6.0) == 2.0
    assert map_node(1.0, 2.0, 6.0) == 6.0
    assert map_node(0.0, 2.0, 6.0) == 4.0
    assert map_weight(2.0, 2.0, 6.0) == 4.0
    assert np.allclose(map_node(np.array([-1.0, 0.5]), 0.0, 1.0), [0.0, 0.75])


def test_gauss_legendre_exact_for_quartic_with_three_points() -> None:
    res = evaluate(Method.GAUSS_LEGENDRE, lambda x: x ** 4, -1.0, 1.0, 3)
    assert abs(res.integral - 0.4) <= 1e-10


@pytest.mark.parametrize("n", range(1, 11))
def test_equally_spaced_exact_for_linear(n) -> None:
    res = evaluate(Method.EQUALLY_SPACED, lambda x: x, 0.0, 2.0, n)
    assert abs(res.integral - 2.0) <= 1e-9

    shifted = evaluate(Method.EQUALLY_SPACED, lambda x: 3 * x - 1, -2.5, 4.0, n)
    assert abs(shifted.integral - (1.5 * (4.0 ** 2 - 2.5 ** 2) - 6.5)) <= 1e-9


def test_square_on_symmetric_interval() -> None:
    f = lambda x: x ** 2
    gauss = evaluate("gaussLegendre", f, -1.0, 1.0, 2)
    trapezoid = evaluate("equallySpaced", f, -1.0, 1.0, 2)

    assert abs(gauss.integral - 2.0 / 3.0) <= 1e-14
    assert abs(trapezoid.integral - 2.0) <= 1e-14
    assert trapezoid.integral == pytest.approx((1.0 - -1.0) / 2 * (f(-1.0) + f(1.0)))


def test_detail_rows_describe_the_sum() -> None:
    a, b, n = 0.5, 3.0, 5
    res = evaluate(Method.CHEBYSHEV, math.exp, a, b, n)

    assert res.method is Method.CHEBYSHEV
    assert res.n == n and len(res.details) == n
    assert [r.index for r in res.details] == list(range(1, n + 1))
    for row in res.details:
        assert row.mapped_node == pytest.approx((b - a) / 2 * row.node + (a + b) / 2)
        assert row.mapped_weight == pytest.approx((b - a) / 2 * row.weight)
        assert row.f_value == pytest.approx(math.exp(row.mapped_node))
        assert row.contribution == pytest.approx(row.mapped_weight * row.f_value)
        assert a <= row.mapped_node <= b

    assert res.integral == pytest.approx(math.fsum(r.contribution for r in res.details))
    assert sum(r.mapped_weight for r in res.details) == pytest.approx(b - a)
    assert not res.has_invalid_values


def test_detail_rows_are_frozen() -> None:
    res = evaluate(Method.GAUSS_LEGENDRE, math.sin, 0.0, 1.0, 2)
    with pytest.raises(AttributeError):
        res.details[0].f_value = 0.0


def test_non_finite_values_propagate() -> None:
    # middle Gauss node lands exactly on the pole
    res = evaluate(Method.GAUSS_LEGENDRE, lambda x: 1 / x, -1.0, 1.0, 3)
    assert res.has_invalid_values
    assert not math.isfinite(res.integral)
    assert math.isinf(res.details[1].f_value)


def test_exceptions_from_function_propagate() -> None:
    def boom(x):
        raise RuntimeError("no")

    with pytest.raises(RuntimeError):
        evaluate(Method.EQUALLY_SPACED, boom, 0.0, 1.0, 3)


def test_interval_checked_before_degree() -> None:
    with pytest.raises(InvalidIntervalError):
        evaluate(Method.GAUSS_LEGENDRE, math.sin, 1.0, 1.0, 3)
    with pytest.raises(InvalidIntervalError):
        evaluate(Method.GAUSS_LEGENDRE, math.sin, 2.0, 1.0, 99)
    with pytest.raises(InvalidIntervalError):
        evaluate(Method.GAUSS_LEGENDRE, math.sin, 0.0, math.inf, 3)
    with pytest.raises(OutOfRangeError):
        evaluate(Method.GAUSS_LEGENDRE, math.sin, 0.0, 1.0, 11)
    with pytest.raises(UnknownMethodError):
        evaluate("romberg", math.sin, 0.0, 1.0, 3)


def test_random_seed_defaults_to_42() -> None:
    default = evaluate(Method.RANDOM, math.cos, 0.0, 2.0, 6)
    seeded = evaluate(Method.RANDOM, math.cos, 0.0, 2.0, 6, seed=42)
    other = evaluate(Method.RANDOM, math.cos, 0.0, 2.0, 6, seed=5)
    assert default.integral == seeded.integral
    assert default.integral != other.integral


def test_evaluate_many_keeps_order_and_drops_duplicates() -> None:
    results = evaluate_many(["random", Method.GAUSS_LEGENDRE, "random"], math.sin, 0.0, math.pi, 4, seed=3)
    assert list(results) == [Method.RANDOM, Method.GAUSS_LEGENDRE]
    assert results[Method.RANDOM].integral == evaluate(Method.RANDOM, math.sin, 0.0, math.pi, 4, seed=3).integral


def test_estimate_error() -> None:
    # both 2 and 3 Gauss points integrate x^2 exactly
    assert estimate_error(Method.GAUSS_LEGENDRE, lambda x: x ** 2, -1.0, 1.0, 2) == pytest.approx(0.0, abs=1e-14)
    assert estimate_error(Method.EQUALLY_SPACED, math.exp, 0.0, 1.0, 3) > 0.0
    assert estimate_error(Method.CHEBYSHEV, math.exp, 0.0, 1.0, 10) is None


def test_to_frame() -> None:
    frame = evaluate(Method.EQUALLY_SPACED, math.sin, 0.0, 1.0, 4).to_frame()
    assert frame.shape == (4, 7)
    assert frame["i"].tolist() == [1, 2, 3, 4]
    assert frame["W·f(x)"].sum() == pytest.approx(evaluate(Method.EQUALLY_SPACED, math.sin, 0.0, 1.0, 4).integral)
