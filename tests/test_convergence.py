import math

import numpy as np
import pytest

from quadlab import METHOD_IDS, ConvergencePoint, EvaluationBudgetError, Method, convergence, evaluate, observed_rate


def test_gauss_error_drops_for_sine() -> None:
    data = convergence(math.sin, 0.0, math.pi)
    assert data.reference_value == pytest.approx(2.0, abs=1e-12)

    gauss = data.series[Method.GAUSS_LEGENDRE]
    assert [p.n for p in gauss] == list(range(1, 11))
    assert gauss[5].error < gauss[1].error


def test_series_cover_every_method_and_degree() -> None:
    data = convergence(math.exp, 0.0, 1.0, seed=11)
    assert list(data.series) == list(METHOD_IDS)
    for method, points in data.series.items():
        assert len(points) == 10
        for p in points:
            expected = evaluate(method, math.exp, 0.0, 1.0, p.n, seed=11).integral
            assert p.integral == expected
            assert p.error == abs(p.integral - data.reference_value)


def test_methods_order_duplicates_and_string_ids() -> None:
    data = convergence(math.cos, -1.0, 2.0, methods=["chebyshev", Method.GAUSS_LEGENDRE, "chebyshev"])
    assert list(data.series) == [Method.CHEBYSHEV, Method.GAUSS_LEGENDRE]


def test_supplied_reference_is_used() -> None:
    data = convergence(lambda x: x ** 3, 0.0, 1.0, methods=[Method.EQUALLY_SPACED], reference=0.0)
    assert data.reference_value == 0.0
    assert np.allclose(data.errors(Method.EQUALLY_SPACED), [abs(p.integral) for p in data.series[Method.EQUALLY_SPACED]])


def test_thread_pool_matches_sequential() -> None:
    f = lambda x: math.exp(-x * x) * math.cos(3 * x)
    sequential = convergence(f, -1.0, 2.0, seed=9)
    threaded = convergence(f, -1.0, 2.0, seed=9, max_workers=4)
    assert threaded.reference_value == sequential.reference_value
    assert list(threaded.series) == list(sequential.series)
    for method in METHOD_IDS:
        assert threaded.series[method] == sequential.series[method]


def test_seed_only_changes_random_series() -> None:
    first = convergence(math.sin, 0.0, 1.0, seed=1)
    second = convergence(math.sin, 0.0, 1.0, seed=2)
    assert first.series[Method.GAUSS_LEGENDRE] == second.series[Method.GAUSS_LEGENDRE]
    assert first.series[Method.RANDOM] != second.series[Method.RANDOM]


def test_to_frame_long_format() -> None:
    frame = convergence(math.sin, 0.0, 1.0).to_frame()
    assert frame.shape == (40, 4)
    assert set(frame["Method"]) == {m.spec.name for m in METHOD_IDS}


def test_observed_rate() -> None:
    data = convergence(math.exp, 0.0, 1.0, methods=[Method.GAUSS_LEGENDRE, Method.EQUALLY_SPACED])
    gauss_rate = observed_rate(data.series[Method.GAUSS_LEGENDRE])
    trapezoid_rate = observed_rate(data.series[Method.EQUALLY_SPACED])
    assert gauss_rate is not None and gauss_rate < 0
    assert trapezoid_rate is not None and gauss_rate < trapezoid_rate

    assert observed_rate([ConvergencePoint(1, 0.0, 1.0), ConvergencePoint(2, 0.0, math.nan)]) is None


def test_observed_rate_ignores_errors_at_rounding_floor() -> None:
    data = convergence(lambda x: x * x, -1.0, 1.0, methods=[Method.GAUSS_LEGENDRE])
    points = data.series[Method.GAUSS_LEGENDRE]
    assert points[0].error > 0.5
    assert all(p.error < 1e-14 for p in points[1:])

    for rate in (observed_rate(points), observed_rate(points, reference=data.reference_value)):
        assert rate is None or rate < 0


def test_observed_rate_floor_scales_with_reference() -> None:
    points = [ConvergencePoint(n, 1e6, 10.0 ** (-n)) for n in range(1, 11)]
    # floor is 64 * eps * 1e6 ~ 1.4e-8: only n = 1..7 take part in the fit
    assert observed_rate(points, reference=1e6) == pytest.approx(-1.0)
    assert observed_rate(points) == pytest.approx(-1.0)
    assert observed_rate(points[7:], reference=1e6) is None


def test_convergence_forwards_evaluation_budget() -> None:
    with pytest.raises(EvaluationBudgetError):
        convergence(lambda x: 1e6 * math.sin(x), 0.0, math.pi, max_evaluations=1000)

    data = convergence(math.sin, 0.0, math.pi, methods=[Method.GAUSS_LEGENDRE], max_evaluations=2_000_000)
    assert data.reference_value == pytest.approx(2.0, abs=1e-12)
