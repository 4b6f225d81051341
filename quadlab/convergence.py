# quadlab/convergence.py
# Convergence analyzer: every method, every n in 1..10, error against the reference value

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from quadlab.engine import ScalarFunction, evaluate
from quadlab.mapping import check_interval
from quadlab.methods import DEFAULT_SEED, MAX_POINTS, METHOD_IDS, MIN_POINTS, Method
from quadlab.reference import reference_value

logger = logging.getLogger(__name__)

EPS_LOG = 1e-300
ROUNDING_FLOOR_ULPS = 64


@dataclass(frozen=True)
class ConvergencePoint:
    n: int
    integral: float
    error: float


@dataclass(frozen=True)
class ConvergenceData:
    reference_value: float
    series: Mapping[Method, Tuple[ConvergencePoint, ...]]

    def errors(self, method) -> np.ndarray:
        return np.array([p.error for p in self.series[Method.coerce(method)]], dtype=float)

    def to_frame(self) -> pd.DataFrame:
        rows = [
            [m.spec.name, p.n, p.integral, p.error]
            for m, points in self.series.items()
            for p in points
        ]
        return pd.DataFrame(rows, columns=["Method", "n", "Integral", "Abs Error"])


def _series_for(
    method: Method,
    f: ScalarFunction,
    a: float,
    b: float,
    reference: float,
    seed: Optional[int],
) -> Tuple[ConvergencePoint, ...]:
    points = []
    for n in range(MIN_POINTS, MAX_POINTS + 1):
        result = evaluate(method, f, a, b, n, seed=seed)
        points.append(ConvergencePoint(n=n, integral=result.integral, error=abs(result.integral - reference)))
    return tuple(points)


def convergence(
    f: ScalarFunction,
    a: float,
    b: float,
    methods: Iterable = METHOD_IDS,
    seed: Optional[int] = DEFAULT_SEED,
    reference: Optional[float] = None,
    max_workers: Optional[int] = None,
    max_evaluations: Optional[int] = None,
) -> ConvergenceData:
    """Tabulate integral and absolute error for n = 1..10 for each method.

    ``reference`` skips the reference computation when the caller already has
    it. Otherwise ``max_evaluations`` is forwarded to :func:`reference_value`;
    left unbounded, large-magnitude integrands can take hours to reach the
    absolute tolerance, so bound it for untrusted input.

    With ``max_workers > 1`` the per-method series run on a thread pool;
    ``f`` must then be safe to call concurrently.
    """
    check_interval(a, b)
    ordered: List[Method] = []
    for m in methods:
        m = Method.coerce(m)
        if m not in ordered:
            ordered.append(m)

    if reference is None:
        reference = reference_value(f, a, b, max_evaluations=max_evaluations)

    if max_workers is not None and max_workers > 1 and len(ordered) > 1:
        logger.debug("convergence: %d methods on %d workers", len(ordered), max_workers)
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = [pool.submit(_series_for, m, f, a, b, reference, seed) for m in ordered]
            computed = [fut.result() for fut in futures]
    else:
        computed = [_series_for(m, f, a, b, reference, seed) for m in ordered]

    return ConvergenceData(
        reference_value=reference,
        series=MappingProxyType(dict(zip(ordered, computed))),
    )


def observed_rate(
    points: Sequence[ConvergencePoint],
    reference: Optional[float] = None,
) -> Optional[float]:
    """Slope of log10(error) against n: decades of accuracy gained per extra point.

    Errors at or below the rounding floor ``64 * eps * max(|reference|, 1)``
    carry no convergence information and are left out of the fit. Without
    ``reference`` the largest finite ``|integral|`` of the series sets the
    scale. ``None`` if fewer than three points remain.
    """
    ns = np.array([p.n for p in points], dtype=float)
    errs = np.array([p.error for p in points], dtype=float)

    if reference is None:
        integrals = np.array([p.integral for p in points], dtype=float)
        integrals = integrals[np.isfinite(integrals)]
        scale = float(np.max(np.abs(integrals))) if integrals.size else 1.0
    else:
        scale = abs(reference)
    floor = ROUNDING_FLOOR_ULPS * np.finfo(float).eps * max(scale, 1.0)

    mask = np.isfinite(errs) & (errs > floor)
    if mask.sum() < 3:
        return None
    return float(np.polyfit(ns[mask], np.log10(errs[mask]), 1)[0])
