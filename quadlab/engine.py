# quadlab/engine.py
# Quadrature evaluator: node set -> mapped nodes -> weighted sum with per-node breakdown

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

import numpy as np
import pandas as pd

from quadlab.mapping import check_interval, map_node, map_weight
from quadlab.methods import MAX_POINTS, Method

logger = logging.getLogger(__name__)

ScalarFunction = Callable[[float], float]

DETAIL_COLUMNS = ["i", "ξ", "x", "w", "W", "f(x)", "W·f(x)"]


@dataclass(frozen=True)
class QuadratureDetailRow:
    index: int
    node: float
    mapped_node: float
    weight: float
    mapped_weight: float
    f_value: float
    contribution: float


@dataclass(frozen=True)
class QuadratureResult:
    method: Method
    n: int
    a: float
    b: float
    integral: float
    details: Tuple[QuadratureDetailRow, ...]

    @property
    def has_invalid_values(self) -> bool:
        return any(not math.isfinite(row.f_value) for row in self.details)

    def to_frame(self) -> pd.DataFrame:
        rows = [
            [r.index, r.node, r.mapped_node, r.weight, r.mapped_weight, r.f_value, r.contribution]
            for r in self.details
        ]
        return pd.DataFrame(rows, columns=DETAIL_COLUMNS)


def call_scalar(f: ScalarFunction, x) -> float:
    # numpy scalars turn 1/0 into inf instead of raising; silence the warning, keep the value
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return float(f(np.float64(x)))


def evaluate(
    method,
    f: ScalarFunction,
    a: float,
    b: float,
    n: int,
    seed: Optional[int] = None,
) -> QuadratureResult:
    """Approximate the integral of ``f`` over ``[a, b]`` with ``n`` points of ``method``.

    Non-finite values of ``f`` are not checked here: they end up in the
    affected rows and in ``integral``. Exceptions raised by ``f`` propagate.
    """
    method = Method.coerce(method)
    check_interval(a, b)
    nodes_weights = method.generate(n, seed)

    mapped_nodes = map_node(nodes_weights.nodes, a, b)
    mapped_weights = map_weight(nodes_weights.weights, a, b)

    integral = 0.0
    details = []
    for i, (xi, wi) in enumerate(nodes_weights):
        x = mapped_nodes[i]
        w = float(mapped_weights[i])
        f_value = call_scalar(f, x)
        contribution = w * f_value
        integral += contribution
        details.append(QuadratureDetailRow(
            index=i + 1,
            node=xi,
            mapped_node=float(x),
            weight=wi,
            mapped_weight=w,
            f_value=f_value,
            contribution=contribution,
        ))

    return QuadratureResult(
        method=method,
        n=len(nodes_weights),
        a=float(a),
        b=float(b),
        integral=integral,
        details=tuple(details),
    )


def evaluate_many(
    methods: Iterable,
    f: ScalarFunction,
    a: float,
    b: float,
    n: int,
    seed: Optional[int] = None,
) -> Dict[Method, QuadratureResult]:
    results: Dict[Method, QuadratureResult] = {}
    for m in methods:
        m = Method.coerce(m)
        if m not in results:
            results[m] = evaluate(m, f, a, b, n, seed=seed)
    return results


def estimate_error(
    method,
    f: ScalarFunction,
    a: float,
    b: float,
    n: int,
    seed: Optional[int] = None,
) -> Optional[float]:
    """|I(n+1) - I(n)|; ``None`` when no larger rule exists."""
    current = evaluate(method, f, a, b, n, seed=seed)
    if n >= MAX_POINTS:
        return None
    finer = evaluate(method, f, a, b, n + 1, seed=seed)
    logger.debug("error estimate %s n=%d: %r vs %r", current.method.value, n, current.integral, finer.integral)
    return abs(finer.integral - current.integral)
