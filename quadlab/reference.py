# quadlab/reference.py
# Reference value engine
# ------------------------------------------------------------
# - Adaptive Simpson with Richardson correction (ground truth for error tables)
# - Explicit stack, tolerance halved per level, depth capped
# - SciPy quad as an independent cross-check

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from scipy.integrate import quad

from quadlab.engine import ScalarFunction, call_scalar
from quadlab.errors import EvaluationBudgetError
from quadlab.mapping import check_interval

logger = logging.getLogger(__name__)

REFERENCE_TOLERANCE = 1e-14
REFERENCE_MAX_DEPTH = 30
RICHARDSON_DIVISOR = 15.0


def _simpson(fa: float, fm: float, fb: float, width: float) -> float:
    return (width / 6) * (fa + 4 * fm + fb)


def reference_value(
    f: ScalarFunction,
    a: float,
    b: float,
    tol: float = REFERENCE_TOLERANCE,
    max_depth: int = REFERENCE_MAX_DEPTH,
    max_evaluations: Optional[int] = None,
) -> float:
    """Near machine-precision estimate of the integral of ``f`` over ``[a, b]``.

    Each panel is bisected until the two-half Simpson estimate agrees with the
    whole-panel one to ``15 * tol`` (or ``max_depth`` is reached), then the
    Richardson-corrected value ``combined + (combined - whole) / 15`` is kept.
    Halving ``tol`` on every split bounds the accumulated error by the
    initial tolerance.

    ``max_evaluations`` caps the number of calls to ``f``; exceeding it raises
    :class:`EvaluationBudgetError`. The default is unbounded.
    """
    check_interval(a, b)
    evaluations = 0

    def sample(x: float) -> float:
        nonlocal evaluations
        evaluations += 1
        if max_evaluations is not None and evaluations > max_evaluations:
            raise EvaluationBudgetError(max_evaluations)
        return call_scalar(f, x)

    fa = sample(a)
    fb = sample(b)
    m = (a + b) / 2
    fm = sample(m)
    whole = _simpson(fa, fm, fb, b - a)

    # (left, right, f(left), f(mid), f(right), whole estimate, tol, depth)
    stack = [(a, b, fa, fm, fb, whole, tol, 0)]
    pieces = []
    deepest = 0
    while stack:
        lo, hi, flo, fmid, fhi, whole, tol_here, depth = stack.pop()
        mid = (lo + hi) / 2
        fl = sample((lo + mid) / 2)
        fr = sample((mid + hi) / 2)
        left = _simpson(flo, fl, fmid, mid - lo)
        right = _simpson(fmid, fr, fhi, hi - mid)
        combined = left + right
        delta = combined - whole

        # splitting cannot repair a non-finite panel; keep it and let NaN/inf propagate
        if depth >= max_depth or not math.isfinite(delta) or abs(delta) <= RICHARDSON_DIVISOR * tol_here:
            pieces.append(combined + delta / RICHARDSON_DIVISOR)
            deepest = max(deepest, depth)
            continue

        # right pushed first so panels are accepted left to right
        stack.append((mid, hi, fmid, fr, fhi, right, tol_here / 2, depth + 1))
        stack.append((lo, mid, flo, fl, fmid, left, tol_here / 2, depth + 1))

    logger.debug("reference on [%r, %r]: %d panels, depth %d, %d evaluations", a, b, len(pieces), deepest, evaluations)
    return sum(pieces, 0.0)


def scipy_reference(f: ScalarFunction, a: float, b: float, limit: int = 200) -> Tuple[Optional[float], Optional[float]]:
    # cross-check only; any failure means "no second opinion"
    try:
        val, err = quad(lambda t: call_scalar(f, t), a, b, limit=limit)
        return float(val), float(err)
    except Exception:
        logger.debug("scipy quad failed on [%r, %r]", a, b, exc_info=True)
        return None, None
