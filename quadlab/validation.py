# quadlab/validation.py
# Domain validator: sample f on [a, b] and refuse intervals where the integral
# is unlikely to exist. Heuristic only: thin singularities between samples can
# slip through, and large-but-finite functions can be rejected.

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from quadlab.engine import ScalarFunction, call_scalar
from quadlab.mapping import check_interval

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationThresholds:
    sample_intervals: int = 200      # 201 evenly spaced samples
    max_nan_fraction: float = 0.1
    pole_magnitude: float = 50.0     # opposite-sign neighbours above this straddle a pole
    ratio_floor: float = 1.0         # ratio test only between samples above this magnitude
    max_neighbour_ratio: float = 1e6
    boundary_offset: float = 1e-10   # relative to b - a


DEFAULT_THRESHOLDS = ValidationThresholds()


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: Optional[str] = None


def _safe_sample(f: ScalarFunction, x) -> float:
    try:
        return call_scalar(f, x)
    except Exception:
        return math.nan


def _reject(message: str) -> ValidationResult:
    logger.debug("validation failed: %s", message)
    return ValidationResult(valid=False, message=message)


def validate(
    f: ScalarFunction,
    a: float,
    b: float,
    thresholds: ValidationThresholds = DEFAULT_THRESHOLDS,
) -> ValidationResult:
    check_interval(a, b)
    span = f"[{a:.2f}, {b:.2f}]"
    t = thresholds

    steps = t.sample_intervals
    xs = a + (b - a) * np.arange(steps + 1, dtype=float) / steps
    values: List[float] = [_safe_sample(f, x) for x in xs]

    nan_count = sum(1 for y in values if math.isnan(y))
    inf_count = sum(1 for y in values if math.isinf(y))

    if nan_count / len(values) > t.max_nan_fraction:
        return _reject(
            f"Function is undefined on a large portion of {span}. "
            "Adjust the interval to the function's domain."
        )

    if inf_count > 0:
        return _reject(
            f"Function has asymptotes or singularities on {span}. "
            "The integral may not exist on this interval."
        )

    # poles that fall between samples show up as huge or sign-flipping neighbours
    for prev, curr in zip(values, values[1:]):
        if not (math.isfinite(prev) and math.isfinite(curr)):
            continue

        abs_prev, abs_curr = abs(prev), abs(curr)
        if prev * curr < 0 and abs_prev > t.pole_magnitude and abs_curr > t.pole_magnitude:
            return _reject(
                f"Function appears to have an asymptote on {span}. "
                "The integral may not exist on this interval."
            )

        if abs_prev > t.ratio_floor and abs_curr > t.ratio_floor:
            ratio = max(abs_prev, abs_curr) / min(abs_prev, abs_curr)
            if ratio > t.max_neighbour_ratio:
                return _reject(
                    f"Function has a singularity or asymptote on {span}. "
                    "The integral may not exist on this interval."
                )

    eps = (b - a) * t.boundary_offset
    for x in (a, a + eps, b - eps, b):
        try:
            y = call_scalar(f, x)
        except Exception:
            return _reject(f"Function cannot be evaluated at the boundary of {span}.")
        if not math.isfinite(y):
            return _reject(
                f"Function is undefined or infinite at the boundary of {span}. "
                "The integral may not converge."
            )

    return ValidationResult(valid=True)
