from __future__ import annotations

import math

from quadlab.errors import InvalidIntervalError


def map_node(xi, a: float, b: float):
    """Affine map of a canonical node from [-1, 1] onto [a, b]. Works on arrays too."""
    return ((b - a) / 2) * xi + (a + b) / 2


def map_weight(w, a: float, b: float):
    return ((b - a) / 2) * w


def check_interval(a: float, b: float) -> None:
    if not (math.isfinite(a) and math.isfinite(b)) or a >= b:
        raise InvalidIntervalError(a, b)
