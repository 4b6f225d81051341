# quadlab/methods.py
# Quadrature families on the canonical interval [-1, 1]
# ------------------------------------------------------------
# - Gauss-Legendre (tables built once, NumPy leggauss)
# - Equally spaced (composite trapezoid, midpoint for n=1)
# - Chebyshev roots with Fejer first-rule weights
# - Seeded random nodes with equal weights
# - Immutable method table + closed Method enum

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Iterator, Mapping, Optional, Tuple

import numpy as np
from numpy.polynomial import chebyshev as np_chebyshev
from numpy.polynomial import legendre as np_legendre

from quadlab.errors import OutOfRangeError, UnknownMethodError

MIN_POINTS = 1
MAX_POINTS = 10
DEFAULT_SEED = 42

_SEED_MASK = 0xFFFFFFFF


# ----------------------------
# 1) DATA MODEL
# ----------------------------
class Method(str, Enum):
    GAUSS_LEGENDRE = "gaussLegendre"
    EQUALLY_SPACED = "equallySpaced"
    CHEBYSHEV = "chebyshev"
    RANDOM = "random"

    @classmethod
    def coerce(cls, value) -> "Method":
        """Accept a member, its value (``"gaussLegendre"``) or its name (``"GAUSS_LEGENDRE"``)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if value == member.value or value.upper() == member.name:
                    return member
        raise UnknownMethodError(value)

    @property
    def spec(self) -> "MethodSpec":
        return METHOD_TABLE[self]

    def generate(self, n: int, seed: Optional[int] = None) -> "NodeWeightSet":
        return METHOD_TABLE[self].generator(n, seed)

    def exactness(self, n: int) -> int:
        return METHOD_TABLE[self].exactness(_check_points(n))


@dataclass(frozen=True, eq=False)
class NodeWeightSet:
    nodes: np.ndarray
    weights: np.ndarray

    def __post_init__(self) -> None:
        nodes = np.array(self.nodes, dtype=float)
        weights = np.array(self.weights, dtype=float)
        if nodes.ndim != 1 or nodes.shape != weights.shape:
            raise ValueError("nodes and weights must be 1-D sequences of the same length")
        nodes.setflags(write=False)
        weights.setflags(write=False)
        object.__setattr__(self, "nodes", nodes)
        object.__setattr__(self, "weights", weights)

    def __len__(self) -> int:
        return int(self.nodes.size)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return zip(self.nodes.tolist(), self.weights.tolist())


def _check_points(n) -> int:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise OutOfRangeError(n, MIN_POINTS, MAX_POINTS)
    if not MIN_POINTS <= n <= MAX_POINTS:
        raise OutOfRangeError(n, MIN_POINTS, MAX_POINTS)
    return int(n)


# ----------------------------
# 2) GENERATORS
# ----------------------------
def _build_gauss_table() -> Mapping[int, Tuple[np.ndarray, np.ndarray]]:
    table = {}
    for n in range(MIN_POINTS, MAX_POINTS + 1):
        nodes, weights = np_legendre.leggauss(n)
        nodes.setflags(write=False)
        weights.setflags(write=False)
        table[n] = (nodes, weights)
    return MappingProxyType(table)


GAUSS_LEGENDRE_TABLE = _build_gauss_table()


def gauss_legendre(n: int, seed: Optional[int] = None) -> NodeWeightSet:
    # roots of P_n, weights 2 / ((1 - x^2) P'_n(x)^2)
    nodes, weights = GAUSS_LEGENDRE_TABLE[_check_points(n)]
    return NodeWeightSet(nodes, weights)


def equally_spaced(n: int, seed: Optional[int] = None) -> NodeWeightSet:
    n = _check_points(n)
    if n == 1:
        # midpoint rule
        return NodeWeightSet([0.0], [2.0])

    h = 2.0 / (n - 1)
    nodes = np.linspace(-1.0, 1.0, n)
    weights = np.full(n, h)
    weights[0] = weights[-1] = h / 2
    return NodeWeightSet(nodes, weights)


def chebyshev(n: int, seed: Optional[int] = None) -> NodeWeightSet:
    n = _check_points(n)
    k = np.arange(1, n + 1, dtype=float)
    theta = (2 * k - 1) * np.pi / (2 * n)

    acc = np.zeros(n)
    for j in range(1, (n - 1) // 2 + 1):
        acc += np.cos(2 * j * theta) / (4 * j * j - 1)
    weights = (2.0 / n) * (1.0 - 2.0 * acc)

    # cos(theta_k) decreases with k, so ascending nodes pair with reversed weights
    nodes = np.sort(np.cos(theta))
    return NodeWeightSet(nodes, weights[::-1])


def random_nodes(n: int, seed: Optional[int] = None) -> NodeWeightSet:
    n = _check_points(n)
    if seed is None:
        seed = DEFAULT_SEED
    rng = np.random.default_rng(int(seed) & _SEED_MASK)
    nodes = np.sort(-1.0 + 2.0 * rng.random(n))
    return NodeWeightSet(nodes, np.full(n, 2.0 / n))


def get_nodes_and_weights(method, n: int, seed: Optional[int] = None) -> NodeWeightSet:
    return Method.coerce(method).generate(n, seed)


# ----------------------------
# 3) POLYNOMIALS (plots only)
# ----------------------------
def _unit_series(degree: int) -> np.ndarray:
    if degree < 0:
        raise ValueError(f"Polynomial degree must be non-negative, got {degree}")
    coeffs = np.zeros(int(degree) + 1)
    coeffs[-1] = 1.0
    return coeffs


def legendre_polynomial(degree: int, x):
    return np_legendre.legval(x, _unit_series(degree))


def chebyshev_polynomial(degree: int, x):
    return np_chebyshev.chebval(x, _unit_series(degree))


# ----------------------------
# 4) METHOD TABLE
# ----------------------------
@dataclass(frozen=True)
class MethodSpec:
    method: Method
    name: str
    short_name: str
    color: str
    description: str
    properties: Tuple[str, ...]
    generator: Callable[[int, Optional[int]], NodeWeightSet]
    exactness: Callable[[int], int]


METHOD_TABLE: Mapping[Method, MethodSpec] = MappingProxyType({
    Method.GAUSS_LEGENDRE: MethodSpec(
        method=Method.GAUSS_LEGENDRE,
        name="Gauss-Legendre",
        short_name="Gauss-Leg.",
        color="#6366f1",
        description="Optimal polynomial quadrature using roots of Legendre polynomials as nodes.",
        properties=(
            "n points exact for polynomials up to degree 2n-1",
            "Nodes are roots of Legendre polynomial Pn(x)",
            "Weights are positive and sum to 2",
            "Exponential convergence for smooth functions",
        ),
        generator=gauss_legendre,
        exactness=lambda n: 2 * n - 1,
    ),
    Method.EQUALLY_SPACED: MethodSpec(
        method=Method.EQUALLY_SPACED,
        name="Equally Spaced",
        short_name="Equi-Spaced",
        color="#10b981",
        description="Composite trapezoid rule with uniformly distributed nodes.",
        properties=(
            "Exact for linear functions (degree 1)",
            "Error is O(h²) where h is the node spacing",
            "Single point falls back to the midpoint rule",
            "Suffers from Runge phenomenon at high n",
        ),
        generator=equally_spaced,
        exactness=lambda n: 1,
    ),
    Method.CHEBYSHEV: MethodSpec(
        method=Method.CHEBYSHEV,
        name="Chebyshev",
        short_name="Chebyshev",
        color="#f59e0b",
        description="Fejér quadrature on the roots of Chebyshev polynomials of the first kind.",
        properties=(
            "Nodes cluster near endpoints, reducing interpolation error",
            "Avoids Runge phenomenon (unlike equally spaced)",
            "Exact for polynomials up to degree n-1 (n for odd n)",
            "Exponential convergence for analytic functions",
        ),
        generator=chebyshev,
        exactness=lambda n: n if n % 2 == 1 else n - 1,
    ),
    Method.RANDOM: MethodSpec(
        method=Method.RANDOM,
        name="Random",
        short_name="Random",
        color="#ef4444",
        description="Monte Carlo style quadrature with seeded random node placement.",
        properties=(
            "Convergence is O(1/√n) in expectation",
            "Exact only for constants",
            "Useful baseline for comparing structured methods",
            "Seed provides reproducibility; reshuffle for new samples",
        ),
        generator=random_nodes,
        exactness=lambda n: 0,
    ),
})

METHOD_IDS: Tuple[Method, ...] = tuple(METHOD_TABLE)
