"""Quadrature engine: node/weight families, evaluation, reference values,
convergence tables and a domain check for the integrand."""

from quadlab.convergence import ConvergenceData, ConvergencePoint, convergence, observed_rate
from quadlab.engine import (
    QuadratureDetailRow,
    QuadratureResult,
    estimate_error,
    evaluate,
    evaluate_many,
)
from quadlab.errors import (
    EvaluationBudgetError,
    ExpressionError,
    InvalidIntervalError,
    OutOfRangeError,
    QuadratureError,
    UnknownMethodError,
)
from quadlab.mapping import check_interval, map_node, map_weight
from quadlab.methods import (
    DEFAULT_SEED,
    MAX_POINTS,
    METHOD_IDS,
    METHOD_TABLE,
    MIN_POINTS,
    Method,
    MethodSpec,
    NodeWeightSet,
    get_nodes_and_weights,
)
from quadlab.reference import reference_value, scipy_reference
from quadlab.validation import DEFAULT_THRESHOLDS, ValidationResult, ValidationThresholds, validate

__version__ = "1.0.0"

__all__ = [
    "ConvergenceData",
    "ConvergencePoint",
    "DEFAULT_SEED",
    "DEFAULT_THRESHOLDS",
    "EvaluationBudgetError",
    "ExpressionError",
    "InvalidIntervalError",
    "MAX_POINTS",
    "METHOD_IDS",
    "METHOD_TABLE",
    "MIN_POINTS",
    "Method",
    "MethodSpec",
    "NodeWeightSet",
    "OutOfRangeError",
    "QuadratureDetailRow",
    "QuadratureError",
    "QuadratureResult",
    "UnknownMethodError",
    "ValidationResult",
    "ValidationThresholds",
    "check_interval",
    "convergence",
    "estimate_error",
    "evaluate",
    "evaluate_many",
    "get_nodes_and_weights",
    "map_node",
    "map_weight",
    "observed_rate",
    "reference_value",
    "scipy_reference",
    "validate",
]
