from __future__ import annotations


class QuadratureError(ValueError):
    """Base class for every error raised by the quadrature engine."""


class OutOfRangeError(QuadratureError):
    def __init__(self, n, low: int = 1, high: int = 10):
        self.n = n
        super().__init__(f"Degree must be between {low} and {high}, got {n}")


class InvalidIntervalError(QuadratureError):
    def __init__(self, a, b):
        self.a = a
        self.b = b
        super().__init__(f"Lower bound must be less than upper bound, got [{a}, {b}]")


class UnknownMethodError(QuadratureError):
    def __init__(self, method):
        self.method = method
        super().__init__(f"Unknown quadrature method: {method!r}")


class EvaluationBudgetError(QuadratureError):
    def __init__(self, budget: int):
        self.budget = budget
        super().__init__(f"Reference integration exceeded {budget} function evaluations")


class ExpressionError(QuadratureError):
    pass
