# quadlab/expressions.py
# SymPy parsing + NumPy lambdify for expressions typed in the UI

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

import numpy as np
import sympy as sp

from quadlab.errors import ExpressionError

X = sp.Symbol("x", real=True)

LOCALS_MAP = {
    "x": X,
    "sin": sp.sin, "cos": sp.cos, "tan": sp.tan,
    "asin": sp.asin, "acos": sp.acos, "atan": sp.atan,
    "sinh": sp.sinh, "cosh": sp.cosh, "tanh": sp.tanh,
    "exp": sp.exp, "log": sp.log, "log10": lambda z: sp.log(z, 10),
    "sqrt": sp.sqrt, "Abs": sp.Abs, "abs": sp.Abs,
    "pi": sp.pi, "E": sp.E, "e": sp.E,
}

EXAMPLE_FUNCTIONS: Dict[str, str] = {
    "x²": "x**2",
    "x³": "x**3",
    "sin(x)": "sin(x)",
    "cos(x)": "cos(x)",
    "eˣ": "exp(x)",
    "e⁻ˣ²": "exp(-x**2)",
    "1/(1+x²)": "1/(1 + x**2)",
    "√(1-x²)": "sqrt(1 - x**2)",
    "sin(x)cos(x)": "sin(x)*cos(x)",
    "x·sin(x)": "x*sin(x)",
}


@dataclass(frozen=True)
class ParsedFunction:
    expr: sp.Expr
    f_num: Callable[[np.ndarray], np.ndarray]

    def __call__(self, x) -> float:
        with np.errstate(all="ignore"):
            y = self.f_num(x)
        if np.iscomplexobj(y):
            return float("nan")
        return float(y)

    def vectorized(self, x: np.ndarray) -> np.ndarray:
        """Evaluate on an array, falling back to a point loop; non-finite values become NaN."""
        with np.errstate(all="ignore"):
            try:
                y = np.broadcast_to(np.asarray(self.f_num(x), dtype=float), np.shape(x)).copy()
            except Exception:
                y = np.array([self(xx) for xx in x], dtype=float)
        y[~np.isfinite(y)] = np.nan
        return y


def parse_function(expr_str: str) -> ParsedFunction:
    if expr_str is None or not expr_str.strip():
        raise ExpressionError("Expression cannot be empty")
    try:
        expr = sp.sympify(expr_str, locals=LOCALS_MAP, convert_xor=True)
    except (sp.SympifyError, SyntaxError, TypeError) as exc:
        raise ExpressionError(f"Failed to parse expression: {exc}") from exc

    if not isinstance(expr, sp.Expr):
        raise ExpressionError(f"Not a real-valued expression: {expr_str!r}")
    unknown = expr.free_symbols - {X}
    if unknown:
        names = ", ".join(sorted(str(s) for s in unknown))
        raise ExpressionError(f"Unknown symbols: {names} (only x is allowed)")

    f_num = sp.lambdify(X, expr, modules=["numpy"])
    return ParsedFunction(expr=expr, f_num=f_num)


def to_latex(expr: sp.Expr) -> str:
    return sp.latex(expr)


def polynomial_degree(expr: sp.Expr) -> Optional[int]:
    if not expr.is_polynomial(X):
        return None
    return int(sp.degree(expr, X)) if expr.has(X) else 0
