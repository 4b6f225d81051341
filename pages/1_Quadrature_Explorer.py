# pages/1_Quadrature_Explorer.py
# Quadrature Explorer: Gauss-Legendre vs Equally Spaced vs Chebyshev vs Random
# ------------------------------------------------------------
# - SymPy parsing + NumPy lambdify (quadlab.expressions)
# - Domain check gates every computation
# - Per-node breakdown for the active method
# - Adaptive Simpson reference, SciPy quad as second opinion
# - Convergence n = 1..10 for every enabled method

from __future__ import annotations

import time
from typing import Dict, Optional, Tuple

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from quadlab import (
    DEFAULT_SEED,
    MAX_POINTS,
    METHOD_IDS,
    MIN_POINTS,
    ConvergenceData,
    EvaluationBudgetError,
    ExpressionError,
    Method,
    QuadratureResult,
    convergence,
    estimate_error,
    evaluate_many,
    observed_rate,
    reference_value,
    scipy_reference,
    validate,
)
from quadlab.convergence import EPS_LOG
from quadlab.expressions import EXAMPLE_FUNCTIONS, ParsedFunction, parse_function, polynomial_degree, to_latex


# ----------------------------
# 0) PAGE CONFIG (MUST BE FIRST)
# ----------------------------
st.set_page_config(page_title="Quadrature Explorer", layout="wide")

REFERENCE_BUDGET_DEFAULT = 2_000_000


# ----------------------------
# 1) STYLE
# ----------------------------
st.markdown(
    """
<style>
:root {
  --bg: #0e1117;
  --border: rgba(255,255,255,0.08);
  --muted: rgba(229,231,235,0.60);
  --muted2: rgba(229,231,235,0.40);
  --accent: #FF4B4B;
  --accent2: #1E90FF;
}

.main { background-color: var(--bg); }
section[data-testid="stSidebar"] { background-color: #0b1020; border-right: 1px solid var(--border); }
div[data-testid="stMetric"]{
  background: linear-gradient(180deg, rgba(255,255,255,0.045), rgba(255,255,255,0.018));
  border: 1px solid rgba(255,255,255,0.06);
  border-radius: 14px;
  padding: 14px;
}

.hr {
  border: none;
  border-top: 1px solid var(--border);
  margin: 0.75rem 0 1.0rem 0;
}

.small-muted { color: var(--muted); font-size: 0.92rem; }
.badge {
  display:inline-block; padding: 0.18rem 0.55rem; border-radius: 999px;
  background: rgba(255,255,255,0.06); border: 1px solid rgba(255,255,255,0.08);
  color: rgba(229,231,235,0.80); font-size: 0.82rem;
}
.footer { text-align:center; color: var(--muted2); margin-top: 14px; font-size: 0.85rem; }
</style>
""",
    unsafe_allow_html=True,
)


# ----------------------------
# 2) CACHED ENGINE CALLS
# ----------------------------
@st.cache_resource(show_spinner=False)
def cached_parse(expr_str: str) -> ParsedFunction:
    return parse_function(expr_str)


@st.cache_data(show_spinner=False)
def cached_reference(expr_str: str, a: float, b: float, budget: int) -> Tuple[Optional[float], str]:
    parsed = cached_parse(expr_str)
    try:
        return reference_value(parsed, a, b, max_evaluations=budget), "adaptive Simpson"
    except EvaluationBudgetError:
        val, _ = scipy_reference(parsed, a, b)
        return val, "SciPy quad (budget hit)"


@st.cache_data(show_spinner=False)
def cached_scipy(expr_str: str, a: float, b: float) -> Tuple[Optional[float], Optional[float]]:
    return scipy_reference(cached_parse(expr_str), a, b)


@st.cache_data(show_spinner=False)
def build_xcurve(a: float, b: float, points: int = 1400) -> np.ndarray:
    pad = 0.15 * (b - a)
    return np.linspace(a - pad, b + pad, points)


# ----------------------------
# 3) THEORY PANEL
# ----------------------------
def theory_panel():
    st.markdown("## 📘 Mathematical Foundations")
    st.markdown(
        "<span class='badge'>Gauss-Legendre</span> "
        "<span class='badge'>Trapezoid</span> "
        "<span class='badge'>Fejér / Chebyshev</span> "
        "<span class='badge'>Monte Carlo</span>",
        unsafe_allow_html=True,
    )

    with st.expander("Open full theory (nodes, weights, mapping, reference value)", expanded=False):
        st.markdown("Every method approximates the integral by a weighted sum of samples:")
        st.latex(r"\displaystyle \int_a^b f(x)\,dx \approx \sum_{i=1}^{n} W_i\, f(x_i)")

        st.markdown("Nodes and weights are defined on the canonical interval $[-1,1]$ and mapped onto $[a,b]$:")
        st.latex(r"\displaystyle x_i = \frac{b-a}{2}\,\xi_i + \frac{a+b}{2}, \qquad W_i = \frac{b-a}{2}\, w_i")

        st.markdown("""
---

### 1) Gauss-Legendre
Nodes are the roots of the Legendre polynomial $P_n$; weights are
""")
        st.latex(r"\displaystyle w_i = \frac{2}{(1-\xi_i^2)\,[P_n'(\xi_i)]^2}")
        st.markdown("With $n$ points the rule is exact for polynomials up to degree $2n-1$.")

        st.markdown("""
---

### 2) Equally Spaced (composite trapezoid)
Uniform nodes with spacing $h = 2/(n-1)$, weight $h/2$ at the endpoints and $h$ inside.
A single point falls back to the midpoint rule. Exact for linear functions, error $O(h^2)$.

---

### 3) Chebyshev (Fejér's first rule)
""")
        st.latex(r"\displaystyle \xi_k = \cos\theta_k,\quad \theta_k = \frac{(2k-1)\pi}{2n}")
        st.latex(r"\displaystyle w_k = \frac{2}{n}\left[1 - 2\sum_{j=1}^{\lfloor (n-1)/2 \rfloor} \frac{\cos(2j\theta_k)}{4j^2-1}\right]")

        st.markdown("""
---

### 4) Random
Seeded uniform nodes on $[-1,1)$ with equal weights $2/n$. Expected error $O(1/\\sqrt{n})$.

---

### 5) Reference value
Adaptive Simpson with Richardson correction: a panel is accepted when
""")
        st.latex(r"\displaystyle |S_{left} + S_{right} - S_{whole}| \le 15\,\varepsilon, \qquad I \approx S + \frac{S - S_{whole}}{15}")
        st.markdown("with the tolerance halved at every split, starting from $10^{-14}$.")


# ----------------------------
# 4) PLOTS
# ----------------------------
def make_main_plot(parsed: ParsedFunction, a: float, b: float, results: Dict[Method, QuadratureResult], active: Method) -> go.Figure:
    x_curve = build_xcurve(a, b)
    y_curve = parsed.vectorized(x_curve)

    fig = go.Figure()

    mask = (x_curve >= a) & (x_curve <= b)
    fig.add_trace(go.Scatter(
        x=x_curve[mask], y=y_curve[mask],
        fill="tozeroy",
        name="Area (visual)",
        fillcolor="rgba(255, 75, 75, 0.10)",
        line=dict(color="rgba(255,255,255,0)"),
        hoverinfo="skip",
    ))

    fig.add_trace(go.Scatter(
        x=x_curve, y=y_curve,
        mode="lines",
        name="f(x)",
        line=dict(color="#FF4B4B", width=3),
        hovertemplate="x=%{x:.6f}<br>f(x)=%{y:.6f}<extra></extra>",
    ))

    if active in results:
        res = results[active]
        spec = active.spec
        fig.add_trace(go.Bar(
            x=[r.mapped_node for r in res.details],
            y=[r.f_value for r in res.details],
            width=[r.mapped_weight for r in res.details],
            name=f"{spec.short_name} contributions",
            marker=dict(color=spec.color, opacity=0.35, line=dict(color="rgba(255,255,255,0.35)", width=0.5)),
            customdata=[r.contribution for r in res.details],
            hovertemplate="x=%{x:.6f}<br>f(x)=%{y:.6f}<br>W·f(x)=%{customdata:.6f}<extra></extra>",
        ))

    for method, res in results.items():
        spec = method.spec
        weights = np.array([r.mapped_weight for r in res.details], dtype=float)
        sizes = 8 + 16 * weights / max(float(np.max(np.abs(weights))), EPS_LOG)
        fig.add_trace(go.Scatter(
            x=[r.mapped_node for r in res.details],
            y=[r.f_value for r in res.details],
            mode="markers",
            name=spec.name,
            marker=dict(color=spec.color, size=sizes, line=dict(color="white", width=1)),
            customdata=weights,
            hovertemplate="x=%{x:.6f}<br>f(x)=%{y:.6f}<br>W=%{customdata:.6f}<extra></extra>",
        ))

    fig.add_vline(x=a, line_width=1, line_dash="dot", line_color="rgba(229,231,235,0.35)")
    fig.add_vline(x=b, line_width=1, line_dash="dot", line_color="rgba(229,231,235,0.35)")

    fig.update_layout(
        template="plotly_dark",
        hovermode="closest",
        barmode="overlay",
        margin=dict(l=0, r=0, t=50, b=0),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        title=f"f(x) = {parsed.expr}   |   [{a:.6g}, {b:.6g}]",
    )
    fig.update_xaxes(showgrid=True, gridcolor="rgba(255,255,255,0.06)")
    fig.update_yaxes(showgrid=True, gridcolor="rgba(255,255,255,0.06)")
    return fig


def make_convergence_plot(conv: ConvergenceData, current_n: int, log_scale: bool) -> go.Figure:
    fig = go.Figure()
    for method, points in conv.series.items():
        spec = method.spec
        errs = np.maximum(conv.errors(method), EPS_LOG) if log_scale else conv.errors(method)
        fig.add_trace(go.Scatter(
            x=[p.n for p in points], y=errs,
            mode="lines+markers",
            name=spec.name,
            line=dict(color=spec.color, width=2),
            hovertemplate="n=%{x}<br>err=%{y:.3e}<extra></extra>",
        ))

    fig.add_vline(x=current_n, line_width=1, line_dash="dot", line_color="rgba(229,231,235,0.35)")
    fig.update_layout(
        template="plotly_dark",
        margin=dict(l=0, r=0, t=50, b=0),
        title="Absolute Error vs n",
        xaxis_title="n (points)",
        yaxis_title="Absolute Error",
    )
    if log_scale:
        fig.update_layout(yaxis_type="log")
    fig.update_xaxes(showgrid=True, gridcolor="rgba(255,255,255,0.06)", dtick=1)
    fig.update_yaxes(showgrid=True, gridcolor="rgba(255,255,255,0.06)")
    return fig


# ----------------------------
# 5) HEADER
# ----------------------------
st.title("🎯 Quadrature Explorer")
st.caption("Nodes & Weights • Interval Mapping • Convergence n = 1..10")
st.markdown("<div class='hr'></div>", unsafe_allow_html=True)

theory_panel()

st.markdown("<div class='hr'></div>", unsafe_allow_html=True)


# ----------------------------
# 6) SIDEBAR
# ----------------------------
st.sidebar.header("Controls")

if "example" not in st.session_state:
    st.session_state.example = "sin(x)"
if "expr" not in st.session_state:
    st.session_state.expr = EXAMPLE_FUNCTIONS[st.session_state.example]
if "seed" not in st.session_state:
    st.session_state.seed = DEFAULT_SEED


def _apply_example():
    st.session_state.expr = EXAMPLE_FUNCTIONS[st.session_state.example]


def _reshuffle():
    st.session_state.seed = int(np.random.default_rng().integers(1, 101))


st.sidebar.selectbox("Quick examples", list(EXAMPLE_FUNCTIONS.keys()), key="example", on_change=_apply_example)
expr_str = st.sidebar.text_input("f(x) (SymPy syntax, ^ allowed)", key="expr")

colA, colB = st.sidebar.columns(2)
a = colA.number_input("a", value=0.0, format="%.6f")
b = colB.number_input("b", value=float(np.pi), format="%.6f")

if a == b:
    st.error("a and b cannot be equal.")
    st.stop()
if a > b:
    st.sidebar.warning("Swapping bounds because a > b.")
    a, b = b, a

n = st.sidebar.slider("Points (n)", MIN_POINTS, MAX_POINTS, 4)

enabled = st.sidebar.multiselect(
    "Methods",
    list(METHOD_IDS),
    default=list(METHOD_IDS),
    format_func=lambda m: m.spec.name,
)
if not enabled:
    st.sidebar.warning("Enable at least one method.")
    st.stop()

active = st.sidebar.selectbox("Active method (breakdown)", enabled, format_func=lambda m: m.spec.name)

st.sidebar.markdown("---")
colS, colR = st.sidebar.columns([2, 1])
seed = colS.number_input("Random seed", min_value=0, step=1, key="seed")
colR.button("🎲", on_click=_reshuffle, help="Reshuffle random nodes")

budget = st.sidebar.number_input("Reference budget (f evaluations)", min_value=1000, value=REFERENCE_BUDGET_DEFAULT, step=100_000)
log_scale = st.sidebar.checkbox("Log error axis", value=True)

st.sidebar.markdown("---")
st.sidebar.caption("Note: the domain check is a heuristic; thin singularities can slip between samples.")


# ----------------------------
# 7) PARSE + DOMAIN CHECK
# ----------------------------
try:
    parsed = cached_parse(expr_str)
except ExpressionError as e:
    st.error(f"Invalid function. {e}")
    st.stop()

check = validate(parsed, a, b)
if not check.valid:
    st.error(check.message)
    st.stop()


# ----------------------------
# 8) COMPUTE
# ----------------------------
t0 = time.time()
results = evaluate_many(enabled, parsed, a, b, n, seed=int(seed))
t_eval = time.time() - t0

ref_val, ref_source = cached_reference(expr_str, a, b, int(budget))
quad_val, quad_err = cached_scipy(expr_str, a, b)

deg = polynomial_degree(parsed.expr)

rows = []
for method, res in results.items():
    err = abs(res.integral - ref_val) if ref_val is not None else np.nan
    est = estimate_error(method, parsed, a, b, n, seed=int(seed))
    rows.append([method.spec.name, res.integral, err, est if est is not None else np.nan, method.exactness(n)])

df = pd.DataFrame(rows, columns=["Method", "Approximation", "Abs Error (vs reference)", "|I(n+1) - I(n)|", "Exact to degree"])
df_sorted = df.sort_values(by=["Abs Error (vs reference)"], ascending=True, na_position="last")

active_res = results[active]


# ----------------------------
# 9) STATUS STRIP (METRICS)
# ----------------------------
m1, m2, m3, m4, m5 = st.columns([1.2, 1.1, 1.1, 1.0, 1.0])

m1.metric(f"{active.spec.name}", f"{active_res.integral:.10f}", f"n = {n}")
if ref_val is not None:
    m2.metric("Reference", f"{ref_val:.10f}", ref_source)
    m3.metric("Abs Error", f"{abs(ref_val - active_res.integral):.6e}", delta_color="inverse")
else:
    m2.metric("Reference", "n/a", "reference unavailable")
    m3.metric("Abs Error", "n/a", "—")
if quad_val is not None:
    m4.metric("SciPy quad", f"{quad_val:.10f}", f"± {quad_err:.2e}")
else:
    m4.metric("SciPy quad", "n/a", "quad failed")
m5.metric("Evaluation", f"{t_eval * 1000:.2f} ms", f"{len(results)} methods")

st.latex(r"f(x) = " + to_latex(parsed.expr))

if deg is not None and deg <= active.exactness(n):
    st.success(f"f is a polynomial of degree {deg}: {active.spec.name} with n = {n} is exact (up to rounding).")

for method, res in results.items():
    if res.has_invalid_values:
        st.warning(f"{method.spec.name}: function is undefined or infinite at some quadrature nodes.")

st.markdown("<div class='small-muted'>Method comparison (computed at the current n):</div>", unsafe_allow_html=True)
st.dataframe(df_sorted, hide_index=True)

st.markdown("<div class='hr'></div>", unsafe_allow_html=True)


# ----------------------------
# 10) TABS
# ----------------------------
tab_engine, tab_nodes, tab_diag = st.tabs(["Engine View", "Node Breakdown", "Convergence"])

with tab_engine:
    st.plotly_chart(make_main_plot(parsed, a, b, results, active))

with tab_nodes:
    spec = active.spec
    st.markdown(f"**{spec.name}** — {spec.description}")
    for prop in spec.properties:
        st.markdown(f"- {prop}")
    st.dataframe(active_res.to_frame(), hide_index=True)
    st.caption(f"Σ W·f(x) = {active_res.integral:.12g}")

with tab_diag:
    if ref_val is None:
        st.info("Convergence diagnostics requires a reference value. Try a smoother function or a different interval.")
    else:
        t0c = time.time()
        conv = convergence(parsed, a, b, enabled, seed=int(seed), reference=ref_val)
        t1c = time.time()

        st.plotly_chart(make_convergence_plot(conv, n, log_scale))

        cols = st.columns(len(conv.series))
        for col, (method, points) in zip(cols, conv.series.items()):
            rate = observed_rate(points, reference=conv.reference_value)
            col.metric(
                method.spec.name,
                f"{rate:.2f}" if rate is not None else "n/a",
                "decades / point (log10 err slope)",
                delta_color="off",
            )

        st.caption(f"Diagnostics runtime: {(t1c - t0c):.3f}s")
        wide = conv.to_frame().pivot(index="n", columns="Method", values="Abs Error")
        st.markdown("<div class='small-muted'>Raw convergence samples:</div>", unsafe_allow_html=True)
        st.dataframe(wide)


# ----------------------------
# 11) FOOTER
# ----------------------------
st.markdown("<div class='footer'>Quadrature Lab • Numerical Integration Visualizer</div>", unsafe_allow_html=True)
