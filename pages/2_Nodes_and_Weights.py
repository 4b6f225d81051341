import streamlit as st
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from quadlab import DEFAULT_SEED, MAX_POINTS, METHOD_IDS, MIN_POINTS, Method, QuadratureError
from quadlab.methods import chebyshev_polynomial, legendre_polynomial

# IDENTIDADE VISUAL
st.set_page_config(page_title="Quadrature Lab - Nodes & Weights", layout="wide")

# CABECALHO
st.caption("Quadrature Lab")
st.title("Nós e Pesos no Intervalo Canônico [-1, 1]")

st.markdown("### 🏛️ Fundamentação Teórica")

st.write("""
Toda regra de quadratura é um par **(nós, pesos)** definido em $[-1, 1]$.
A integral em $[a, b]$ é obtida pelo mapeamento afim dos nós e pela escala
$(b-a)/2$ dos pesos. Em todas as famílias a soma dos pesos é **2**, o
comprimento do intervalo canônico.
""")

with st.popover("Visualizar de onde vêm os nós"):
    st.write("1. **Gauss-Legendre:** raízes do polinômio de Legendre $P_n$.")
    st.write("2. **Chebyshev:** raízes de $T_n$, agrupadas perto das extremidades.")
    st.write("3. **Equally Spaced:** malha uniforme com pesos do trapézio.")
    st.write("4. **Random:** sorteio com semente, pesos iguais $2/n$.")
    st.latex(r"\int_{-1}^{1} f(\xi) \, d\xi \approx \sum_{i=1}^{n} w_i \, f(\xi_i)")

st.markdown("---")

# SIDEBAR
st.sidebar.header("Parâmetros")
method = st.sidebar.selectbox("Método", list(METHOD_IDS), format_func=lambda m: m.spec.name)
n = st.sidebar.slider("Quantidade de nós (n)", MIN_POINTS, MAX_POINTS, 5)
seed = st.sidebar.number_input("Semente (Random)", min_value=0, value=DEFAULT_SEED, step=1)
show_poly = st.sidebar.checkbox("Mostrar polinômio gerador", value=True)

# MATEMATICA
try:
    nw = method.generate(n, int(seed))
    spec = method.spec

    m1, m2, m3 = st.columns(3)
    with m1:
        st.write("Soma dos pesos")
        st.subheader(f"{np.sum(nw.weights):.12f}")
    with m2:
        st.write("Exata até o grau")
        st.subheader(f"{method.exactness(n)}")
    with m3:
        st.write("Menor peso")
        st.subheader(f"{np.min(nw.weights):.6f}")

    st.markdown(f"**{spec.name}** — {spec.description}")

    # --- Visualização Gráfica ---
    st.markdown("### Visualização Gráfica")

    fig, ax = plt.subplots(figsize=(12, 5))
    fig.patch.set_facecolor('#0e1117')
    ax.set_facecolor('#0e1117')

    markerline, stemlines, baseline = ax.stem(nw.nodes, nw.weights)
    plt.setp(stemlines, color=spec.color, linewidth=2)
    plt.setp(markerline, color=spec.color, markersize=8)
    plt.setp(baseline, color='white', linewidth=1)

    if show_poly and method in (Method.GAUSS_LEGENDRE, Method.CHEBYSHEV):
        xs = np.linspace(-1, 1, 500)
        if method is Method.GAUSS_LEGENDRE:
            ys, label = legendre_polynomial(n, xs), f"$P_{{{n}}}(x)$"
        else:
            ys, label = chebyshev_polynomial(n, xs), f"$T_{{{n}}}(x)$"
        ax.plot(xs, ys, color='#FF4B4B', linewidth=2, label=label)
        ax.legend(facecolor='#0e1117', labelcolor='white')

    ax.axhline(0, color='white', linewidth=1)
    ax.set_xlim(-1.1, 1.1)
    ax.tick_params(colors='white')
    ax.grid(True, linestyle=':', alpha=0.3)

    st.pyplot(fig)

    df = pd.DataFrame({"i": np.arange(1, n + 1), "ξ (nó)": nw.nodes, "w (peso)": nw.weights})
    st.dataframe(df, hide_index=True)

    with st.expander("Propriedades"):
        for prop in spec.properties:
            st.write(f"- {prop}")

except QuadratureError as e:
    st.error(f"Erro: {e}")

st.divider()
st.markdown("<div style='text-align: center; color: gray;'>Quadrature Lab - Numerical Integration Visualizer</div>", unsafe_allow_html=True)
