import streamlit as st

from quadlab import METHOD_IDS, __version__

# ------------------------------------------------------------
# 1) CONFIGURAÇÃO DA PÁGINA
# ------------------------------------------------------------
st.set_page_config(
    page_title="Quadrature Lab",
    page_icon="🎯",
    layout="wide"
)

# ------------------------------------------------------------
# 2) ESTILO (CSS)
# ------------------------------------------------------------
st.markdown(
    """
<style>
:root {
  --bg: #0e1117;
  --border: rgba(255,255,255,0.1);
  --muted: rgba(229,231,235,0.70);
  --muted2: rgba(229,231,235,0.40);
  --accent: #FF4B4B;
  --accent2: #1E90FF;
}

.stApp { background-color: var(--bg); }

.hero-section {
    padding: 4rem 2rem;
    background: radial-gradient(circle at top left, rgba(255,75,75,0.1), transparent),
                radial-gradient(circle at bottom right, rgba(30,144,255,0.1), transparent);
    border-radius: 24px;
    border: 1px solid var(--border);
    margin-bottom: 3rem;
    text-align: center;
}

.title-text {
    font-size: 4rem;
    font-weight: 800;
    letter-spacing: -2px;
    margin-bottom: 0.5rem;
    color: #FFFFFF;
}

.feature-card {
    background: rgba(255,255,255,0.03);
    border: 1px solid var(--border);
    border-radius: 16px;
    padding: 24px;
    height: 100%;
    transition: all 0.3s cubic-bezier(0.4, 0, 0.2, 1);
}

.feature-card:hover {
    border-color: var(--accent);
    transform: translateY(-8px);
    background: rgba(255,255,255,0.05);
    box-shadow: 0 10px 30px rgba(0,0,0,0.4);
}

.card-icon { font-size: 2rem; margin-bottom: 15px; }
.card-title { color: #FFFFFF; font-size: 1.3rem; font-weight: 700; margin-bottom: 12px; }

.info-box {
    background: rgba(30,144,255,0.05);
    border-left: 4px solid var(--accent2);
    padding: 20px;
    border-radius: 0 12px 12px 0;
}

.hr {
    border: none;
    border-top: 1px solid var(--border);
    margin: 3rem 0;
}

.footer {
    text-align: center;
    color: var(--muted2);
    margin-top: 5rem;
    padding-bottom: 3rem;
    font-size: 0.9rem;
}

code { color: var(--accent) !important; }
.badge {
    display: inline-block;
    padding: 2px 10px;
    border-radius: 5px;
    background: rgba(255,255,255,0.1);
    font-size: 0.75rem;
    margin-bottom: 10px;
}
</style>
""",
    unsafe_allow_html=True,
)

# ------------------------------------------------------------
# 3) HERO SECTION
# ------------------------------------------------------------
st.markdown(
    f"""
    <div class="hero-section">
        <div class="badge">ENGINE v{__version__}</div>
        <h1 class="title-text">QUADRATURE LAB</h1>
        <p style="color: var(--muted); font-size: 1.3rem; max-width: 800px; margin: 0 auto; line-height: 1.6;">
            Compare regras de quadratura com 1 a 10 nós: onde cada método coloca
            seus pontos, quanto pesa cada amostra e com que velocidade o erro cai.
        </p>
    </div>
    """,
    unsafe_allow_html=True,
)

# ------------------------------------------------------------
# 4) GRID DE FUNCIONALIDADES
# ------------------------------------------------------------
st.markdown("### 🛠️ Módulos")
c1, c2, c3 = st.columns(3)

with c1:
    st.markdown(
        f"""
        <div class="feature-card">
            <div class="card-icon">📐</div>
            <div class="card-title">Famílias de Quadratura</div>
            <p style="color: var(--muted); font-size: 0.95rem;">
                {", ".join(m.spec.name for m in METHOD_IDS)}. Nós e pesos no intervalo
                canônico, mapeados para [a, b] com detalhamento por nó.
            </p>
        </div>
        """, unsafe_allow_html=True
    )

with c2:
    st.markdown(
        """
        <div class="feature-card">
            <div class="card-icon">📉</div>
            <div class="card-title">Análise de Convergência</div>
            <p style="color: var(--muted); font-size: 0.95rem;">
                Erro absoluto para n = 1..10 contra um valor de referência
                (Simpson adaptativo com extrapolação de Richardson).
            </p>
        </div>
        """, unsafe_allow_html=True
    )

with c3:
    st.markdown(
        """
        <div class="feature-card">
            <div class="card-icon">🧬</div>
            <div class="card-title">Verificação de Domínio</div>
            <p style="color: var(--muted); font-size: 0.95rem;">
                Amostragem da função antes de integrar: NaN, assíntotas e
                singularidades na fronteira bloqueiam o cálculo.
            </p>
        </div>
        """, unsafe_allow_html=True
    )

st.markdown("<div class='hr'></div>", unsafe_allow_html=True)

# ------------------------------------------------------------
# 5) SINTAXE
# ------------------------------------------------------------
col_about, col_syntax = st.columns([1, 1], gap="large")

with col_about:
    st.markdown("### 🔍 Sobre o Projeto")
    st.write(
        """
        O **Quadrature Lab** mostra por que a escolha dos nós importa: com os
        mesmos n pontos, Gauss-Legendre integra polinômios de grau 2n-1 exatamente,
        enquanto nós aleatórios convergem devagar.
        """
    )
    st.markdown(
        """
        <div class="info-box">
            <strong>Aviso de Rigor:</strong> a verificação de domínio é heurística.
            Singularidades muito estreitas podem escapar da amostragem, e funções
            grandes porém finitas podem ser rejeitadas.
        </div>
        """, unsafe_allow_html=True
    )

with col_syntax:
    st.markdown("### ⌨️ Guia de Sintaxe (SymPy)")
    st.markdown("As funções são interpretadas pelo SymPy:")
    st.code("""
# Potência: x**2 ou x^2
# Constantes: pi, e, E
# Funções: exp(x), log(x), log10(x), sin(x), cos(x), atan(x)
# Raiz Quadrada: sqrt(x)
# Valor Absoluto: abs(x) ou Abs(x)
    """, language="python")

# ------------------------------------------------------------
# 6) RODAPÉ
# ------------------------------------------------------------
st.markdown(
    f"""
    <div class='footer'>
        <strong>Quadrature Lab v{__version__}</strong> — Numerical Integration Visualizer
    </div>
    """,
    unsafe_allow_html=True
)

st.sidebar.title("Navegação")
st.sidebar.info("Acesse os módulos através do menu acima para iniciar as análises.")
