"""
app.py — Bet Tracker Streamlit Entry Point

Multi-page navigation via st.navigation() (Streamlit 1.36+).
Two sections, each with Input / Analytics / History tabs:
- Sports Betting
- Day Trading

Design principles:
- Dark terminal aesthetic: #0e1117 bg, amber accent (#f59e0b)
- st.html() for custom cards (not st.markdown — style tags sandboxed)
- Inline styles only — Streamlit strips <style> blocks in components
- No rainbow metrics — single accent color hierarchy

Run: streamlit run app.py
"""

import logging
import sys
from pathlib import Path

import streamlit as st

# ---------------------------------------------------------------------------
# Path setup — allow 'from core.xxx import' regardless of cwd
# ---------------------------------------------------------------------------
ROOT = Path(__file__).parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# ---------------------------------------------------------------------------
# Logging setup — write to logs/error.log
# ---------------------------------------------------------------------------
LOG_DIR = ROOT / "logs"
LOG_DIR.mkdir(exist_ok=True)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    handlers=[
        logging.FileHandler(LOG_DIR / "error.log"),
        logging.StreamHandler(),
    ],
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Page config — must be first Streamlit call
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Bet Tracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
    menu_items={
        "Get Help": None,
        "Report a bug": None,
        "About": "Bet Tracker — Personal sports betting & day trading log",
    },
)

# ---------------------------------------------------------------------------
# Global CSS injection — minimal, purposeful
# Only things that CANNOT be done with inline styles go here.
# ---------------------------------------------------------------------------
st.markdown(
    """
    <style>
    [data-testid="stSidebar"] {
        background-color: #13161d;
    }
    [data-testid="stSidebar"] .stMarkdown p {
        color: #9ca3af;
        font-size: 0.75rem;
        letter-spacing: 0.05em;
    }
    .block-container {
        padding-top: 1.5rem;
        padding-bottom: 2rem;
    }
    [data-testid="stMetricValue"] {
        font-size: 1.6rem !important;
        font-weight: 700 !important;
    }
    footer { visibility: hidden; }
    thead tr th {
        background-color: #1a1d23 !important;
        color: #f59e0b !important;
        font-size: 0.75rem !important;
        letter-spacing: 0.08em !important;
        text-transform: uppercase !important;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# ---------------------------------------------------------------------------
# Sidebar — database status
# ---------------------------------------------------------------------------
with st.sidebar:
    st.html(
        """
        <div style="
            padding: 12px 0 8px 0;
            border-bottom: 1px solid #2d3139;
            margin-bottom: 12px;
        ">
            <span style="
                font-size: 1.1rem;
                font-weight: 700;
                color: #f59e0b;
                letter-spacing: 0.03em;
            ">💰 BET TRACKER</span>
            <span style="
                font-size: 0.65rem;
                color: #6b7280;
                margin-left: 6px;
                letter-spacing: 0.1em;
                vertical-align: middle;
            ">BETS · TRADES</span>
        </div>
        """
    )

    from core.supabase_gateway import get_gateway

    gateway = get_gateway()
    if gateway.configured:
        dot_color = "#22c55e"
        label = "CONNECTED"
        detail = gateway.url.replace("https://", "")
    else:
        dot_color = "#ef4444"
        label = "NOT CONFIGURED"
        detail = "Set SUPABASE_URL and SUPABASE_ANON_KEY"
        logger.warning("Database credentials missing — app running against placeholder")

    st.html(
        f"""
        <div style="
            background: #1a1d23;
            border: 1px solid #2d3139;
            border-radius: 6px;
            padding: 10px 12px;
            margin-bottom: 12px;
        ">
            <div style="display:flex; align-items:center; gap:6px; margin-bottom:6px;">
                <div style="
                    width:8px; height:8px; border-radius:50%;
                    background:{dot_color};
                    box-shadow: 0 0 6px {dot_color};
                "></div>
                <span style="
                    font-size:0.65rem; font-weight:600;
                    color:{dot_color}; letter-spacing:0.1em;
                ">{label}</span>
            </div>
            <div style="font-size:0.65rem; color:#6b7280; line-height:1.6; word-break:break-all;">
                {detail}
            </div>
        </div>
        """
    )

    st.markdown("---")
    st.markdown("Track it. Then grow it.")

# ---------------------------------------------------------------------------
# Multi-page navigation — programmatic (st.navigation, Streamlit 1.36+)
# ---------------------------------------------------------------------------
pages = [
    st.Page("pages/01_sports_betting.py", title="Sports Betting", icon="🏈", default=True),
    st.Page("pages/02_day_trading.py",    title="Day Trading",    icon="📈"),
]

pg = st.navigation(pages)
pg.run()
