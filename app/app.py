# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
app.py — Streamlit climate outlook dashboard with a dark UI.

Run with: streamlit run app/app.py
Requires: pip install -e ".[ui]"
Data source: NASA POWER daily point API (free, no key).
"""

import sys
from pathlib import Path

# Ensure the src/ package is importable when running from the project root
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from datetime import date

import plotly.graph_objects as go
import streamlit as st

from climate_outlook.config import default_config, load_config
from climate_outlook.geocode import search_places
from climate_outlook.query import InvalidQueryError, QuerySession
from climate_outlook.rules import evaluate_rules
from climate_outlook.trend import series_summary
from climate_outlook.units import display_series
from climate_outlook.utils import fmt_day, fmt_value


# ─────────────────────────────────────────────────────────────
# Page config — must be first Streamlit call
# ─────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Climate Outlook",
    page_icon="🌤",
    layout="wide",
    initial_sidebar_state="collapsed",
)


CUSTOM_CSS = """
<style>
  #MainMenu, footer, header { visibility: hidden; }
  .block-container { padding-top: 2rem; padding-bottom: 4rem; max-width: 960px; }
  html, body, [class*="css"] {
    font-family: -apple-system, BlinkMacSystemFont, "SF Pro Display",
                 "SF Pro Text", "Segoe UI", Roboto, sans-serif;
    background-color: #0a0a0a;
    color: #f5f5f7;
  }
  .card {
    background: #1c1c1e; border-radius: 18px; padding: 1rem 1.25rem;
    margin-bottom: 0.75rem;
  }
  .card-title { color: #8e8e93; font-size: 0.8rem; text-transform: uppercase; }
  .card-value { font-size: 1.8rem; font-weight: 700; letter-spacing: -0.03em; }
  .badge-ok  { color: #30d158; font-weight: 600; }
  .badge-bad { color: #ff453a; font-weight: 600; }
  .badge-unk { color: #8e8e93; font-weight: 600; }
  .error-card {
    background: #2c1515; border: 1px solid #ff453a; border-radius: 12px;
    padding: 0.75rem 1rem; color: #ff6961;
  }
</style>
"""
st.markdown(CUSTOM_CSS, unsafe_allow_html=True)

PLOTLY_LAYOUT = dict(
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font=dict(
        family="-apple-system, BlinkMacSystemFont, 'SF Pro Display', sans-serif",
        color="#8e8e93",
        size=12,
    ),
    margin=dict(l=8, r=8, t=32, b=8),
    xaxis=dict(showgrid=False, zeroline=False, tickfont=dict(color="#636366")),
    yaxis=dict(gridcolor="#2c2c2e", zeroline=False, tickfont=dict(color="#636366")),
)

BADGE_CLASS = {"Comfortable": "badge-ok", "Uncomfortable": "badge-bad"}


# ─────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────

def _config() -> dict:
    try:
        return load_config()
    except FileNotFoundError:
        return default_config()


def card_html(card: dict) -> str:
    """Render a prediction card as HTML."""
    badge = BADGE_CLASS.get(card["status"], "badge-unk")
    return f"""
    <div class="card">
      <div class="card-title">{card['title']}</div>
      <div class="card-value">{fmt_value(card['prediction'], card['unit'])}</div>
      <span class="{badge}">{card['status']}</span>
    </div>
    """


def card_figure(card: dict) -> go.Figure:
    """Line or bar chart of one variable's same-day history."""
    if card["graph_type"] == "bar":
        trace = go.Bar(
            x=card["labels"],
            y=card["values"],
            marker_color="rgba(10,132,255,0.7)",
            marker_line_width=0,
        )
    else:
        trace = go.Scatter(
            x=card["labels"],
            y=card["values"],
            mode="lines+markers",
            connectgaps=False,
            line=dict(color="#0a84ff", width=2),
            marker=dict(color="#0a84ff", size=5),
        )
    fig = go.Figure(trace)
    fig.update_layout(**{
        **PLOTLY_LAYOUT,
        "title": dict(text=f"{card['title']} — same day each year", font=dict(color="#8e8e93", size=13)),
        "yaxis": dict(**PLOTLY_LAYOUT["yaxis"], ticksuffix=f" {card['unit']}" if card["unit"] else ""),
        "height": 240,
        "showlegend": False,
    })
    return fig


# ─────────────────────────────────────────────────────────────
# Session state initialisation
# ─────────────────────────────────────────────────────────────

if "session" not in st.session_state:
    st.session_state.session = QuerySession()
if "candidates" not in st.session_state:
    st.session_state.candidates = []
if "error" not in st.session_state:
    st.session_state.error = None


# ─────────────────────────────────────────────────────────────
# SECTION 1: Search + date
# ─────────────────────────────────────────────────────────────

config = _config()
session: QuerySession = st.session_state.session

col_l, col_c, col_r = st.columns([1, 2, 1])
with col_c:
    query_text = st.text_input(
        label="location",
        placeholder="Search location...",
        label_visibility="collapsed",
        key="location_input",
    )
    if query_text.strip():
        try:
            st.session_state.candidates = search_places(query_text)
        except RuntimeError as e:
            st.session_state.candidates = []
            st.session_state.error = f"Geocoding error: {e}"

    candidates = st.session_state.candidates
    choice = None
    if candidates:
        choice = st.selectbox(
            "Place",
            options=range(len(candidates)),
            format_func=lambda i: candidates[i]["display_name"],
            label_visibility="collapsed",
        )
    picked_date = st.date_input("Date", value=date.today(), label_visibility="collapsed")
    predict_clicked = st.button("Predict", use_container_width=True)

if predict_clicked and choice is not None:
    place = candidates[choice]
    st.session_state.error = None
    try:
        query = session.issue(place["latitude"], place["longitude"], picked_date)
        with st.spinner(f"Fetching same-day history for {place['display_name']}…"):
            session.run(
                query,
                max_workers=config["provider"]["max_workers"],
                timeout=config["provider"]["timeout_seconds"],
                log_path=Path(config["log"]["path"]),
            )
        st.session_state.place_name = place["display_name"]
    except InvalidQueryError as e:
        st.session_state.error = str(e)

if st.session_state.error:
    st.markdown(f'<div class="error-card">⚠️ {st.session_state.error}</div>', unsafe_allow_html=True)


# ─────────────────────────────────────────────────────────────
# SECTION 2: Predictions + charts
# ─────────────────────────────────────────────────────────────

outlook = session.latest
if outlook is not None:
    labels = outlook["labels"]
    st.markdown(
        f"### 📍 {st.session_state.get('place_name', '')} — {fmt_day(outlook['reference_date'])}"
        f"  \n<span style='color:#8e8e93'>Based on {labels[0]}–{labels[-1]}</span>",
        unsafe_allow_html=True,
    )
    if outlook["failed_years"]:
        st.caption("No data for: " + ", ".join(str(y) for y in outlook["failed_years"]))

    for alert in evaluate_rules(outlook["predictions"], config):
        st.warning(alert)

    cards = display_series(outlook, config)
    for card in cards:
        info_col, chart_col = st.columns([1, 2])
        with info_col:
            st.markdown(card_html(card), unsafe_allow_html=True)
            summary = series_summary(card["labels"], card["values"])
            if summary["count"]:
                st.caption(
                    f"Trend: {summary['trend']['label']} · "
                    f"next by trend {fmt_value(summary['next'], card['unit'], 1)}"
                )
        with chart_col:
            st.plotly_chart(card_figure(card), use_container_width=True, config={"displayModeBar": False})
