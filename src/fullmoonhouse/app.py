"""Full Moon House Finder — Streamlit app for the house of each full moon."""

import html

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

from fullmoonhouse.compute import SIGNS, run  # noqa: E402
from fullmoonhouse.config import (  # noqa: E402
    ConfigError,
    Settings,
    configure_logging,
    load_settings,
)
from fullmoonhouse.models import ReferenceData  # noqa: E402
from fullmoonhouse.reference import (  # noqa: E402
    ReferenceDataError,
    format_date_label,
    full_moon_dates,
    load_reference_data,
)
from fullmoonhouse.renderers.html import render_more_html, render_result_html  # noqa: E402
from fullmoonhouse.renderers.plotly_wheel import render_house_wheel  # noqa: E402

st.set_page_config(
    page_title="Full Moon House Finder",
    page_icon="◯",
    layout="centered",
)

# --- Dark theme CSS (static) ---
st.markdown(
    """
    <style>
    /* Full background */
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0d1b35 !important;
    }
    /* Hide header/toolbar */
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    /* Labels */
    label, [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    h1 { color: #e8d5a3 !important; }
    /* Result card */
    .result-card {
        border-top: 1px solid rgba(201,169,110,0.18);
        padding: 1.2rem 0.2rem 0.4rem;
    }
    /* Expander */
    [data-testid="stExpander"] {
        border: 1px solid rgba(201,169,110,0.25) !important;
        border-radius: 6px !important;
    }
    </style>
    """,
    unsafe_allow_html=True,
)


# Tables are loaded once per process and are read-only afterwards.
@st.cache_resource(show_spinner=False)
def _load_reference(source: str | None) -> ReferenceData:
    return load_reference_data(source)


try:
    _settings = load_settings()
except ConfigError as e:
    st.error(f"Configuration error: {html.escape(str(e))}")
    _settings = Settings()
configure_logging(_settings.log_level)

try:
    reference = _load_reference(_settings.data_source)
except ReferenceDataError as e:
    st.error(f"Could not load reference data: {html.escape(str(e))}")
    st.stop()

st.title("Full Moon House Finder")

# --- Selection ---
# Every widget change reruns the script; the result below is recomputed from
# the fresh selection and never carried over between runs.
dates = full_moon_dates(reference)
if not dates:
    st.info("No full moons in the reference data.")
    st.stop()

col1, col2, col3 = st.columns([2, 2, 3])
with col1:
    system_label = st.radio("Zodiac", ["Tropical", "Sidereal"], index=0)
with col2:
    rising = st.selectbox(
        "Rising sign",
        options=list(range(12)),
        index=0,
        format_func=lambda i: SIGNS[i],
    )
with col3:
    date_key = st.selectbox(
        "Full moon",
        options=dates,
        index=0,
        format_func=format_date_label,
    )

system = "sidereal" if system_label == "Sidereal" else "tropical"
result = run(reference, system, rising, date_key, ayanamsa=_settings.ayanamsa)

# --- Result ---
if result is not None:
    st.markdown(render_result_html(result), unsafe_allow_html=True)
    st.plotly_chart(
        render_house_wheel(result),
        use_container_width=True,
        config={"displayModeBar": False},
    )
    with st.expander("More"):
        st.markdown(
            render_more_html(result, display_tz=_settings.display_tz),
            unsafe_allow_html=True,
        )
