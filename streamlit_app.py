# streamlit_app.py
import streamlit as st

from covid_dashboard.charts import line_figure, pie_figure
from covid_dashboard.config import Settings, configure_logging
from covid_dashboard.metrics import format_millions, to_line_series, to_pie_series
from covid_dashboard.sources import fetch_countries
from covid_dashboard.state import DashboardController

NO_DATA_MESSAGE = "Loading chart data or no data available."

st.set_page_config(page_title="COVID‑19 Dashboard", layout="wide")
st.title("COVID-19 Dashboard")


@st.cache_data
def load_countries(settings: Settings, _session=None):
    """Country directory, fetched once per server process and shared by all sessions."""
    return fetch_countries(settings, _session)


def get_controller() -> DashboardController:
    """One controller per browser session; the directory and the default
    country are fetched on its first run."""
    if "controller" not in st.session_state:
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        controller = DashboardController(settings, directory_loader=load_countries)
        controller.start()
        st.session_state.controller = controller
    return st.session_state.controller


def selector_options(state):
    names = {c.code: c.name for c in state.countries}
    codes = list(names)
    # keep the current selection active even when the directory lacks it
    if state.selected_country and state.selected_country not in names:
        codes.insert(0, state.selected_country)
    return codes, names


def on_country_change():
    st.session_state.controller.select_country(st.session_state.country_select)


controller = get_controller()
state = controller.state

# --- Country selector ---
codes, names = selector_options(state)
st.selectbox(
    "Select Country",
    codes,
    index=codes.index(state.selected_country) if state.selected_country in codes else 0,
    format_func=lambda code: names.get(code, code),
    key="country_select",
    on_change=on_country_change,
)

# --- Metrics ---
stats = state.stats
col1, col2, col3 = st.columns(3)
col1.metric("Cases", format_millions(stats.cases))
col2.metric("Recovered", format_millions(stats.recovered))
col3.metric("Deaths", format_millions(stats.deaths))

# --- Charts ---
if state.has_data:
    left, right = st.columns(2)
    with left:
        st.plotly_chart(line_figure(to_line_series(state.timeline)), use_container_width=True)
    with right:
        pie = to_pie_series(stats, controller.settings.total_population)
        st.plotly_chart(pie_figure(pie), use_container_width=True)
else:
    st.info(NO_DATA_MESSAGE)
