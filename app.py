import streamlit as st

from habit_dashboard.auth import get_secret
from habit_dashboard.data import api_client
from habit_dashboard.logging_config import configure_logging
from habit_dashboard.router import render_router
from habit_dashboard.state import session_slices


st.set_page_config(page_title="Habit Tracker", page_icon="✅", layout="wide")

configure_logging()
api_client.configure(get_secret, session_slices.get_tokens, session_slices.set_tokens)

if not api_client.is_enabled():
    st.error("API_BASE_URL is not configured.")
    st.markdown("Set it in `.streamlit/secrets.toml` or the environment:")
    st.code("[app]\nAPI_BASE_URL = \"http://localhost:8000\"", language="toml")
    st.stop()

render_router()
