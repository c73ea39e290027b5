import logging

import requests
import streamlit as st

from habit_dashboard.data import repositories
from habit_dashboard.data.api_client import ApiError
from habit_dashboard.views.auth_pages import render_login_page, render_register_page
from habit_dashboard.views.dashboard_page import render_dashboard_page

logger = logging.getLogger(__name__)

HOME_PATH = "/"
DASHBOARD_PATH = "/dashboard"
LOGIN_PATH = "/login"
REGISTER_PATH = "/register"

_PAGES = {}


def _go(path):
    st.switch_page(_PAGES[path])


def _resolve(path):
    try:
        target, payload = repositories.resolve_page(path)
    except (ApiError, requests.RequestException) as exc:
        logger.error("Failed to resolve page %s: %s", path, exc)
        st.error("The habit service is unavailable. Please try again in a moment.")
        st.stop()
    if target and target != path and target in _PAGES:
        _go(target)
    return payload or {}


def _render_home():
    _resolve(HOME_PATH)
    _go(DASHBOARD_PATH)


def _render_dashboard():
    payload = _resolve(DASHBOARD_PATH)
    render_dashboard_page(payload, on_sign_out=lambda: _go(LOGIN_PATH))


def _render_login():
    _resolve(LOGIN_PATH)
    render_login_page(on_success=lambda: _go(DASHBOARD_PATH), register_page=_PAGES[REGISTER_PATH])


def _render_register():
    _resolve(REGISTER_PATH)
    render_register_page(on_success=lambda: _go(DASHBOARD_PATH), login_page=_PAGES[LOGIN_PATH])


def render_router():
    _PAGES.update(
        {
            HOME_PATH: st.Page(_render_home, title="Home", default=True),
            DASHBOARD_PATH: st.Page(_render_dashboard, title="Dashboard", url_path="dashboard"),
            LOGIN_PATH: st.Page(_render_login, title="Login", url_path="login"),
            REGISTER_PATH: st.Page(_render_register, title="Register", url_path="register"),
        }
    )
    page = st.navigation(list(_PAGES.values()), position="hidden")
    page.run()
