import logging
import os

import streamlit as st

from habit_dashboard.data import repositories
from habit_dashboard.data.api_client import ApiError
from habit_dashboard.state import session_slices

logger = logging.getLogger(__name__)

ENV_FALLBACK_KEYS = {
    ("app", "API_BASE_URL"): "API_BASE_URL",
}


def get_secret(path, default=None):
    env_key = ENV_FALLBACK_KEYS.get(tuple(path))
    if env_key:
        env_value = os.getenv(env_key)
        if env_value:
            return env_value
    try:
        current = st.secrets
        for key in path:
            if key not in current:
                return default
            current = current[key]
    except FileNotFoundError:
        return default
    return current


def is_signed_in():
    return bool(session_slices.get_tokens())


def sign_in(email, password):
    payload = repositories.sign_in(email.strip(), password)
    session_slices.set_value("auth", "user", payload.get("user"))
    return payload


def sign_up(email, password):
    payload = repositories.sign_up(email.strip(), password)
    session_slices.set_value("auth", "user", payload.get("user"))
    return payload


def sign_out():
    try:
        repositories.sign_out()
    except ApiError as exc:
        logger.warning("Sign out request failed: %s", exc)
    session_slices.set_tokens(None)
    session_slices.clear_slice("auth")
    session_slices.clear_slice("dashboard")
    session_slices.clear_slice("entries")


def current_user():
    return session_slices.get_value("auth", "user")
