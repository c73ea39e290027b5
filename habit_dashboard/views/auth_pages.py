import streamlit as st

from habit_dashboard import auth
from habit_dashboard.state.views import error_message


def _credentials_form(form_key, submit_label):
    with st.form(key=form_key):
        email = st.text_input("Email", placeholder="you@example.com")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button(submit_label, type="primary")
    return submitted, email, password


def render_login_page(on_success, register_page):
    st.title("Sign in")
    submitted, email, password = _credentials_form("auth.login_form", "Sign in")
    if submitted:
        if not email.strip() or not password:
            st.error("Email and password are required")
        else:
            try:
                auth.sign_in(email, password)
            except Exception as exc:
                st.error(error_message(exc, "Could not sign in. Please try again."))
            else:
                on_success()
    st.page_link(register_page, label="Don't have an account? Register")


def render_register_page(on_success, login_page):
    st.title("Create an account")
    submitted, email, password = _credentials_form("auth.register_form", "Register")
    if submitted:
        if not email.strip() or not password:
            st.error("Email and password are required")
        else:
            try:
                payload = auth.sign_up(email, password)
            except Exception as exc:
                st.error(error_message(exc, "Could not register. Please try again."))
            else:
                if payload.get("authenticated"):
                    on_success()
                else:
                    st.success("Check your email to confirm your account, then sign in.")
    st.page_link(login_page, label="Already have an account? Sign in")
