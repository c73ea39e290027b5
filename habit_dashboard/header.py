import streamlit as st

from habit_dashboard import auth


def render_global_header(user, on_sign_out):
    cols = st.columns([4, 2, 1])
    with cols[0]:
        st.title("Habit Tracker")
    with cols[1]:
        st.caption((user or {}).get("email") or "")
    with cols[2]:
        if st.button("Sign Out", key="header.sign_out"):
            auth.sign_out()
            on_sign_out()
