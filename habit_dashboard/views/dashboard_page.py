import streamlit as st

from habit_dashboard.data import repositories
from habit_dashboard.header import render_global_header
from habit_dashboard.state import session_slices
from habit_dashboard.state.views import DashboardState, HabitFormState
from habit_dashboard.views.habit_form import render_habit_form
from habit_dashboard.views.habit_list import render_habit_list


def _dashboard_state():
    return session_slices.get_state("dashboard", "view", lambda: DashboardState(repositories))


def _form_state():
    return session_slices.get_state("dashboard", "form", HabitFormState)


def _set_show_form(value):
    session_slices.set_value("dashboard", "show_form", value)


def _hide_form():
    _set_show_form(False)
    st.rerun()


@st.dialog("Delete habit")
def _confirm_delete(state, habit):
    st.write(f'Are you sure you want to delete "{habit["name"]}"?')
    cols = st.columns(2)
    with cols[0]:
        if st.button("Delete", type="primary", key="dashboard.confirm_delete"):
            state.delete_habit(habit, confirmed=True)
            st.rerun()
    with cols[1]:
        if st.button("Cancel", key="dashboard.cancel_delete"):
            state.delete_habit(habit, confirmed=False)
            st.rerun()


def render_dashboard_page(payload, on_sign_out):
    state = _dashboard_state()
    if not state.loaded:
        if "habits" in payload:
            state.hydrate(payload["habits"])
        else:
            with st.spinner("Loading habits..."):
                state.fetch()

    render_global_header(payload.get("user"), on_sign_out)

    if state.error:
        cols = st.columns([12, 1])
        with cols[0]:
            st.error(state.error)
        with cols[1]:
            if st.button("✕", key="dashboard.dismiss_error", help="Close"):
                state.dismiss_error()
                st.rerun()

    show_form = session_slices.get_value("dashboard", "show_form", False)
    header_cols = st.columns([4, 1])
    with header_cols[0]:
        st.subheader("Your Habits")
    with header_cols[1]:
        if st.button("Cancel" if show_form else "Add New Habit", key="dashboard.toggle_form"):
            _set_show_form(not show_form)
            st.rerun()

    if show_form:
        if render_habit_form(_form_state(), state.add_habit, on_cancel=_hide_form):
            _set_show_form(False)
            st.rerun()

    if state.loading:
        st.caption("Loading habits...")
    else:
        render_habit_list(state, on_delete=lambda habit: _confirm_delete(state, habit))
