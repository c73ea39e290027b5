import streamlit as st

from habit_dashboard.constants import HISTORY_DAYS
from habit_dashboard.data import repositories
from habit_dashboard.dates import format_date
from habit_dashboard.state import session_slices
from habit_dashboard.state.views import EntryLogState
from habit_dashboard.visualizations import build_history_figure, build_history_frame


def _entry_state(habit):
    state = session_slices.get_state(
        "entries",
        habit["id"],
        lambda: EntryLogState(repositories, habit),
    )
    state.habit = habit
    if not state.loaded:
        state.load(HISTORY_DAYS)
    return state


def render_entry_log(habit):
    state = _entry_state(habit)
    st.caption(format_date(state.day))
    if state.error:
        st.warning(state.error)

    key = f"entries.{habit['id']}"
    entry = state.entry or {}
    if state.is_unit:
        value = st.number_input(
            "Today's value",
            min_value=0.0,
            step=1.0,
            value=float(entry.get("value") or 0),
            key=f"{key}.value",
        )
        if entry.get("percentage") is not None:
            st.progress(min(float(entry["percentage"]), 100.0) / 100, text=f"{entry['percentage']:g}% of target")
        if st.button("Save", key=f"{key}.save"):
            state.save(value=value)
            st.rerun()
    else:
        done = st.checkbox("Done today", value=bool(entry.get("status")), key=f"{key}.status")
        if done != bool(entry.get("status")):
            state.save(status=done)
            st.rerun()

    if state.entry and st.button("Clear today", key=f"{key}.clear", type="tertiary"):
        state.clear()
        st.rerun()

    frame = build_history_frame(habit, state.history, HISTORY_DAYS, today=state.day)
    st.plotly_chart(build_history_figure(habit, frame), use_container_width=True, key=f"{key}.chart")
