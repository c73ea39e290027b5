import streamlit as st

from habit_dashboard.constants import EMPTY_HABITS_MESSAGE, HABIT_GROUP_TITLES
from habit_dashboard.views.entry_log import render_entry_log
from habit_dashboard.views.habit_card import render_habit_card


def render_habit_list(state, on_delete=None):
    groups = state.grouped_habits()
    if not groups:
        st.info(EMPTY_HABITS_MESSAGE)
        return

    for habit_type, habits in groups.items():
        st.subheader(HABIT_GROUP_TITLES.get(habit_type, habit_type.title()))
        cols = st.columns(2)
        for idx, habit in enumerate(habits):
            with cols[idx % 2]:
                render_habit_card(habit, on_delete=on_delete)
                with st.expander("Today & history"):
                    render_entry_log(habit)
