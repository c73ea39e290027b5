import html

import streamlit as st

from habit_dashboard.constants import COLOR_SWATCHES, HABIT_TYPE_LABELS


def _format_target(value):
    number = float(value)
    return str(int(number)) if number.is_integer() else f"{number:g}"


def render_habit_card(habit, on_delete=None, key_prefix="habits"):
    swatch = COLOR_SWATCHES.get(habit.get("color"), COLOR_SWATCHES["pink"])
    with st.container(border=True):
        cols = st.columns([6, 1])
        with cols[0]:
            st.markdown(
                f"<span style='color:{swatch}'>●</span> **{html.escape(habit['name'])}**",
                unsafe_allow_html=True,
            )
            st.caption(f"Type: {HABIT_TYPE_LABELS.get(habit.get('type'), habit.get('type'))}")
            if habit.get("type") == "unit" and habit.get("target_value"):
                st.caption(f"Target: {_format_target(habit['target_value'])} units")
        if on_delete is not None:
            with cols[1]:
                if st.button("✕", key=f"{key_prefix}.delete.{habit['id']}", type="tertiary", help="Delete habit"):
                    on_delete(habit)
