import streamlit as st

from habit_dashboard.constants import COLOR_OPTIONS, HABIT_TYPE_OPTIONS, HABIT_TYPES

FORM_KEY = "habits.add_form"


def render_habit_form(form_state, on_submit, on_cancel=None):
    st.markdown("#### Add New Habit")
    if form_state.error:
        st.error(form_state.error)

    color_values = [option["value"] for option in COLOR_OPTIONS]
    color_labels = {option["value"]: option["label"] for option in COLOR_OPTIONS}

    with st.form(key=FORM_KEY):
        name = st.text_input(
            "Habit Name",
            value=form_state.name,
            placeholder="e.g., Drink water, Exercise, Read",
        )
        habit_type = st.selectbox(
            "Habit Type",
            HABIT_TYPES,
            index=HABIT_TYPES.index(form_state.type),
            format_func=HABIT_TYPE_OPTIONS.get,
        )
        target_value = st.text_input(
            "Target Value (optional, numeric habits only)",
            value=str(form_state.target_value or ""),
            placeholder="e.g., 8 glasses, 10000 steps",
        )
        color = st.selectbox(
            "Color",
            color_values,
            index=color_values.index(form_state.color),
            format_func=color_labels.get,
        )
        cols = st.columns([1, 1, 4])
        with cols[0]:
            submitted = st.form_submit_button(
                "Adding..." if form_state.loading else "Add Habit",
                type="primary",
                disabled=form_state.loading,
            )
        with cols[1]:
            cancelled = on_cancel is not None and st.form_submit_button("Cancel", disabled=form_state.loading)

    if cancelled:
        form_state.reset()
        form_state.error = None
        on_cancel()
        return False

    if not submitted:
        return False

    form_state.name = name
    form_state.type = habit_type
    form_state.target_value = target_value
    form_state.color = color
    return form_state.submit(on_submit)
