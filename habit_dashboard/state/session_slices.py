import streamlit as st


PREFIX = "slice"
TOKENS_KEY = "auth.tokens"


def get_slice(slice_name):
    key = f"{PREFIX}.{slice_name}"
    if key not in st.session_state:
        st.session_state[key] = {}
    return st.session_state[key]


def get_value(slice_name, name, default=None):
    payload = get_slice(slice_name)
    return payload.get(name, default)


def set_value(slice_name, name, value):
    payload = get_slice(slice_name)
    payload[name] = value


def get_state(slice_name, name, factory):
    payload = get_slice(slice_name)
    if name not in payload:
        payload[name] = factory()
    return payload[name]


def clear_slice(slice_name):
    key = f"{PREFIX}.{slice_name}"
    if key in st.session_state:
        del st.session_state[key]


def get_tokens():
    return st.session_state.get(TOKENS_KEY)


def set_tokens(tokens):
    if tokens:
        st.session_state[TOKENS_KEY] = tuple(tokens)
    else:
        st.session_state.pop(TOKENS_KEY, None)
