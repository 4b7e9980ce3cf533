from contextlib import contextmanager

import streamlit as st

WINDOW_SLOT_ID = "app-body"


@contextmanager
def window_content():
    """Content region of the shell, next to the sidebar."""
    st.markdown(f'<div id="{WINDOW_SLOT_ID}"></div>', unsafe_allow_html=True)
    with st.container():
        yield
