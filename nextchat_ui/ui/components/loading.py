import streamlit as st

from nextchat_ui.config.settings import APP_NAME


def render(no_logo: bool = False) -> None:
    """Loading placeholder; ``no_logo`` drops the brand mark for in-shell views."""
    if not no_logo:
        st.markdown(f"### 🤖 {APP_NAME}")
    st.caption("Loading...")
