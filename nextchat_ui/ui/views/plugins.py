import streamlit as st

from nextchat_ui.core.context import AppContext


def render(ctx: AppContext, **_):
    st.subheader("🧩 Plugins")
    st.info("No plugins installed.")
