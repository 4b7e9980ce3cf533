import streamlit as st

from nextchat_ui.core.context import AppContext
from nextchat_ui.core.routing import Path
from nextchat_ui.ui import navigation
from nextchat_ui.ui.views.chat import HISTORY_KEY


def render(ctx: AppContext, **_):
    st.subheader("➕ New Chat")
    st.markdown("Start a fresh conversation with the current model.")
    if st.button("Just start chatting", type="primary"):
        st.session_state[HISTORY_KEY] = []
        navigation.navigate(Path.CHAT.value)
