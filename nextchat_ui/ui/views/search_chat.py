import streamlit as st

from nextchat_ui.core.context import AppContext
from nextchat_ui.ui.views.chat import HISTORY_KEY


def render(ctx: AppContext, **_):
    st.subheader("🔍 Search Chat")
    query = st.text_input("Search", placeholder="Search chat history")
    if not query:
        return
    hits = [m for m in st.session_state.get(HISTORY_KEY, []) if query.lower() in m["content"].lower()]
    if not hits:
        st.caption("No results.")
    for m in hits:
        st.markdown(f"**{m['role']}**: {m['content']}")
