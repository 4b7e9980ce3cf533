import streamlit as st

from nextchat_ui.core.context import AppContext
from nextchat_ui.core.routing import Path
from nextchat_ui.ui import navigation


def render(ctx: AppContext, **_):
    st.title("🔐 Need access code")
    st.caption("The administrator enabled password authentication. Enter the access code below.")
    code = st.text_input("Access code", value=ctx.access.access_code, type="password")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Confirm", type="primary"):
            ctx.apply(setattr, ctx.access, "access_code", code.strip())
            navigation.navigate(Path.HOME.value)
    with col2:
        if st.button("Later"):
            navigation.navigate(Path.HOME.value)
