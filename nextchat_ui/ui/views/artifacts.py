import streamlit as st

from nextchat_ui.core.context import AppContext


def render(ctx: AppContext, artifact_id: str = "", **_):
    st.title("Artifact")
    st.caption(f"id: {artifact_id}")
    url = f"{ctx.access.base_url}/api/artifacts?id={artifact_id}"
    st.markdown(f"[Open artifact]({url})")
