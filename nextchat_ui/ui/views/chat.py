import streamlit as st

from nextchat_ui.core.context import AppContext

HISTORY_KEY = "chat_messages"


def render(ctx: AppContext, **_):
    config = ctx.config.config
    st.subheader("💬 Chat")
    st.caption(f"{config.model_config.provider_name} • {config.model_config.model}")

    messages = st.session_state.setdefault(HISTORY_KEY, [])
    for msg in messages:
        with st.chat_message(msg["role"]):
            st.markdown(msg["content"])

    if not ctx.access.is_authorized:
        st.warning("An access code is required. Open the auth page to enter one.")
        return

    prompt = st.chat_input("Enter to send")
    if prompt:
        messages.append({"role": "user", "content": prompt})
        st.rerun()
