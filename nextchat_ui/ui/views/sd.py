import streamlit as st

from nextchat_ui.core.context import AppContext
from nextchat_ui.core.routing import Path
from nextchat_ui.ui import navigation

SD_PROMPT_KEY = "sd_prompts"


def render(ctx: AppContext, path: str = Path.SD.value, **_):
    st.title("🎨 Stable Diffusion")
    if st.button("← Back to chat"):
        navigation.navigate(Path.HOME.value)
    prompts = st.session_state.setdefault(SD_PROMPT_KEY, [])
    if path == Path.SD_NEW.value:
        prompt = st.text_area("Prompt", placeholder="Describe the image")
        if st.button("Generate", type="primary", disabled=not prompt):
            prompts.append(prompt)
            navigation.navigate(Path.SD.value)
        return
    if st.button("New image"):
        navigation.navigate(Path.SD_NEW.value)
    for p in reversed(prompts):
        st.markdown(f"- {p}")
