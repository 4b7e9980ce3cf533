import streamlit as st

from nextchat_ui.core.context import AppContext

BUILTIN_MASKS = [
    {"name": "Copywriter", "lang": "en", "context": "You write concise marketing copy."},
    {"name": "Translator", "lang": "en", "context": "You translate the user's text into English."},
    {"name": "Code reviewer", "lang": "en", "context": "You review code for bugs and readability."},
]


def render(ctx: AppContext, **_):
    st.subheader("🎭 Masks")
    query = st.text_input("Search masks", placeholder="Search")
    for mask in BUILTIN_MASKS:
        if query and query.lower() not in mask["name"].lower():
            continue
        with st.expander(mask["name"]):
            st.caption(mask["context"])
