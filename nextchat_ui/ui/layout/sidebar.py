import streamlit as st

from nextchat_ui.config.settings import APP_NAME, VERSION
from nextchat_ui.core.context import AppContext
from nextchat_ui.core.routing import Path
from nextchat_ui.ui import navigation

NAV_ITEMS = [
    ("💬 Chat", Path.HOME),
    ("➕ New Chat", Path.NEW_CHAT),
    ("🎭 Masks", Path.MASKS),
    ("🧩 Plugins", Path.PLUGINS),
    ("🔍 Search", Path.SEARCH_CHAT),
    ("🎨 Stable Diffusion", Path.SD),
    ("🔌 MCP Market", Path.MCP_MARKET),
    ("⚙️ Settings", Path.SETTINGS),
]


def render(ctx: AppContext, visible: bool) -> None:
    with st.sidebar:
        st.title(APP_NAME)
        if visible:
            config = ctx.config.config
            available = sum(1 for m in config.models if m.available)
            st.caption(f"v{VERSION} • {available} models • {config.model_config.model}")
        current = navigation.get_current_path()
        for label, path in NAV_ITEMS:
            if st.button(label, key=f"nav_{path.value}", use_container_width=True,
                         disabled=path.value == current):
                navigation.navigate(path.value)
        if ctx.mcp.initialized:
            active = sum(1 for c in ctx.mcp.clients.values() if c.status == "active")
            st.caption(f"MCP: {active}/{len(ctx.mcp.clients)} active")
