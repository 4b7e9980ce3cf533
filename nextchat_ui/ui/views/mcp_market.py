import pandas as pd
import streamlit as st

from nextchat_ui.core.context import AppContext


def render(ctx: AppContext, **_):
    st.subheader("🔌 MCP Market")
    if not ctx.mcp.initialized:
        st.info("MCP is disabled or no servers are configured. Set ENABLE_MCP=true to enable it.")
        return
    rows = [
        {"server": cid, "status": c.status, "tools": len(c.tools), "error": c.error or ""}
        for cid, c in sorted(ctx.mcp.clients.items())
    ]
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
