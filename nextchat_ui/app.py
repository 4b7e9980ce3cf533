import atexit

import streamlit as st

from nextchat_ui.config.logging_config import logger, setup_logging
from nextchat_ui.config.settings import APP_NAME, load_env
from nextchat_ui.core.bootstrap import build_init_pipeline
from nextchat_ui.core.context import AppContext
from nextchat_ui.core.loop import BackgroundLoop
from nextchat_ui.core.orchestrator import RootOrchestrator
from nextchat_ui.services.mcp_controller import McpController
from nextchat_ui.ui import navigation
from nextchat_ui.ui.components import loading
from nextchat_ui.ui.screen import Screen, build_view_registry
from nextchat_ui.utils.errors import ui_error_boundary

SESSION_KEY = "nextchat_app"
SHUTDOWN_TIMEOUT_S = 10.0


@st.cache_resource
def get_runner() -> BackgroundLoop:
    """One event loop per process, shared by every browser session."""
    return BackgroundLoop()


def shutdown(runner: BackgroundLoop, mcp: McpController) -> None:
    try:
        runner.run(mcp.aclose(), timeout=SHUTDOWN_TIMEOUT_S)
    except Exception as e:
        logger.error("[MCP] failed to shut down: %s", e)
    runner.stop()


@st.cache_resource
def get_mcp() -> McpController:
    """One MCP client set per process; its servers are closed at exit."""
    mcp = McpController()
    atexit.register(shutdown, get_runner(), mcp)
    return mcp


class NextChatApp:
    """Main Streamlit controller, one per browser session."""

    def __init__(self, runner: BackgroundLoop, mcp: McpController, accept_language: str = ""):
        setup_logging()
        self.runner = runner
        self.ctx = AppContext.create(accept_language=accept_language or None, mcp=mcp)
        self.ctx.runner = runner
        self.registry = build_view_registry()
        self.orchestrator = RootOrchestrator(self.ctx, self.registry, build_init_pipeline(self.ctx))
        self.screen = Screen(self.ctx, self.orchestrator)

    def main(self):
        st.set_page_config(page_title=APP_NAME, page_icon="🤖", layout="wide")
        if not self.orchestrator.ready:
            loading.render()
            self.runner.run(self.orchestrator.hydrate())
            st.rerun()
        self.screen.render(navigation.get_current_path(), navigation.is_mobile_client())


@ui_error_boundary
def main():
    app = st.session_state.get(SESSION_KEY)
    if app is None:
        load_env()
        app = NextChatApp(get_runner(), get_mcp(), navigation.accept_language())
        st.session_state[SESSION_KEY] = app
    app.main()
