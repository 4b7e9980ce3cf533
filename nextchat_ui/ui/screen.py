"""Renders one dispatched frame: standalone views, the auth page, or the shell."""
from functools import partial
from typing import Optional
from urllib.parse import quote

import streamlit as st

from nextchat_ui.config.settings import GOOGLE_FONT_FAMILY, GOOGLE_FONT_PROXY_URL, GOOGLE_FONT_REMOTE_URL
from nextchat_ui.core.context import AppContext
from nextchat_ui.core.orchestrator import RootOrchestrator
from nextchat_ui.core.registry import ViewDescriptor, ViewRegistry, lazy_view
from nextchat_ui.core.routing import ArtifactBranch, AuthBranch, ImageGenBranch
from nextchat_ui.ui.components import loading
from nextchat_ui.ui.layout import document, sidebar, window
from nextchat_ui.ui.views import auth
from nextchat_ui.utils.errors import ui_error_boundary

# view name -> module; imported on first use
VIEWS = {
    "chat": "nextchat_ui.ui.views.chat",
    "new-chat": "nextchat_ui.ui.views.new_chat",
    "masks": "nextchat_ui.ui.views.masks",
    "plugins": "nextchat_ui.ui.views.plugins",
    "search-chat": "nextchat_ui.ui.views.search_chat",
    "settings": "nextchat_ui.ui.views.settings",
    "mcp-market": "nextchat_ui.ui.views.mcp_market",
    "artifacts": "nextchat_ui.ui.views.artifacts",
    "sd": "nextchat_ui.ui.views.sd",
}
STANDALONE_VIEWS = frozenset({"artifacts", "sd"})


def build_view_registry() -> ViewRegistry:
    return ViewRegistry(
        ViewDescriptor(
            name=name,
            activate=lazy_view(module),
            placeholder=partial(loading.render, no_logo=name not in STANDALONE_VIEWS),
        )
        for name, module in VIEWS.items()
    )


def font_url(build_mode: str) -> str:
    base = GOOGLE_FONT_REMOTE_URL if build_mode == "export" else GOOGLE_FONT_PROXY_URL
    return f"{base}/css2?family={quote(GOOGLE_FONT_FAMILY, safe='')}&display=swap"


class Screen:
    def __init__(self, ctx: AppContext, orchestrator: RootOrchestrator):
        self.ctx = ctx
        self.orchestrator = orchestrator

    @ui_error_boundary
    def render(self, location: Optional[str], is_mobile: bool = False) -> None:
        self.ctx.apply(self.ctx.document.add_stylesheet, font_url(self.ctx.client.build_mode))
        frame = self.ctx.apply(self.orchestrator.frame, location, is_mobile)
        document.inject(self.ctx.document, self.ctx.tokens)

        branch = frame.branch
        if isinstance(branch, ArtifactBranch):
            if branch.artifact_id:
                self.render_view("artifacts", artifact_id=branch.artifact_id)
        elif isinstance(branch, AuthBranch):
            auth.render(self.ctx)
        elif isinstance(branch, ImageGenBranch):
            self.render_view("sd", path=branch.path)
        else:
            sidebar.render(self.ctx, branch.sidebar_visible)
            with window.window_content():
                if branch.view:
                    self.render_view(branch.view)

    def render_view(self, name: str, **props) -> None:
        runner = self.ctx.runner
        view = runner.run(self.orchestrator.peek_view(name))
        if view is None:
            slot = st.empty()
            with slot.container():
                self.orchestrator.registry.descriptor(name).placeholder()
            try:
                view = runner.run(self.orchestrator.load_view(name))
            finally:
                slot.empty()
        view(self.ctx, **props)
