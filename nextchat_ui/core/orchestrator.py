"""Root state machine: HYDRATING -> READY.

Nothing is dispatched and no startup task runs until ``hydrate`` has
moved the machine to READY. READY is terminal.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from nextchat_ui.config.logging_config import logger
from nextchat_ui.core.context import AppContext
from nextchat_ui.core.locale import LocaleSynchronizer
from nextchat_ui.core.pipeline import InitPipeline
from nextchat_ui.core.readiness import ReadinessGate
from nextchat_ui.core.registry import ViewFn, ViewRegistry
from nextchat_ui.core.routing import Branch, Layout, dispatch, layout_for
from nextchat_ui.core.theme import ThemeSynchronizer
from nextchat_ui.utils.errors import NotReadyError


class Phase(str, Enum):
    HYDRATING = "hydrating"
    READY = "ready"


@dataclass(frozen=True)
class Frame:
    branch: Branch
    layout: Layout


class RootOrchestrator:
    def __init__(self, ctx: AppContext, registry: ViewRegistry, pipeline: InitPipeline):
        self.ctx = ctx
        self.registry = registry
        self.pipeline = pipeline
        self.gate = ReadinessGate()
        self.theme = ThemeSynchronizer(ctx.config, ctx.document, ctx.tokens)
        self.locale = LocaleSynchronizer(ctx.document, ctx.lang)

    @property
    def phase(self) -> Phase:
        return Phase.READY if self.gate.is_ready() else Phase.HYDRATING

    @property
    def ready(self) -> bool:
        return self.gate.is_ready()

    async def hydrate(self) -> bool:
        """Enter READY after the first placeholder render. Runs on the event loop."""
        if not self.gate.mark_ready():
            return False
        logger.info("[Config] got config from build time: %s", self.ctx.client)
        self.theme.start()
        self.locale.activate()
        self.pipeline.start()
        return True

    def frame(self, location: Optional[str], is_mobile: bool = False) -> Frame:
        if not self.gate.is_ready():
            raise NotReadyError("cannot dispatch before the client is ready")
        config = self.ctx.config.config
        layout = layout_for(self.ctx.client, config.tight_border, self.ctx.lang(), is_mobile)
        self.ctx.document.set_root_classes(layout.classes)
        return Frame(branch=dispatch(location), layout=layout)

    async def load_view(self, name: str) -> ViewFn:
        return await self.registry.resolve(name)

    async def peek_view(self, name: str) -> Optional[ViewFn]:
        return self.registry.peek(name)
