"""The fixed set of startup tasks."""
from __future__ import annotations

from nextchat_ui.config.logging_config import logger
from nextchat_ui.config.settings import MODEL_FETCH_ATTEMPTS, MODEL_FETCH_RETRY_DELAY_S
from nextchat_ui.core.context import AppContext
from nextchat_ui.core.pipeline import InitPipeline, InitTask, Isolation


async def load_models(ctx: AppContext) -> None:
    api = ctx.api_factory(ctx.config.config.model_config.provider_name)
    models = await api.llm.models()
    ctx.config.merge_models(models)


async def fetch_access(ctx: AppContext) -> None:
    await ctx.access.fetch()


async def init_mcp(ctx: AppContext) -> None:
    if not await ctx.mcp.is_enabled():
        return
    logger.info("[MCP] initializing...")
    await ctx.mcp.initialize()
    logger.info("[MCP] initialized")


def build_init_pipeline(ctx: AppContext) -> InitPipeline:
    return InitPipeline([
        InitTask("models", lambda: load_models(ctx),
                 attempts=MODEL_FETCH_ATTEMPTS, retry_delay_s=MODEL_FETCH_RETRY_DELAY_S),
        InitTask("access", lambda: fetch_access(ctx)),
        InitTask("MCP", lambda: init_mcp(ctx), isolation=Isolation.CATCH_AND_LOG),
    ])
