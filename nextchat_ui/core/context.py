from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from nextchat_ui.config.client import ClientConfig, get_client_config
from nextchat_ui.config.settings import config_path
from nextchat_ui.core.document import Document
from nextchat_ui.core.locale import get_lang
from nextchat_ui.core.loop import BackgroundLoop
from nextchat_ui.services.access_store import AccessStore
from nextchat_ui.services.api_client import ClientApi, get_client_api
from nextchat_ui.services.config_store import ConfigStore
from nextchat_ui.services.mcp_controller import McpController
from nextchat_ui.services.tokens import TokenStore


@dataclass
class AppContext:
    """Everything the shell shares, passed down explicitly instead of via globals."""

    client: ClientConfig
    config: ConfigStore
    access: AccessStore
    mcp: McpController
    document: Document
    tokens: TokenStore
    api_factory: Callable[[str], ClientApi] = get_client_api
    accept_language: Optional[str] = None
    runner: Optional[BackgroundLoop] = field(default=None, repr=False)

    @classmethod
    def create(cls, accept_language: Optional[str] = None, mcp: Optional[McpController] = None) -> "AppContext":
        client = get_client_config()
        document = Document()
        return cls(
            client=client,
            config=ConfigStore.load(config_path()),
            access=AccessStore(client),
            mcp=mcp or McpController(),
            document=document,
            tokens=TokenStore(document),
            accept_language=accept_language,
        )

    def lang(self) -> str:
        return get_lang(self.config.config.lang, self.accept_language)

    def apply(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run a state mutation on the event loop thread when one is attached."""
        if self.runner is None:
            return fn(*args, **kwargs)
        return self.runner.call(fn, *args, **kwargs)
