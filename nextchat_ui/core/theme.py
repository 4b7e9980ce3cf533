from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Optional

from nextchat_ui.config.logging_config import logger
from nextchat_ui.config.settings import AUTO_THEME_COLORS
from nextchat_ui.core.document import Document
from nextchat_ui.services.config_store import AppConfig, ConfigStore
from nextchat_ui.services.tokens import TokenStore


class Theme(str, Enum):
    AUTO = "auto"
    DARK = "dark"
    LIGHT = "light"


def apply_theme(theme: str, document: Document, tokens: TokenStore) -> Dict[str, Any]:
    """Project a theme preference onto the document and return the result.

    Explicit classes are always cleared before the new one is added, so
    switching themes never leaves both classes on the body.
    """
    theme = theme.value if isinstance(theme, Theme) else str(theme)

    document.remove_class(Theme.LIGHT.value)
    document.remove_class(Theme.DARK.value)
    if theme == Theme.DARK.value:
        document.add_class(Theme.DARK.value)
    elif theme == Theme.LIGHT.value:
        document.add_class(Theme.LIGHT.value)

    if theme == Theme.AUTO.value:
        document.set_theme_color("dark", AUTO_THEME_COLORS["dark"])
        document.set_theme_color("light", AUTO_THEME_COLORS["light"])
    else:
        color = tokens.get_css_var("--theme-color")
        document.set_theme_color("dark", color)
        document.set_theme_color("light", color)

    return document.snapshot()


class ThemeSynchronizer:
    """Keeps the document in step with ``AppConfig.theme``."""

    def __init__(self, store: ConfigStore, document: Document, tokens: TokenStore):
        self._store = store
        self._document = document
        self._tokens = tokens
        self._applied: Optional[str] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def applied(self) -> Optional[str]:
        return self._applied

    def start(self) -> None:
        if self._unsubscribe is not None:
            return
        self.sync(self._store.config.theme)
        self._unsubscribe = self._store.subscribe(self._on_change)

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def sync(self, theme: str) -> None:
        apply_theme(theme, self._document, self._tokens)
        if theme != self._applied:
            logger.debug("Theme applied: %s", theme)
        self._applied = theme

    def _on_change(self, old: AppConfig, new: AppConfig) -> None:
        if new.theme != old.theme:
            self.sync(new.theme)
