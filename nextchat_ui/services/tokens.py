"""Presentation tokens (CSS custom properties) per color scheme."""
from __future__ import annotations

from typing import Dict, Mapping

from nextchat_ui.core.document import Document

PALETTES: Dict[str, Dict[str, str]] = {
    "light": {
        "--white": "#ffffff",
        "--black": "rgb(48, 48, 48)",
        "--gray": "rgb(250, 250, 250)",
        "--primary": "rgb(29, 147, 171)",
        "--second": "rgb(231, 248, 255)",
        "--hover-color": "#f3f3f3",
        "--bar-color": "rgba(0, 0, 0, 0.1)",
        "--theme-color": "rgb(250, 250, 250)",
    },
    "dark": {
        "--white": "rgb(30, 30, 30)",
        "--black": "rgb(187, 187, 187)",
        "--gray": "rgb(21, 21, 21)",
        "--primary": "rgb(29, 147, 171)",
        "--second": "rgb(27, 38, 42)",
        "--hover-color": "#323232",
        "--bar-color": "rgba(255, 255, 255, 0.1)",
        "--theme-color": "rgb(21, 21, 21)",
    },
}


class TokenStore:
    """Looks up tokens for the scheme currently in effect on the document.

    An explicit ``dark``/``light`` body class wins; otherwise the ambient
    OS preference decides.
    """

    def __init__(self, document: Document, palettes: Mapping[str, Mapping[str, str]] = PALETTES,
                 prefers_dark: bool = False):
        self._document = document
        self._palettes = palettes
        self.prefers_dark = prefers_dark

    def active_scheme(self) -> str:
        classes = self._document.body_classes
        if "dark" in classes:
            return "dark"
        if "light" in classes:
            return "light"
        return "dark" if self.prefers_dark else "light"

    def get_css_var(self, name: str) -> str:
        return self._palettes.get(self.active_scheme(), {}).get(name, "").strip()

    def palette(self) -> Dict[str, str]:
        return dict(self._palettes.get(self.active_scheme(), {}))
