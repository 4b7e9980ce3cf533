"""Ambient presentation state the synchronizers write into.

This is the client's stand-in for the browser document: body classes,
theme-color meta hints, the root language tag, head stylesheets and the
classes on the root screen container. The Streamlit layer renders it on
every pass (see ``ui/layout/document.py``).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Set


@dataclass
class Document:
    lang: str = ""
    body_classes: Set[str] = field(default_factory=set)
    theme_colors: Dict[str, str] = field(default_factory=dict)  # media ("dark"/"light") -> color
    stylesheets: List[str] = field(default_factory=list)
    root_classes: Set[str] = field(default_factory=set)

    def add_class(self, name: str) -> None:
        self.body_classes.add(name)

    def remove_class(self, name: str) -> None:
        self.body_classes.discard(name)

    def set_theme_color(self, media: str, value: str) -> None:
        self.theme_colors[media] = value

    def add_stylesheet(self, href: str) -> bool:
        if href in self.stylesheets:
            return False
        self.stylesheets.append(href)
        return True

    def set_root_classes(self, classes: Set[str]) -> None:
        self.root_classes = set(classes)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "lang": self.lang,
            "body_classes": sorted(self.body_classes),
            "theme_colors": dict(self.theme_colors),
            "stylesheets": list(self.stylesheets),
            "root_classes": sorted(self.root_classes),
        }
