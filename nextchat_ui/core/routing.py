"""Location -> branch dispatch.

``dispatch`` is a pure function of the path. The branch decides which
surface is rendered; ``layout_for`` computes presentation modifiers that
apply to the root container whatever the branch is.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from nextchat_ui.config.client import ClientConfig
from nextchat_ui.core.locale import is_rtl


class Path(str, Enum):
    HOME = "/"
    CHAT = "/chat"
    SETTINGS = "/settings"
    NEW_CHAT = "/new-chat"
    MASKS = "/masks"
    PLUGINS = "/plugins"
    AUTH = "/auth"
    SD = "/sd"
    SD_NEW = "/sd-new"
    ARTIFACTS = "/artifacts"
    SEARCH_CHAT = "/search-chat"
    MCP_MARKET = "/mcp-market"


@dataclass(frozen=True)
class ArtifactBranch:
    artifact_id: Optional[str] = None


@dataclass(frozen=True)
class AuthBranch:
    pass


@dataclass(frozen=True)
class ImageGenBranch:
    path: str


@dataclass(frozen=True)
class ShellBranch:
    view: Optional[str]
    sidebar_visible: bool


Branch = Union[ArtifactBranch, AuthBranch, ImageGenBranch, ShellBranch]

# Sub-routes rendered inside the shell's content region
SHELL_ROUTES: Dict[str, str] = {
    Path.HOME.value: "chat",
    Path.NEW_CHAT.value: "new-chat",
    Path.MASKS.value: "masks",
    Path.PLUGINS.value: "plugins",
    Path.SEARCH_CHAT.value: "search-chat",
    Path.CHAT.value: "chat",
    Path.SETTINGS.value: "settings",
    Path.MCP_MARKET.value: "mcp-market",
}

IMAGE_GEN_PATHS = frozenset({Path.SD.value, Path.SD_NEW.value})

_ARTIFACT_RE = re.compile(r"^/artifacts(?:/(?P<id>[^/]+))?/?$")


def normalize(location: Optional[str]) -> str:
    """Reduce a raw location (possibly a hash route) to a bare path."""
    path = (location or "").strip()
    if path.startswith("#"):
        path = path[1:]
    path = path.split("?", 1)[0].split("#", 1)[0]
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1 and path.endswith("/"):
        path = path.rstrip("/") or "/"
    return path


def dispatch(location: Optional[str]) -> Branch:
    path = normalize(location)

    m = _ARTIFACT_RE.match(path)
    if m:
        return ArtifactBranch(artifact_id=m.group("id"))
    if path == Path.AUTH.value:
        return AuthBranch()
    if path in IMAGE_GEN_PATHS:
        return ImageGenBranch(path=path)
    return ShellBranch(view=SHELL_ROUTES.get(path), sidebar_visible=path == Path.HOME.value)


@dataclass(frozen=True)
class Layout:
    tight_border: bool = False
    rtl: bool = False

    @property
    def classes(self) -> set:
        out = {"container"}
        if self.tight_border:
            out.add("tight-container")
        if self.rtl:
            out.add("rtl-screen")
        return out


def layout_for(client: ClientConfig, tight_border: bool, lang: str, is_mobile: bool) -> Layout:
    return Layout(
        tight_border=client.is_app or (tight_border and not is_mobile),
        rtl=is_rtl(lang),
    )
