"""Build-time client configuration.

Mirrors what the packaged client knows before any server round trip:
how it was built and whether it runs as an embedded desktop app.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from nextchat_ui.config.settings import VERSION

BUILD_MODES = ("standalone", "export")


@dataclass(frozen=True)
class ClientConfig:
    version: str = VERSION
    build_mode: str = "standalone"
    is_app: bool = False


def _truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def get_client_config() -> ClientConfig:
    build_mode = os.environ.get("NEXTCHAT_BUILD_MODE", "standalone").strip().lower()
    if build_mode not in BUILD_MODES:
        build_mode = "standalone"
    return ClientConfig(
        version=VERSION,
        build_mode=build_mode,
        is_app=_truthy(os.environ.get("NEXTCHAT_BUILD_APP")),
    )
