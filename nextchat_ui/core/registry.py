"""Lazily activated views.

Each view name owns at most one activation handle for the life of the
process. Handles are created on first resolve and shared by every caller
after that; a failed handle stays put and re-raises its error.
"""
from __future__ import annotations

import asyncio
import importlib
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from nextchat_ui.config.logging_config import logger
from nextchat_ui.utils.errors import ViewActivationError

ViewFn = Callable[..., Any]


@dataclass(frozen=True)
class ViewDescriptor:
    name: str
    activate: Callable[[], Awaitable[ViewFn]]
    placeholder: Callable[[], Any]


def lazy_view(module: str, attr: str = "render") -> Callable[[], Awaitable[ViewFn]]:
    """Activation that imports ``module`` off the loop thread and returns ``attr``."""
    async def activate() -> ViewFn:
        mod = await asyncio.to_thread(importlib.import_module, module)
        return getattr(mod, attr)
    return activate


class ViewRegistry:
    def __init__(self, descriptors: Iterable[ViewDescriptor]):
        table: Dict[str, ViewDescriptor] = {}
        for d in descriptors:
            if d.name in table:
                raise ValueError(f"Duplicate view name: {d.name}")
            table[d.name] = d
        self._descriptors = MappingProxyType(table)
        self._handles: Dict[str, "asyncio.Future[ViewFn]"] = {}

    def names(self) -> List[str]:
        return list(self._descriptors)

    def descriptor(self, name: str) -> ViewDescriptor:
        d = self._descriptors.get(name)
        if d is None:
            raise ViewActivationError(name, "unknown view")
        return d

    def resolve(self, name: str) -> "asyncio.Future[ViewFn]":
        """Return the activation handle for ``name``, starting it if needed.

        Must be called on the event loop thread. There is no await between
        the lookup and the insert, so two callers can never both start an
        activation for the same name.
        """
        handle = self._handles.get(name)
        if handle is not None:
            return handle
        d = self.descriptor(name)
        handle = asyncio.ensure_future(self._activate(d))
        self._handles[name] = handle
        return handle

    def peek(self, name: str) -> Optional[ViewFn]:
        handle = self._handles.get(name)
        if handle is None or not handle.done() or handle.cancelled() or handle.exception() is not None:
            return None
        return handle.result()

    async def _activate(self, d: ViewDescriptor) -> ViewFn:
        logger.debug("[View] activating %s", d.name)
        try:
            return await d.activate()
        except Exception as e:
            logger.error("[View] failed to load %s: %s", d.name, e)
            raise ViewActivationError(d.name, f"failed to load view: {e}") from e
