"""
MCP (Model Context Protocol) capability subsystem.
Optional: enabled with ENABLE_MCP=true. Bring-up reads the server list
from mcp_config.json and connects to every active server over stdio.
"""
from __future__ import annotations

import asyncio
import os
from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client

from nextchat_ui.config.logging_config import logger
from nextchat_ui.config.settings import mcp_config_path
from nextchat_ui.utils.errors import CapabilityError
from nextchat_ui.utils.io import read_json


@dataclass(frozen=True)
class McpServerConfig:
    command: str
    args: List[str] = field(default_factory=list)
    env: Optional[Dict[str, str]] = None
    status: str = "active"  # "active" | "paused"


@dataclass
class McpClientState:
    status: str  # "active" | "paused" | "error"
    tools: List[str] = field(default_factory=list)
    error: Optional[str] = None
    session: Any = None


Connector = Callable[[McpServerConfig, AsyncExitStack], Awaitable[Tuple[Any, List[str]]]]


async def connect_stdio(server: McpServerConfig, stack: AsyncExitStack) -> Tuple[ClientSession, List[str]]:
    params = StdioServerParameters(command=server.command, args=list(server.args), env=server.env)
    read, write = await stack.enter_async_context(stdio_client(params))
    session = await stack.enter_async_context(ClientSession(read, write))
    await session.initialize()
    result = await session.list_tools()
    return session, [t.name for t in result.tools]


def load_mcp_config(path: Path) -> Dict[str, McpServerConfig]:
    data = read_json(path, default={"mcpServers": {}})
    servers = data.get("mcpServers") if isinstance(data, dict) else None
    if not isinstance(servers, dict):
        raise CapabilityError(f"mcpServers must be a mapping: {path}")
    out: Dict[str, McpServerConfig] = {}
    for client_id, raw in servers.items():
        if not isinstance(raw, dict) or not isinstance(raw.get("command"), str) or not raw["command"].strip():
            raise CapabilityError(f"server {client_id!r} needs a command: {path}")
        args = raw.get("args", [])
        if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            raise CapabilityError(f"server {client_id!r} args must be a list of strings: {path}")
        out[client_id] = McpServerConfig(
            command=raw["command"],
            args=list(args),
            env=dict(raw["env"]) if isinstance(raw.get("env"), dict) else None,
            status=str(raw.get("status", "active")),
        )
    return out


class McpController:
    """Process-wide MCP client set.

    Server connections are opened and closed by one owner task, which
    holds the exit stack for as long as the controller is open.
    """

    def __init__(self, config_path: Optional[Path] = None, connector: Connector = connect_stdio):
        self._config_path = config_path
        self._connector = connector
        self._owner: Optional[asyncio.Task] = None
        self._ready: Optional[asyncio.Future] = None
        self._closing: Optional[asyncio.Event] = None
        self.clients: Dict[str, McpClientState] = {}

    @property
    def initialized(self) -> bool:
        return bool(self.clients)

    async def is_enabled(self) -> bool:
        return os.environ.get("ENABLE_MCP", "").strip().lower() == "true"

    async def initialize(self) -> Dict[str, McpClientState]:
        """Connect every active server once. Per-server failures are recorded, not raised."""
        if self._owner is None:
            servers = load_mcp_config(self._config_path or mcp_config_path())
            if not servers:
                return self.clients
            loop = asyncio.get_running_loop()
            self._ready = loop.create_future()
            self._closing = asyncio.Event()
            self._owner = loop.create_task(self._serve(servers), name="mcp:owner")
        self.clients = await asyncio.shield(self._ready)
        return self.clients

    async def aclose(self) -> None:
        """Shut every server down. Must run on the loop that initialized them."""
        if self._owner is None:
            return
        self._closing.set()
        await self._owner
        self._owner = self._ready = self._closing = None
        self.clients = {}
        logger.info("[MCP] closed")

    async def _serve(self, servers: Dict[str, McpServerConfig]) -> None:
        try:
            await self._hold(servers)
        except Exception as e:
            if self._ready.done():
                raise
            self._ready.set_exception(e)

    async def _hold(self, servers: Dict[str, McpServerConfig]) -> None:
        async with AsyncExitStack() as stack:
            clients: Dict[str, McpClientState] = {}
            for client_id, server in servers.items():
                if server.status == "paused":
                    clients[client_id] = McpClientState(status="paused")
                    continue
                clients[client_id] = await self._init_client(client_id, server, stack)
            logger.info("[MCP] %d client(s) configured", len(clients))
            self._ready.set_result(clients)
            await self._closing.wait()

    async def _init_client(self, client_id: str, server: McpServerConfig, stack: AsyncExitStack) -> McpClientState:
        logger.info("[MCP] initializing client %s", client_id)
        try:
            session, tools = await self._connector(server, stack)
        except Exception as e:
            logger.error("[MCP] failed to initialize client %s: %s", client_id, e)
            return McpClientState(status="error", error=str(e))
        logger.info("[MCP] client %s ready with %d tool(s)", client_id, len(tools))
        return McpClientState(status="active", tools=tools, session=session)
