"""
Access-state store.
Fetches the server-side access flags once per process and owns the
handling of that fetch's failures.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import IntEnum
from typing import Any, Dict, Optional

import httpx

from nextchat_ui.config.client import ClientConfig
from nextchat_ui.config.logging_config import logger
from nextchat_ui.config.settings import REQUEST_TIMEOUT_S, server_url


@dataclass(frozen=True)
class AccessState:
    need_code: bool = True
    hide_user_api_key: bool = False
    hide_balance_query: bool = False
    disable_gpt4: bool = False
    disable_fast_link: bool = False
    custom_models: str = ""
    default_model: str = ""


# server payload key -> AccessState field
_SERVER_KEYS = {
    "needCode": "need_code",
    "hideUserApiKey": "hide_user_api_key",
    "hideBalanceQuery": "hide_balance_query",
    "disableGPT4": "disable_gpt4",
    "disableFastLink": "disable_fast_link",
    "customModels": "custom_models",
    "defaultModel": "default_model",
}


class FetchState(IntEnum):
    IDLE = 0
    FETCHING = 1
    DONE = 2


class AccessStore:
    def __init__(self, client: ClientConfig, base_url: Optional[str] = None, access_code: str = "",
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._client = client
        self._base_url = (base_url or server_url()).rstrip("/")
        self._transport = transport
        self.access_code = access_code
        self.state = AccessState()
        self.fetch_state = FetchState.IDLE

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def is_authorized(self) -> bool:
        return not self.state.need_code or bool(self.access_code)

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer nk-{self.access_code}"} if self.access_code else {}

    def _apply(self, payload: Dict[str, Any]) -> None:
        known = {f.name for f in fields(AccessState)}
        changes = {}
        for key, value in payload.items():
            name = _SERVER_KEYS.get(key, key)
            if name in known and value is not None:
                changes[name] = value
        self.state = replace(self.state, **changes)

    async def fetch(self) -> None:
        """Fetch access flags once. Failures are logged here and never raised."""
        if self.fetch_state > FetchState.IDLE or self._client.build_mode == "export":
            return
        self.fetch_state = FetchState.FETCHING
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url, timeout=REQUEST_TIMEOUT_S, transport=self._transport
            ) as client:
                resp = await client.post("/api/config", headers=self._headers())
                resp.raise_for_status()
                payload = resp.json()
            if not isinstance(payload, dict):
                raise ValueError(f"unexpected payload: {payload!r}")
            self._apply(payload)
            logger.info("[Config] got config from server")
        except (httpx.HTTPError, ValueError) as e:
            logger.error("[Config] failed to fetch config: %s", e)
        finally:
            self.fetch_state = FetchState.DONE
