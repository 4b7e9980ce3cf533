"""
Application configuration store.
Holds the user-facing settings the shell reads (theme, language, layout,
active model provider) plus the merged model catalogue, and notifies
subscribers when anything changes.
"""
from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from nextchat_ui.config.logging_config import logger
from nextchat_ui.services.api_client import LLMModel, LLMModelProvider
from nextchat_ui.utils.errors import ConfigError
from nextchat_ui.utils.io import read_json, write_json

Listener = Callable[["AppConfig", "AppConfig"], None]


@dataclass(frozen=True)
class ModelConfig:
    provider_name: str = "OpenAI"
    model: str = "gpt-4o-mini"
    temperature: float = 0.5
    max_tokens: int = 4000


@dataclass(frozen=True)
class AppConfig:
    theme: str = "auto"
    lang: Optional[str] = None
    tight_border: bool = False
    model_config: ModelConfig = field(default_factory=ModelConfig)
    models: List[LLMModel] = field(default_factory=list)


def _config_from_dict(data: Dict[str, Any]) -> AppConfig:
    defaults = AppConfig()
    models = []
    for m in data.get("models") or []:
        provider = LLMModelProvider(**m["provider"])
        models.append(LLMModel(**{**m, "provider": provider}))
    return AppConfig(
        theme=str(data.get("theme", defaults.theme)),
        lang=data.get("lang"),
        tight_border=bool(data.get("tight_border", defaults.tight_border)),
        model_config=ModelConfig(**(data.get("model_config") or {})),
        models=models,
    )


class ConfigStore:
    """Process-wide configuration, mutated only through ``update``."""

    def __init__(self, config: Optional[AppConfig] = None, path: Optional[Path] = None):
        self._config = config or AppConfig()
        self._path = path
        self._listeners: List[Listener] = []
        self._writer: Optional[ThreadPoolExecutor] = None
        self._pending: Optional[asyncio.Future] = None

    @classmethod
    def load(cls, path: Path) -> "ConfigStore":
        try:
            data = read_json(path, default={})
            config = _config_from_dict(data) if data else AppConfig()
        except (ValueError, TypeError, KeyError) as e:
            raise ConfigError(f"Invalid configuration at {path}: {e}") from e
        return cls(config, path=path)

    @property
    def config(self) -> AppConfig:
        return self._config

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **changes: Any) -> AppConfig:
        old = self._config
        new = replace(old, **changes)
        if new == old:
            return old
        self._config = new
        self.save()
        for listener in list(self._listeners):
            listener(old, new)
        return new

    def merge_models(self, new_models: List[LLMModel]) -> None:
        """Fold a fetched catalogue into the known models.

        Known models missing from the catalogue are kept but marked
        unavailable; catalogue entries replace known ones by key.
        """
        if not new_models:
            return
        merged: Dict[str, LLMModel] = {}
        for m in self._config.models:
            merged[m.key] = replace(m, available=False)
        for m in new_models:
            merged[m.key] = replace(m, available=True)
        self.update(models=list(merged.values()))

    def save(self) -> None:
        """Persist the current config.

        On a running event loop the write is handed to a single writer
        thread, so the loop never blocks on disk and writes land in order.
        """
        if self._path is None:
            return
        data = asdict(self._config)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._write(data)
            return
        if self._writer is None:
            self._writer = ThreadPoolExecutor(max_workers=1, thread_name_prefix="config-writer")
        self._pending = loop.run_in_executor(self._writer, self._write, data)
        self._pending.add_done_callback(self._log_write_failure)

    async def flush(self) -> None:
        """Wait for the last background write."""
        if self._pending is not None:
            await self._pending

    def _write(self, data: Dict[str, Any]) -> None:
        write_json(self._path, data)
        logger.debug("Configuration saved to %s", self._path)

    def _log_write_failure(self, fut: "asyncio.Future") -> None:
        if not fut.cancelled() and fut.exception() is not None:
            logger.error("Failed to save configuration to %s: %s", self._path, fut.exception())
