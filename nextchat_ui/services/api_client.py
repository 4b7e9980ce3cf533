"""
Model-provider API clients.
Only the model catalogue is needed by the shell: each provider client
exposes ``llm.models()``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Tuple

import httpx

from nextchat_ui.config.logging_config import logger
from nextchat_ui.config.settings import REQUEST_TIMEOUT_S


@dataclass(frozen=True)
class LLMModelProvider:
    id: str
    provider_name: str
    provider_type: str
    sorted: int = 1


@dataclass(frozen=True)
class LLMModel:
    name: str
    provider: LLMModelProvider
    available: bool = True
    display_name: Optional[str] = None
    sorted: int = 1

    @property
    def key(self) -> str:
        return f"{self.name}@{self.provider.id}"


@dataclass(frozen=True)
class ProviderSpec:
    id: str
    name: str
    provider_type: str
    sorted: int
    base_url: str = ""
    base_url_var: Optional[str] = None
    api_key_var: Optional[str] = None
    models_path: Optional[str] = None  # None -> no remote catalogue
    models_prefix: Tuple[str, ...] = ()
    default_models: Tuple[str, ...] = ()

    def model_provider(self) -> LLMModelProvider:
        return LLMModelProvider(
            id=self.id, provider_name=self.name, provider_type=self.provider_type, sorted=self.sorted
        )


# Known providers, keyed by the provider name stored in the model config
PROVIDERS: Dict[str, ProviderSpec] = {
    "OpenAI": ProviderSpec(
        id="openai", name="OpenAI", provider_type="openai", sorted=1,
        base_url="https://api.openai.com", base_url_var="OPENAI_BASE_URL", api_key_var="OPENAI_API_KEY",
        models_path="/v1/models", models_prefix=("gpt-", "chatgpt-"),
        default_models=("gpt-4o", "gpt-4o-mini", "gpt-4-turbo", "gpt-3.5-turbo"),
    ),
    "Azure": ProviderSpec(id="azure", name="Azure", provider_type="azure", sorted=2),
    "Google": ProviderSpec(
        id="google", name="Google", provider_type="google", sorted=3,
        default_models=("gemini-1.5-pro", "gemini-1.5-flash"),
    ),
    "Anthropic": ProviderSpec(
        id="anthropic", name="Anthropic", provider_type="anthropic", sorted=4,
        default_models=("claude-3-5-sonnet-latest", "claude-3-5-haiku-latest"),
    ),
    "Moonshot": ProviderSpec(id="moonshot", name="Moonshot", provider_type="moonshot", sorted=9),
    "XAI": ProviderSpec(id="xai", name="XAI", provider_type="xai", sorted=11),
    "DeepSeek": ProviderSpec(
        id="deepseek", name="DeepSeek", provider_type="deepseek", sorted=13,
        default_models=("deepseek-chat", "deepseek-reasoner"),
    ),
    "SiliconFlow": ProviderSpec(
        id="siliconflow", name="SiliconFlow", provider_type="siliconflow", sorted=14,
        base_url="https://api.siliconflow.cn", base_url_var="SILICONFLOW_BASE_URL",
        api_key_var="SILICONFLOW_API_KEY", models_path="/v1/models?&sub_type=chat",
    ),
}


class LLMApi(Protocol):
    async def models(self) -> List[LLMModel]:
        ...


class ProviderLLMApi:
    """Lists a provider's chat models over its OpenAI-compatible endpoint."""

    def __init__(self, spec: ProviderSpec, *, base_url: Optional[str] = None, api_key: Optional[str] = None,
                 disable_list_models: bool = False, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.spec = spec
        self.base_url = (base_url or spec.base_url).rstrip("/")
        self.api_key = api_key
        self.disable_list_models = disable_list_models
        self._transport = transport

    def _default_models(self) -> List[LLMModel]:
        provider = self.spec.model_provider()
        return [LLMModel(name=n, provider=provider, sorted=i + 1) for i, n in enumerate(self.spec.default_models)]

    async def models(self) -> List[LLMModel]:
        if self.disable_list_models:
            return self._default_models()
        if not self.spec.models_path:
            return []

        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=REQUEST_TIMEOUT_S, transport=self._transport
        ) as client:
            resp = await client.get(self.spec.models_path, headers=headers)
            resp.raise_for_status()
            payload = resp.json()

        ids = [m.get("id") for m in (payload.get("data") or []) if isinstance(m, dict)]
        ids = [i for i in ids if isinstance(i, str) and i]
        if self.spec.models_prefix:
            ids = [i for i in ids if i.startswith(self.spec.models_prefix)]

        provider = self.spec.model_provider()
        models = [LLMModel(name=i, provider=provider, sorted=n + 1) for n, i in enumerate(sorted(ids))]
        logger.info("[Models] %s listed %d models", self.spec.name, len(models))
        return models


@dataclass
class ClientApi:
    llm: LLMApi
    provider: Optional[ProviderSpec] = field(default=None)


def _truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def get_client_api(provider_name: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> ClientApi:
    """Return the API client for a provider name; unknown names fall back to OpenAI."""
    spec = PROVIDERS.get(provider_name)
    if spec is None:
        logger.warning("[Models] unknown provider %r, falling back to OpenAI", provider_name)
        spec = PROVIDERS["OpenAI"]
    api = ProviderLLMApi(
        spec,
        base_url=os.environ.get(spec.base_url_var) if spec.base_url_var else None,
        api_key=os.environ.get(spec.api_key_var) if spec.api_key_var else None,
        disable_list_models=_truthy(os.environ.get("NEXTCHAT_DISABLE_LIST_MODELS")),
        transport=transport,
    )
    return ClientApi(llm=api, provider=spec)
