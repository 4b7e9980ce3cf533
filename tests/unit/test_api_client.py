import asyncio
import logging

import httpx
import pytest

from nextchat_ui.services.api_client import PROVIDERS, get_client_api

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("OPENAI_BASE_URL", "OPENAI_API_KEY", "SILICONFLOW_BASE_URL", "SILICONFLOW_API_KEY",
                "NEXTCHAT_DISABLE_LIST_MODELS"):
        monkeypatch.delenv(var, raising=False)

def _transport(payload, seen=None, status=200):
    def handler(request):
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=payload)
    return httpx.MockTransport(handler)

def test_openai_models_filtered_and_sorted(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    seen = []
    payload = {"data": [{"id": "gpt-4o"}, {"id": "dall-e-3"}, {"id": "chatgpt-4o-latest"}, {"id": "gpt-3.5-turbo"}]}
    api = get_client_api("OpenAI", transport=_transport(payload, seen))
    models = asyncio.run(api.llm.models())
    assert [m.name for m in models] == ["chatgpt-4o-latest", "gpt-3.5-turbo", "gpt-4o"]
    assert all(m.provider.id == "openai" for m in models)
    assert seen[0].url.path == "/v1/models"
    assert seen[0].headers["Authorization"] == "Bearer sk-test"

def test_siliconflow_uses_chat_subtype(monkeypatch):
    seen = []
    api = get_client_api("SiliconFlow", transport=_transport({"data": [{"id": "Qwen/Qwen2.5-7B"}]}, seen))
    models = asyncio.run(api.llm.models())
    assert [m.key for m in models] == ["Qwen/Qwen2.5-7B@siliconflow"]
    assert seen[0].url.params["sub_type"] == "chat"

def test_http_error_propagates():
    api = get_client_api("OpenAI", transport=_transport({}, status=500))
    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(api.llm.models())

def test_provider_without_catalogue_returns_nothing():
    assert asyncio.run(get_client_api("Azure").llm.models()) == []

def test_disable_list_models_returns_defaults(monkeypatch):
    monkeypatch.setenv("NEXTCHAT_DISABLE_LIST_MODELS", "1")
    models = asyncio.run(get_client_api("OpenAI").llm.models())
    assert [m.name for m in models] == list(PROVIDERS["OpenAI"].default_models)

def test_unknown_provider_falls_back_to_openai(caplog):
    caplog.set_level(logging.WARNING, logger="nextchat_ui")
    api = get_client_api("Nope")
    assert api.provider is PROVIDERS["OpenAI"]
    assert "unknown provider" in caplog.text
