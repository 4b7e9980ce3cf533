import asyncio
import json
import threading

import pytest

from nextchat_ui.services import config_store
from nextchat_ui.services.api_client import LLMModel, LLMModelProvider
from nextchat_ui.services.config_store import AppConfig, ConfigStore
from nextchat_ui.utils.errors import ConfigError

OPENAI = LLMModelProvider(id="openai", provider_name="OpenAI", provider_type="openai")

def _m(name, available=True):
    return LLMModel(name=name, provider=OPENAI, available=available)

def test_load_missing_file_gives_defaults(tmp_path):
    store = ConfigStore.load(tmp_path / "app_config.json")
    assert store.config == AppConfig()

def test_update_persists_and_notifies(tmp_path):
    path = tmp_path / "app_config.json"
    store = ConfigStore.load(path)
    seen = []
    store.subscribe(lambda old, new: seen.append((old.theme, new.theme)))
    store.update(theme="dark")
    assert seen == [("auto", "dark")]
    assert json.loads(path.read_text())["theme"] == "dark"
    assert ConfigStore.load(path).config.theme == "dark"

def test_update_without_change_is_silent():
    store = ConfigStore()
    seen = []
    store.subscribe(lambda old, new: seen.append(new))
    store.update(theme="auto")
    assert seen == []

def test_unsubscribe():
    store = ConfigStore()
    seen = []
    unsubscribe = store.subscribe(lambda old, new: seen.append(new))
    unsubscribe()
    store.update(theme="light")
    assert seen == []

def test_invalid_file_raises_config_error(tmp_path):
    path = tmp_path / "app_config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError):
        ConfigStore.load(path)

def test_merge_models_is_idempotent():
    store = ConfigStore()
    catalogue = [_m("gpt-4o"), _m("gpt-4o-mini")]
    store.merge_models(catalogue)
    once = store.config.models
    store.merge_models(catalogue)
    assert store.config.models == once

def test_merge_marks_missing_models_unavailable():
    store = ConfigStore(AppConfig(models=[_m("gpt-3.5-turbo")]))
    store.merge_models([_m("gpt-4o")])
    by_name = {m.name: m.available for m in store.config.models}
    assert by_name == {"gpt-3.5-turbo": False, "gpt-4o": True}

def test_merge_empty_catalogue_is_noop():
    store = ConfigStore(AppConfig(models=[_m("gpt-4o")]))
    store.merge_models([])
    assert store.config.models == [_m("gpt-4o")]

def test_save_on_event_loop_runs_off_the_loop_thread(tmp_path, monkeypatch):
    writers = []
    real_write = config_store.write_json

    def tracking_write(path, obj):
        writers.append(threading.current_thread().name)
        real_write(path, obj)
    monkeypatch.setattr(config_store, "write_json", tracking_write)
    path = tmp_path / "app_config.json"
    store = ConfigStore.load(path)

    async def go():
        store.merge_models([_m("gpt-4o")])
        store.update(theme="dark")
        await store.flush()
        return threading.current_thread().name
    loop_thread = asyncio.run(go())

    assert len(writers) == 2 and loop_thread not in writers
    saved = json.loads(path.read_text())
    assert saved["theme"] == "dark" and saved["models"][0]["name"] == "gpt-4o"
