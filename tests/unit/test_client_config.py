import os

from nextchat_ui.config.client import get_client_config
from nextchat_ui.config.settings import config_path, load_env, server_url

def test_defaults(monkeypatch):
    monkeypatch.delenv("NEXTCHAT_BUILD_MODE", raising=False)
    monkeypatch.delenv("NEXTCHAT_BUILD_APP", raising=False)
    cfg = get_client_config()
    assert cfg.build_mode == "standalone" and cfg.is_app is False

def test_env_overrides(monkeypatch):
    monkeypatch.setenv("NEXTCHAT_BUILD_MODE", "export")
    monkeypatch.setenv("NEXTCHAT_BUILD_APP", "1")
    cfg = get_client_config()
    assert cfg.build_mode == "export" and cfg.is_app is True

def test_unknown_build_mode_falls_back(monkeypatch):
    monkeypatch.setenv("NEXTCHAT_BUILD_MODE", "weird")
    assert get_client_config().build_mode == "standalone"

def test_config_dir_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("NEXTCHAT_CONFIG_DIR", str(tmp_path))
    assert config_path() == tmp_path / "app_config.json"

def test_load_env_reads_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.setattr(os, "environ", {"NEXTCHAT_BUILD_APP": "0"})
    env_file = tmp_path / ".env"
    env_file.write_text("NEXTCHAT_BUILD_MODE=export\nNEXTCHAT_BUILD_APP=1\nNEXTCHAT_SERVER_URL=http://chat.local/\n")
    assert load_env(env_file) is True
    cfg = get_client_config()
    assert cfg.build_mode == "export"
    assert cfg.is_app is False
    assert server_url() == "http://chat.local"
