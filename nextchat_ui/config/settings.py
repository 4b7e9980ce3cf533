import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

APP_NAME = "NextChat"
VERSION = "0.1.0"

def config_dir() -> Path:
    env = os.environ.get("NEXTCHAT_CONFIG_DIR")
    return Path(env).expanduser() if env else Path.home() / ".config" / "nextchat"

def config_path() -> Path:
    return config_dir() / "app_config.json"

def mcp_config_path() -> Path:
    return config_dir() / "mcp_config.json"

# Layout
RTL_LANGS = frozenset({"ar"})

# Theme-color hints used while the theme follows the OS preference
AUTO_THEME_COLORS = {"dark": "#151515", "light": "#fafafa"}

# Fonts
GOOGLE_FONT_PROXY_URL = "/google-fonts"
GOOGLE_FONT_REMOTE_URL = "https://fonts.googleapis.com"
GOOGLE_FONT_FAMILY = "Noto Sans:wght@300;400;700;900"

# Network
DEFAULT_SERVER_URL = "http://localhost:3000"
REQUEST_TIMEOUT_S = 10.0
MODEL_FETCH_ATTEMPTS = 3
MODEL_FETCH_RETRY_DELAY_S = 1.0


def load_env(path: Optional[Path] = None) -> bool:
    """Load a ``.env`` file into the environment. Variables already set win."""
    return load_dotenv(path or find_dotenv(usecwd=True), override=False)


def server_url() -> str:
    return os.environ.get("NEXTCHAT_SERVER_URL", DEFAULT_SERVER_URL).rstrip("/")
