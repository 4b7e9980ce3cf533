"""Language detection and the one-time document language sync."""
from __future__ import annotations

from typing import Callable, Optional

from nextchat_ui.config.logging_config import logger
from nextchat_ui.config.settings import RTL_LANGS
from nextchat_ui.core.document import Document

ALL_LANGS = {
    "cn": "简体中文",
    "en": "English",
    "pt": "Português",
    "tw": "繁體中文",
    "jp": "日本語",
    "ko": "한국어",
    "id": "Indonesia",
    "fr": "Français",
    "es": "Español",
    "it": "Italiano",
    "tr": "Türkçe",
    "de": "Deutsch",
    "vi": "Tiếng Việt",
    "ru": "Русский",
    "cs": "Čeština",
    "no": "Nynorsk",
    "ar": "العربية",
    "bn": "বাংলা",
    "sk": "Slovensky",
    "da": "Dansk",
}
DEFAULT_LANG = "en"

# Codes that differ from their ISO 639 / BCP 47 tag
ISO_LANGS = {"cn": "zh-Hans", "tw": "zh-Hant"}


def _browser_lang(accept_language: Optional[str]) -> str:
    if not accept_language:
        return DEFAULT_LANG
    first = accept_language.split(",")[0].split(";")[0].strip()
    if not first:
        return DEFAULT_LANG
    parts = first.replace("_", "-").lower().split("-")
    language = parts[0]
    region = parts[-1] if len(parts) > 1 else ""
    if region in ALL_LANGS:
        return region
    if language in ALL_LANGS:
        return language
    return DEFAULT_LANG


def get_lang(saved: Optional[str] = None, accept_language: Optional[str] = None) -> str:
    """Saved choice first, then the browser language, then English."""
    if saved in ALL_LANGS:
        return saved
    return _browser_lang(accept_language)


def get_iso_lang(lang: str) -> str:
    return ISO_LANGS.get(lang, lang)


def is_rtl(lang: str) -> bool:
    return lang in RTL_LANGS


class LocaleSynchronizer:
    """Copies the active language onto the document tag, once.

    Language changes later in the session do not touch the tag again.
    """

    def __init__(self, document: Document, lang: Callable[[], str]):
        self._document = document
        self._lang = lang
        self._activated = False

    @property
    def activated(self) -> bool:
        return self._activated

    def activate(self) -> bool:
        """Returns True when the document tag was rewritten."""
        if self._activated:
            return False
        self._activated = True
        iso = get_iso_lang(self._lang())
        if self._document.lang == iso:
            return False
        logger.debug("Document lang %r -> %r", self._document.lang, iso)
        self._document.lang = iso
        return True
