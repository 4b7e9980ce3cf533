"""Location handling on top of Streamlit's query string (``?path=/settings``)."""
import streamlit as st

from nextchat_ui.core.routing import Path, normalize

ROUTE_PARAM = "path"
_MOBILE_MARKERS = ("Mobile", "Android", "iPhone", "iPad")


def get_current_path() -> str:
    return normalize(st.query_params.get(ROUTE_PARAM, Path.HOME.value))


def navigate(path: str) -> None:
    path = normalize(path)
    if path == get_current_path():
        return
    st.query_params[ROUTE_PARAM] = path
    st.rerun()


def _header(name: str) -> str:
    try:
        return st.context.headers.get(name) or ""
    except AttributeError:
        return ""


def is_mobile_client() -> bool:
    ua = _header("User-Agent")
    return any(m in ua for m in _MOBILE_MARKERS)


def accept_language() -> str:
    return _header("Accept-Language")
