"""Renders the Document model into the page on every pass."""
import html
from typing import Iterable

import streamlit as st

from nextchat_ui.core.document import Document
from nextchat_ui.services.tokens import TokenStore

ROOT_ID = "nextchat-root"

# Root container modifier -> rules applied to Streamlit's app container
ROOT_RULES = {
    "tight-container": (
        '[data-testid="stMainBlockContainer"], .block-container '
        "{ max-width: 100%; padding: 0; }"
    ),
    "rtl-screen": ".stApp { direction: rtl; }",
}


def _css(tokens: TokenStore, root_classes: Iterable[str]) -> str:
    variables = "".join(f"{k}: {v};" for k, v in tokens.palette().items())
    rules = [
        f":root {{{variables}}}",
        ".stApp { background: var(--gray); color: var(--black); }",
    ]
    rules.extend(ROOT_RULES[c] for c in sorted(root_classes) if c in ROOT_RULES)
    return "\n".join(rules)


def render_html(document: Document, tokens: TokenStore) -> str:
    parts = [f'<link rel="stylesheet" href="{html.escape(href)}">' for href in document.stylesheets]
    for media, color in sorted(document.theme_colors.items()):
        parts.append(
            f'<meta name="theme-color" media="(prefers-color-scheme: {media})" content="{html.escape(color)}">'
        )
    parts.append(f"<style>{_css(tokens, document.root_classes)}</style>")
    parts.append(
        f'<div id="{ROOT_ID}" class="{" ".join(sorted(document.root_classes))}" '
        f'lang="{html.escape(document.lang)}" '
        f'data-body-class="{" ".join(sorted(document.body_classes))}" hidden></div>'
    )
    return "\n".join(parts)


def inject(document: Document, tokens: TokenStore) -> None:
    st.markdown(render_html(document, tokens), unsafe_allow_html=True)
