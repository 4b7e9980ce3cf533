from dataclasses import replace

import pandas as pd
import streamlit as st

from nextchat_ui.core.context import AppContext
from nextchat_ui.core.locale import ALL_LANGS
from nextchat_ui.core.theme import Theme
from nextchat_ui.services.api_client import PROVIDERS


def _models_frame(ctx: AppContext) -> pd.DataFrame:
    rows = [
        {
            "model": m.display_name or m.name,
            "provider": m.provider.provider_name,
            "available": m.available,
        }
        for m in ctx.config.config.models
    ]
    return pd.DataFrame(rows, columns=["model", "provider", "available"])


def render(ctx: AppContext, **_):
    st.subheader("⚙️ Settings")
    config = ctx.config.config

    themes = [t.value for t in Theme]
    theme = st.selectbox("Theme", themes, index=themes.index(config.theme) if config.theme in themes else 0)
    langs = list(ALL_LANGS)
    lang = st.selectbox("Language", langs, index=langs.index(ctx.lang()),
                        format_func=lambda code: ALL_LANGS[code])
    tight_border = st.checkbox("Tight border", value=config.tight_border)

    providers = list(PROVIDERS)
    provider = config.model_config.provider_name
    provider = st.selectbox("Model provider", providers,
                            index=providers.index(provider) if provider in providers else 0)

    changes = {}
    if theme != config.theme:
        changes["theme"] = theme
    if lang != ctx.lang():
        changes["lang"] = lang
    if tight_border != config.tight_border:
        changes["tight_border"] = tight_border
    if provider != config.model_config.provider_name:
        changes["model_config"] = replace(config.model_config, provider_name=provider)
    if changes:
        ctx.apply(ctx.config.update, **changes)
        st.rerun()

    st.divider()
    st.markdown("**Models**")
    df = _models_frame(ctx)
    if df.empty:
        st.caption("No models listed yet.")
    else:
        st.dataframe(df, use_container_width=True, hide_index=True)
