import functools, traceback
import streamlit as st
from nextchat_ui.config.logging_config import logger

class NextChatUIError(Exception): ...
class ConfigError(NextChatUIError): ...
class NotReadyError(NextChatUIError): ...
class CapabilityError(NextChatUIError): ...

class ViewActivationError(NextChatUIError):
    def __init__(self, view: str, message: str):
        super().__init__(f"{view}: {message}")
        self.view = view

def ui_error_boundary(fn):
    """Render a visible failure surface instead of letting a subtree error escape."""
    @functools.wraps(fn)
    def _wrap(*a, **k):
        try:
            return fn(*a, **k)
        except Exception as e:
            logger.error("UI error in %s: %s", fn.__name__, e, exc_info=True)
            st.error("Oops, something went wrong! See details below.")
            with st.expander("Error details"):
                st.code("".join(traceback.format_exception(type(e), e, e.__traceback__)))
            if st.button("Retry", key=f"retry_{fn.__qualname__}"):
                st.rerun()
            return None
    return _wrap
