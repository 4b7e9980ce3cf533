from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable, Coroutine, Optional, TypeVar

from nextchat_ui.config.logging_config import logger

T = TypeVar("T")


def _log_loop_exception(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    exc = context.get("exception")
    logger.error("%s", context.get("message", "Unhandled error on event loop"),
                 exc_info=(type(exc), exc, exc.__traceback__) if exc else None)


class BackgroundLoop:
    """A single asyncio event loop served from one daemon thread.

    Streamlit reruns scripts on their own threads; every coroutine the
    shell owns is funneled onto this loop so the core stays single
    threaded.
    """

    def __init__(self, name: str = "nextchat-loop"):
        self._loop = asyncio.new_event_loop()
        self._loop.set_exception_handler(_log_loop_exception)
        self._thread = threading.Thread(target=self._serve, name=name, daemon=True)
        self._thread.start()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def _serve(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    def run(self, coro: Coroutine[Any, Any, T], timeout: Optional[float] = None) -> T:
        """Run ``coro`` on the loop and block the calling thread for its result."""
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result(timeout)

    def call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a plain callable on the loop thread."""
        async def _invoke() -> T:
            return fn(*args, **kwargs)
        return self.run(_invoke())

    def stop(self) -> None:
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join()
        self._loop.close()
