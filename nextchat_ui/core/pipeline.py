"""Startup tasks that run once, side by side, without blocking the UI."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Awaitable, Callable, Dict, Iterable, Optional

from nextchat_ui.config.logging_config import logger


class Isolation(str, Enum):
    PROPAGATE = "propagate"
    CATCH_AND_LOG = "catch-and-log"


@dataclass(frozen=True)
class InitTask:
    name: str
    run: Callable[[], Awaitable[None]]
    isolation: Isolation = Isolation.PROPAGATE
    attempts: int = 1
    retry_delay_s: float = 0.0


class InitPipeline:
    """Launches every task concurrently and awaits none of them.

    Catch-and-log tasks never raise out of their own task. Failures of
    propagating tasks are recorded in ``failures`` and handed to the event
    loop's exception handler.
    """

    def __init__(self, tasks: Iterable[InitTask]):
        self._tasks = tuple(tasks)
        names = [t.name for t in self._tasks]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate init task names: {names}")
        self._running: Optional[Dict[str, asyncio.Task]] = None
        self.failures: Dict[str, BaseException] = {}

    @property
    def started(self) -> bool:
        return self._running is not None

    def start(self) -> Dict[str, asyncio.Task]:
        """Fire all tasks on the running loop. Later calls return the same handles."""
        if self._running is not None:
            return dict(self._running)
        loop = asyncio.get_running_loop()
        self._running = {}
        for t in self._tasks:
            task = loop.create_task(self._run(t), name=f"init:{t.name}")
            task.add_done_callback(partial(self._report, t))
            self._running[t.name] = task
        logger.debug("Init pipeline started: %s", ", ".join(self._running))
        return dict(self._running)

    async def join(self) -> Dict[str, Optional[BaseException]]:
        """Wait for every started task; returns each task's failure (or None)."""
        if not self._running:
            return {}
        names = list(self._running)
        results = await asyncio.gather(*self._running.values(), return_exceptions=True)
        return {n: r if isinstance(r, BaseException) else None for n, r in zip(names, results)}

    async def _run(self, t: InitTask) -> None:
        if t.isolation is Isolation.CATCH_AND_LOG:
            try:
                await self._attempt(t)
            except Exception as e:
                logger.error("[%s] failed to initialize: %s", t.name, e, exc_info=True)
            return
        await self._attempt(t)

    async def _attempt(self, t: InitTask) -> None:
        attempts = max(1, t.attempts)
        for attempt in range(1, attempts + 1):
            try:
                await t.run()
                return
            except Exception as e:
                if attempt == attempts:
                    raise
                logger.warning("[%s] attempt %d/%d failed: %s", t.name, attempt, attempts, e)
                await asyncio.sleep(t.retry_delay_s)

    def _report(self, t: InitTask, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        self.failures[t.name] = exc
        task.get_loop().call_exception_handler({
            "message": f"Init task {t.name!r} failed",
            "exception": exc,
            "task": task,
        })
