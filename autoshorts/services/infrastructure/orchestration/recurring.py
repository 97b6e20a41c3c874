"""
Recurring background task on the event loop.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, Union

from autoshorts.core.logging import get_logger

logger = get_logger(__name__, component="recurring")

Callback = Callable[[], Union[Any, Awaitable[Any]]]


class RecurringTask:
    """
    Calls ``callback`` immediately on start, then every ``interval_seconds``.

    A failing run is logged and the loop carries on; cancellation stops it.
    """

    def __init__(self, name: str, callback: Callback, interval_seconds: float):
        self.name = name
        self.callback = callback
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> None:
        result = self.callback()
        if inspect.isawaitable(result):
            await result

    async def _loop(self) -> None:
        while True:
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.error(f"Recurring task {self.name} failed", extra={"error": str(exc)}, exc_info=True)
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> asyncio.Task:
        if self.running:
            return self._task
        logger.info(f"Starting recurring task {self.name}", extra={"interval_seconds": self.interval_seconds})
        self._task = asyncio.create_task(self._loop(), name=self.name)
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info(f"Stopped recurring task {self.name}")
