import asyncio
import contextlib
import logging
from typing import Awaitable, Callable


logger = logging.getLogger(__name__)


Tick = Callable[[int], Awaitable[None]]


class Ticker:
    """Calls `tick` with a running count every `interval` seconds until stopped.

    Only ever used for visual feedback, so a failing tick ends the ticker
    rather than the operation it decorates.
    """

    def __init__(self, tick: Tick, *, interval: float = 0.35) -> None:
        self.tick = tick
        self.interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        count = 0
        while True:
            await asyncio.sleep(self.interval)
            count += 1
            try:
                await self.tick(count)
            except Exception:
                logger.exception("Tick failed, stopping ticker.")
                return

    async def start(self) -> None:
        await self.stop()
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
