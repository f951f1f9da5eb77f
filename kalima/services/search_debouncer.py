"""
Debounced search evaluation with last-request-wins delivery.

Each submit() supersedes the previous one. A superseded search that is
still inside its quiet interval is dropped unfired; one that already
started evaluating runs to completion but its result is discarded, so a
slow early query can never overwrite the results of a later one.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional

from kalima.config import settings

logger = logging.getLogger(__name__)


class SearchDebouncer:
    def __init__(
        self,
        evaluate: Callable[[str], Awaitable[Any]],
        on_result: Callable[[str, Any], Any],
        on_error: Optional[Callable[[str, Exception], Any]] = None,
        quiet_interval: Optional[float] = None,
    ):
        self.evaluate = evaluate
        self.on_result = on_result
        self.on_error = on_error
        self.quiet_interval = (
            settings.search_debounce_seconds if quiet_interval is None else quiet_interval
        )
        self._generation = 0
        self._timer: Optional[asyncio.Task] = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def latest_generation(self) -> int:
        return self._generation

    def submit(self, text: str) -> int:
        """Schedule `text` for evaluation and return its generation number"""
        self._generation += 1
        generation = self._generation
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        task = asyncio.create_task(self._run(generation, text))
        self._timer = task
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return generation

    async def _run(self, generation: int, text: str) -> None:
        await asyncio.sleep(self.quiet_interval)

        # Past the quiet interval: no longer cancellable by submit()
        if self._timer is asyncio.current_task():
            self._timer = None

        try:
            result = await self.evaluate(text)
        except Exception as e:
            if generation != self._generation:
                logger.debug(f"Dropping error from stale search '{text}': {e}")
                return
            logger.error(f"Search evaluation failed for '{text}': {e}")
            if self.on_error is not None:
                await _maybe_await(self.on_error(text, e))
            return

        if generation != self._generation:
            logger.debug(f"Discarding stale results for '{text}' (generation {generation})")
            return
        await _maybe_await(self.on_result(text, result))

    async def drain(self) -> None:
        """Wait for every scheduled or running evaluation to settle"""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    async def aclose(self) -> None:
        """Drop the pending timer and wait for evaluations already running"""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None
        await self.drain()


async def _maybe_await(value: Any) -> None:
    if inspect.isawaitable(value):
        await value
