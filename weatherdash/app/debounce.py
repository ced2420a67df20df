"""Debounce coordinator for place-query input."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_QUIET_PERIOD_MS = 1000


class DebounceCoordinator:
    """Coalesces rapid place changes into one fetch per quiet period.

    Only the latest value submitted within a quiet period fires. A value
    equal to the previously fired one is dropped. Fired calls run as their
    own tasks, so a later quiet period never cancels an in-flight fetch.
    """

    def __init__(
        self,
        fire: Callable[[str], Awaitable[None]],
        quiet_period_ms: int = DEFAULT_QUIET_PERIOD_MS,
        normalize: Callable[[str], str] = str.strip,
    ):
        self._fire = fire
        self.quiet_period = quiet_period_ms / 1000
        self._normalize = normalize
        self._pending: str | None = None
        self._timer: asyncio.Task | None = None
        self._last_fired: str | None = None
        self._inflight: set[asyncio.Task] = set()

    @property
    def last_fired(self) -> str | None:
        return self._last_fired

    @property
    def pending(self) -> str | None:
        return self._pending

    def submit(self, value: str) -> None:
        """Record a new value and restart the quiet-period timer."""
        self._pending = value
        self._cancel_timer()
        self._timer = asyncio.get_running_loop().create_task(self._wait_quiet())

    def flush(self) -> asyncio.Task | None:
        """Fire the pending value now, skipping the rest of the quiet period."""
        self._cancel_timer()
        return self._fire_pending()

    def cancel(self) -> None:
        self._cancel_timer()
        self._pending = None

    def reset_last(self) -> None:
        """Forget the last fired value so it may fire again."""
        self._last_fired = None

    async def wait_idle(self) -> None:
        """Wait until no timer is pending and every fired call has finished."""
        while True:
            if self._timer is not None and not self._timer.done():
                await asyncio.gather(self._timer, return_exceptions=True)
                continue
            if self._inflight:
                await asyncio.gather(*list(self._inflight), return_exceptions=True)
                continue
            return

    async def _wait_quiet(self) -> None:
        await asyncio.sleep(self.quiet_period)
        self._timer = None
        self._fire_pending()

    def _fire_pending(self) -> asyncio.Task | None:
        if self._pending is None:
            return None
        value = self._normalize(self._pending)
        self._pending = None
        if value == self._last_fired:
            logger.debug("Skipping unchanged place %r", value)
            return None
        self._last_fired = value
        logger.debug("Debounce fired for %r", value)
        task = asyncio.get_running_loop().create_task(self._fire(value))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None
