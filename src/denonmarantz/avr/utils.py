import asyncio
import logging
import time

_LOGGER = logging.getLogger(__name__)


class Throttle:
    """Serializes writers so consecutive sends are at least *delay* apart.

    Waiting is done with ``asyncio.sleep`` on the caller's task, so other
    tasks (inbound processing, other receivers) keep running meanwhile.
    """

    def __init__(self, delay: float) -> None:
        self._timestamp = time.monotonic()
        self._delay = delay
        self._lock = asyncio.Lock()

    @property
    def delay(self) -> float:
        return self._delay

    async def get(self) -> None:
        async with self._lock:
            delay = self._timestamp - time.monotonic()
            if delay > 0:
                _LOGGER.debug("Throttling send for %.3fs", delay)
                await asyncio.sleep(delay)
            self._timestamp = time.monotonic() + self._delay
