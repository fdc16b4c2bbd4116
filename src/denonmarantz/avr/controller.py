"""Connection lifecycle and refresh orchestration for one receiver.

The Controller owns the Client and the State, runs the reader task, issues
full refreshes (on connect, on demand and on a polling interval) and keeps
failure logging to a single notice per disconnect episode.
"""

import asyncio
import contextlib
import logging

from . import (
    ConnectionFailed,
    ConnectionState,
    ControllerConfig,
    DenonMarantzException,
    Input,
    NotConnectedException,
    Zone,
)
from .client import Client
from .state import State

_LOGGER = logging.getLogger(__name__)


class Controller:
    """Stateful client for one Denon/Marantz receiver.

    Usage::

        async with Controller(ControllerConfig("192.168.1.20")) as avr:
            await avr.set_volume(Zone.ZONE2, 45)
            print(avr.get_power(Zone.MAIN))

    Getters read the cached state and never block. Setters send a command
    and return once it is written; the cache follows when the receiver
    reports the change.
    """

    def __init__(self, config: ControllerConfig) -> None:
        self._config = config
        self._client = Client(
            config.host,
            config.port,
            connect_timeout=config.connect_timeout,
            send_delay=config.send_delay,
        )
        self._state = State(self._client, config.max_volume)
        self._connection_state = ConnectionState.DISCONNECTED
        self._connection_error = False
        self._task: asyncio.Task | None = None
        self._poll_task: asyncio.Task | None = None

    async def __aenter__(self) -> "Controller":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()

    @property
    def config(self) -> ControllerConfig:
        return self._config

    @property
    def client(self) -> Client:
        return self._client

    @property
    def state(self) -> State:
        return self._state

    @property
    def connection_state(self) -> ConnectionState:
        return self._connection_state

    @property
    def connected(self) -> bool:
        return self._connection_state is ConnectionState.CONNECTED

    @property
    def inputs(self) -> list[Input]:
        """Inputs offered for selection."""
        return self._config.inputs()

    def _report_failure(self, error: object) -> None:
        if self._connection_error:
            _LOGGER.debug("Still unable to reach %s: %s", self._config.host, error)
            return

        self._connection_error = True
        _LOGGER.error(
            "Cannot communicate with receiver at %s (%s). "
            "Communication will be restored when the receiver responds again.",
            self._config.host,
            error,
        )

    def _report_recovery(self) -> None:
        if self._connection_error:
            self._connection_error = False
            _LOGGER.info("Communication with receiver at %s restored", self._config.host)

    def _connection_lost(self, error: Exception | None) -> None:
        self._connection_state = ConnectionState.DISCONNECTED
        self._report_failure(error or "connection closed by receiver")

    async def _run(self) -> None:
        try:
            await self._client.process()
        except ConnectionFailed as e:
            self._connection_lost(e)
        else:
            self._connection_lost(None)

    async def connect(self) -> None:
        """Connect, start reading and issue a full refresh.

        Raises ConnectionFailed when the receiver cannot be reached.
        """
        if self.connected:
            return

        _LOGGER.info("Connecting to receiver at %s:%d", self._config.host, self._config.port)
        try:
            await self._client.start()
        except ConnectionFailed as e:
            self._report_failure(e)
            raise

        await self._state.start()
        self._connection_state = ConnectionState.CONNECTED
        self._task = asyncio.create_task(self._run())
        await self.refresh()

    async def disconnect(self) -> None:
        """Stop polling, the reader task and the connection."""
        await self.stop_polling()
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        await self._client.stop()
        await self._state.stop()
        self._connection_state = ConnectionState.DISCONNECTED

    async def refresh(self) -> None:
        """Query every status code. Failures are logged, never raised."""
        _LOGGER.debug("Starting refresh of %s", self._config.host)
        try:
            if not self.connected:
                if not self._config.reconnect:
                    raise NotConnectedException(f"Not connected to {self._config.host}")
                await self.connect()
                return
            await self._state.update()
        except DenonMarantzException as e:
            self._report_failure(e)
            return

        self._report_recovery()
        _LOGGER.debug("Current state of %s: %r", self._config.host, self._state)

    async def _poll(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            await self.refresh()

    def start_polling(self, interval: float | None = None) -> None:
        """Refresh every ``interval`` seconds (default from the config)."""
        if self._poll_task and not self._poll_task.done():
            return
        if interval is None:
            interval = self._config.poll_interval
        self._poll_task = asyncio.create_task(self._poll(interval))

    async def stop_polling(self) -> None:
        if self._poll_task:
            self._poll_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._poll_task
            self._poll_task = None

    def get_power(self, zone: Zone | str = Zone.MAIN) -> bool | None:
        return self._state.get_power(zone)

    async def set_power(self, zone: Zone | str, power: bool) -> None:
        await self._state.set_power(zone, power)

    def get_mute(self, zone: Zone | str = Zone.MAIN) -> bool | None:
        return self._state.get_mute(zone)

    async def set_mute(self, zone: Zone | str, mute: bool) -> None:
        await self._state.set_mute(zone, mute)

    def get_volume(self, zone: Zone | str = Zone.MAIN) -> float | None:
        return self._state.get_volume(zone)

    async def set_volume(self, zone: Zone | str, volume: float) -> None:
        await self._state.set_volume(zone, volume)

    def get_source(self, zone: Zone | str = Zone.MAIN) -> str | None:
        return self._state.get_source(zone)

    async def set_source(self, zone: Zone | str, source: str) -> None:
        await self._state.set_source(zone, source)
