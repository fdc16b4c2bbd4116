"""Async TCP client for the Denon/Marantz telnet protocol.

Provides ClientBase (line framing, listener dispatch, throttled sends) and
Client (TCP connection management). Use ClientContext as an async context
manager to handle the full connection lifecycle.
"""

import asyncio
import contextlib
import logging
from asyncio.streams import StreamReader, StreamWriter
from collections.abc import Callable
from contextlib import contextmanager

from . import (
    DEFAULT_PORT,
    Command,
    ConnectionFailed,
    DenonMarantzException,
    LineSplitter,
    NotConnectedException,
    write_commands,
)
from .utils import Throttle

_LOGGER = logging.getLogger(__name__)
_CONNECT_TIMEOUT = 1.5
_SEND_DELAY = 0.05
_READ_SIZE = 1024


class ClientBase:
    """Base protocol handler with listeners and throttled writes.

    Inbound data is split into lines and every line is handed to each
    registered listener in arrival order. Responses are not correlated with
    requests; the receiver pushes status lines whenever it likes.
    """

    def __init__(self, send_delay: float = _SEND_DELAY) -> None:
        self._reader: StreamReader | None = None
        self._writer: StreamWriter | None = None
        self._listen: set[Callable[[str], None]] = set()
        self._throttle = Throttle(send_delay)
        self._splitter = LineSplitter()

    def add_listener(self, listener: Callable[[str], None]) -> None:
        self._listen.add(listener)

    def remove_listener(self, listener: Callable[[str], None]) -> None:
        self._listen.discard(listener)

    @contextmanager
    def listen(self, listener: Callable[[str], None]):
        self.add_listener(listener)
        try:
            yield self
        finally:
            self.remove_listener(listener)

    def _dispatch(self, chunk: bytes) -> None:
        for line in self._splitter.feed(chunk):
            _LOGGER.debug("Line received: %s", line)
            for listener in list(self._listen):
                listener(line)

    async def _process_data(self, reader: StreamReader):
        self._splitter.reset()
        try:
            while True:
                try:
                    chunk = await reader.read(_READ_SIZE)
                except (ConnectionError, OSError) as exception:
                    raise ConnectionFailed() from exception

                if not chunk:
                    _LOGGER.info("Server disconnected")
                    return

                self._dispatch(chunk)
        finally:
            self._reader = None

    async def process(self) -> None:
        if not self._writer:
            raise NotConnectedException("Writer missing")
        if not self._reader:
            raise NotConnectedException("Reader missing")

        writer = self._writer
        try:
            await self._process_data(self._reader)
        finally:
            self._writer = None
            writer.close()
            with contextlib.suppress(ConnectionError, OSError):
                await writer.wait_closed()

    @property
    def connected(self) -> bool:
        return self._reader is not None and not self._reader.at_eof()

    @property
    def started(self) -> bool:
        return self._writer is not None

    async def send(self, *commands: Command) -> None:
        """Write one or more commands in a single write (fire-and-forget)."""
        if not self._writer:
            raise NotConnectedException()

        writer = self._writer  # keep copy around if stopped by another task
        await self._throttle.get()
        _LOGGER.debug("Sending %s", " | ".join(str(command) for command in commands))
        await write_commands(writer, *commands)


class Client(ClientBase):
    """TCP client for connecting to a Denon/Marantz receiver.

    Args:
        host: Hostname or IP address of the receiver.
        port: TCP port (default 23).
        connect_timeout: Seconds to wait for the TCP connection.
        send_delay: Minimum spacing between consecutive writes.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        *,
        connect_timeout: float = _CONNECT_TIMEOUT,
        send_delay: float = _SEND_DELAY,
    ) -> None:
        super().__init__(send_delay)
        self._host = host
        self._port = port
        self._connect_timeout = connect_timeout

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    async def start(self) -> None:
        """Open TCP connection to the receiver."""
        if self._writer:
            raise DenonMarantzException("Already started")

        _LOGGER.debug("Connecting to %s:%d", self._host, self._port)
        try:
            async with asyncio.timeout(self._connect_timeout):
                self._reader, self._writer = await asyncio.open_connection(
                    self._host, self._port
                )
        except TimeoutError as exception:
            raise ConnectionFailed(
                f"Connection to {self._host}:{self._port} timed out"
            ) from exception
        except OSError as exception:
            raise ConnectionFailed(
                f"Connection to {self._host}:{self._port} failed: {exception}"
            ) from exception
        _LOGGER.info("Connected to %s:%d", self._host, self._port)

    async def stop(self) -> None:
        """Close TCP connection to the receiver."""
        if self._writer:
            try:
                _LOGGER.info("Disconnecting from %s:%d", self._host, self._port)
                self._writer.close()
                await self._writer.wait_closed()
            except (ConnectionError, OSError):
                pass
            finally:
                self._writer = None
                self._reader = None


class ClientContext:
    """Async context manager that starts, processes, and stops a Client.

    Usage::

        async with ClientContext(client) as c:
            await c.send(Command.query("PW"))
    """

    def __init__(self, client: Client):
        self._client = client
        self._task: asyncio.Task | None = None

    async def __aenter__(self) -> Client:
        await self._client.start()
        self._task = asyncio.create_task(self._client.process())
        return self._client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        await self._client.stop()
