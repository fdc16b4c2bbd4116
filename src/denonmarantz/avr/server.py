"""Line-protocol TCP server used to emulate a receiver."""

import asyncio
import contextlib
import logging
from asyncio.streams import StreamReader, StreamWriter
from collections.abc import Awaitable, Callable

from . import DEFAULT_PORT, LineSplitter
from .packets import PROTOCOL_ENCODING, PROTOCOL_IRS

_LOGGER = logging.getLogger(__name__)
_READ_SIZE = 1024

Handler = Callable[..., str | list[str] | None]


class Server:
    """Answer command lines with handlers registered per command code.

    A handler is registered for a ``(code, data)`` pair where ``data`` is the
    exact payload (``"?"`` for queries) or None to receive any payload. The
    longest registered code that prefixes a request line wins. Lines with no
    handler get no answer, as on a real receiver.
    """

    def __init__(self, host: str, port: int = DEFAULT_PORT) -> None:
        self._host = host
        self._port = port
        self._server: asyncio.Server | None = None
        self._handlers: dict[tuple[str, str | None], Handler] = {}
        self._codes: list[str] = []
        self._writers: set[StreamWriter] = set()
        self.process_runner: Callable[[StreamReader, StreamWriter], Awaitable[None]] = (
            self.process
        )

    @property
    def port(self) -> int:
        if self._server and self._server.sockets:
            return self._server.sockets[0].getsockname()[1]
        return self._port

    def register_handler(self, code: str, data: str | None, fn: Handler) -> None:
        self._handlers[(code, data)] = fn
        if code not in self._codes:
            self._codes.append(code)
            self._codes.sort(key=len, reverse=True)

    def _find_handler(self, line: str) -> tuple[Handler, str] | None:
        for code in self._codes:
            if not line.startswith(code):
                continue
            data = line[len(code) :]
            fn = self._handlers.get((code, data)) or self._handlers.get((code, None))
            if fn:
                return fn, data
        return None

    async def process_request(self, line: str) -> list[str]:
        found = self._find_handler(line)
        if found is None:
            _LOGGER.debug("No handler for %r", line)
            return []

        fn, data = found
        result = fn(data=data)
        if result is None:
            return []
        if isinstance(result, str):
            return [result]
        return result

    @staticmethod
    async def _write_lines(writer: StreamWriter, lines: list[str]) -> None:
        for line in lines:
            writer.write(line.encode(PROTOCOL_ENCODING) + PROTOCOL_IRS)
        await writer.drain()

    async def broadcast(self, *lines: str) -> None:
        """Push unsolicited status lines to every connected client."""
        for writer in list(self._writers):
            with contextlib.suppress(ConnectionError, OSError):
                await self._write_lines(writer, list(lines))

    async def process(self, reader: StreamReader, writer: StreamWriter) -> None:
        splitter = LineSplitter()
        while True:
            chunk = await reader.read(_READ_SIZE)
            if not chunk:
                _LOGGER.debug("Client disconnected")
                break

            for line in splitter.feed(chunk):
                _LOGGER.debug("Request %r", line)
                responses = await self.process_request(line)
                await self._write_lines(writer, responses)

    async def _handle(self, reader: StreamReader, writer: StreamWriter) -> None:
        self._writers.add(writer)
        try:
            await self.process_runner(reader, writer)
        except (ConnectionError, OSError):
            _LOGGER.debug("Connection to client lost")
        finally:
            self._writers.discard(writer)
            writer.close()
            with contextlib.suppress(ConnectionError, OSError):
                await writer.wait_closed()

    async def start(self) -> None:
        _LOGGER.debug("Starting server on %s:%d", self._host, self._port)
        self._server = await asyncio.start_server(self._handle, self._host, self._port)

    async def stop(self) -> None:
        if self._server:
            _LOGGER.debug("Stopping server")
            self._server.close()
            for writer in list(self._writers):
                writer.close()
            await self._server.wait_closed()
            self._server = None


class ServerContext:
    def __init__(self, server: Server):
        self._server = server

    async def __aenter__(self) -> Server:
        await self._server.start()
        return self._server

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self._server.stop()
