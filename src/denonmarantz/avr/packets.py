"""Command lines and stream framing for the Denon/Marantz telnet protocol."""

import asyncio
import logging
from collections.abc import Iterator

import attr

from .enums import QUERY
from .exceptions import ConnectionFailed

PROTOCOL_IRS = b"\r"
PROTOCOL_ORS = b"\r\n"
PROTOCOL_ENCODING = "utf-8"
_WRITE_TIMEOUT = 3
_MAX_LINE = 4096

_LOGGER = logging.getLogger(__name__)


@attr.s(frozen=True)
class Command:
    """Represent a command sent to device: ``<code><data>`` with no delimiter."""

    code: str = attr.ib()
    data: str = attr.ib(default="")

    @staticmethod
    def query(code: str) -> "Command":
        return Command(code, QUERY)

    def __str__(self) -> str:
        return f"{self.code}{self.data}"


def encode_commands(*commands: Command) -> bytes:
    """Join commands on the receive separator and terminate the write."""
    text = PROTOCOL_IRS.decode().join(str(command) for command in commands)
    return text.encode(PROTOCOL_ENCODING) + PROTOCOL_ORS


class LineSplitter:
    """Split a byte stream into status lines.

    A chunk may hold several lines, and a line may be split across chunks;
    the unterminated tail is buffered until the next ``feed``. A tail longer
    than ``_MAX_LINE`` bytes is dropped.
    """

    def __init__(self) -> None:
        self._buffer = b""

    def reset(self) -> None:
        self._buffer = b""

    def feed(self, chunk: bytes) -> Iterator[str]:
        *lines, self._buffer = (self._buffer + chunk).split(PROTOCOL_IRS)
        if len(self._buffer) > _MAX_LINE:
            _LOGGER.debug("Dropping %d bytes without line terminator", len(self._buffer))
            self._buffer = b""
        return self._decode(lines)

    @staticmethod
    def _decode(lines: list[bytes]) -> Iterator[str]:
        for raw in lines:
            line = raw.replace(b"\n", b"").decode(PROTOCOL_ENCODING, errors="replace")
            if line:
                yield line


async def write_commands(writer: asyncio.StreamWriter, *commands: Command) -> None:
    try:
        writer.write(encode_commands(*commands))
        async with asyncio.timeout(_WRITE_TIMEOUT):
            await writer.drain()
    except TimeoutError as exception:
        raise ConnectionFailed() from exception
    except ConnectionError as exception:
        raise ConnectionFailed() from exception
    except OSError as exception:
        raise ConnectionFailed() from exception
