"""Shared test fixtures."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from denonmarantz.avr import ControllerConfig
from denonmarantz.avr.client import Client
from denonmarantz.avr.controller import Controller
from denonmarantz.avr.state import State


@pytest.fixture
def make_state():
    """Factory fixture to create a State with a mocked Client."""

    def _make_state(**kwargs):
        client = MagicMock(spec=Client)
        client.send = AsyncMock()
        client.connected = True
        return State(client, **kwargs)

    return _make_state


@pytest.fixture
def make_controller():
    """Factory fixture to create a Controller whose Client is mocked."""

    def _make_controller(**kwargs):
        controller = Controller(ControllerConfig("192.0.2.1", **kwargs))
        client = MagicMock(spec=Client)
        client.send = AsyncMock()
        client.start = AsyncMock()
        client.stop = AsyncMock()
        client.process = AsyncMock()
        controller._client = client
        controller._state._client = client
        return controller

    return _make_controller


@pytest.fixture
def make_reader():
    """Factory fixture to create a StreamReader fed with bytes."""

    def _make_reader(data: bytes) -> asyncio.StreamReader:
        reader = asyncio.StreamReader()
        reader.feed_data(data)
        reader.feed_eof()
        return reader

    return _make_reader


@pytest.fixture
def wait_until():
    """Poll a predicate until it is true or fail after a timeout."""

    async def _wait_until(predicate, timeout: float = 2.0) -> None:
        async with asyncio.timeout(timeout):
            while not predicate():
                await asyncio.sleep(0.01)

    return _wait_until
