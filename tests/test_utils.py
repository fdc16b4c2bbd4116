"""Tests for utils."""

import asyncio
import time

from denonmarantz.avr.utils import Throttle


async def test_throttle_first_call_immediate():
    """Test that Throttle.get() returns immediately on first call."""
    throttle = Throttle(0.1)
    start = time.monotonic()
    await throttle.get()
    elapsed = time.monotonic() - start
    assert elapsed < 0.05


async def test_throttle_delays_subsequent_calls():
    """Test that Throttle.get() delays second call by configured delay."""
    throttle = Throttle(0.1)
    await throttle.get()
    start = time.monotonic()
    await throttle.get()
    elapsed = time.monotonic() - start
    assert elapsed >= 0.05  # Should be ~0.1s, allow some tolerance


async def test_throttle_no_delay_after_waiting():
    """Test that Throttle.get() doesn't delay if enough time has passed."""
    throttle = Throttle(0.05)
    await throttle.get()
    await asyncio.sleep(0.1)
    start = time.monotonic()
    await throttle.get()
    elapsed = time.monotonic() - start
    assert elapsed < 0.05


async def test_throttle_does_not_block_loop():
    """Other tasks keep running while a sender waits."""
    throttle = Throttle(0.1)
    await throttle.get()
    ticks = 0

    async def ticker():
        nonlocal ticks
        while True:
            ticks += 1
            await asyncio.sleep(0.01)

    task = asyncio.create_task(ticker())
    await throttle.get()
    task.cancel()
    assert ticks > 2


async def test_throttle_serializes_concurrent_senders():
    throttle = Throttle(0.05)
    stamps = []

    async def sender():
        await throttle.get()
        stamps.append(time.monotonic())

    await asyncio.gather(sender(), sender(), sender())
    gaps = [b - a for a, b in zip(stamps, stamps[1:])]
    assert all(gap >= 0.04 for gap in gaps)


def test_throttle_delay():
    assert Throttle(0.25).delay == 0.25
