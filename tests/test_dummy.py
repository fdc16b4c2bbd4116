"""Unit tests for dummy.py: DummyServer handlers."""

import pytest

from denonmarantz.avr.dummy import DummyServer


@pytest.fixture
def dummy():
    """Create a DummyServer for testing (no TCP, just handler logic)."""
    return DummyServer("localhost", 0)


async def _request(dummy, line):
    return await dummy.process_request(line)


# --- Main zone ---


async def test_power_query(dummy):
    assert await _request(dummy, "PW?") == ["PWON"]


async def test_power_standby(dummy):
    assert await _request(dummy, "PWSTANDBY") == ["PWSTANDBY", "ZMOFF"]
    assert await _request(dummy, "ZM?") == ["ZMOFF"]


async def test_power_invalid(dummy):
    assert await _request(dummy, "PWOFF") == []
    assert await _request(dummy, "PW?") == ["PWON"]


async def test_main_zone_on(dummy):
    await _request(dummy, "PWSTANDBY")
    assert await _request(dummy, "ZMON") == ["ZMON", "PWON"]


async def test_volume_query(dummy):
    assert await _request(dummy, "MV?") == ["MV50", "MVMAX 98"]


async def test_volume_set(dummy):
    assert await _request(dummy, "MV455") == ["MV455", "MVMAX 98"]


async def test_volume_max_line_silent(dummy):
    assert await _request(dummy, "MVMAX 98") == []


async def test_volume_clamped(dummy):
    dummy = DummyServer("localhost", 0, max_volume=80)
    assert await _request(dummy, "MV95") == ["MV80", "MVMAX 80"]


@pytest.mark.parametrize("step, expected", [("UP", "MV505"), ("DOWN", "MV495")])
async def test_volume_step(dummy, step, expected):
    assert (await _request(dummy, f"MV{step}"))[0] == expected


async def test_volume_invalid(dummy):
    assert await _request(dummy, "MVLOUD") == []


async def test_mute(dummy):
    assert await _request(dummy, "MU?") == ["MUOFF"]
    assert await _request(dummy, "MUON") == ["MUON"]
    assert await _request(dummy, "MUMAYBE") == []


async def test_source(dummy):
    assert await _request(dummy, "SI?") == ["SICD"]
    assert await _request(dummy, "SITUNER") == ["SITUNER"]
    assert await _request(dummy, "SIWALKMAN") == []


# --- Zones ---


async def test_zone_query(dummy):
    assert await _request(dummy, "Z2?") == ["Z2TUNER", "Z2OFF", "Z240"]
    assert await _request(dummy, "Z3?") == ["Z3SOURCE", "Z3OFF", "Z330"]


async def test_zone_power(dummy):
    assert await _request(dummy, "Z2ON") == ["Z2ON"]
    assert (await _request(dummy, "Z2?"))[1] == "Z2ON"


async def test_zone_source_select(dummy):
    assert await _request(dummy, "Z2CD") == ["Z2CD"]
    assert await _request(dummy, "Z2SI?") == ["Z2CD"]


async def test_zone_volume(dummy):
    assert await _request(dummy, "Z345") == ["Z345"]
    assert await _request(dummy, "Z3MV?") == ["Z345"]
    assert await _request(dummy, "Z3MV455") == ["Z3455"]
    assert await _request(dummy, "Z3MVMAX 98") == []


async def test_zone_mute(dummy):
    assert await _request(dummy, "Z2MU?") == ["Z2MUOFF"]
    assert await _request(dummy, "Z2MUON") == ["Z2MUON"]
    assert await _request(dummy, "MU?") == ["MUOFF"]


async def test_zone_source_via_si(dummy):
    assert await _request(dummy, "Z3SIDVD") == ["Z3DVD"]
    assert await _request(dummy, "Z3SIWALKMAN") == []


async def test_zone_invalid(dummy):
    assert await _request(dummy, "Z2FOO") == []


async def test_zone4_not_emulated(dummy):
    assert await _request(dummy, "Z4ON") == []
