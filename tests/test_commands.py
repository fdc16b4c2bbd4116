"""Tests for the command table and line matching."""

import pytest

from denonmarantz.avr import (
    COMMANDS,
    MATCH_ORDER,
    CommandSpec,
    DecoderKind,
    UnknownCommand,
    Zone,
    match_line,
    resolve,
)


def test_resolve():
    spec = resolve("MV")
    assert spec.decoder is DecoderKind.VOLUME
    assert spec.zone is None


def test_resolve_zone():
    spec = resolve("Z3SI")
    assert spec.decoder is DecoderKind.ZONE
    assert spec.zone is Zone.ZONE3


def test_resolve_unknown():
    with pytest.raises(UnknownCommand) as excinfo:
        resolve("XX")
    assert excinfo.value.line == "XX"


def test_match_order_longest_first():
    lengths = [len(code) for code in MATCH_ORDER]
    assert lengths == sorted(lengths, reverse=True)
    assert set(MATCH_ORDER) == set(COMMANDS)


@pytest.mark.parametrize(
    "line, code",
    [
        ("PWON", "PW"),
        ("ZMON", "ZM"),
        ("MUOFF", "MU"),
        ("MV50", "MV"),
        ("SICD", "SI"),
        ("Z2ON", "Z2"),
        ("Z2CD", "Z2"),
        ("Z2MUON", "Z2MU"),
        ("Z2MV40", "Z2MV"),
        ("Z2SICD", "Z2SI"),
        ("Z3MUOFF", "Z3MU"),
        ("Z3OFF", "Z3"),
    ],
)
def test_match_line(line, code):
    matched, spec = match_line(line)
    assert matched == code
    assert spec is COMMANDS[code]


@pytest.mark.parametrize("line", ["Z4ON", "XYZ", "", "ECOON"])
def test_match_line_unknown(line):
    with pytest.raises(UnknownCommand):
        match_line(line)


def test_match_line_picks_longest_prefix():
    for code in COMMANDS:
        line = f"{code}ON"
        matched, _ = match_line(line)
        longest = max((c for c in COMMANDS if line.startswith(c)), key=len)
        assert matched == longest


def test_zone_commands_name_their_zone():
    for spec in COMMANDS.values():
        assert (spec.decoder is DecoderKind.ZONE) == (spec.zone is not None)


def test_zone_decoder_requires_zone():
    with pytest.raises(ValueError):
        CommandSpec("Zone 4", DecoderKind.ZONE)


def test_zone_only_for_zone_decoder():
    with pytest.raises(ValueError):
        CommandSpec("Z2 Muted", DecoderKind.GENERIC, Zone.ZONE2)
