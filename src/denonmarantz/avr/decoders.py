"""Decoders turning status lines into device state updates.

All functions here are pure. A payload that matches no known shape raises
:class:`DecodeSkip`; callers drop those lines.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

import attr

from .commands import CommandSpec
from .dataclasses import INPUTS_BY_ID
from .enums import MAX_VOLUME, POWER_VALUES, DecoderKind, Zone
from .exceptions import DecodeSkip


@attr.s(slots=True, frozen=True)
class StateUpdate:
    """New value for one state code. ``MAX_VOLUME`` targets the volume ceiling."""

    code: str = attr.ib()
    value: str | float = attr.ib()


def parse_volume(data: str) -> float | None:
    """Parse a wire volume: 1-2 digits are whole units, 3 digits are tenths.

    Returns None for anything else.
    """
    data = data.strip()
    if not (data.isascii() and data.isdigit()):
        return None
    if len(data) <= 2:
        return float(int(data))
    if len(data) == 3:
        return int(data) / 10
    return None


def format_volume(value: float) -> str:
    """Encode a volume on the 0.5 grid the way the receiver echoes it."""
    tenths = int(round(value * 10))
    if tenths % 10 == 0:
        return f"{tenths // 10:02d}"
    return f"{tenths:03d}"


def round_volume(value: float) -> float:
    """Round to the nearest 0.5 step, ties away from zero."""
    doubled = (Decimal(str(value)) * 2).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(doubled) / 2


def clamp_volume(value: float, max_volume: float) -> float:
    """Clamp to ``[0, max_volume]`` and snap to the 0.5 grid without exceeding it."""
    value = round_volume(max(0.0, min(float(value), max_volume)))
    if value > max_volume:
        value = math.floor(max_volume * 2) / 2
    return value


def decode_generic(code: str, payload: str) -> StateUpdate:
    payload = payload.strip()
    if not payload:
        raise DecodeSkip(code, payload)
    return StateUpdate(code, payload)


def decode_volume(code: str, payload: str) -> StateUpdate:
    target = code
    data = payload
    if data.startswith("MAX"):
        target = MAX_VOLUME
        data = data[len("MAX") :]

    value = parse_volume(data)
    if value is None:
        raise DecodeSkip(code, payload)
    return StateUpdate(target, value)


def decode_zone(zone: Zone, payload: str) -> StateUpdate:
    """Classify the remainder of a zone status line.

    ``payload`` has the zone tag already stripped, so ``Z2MV50`` arrives as
    ``MV50`` and ``Z2CD`` as ``CD``.
    """
    prefix = zone.prefix
    data = payload.strip()

    if data in POWER_VALUES:
        return StateUpdate(prefix, data)

    if data.startswith("MV"):
        value = parse_volume(data[2:])
        if value is not None:
            return StateUpdate(f"{prefix}MV", value)

    if data.startswith("SI") and data[2:] in INPUTS_BY_ID:
        return StateUpdate(f"{prefix}SI", data[2:])

    value = parse_volume(data)
    if value is not None:
        return StateUpdate(f"{prefix}MV", value)

    if data in INPUTS_BY_ID:
        return StateUpdate(f"{prefix}SI", data)

    raise DecodeSkip(prefix, payload)


def decode(code: str, spec: CommandSpec, line: str) -> StateUpdate:
    """Run the decoder selected by ``spec`` over a full status line."""
    if spec.decoder is DecoderKind.ZONE:
        return decode_zone(spec.zone, line[len(spec.zone.prefix) :])

    payload = line[len(code) :]
    if spec.decoder is DecoderKind.VOLUME:
        return decode_volume(code, payload)
    return decode_generic(code, payload)
