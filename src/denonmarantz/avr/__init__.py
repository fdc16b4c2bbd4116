"""Denon/Marantz AV receiver telnet protocol client."""

from .commands import COMMANDS, MATCH_ORDER, CommandSpec, match_line, resolve
from .dataclasses import INPUTS, INPUTS_BY_ID, ControllerConfig, Input
from .decoders import (
    StateUpdate,
    clamp_volume,
    decode,
    format_volume,
    parse_volume,
    round_volume,
)
from .enums import (
    DEFAULT_MAX_VOLUME,
    DEFAULT_PORT,
    MAX_VOLUME,
    POWER_OFF,
    POWER_ON,
    POWER_STANDBY,
    POWER_VALUES,
    QUERY,
    UNKNOWN,
    ConnectionState,
    DecoderKind,
    Zone,
)
from .exceptions import (
    ConnectionFailed,
    DecodeSkip,
    DenonMarantzException,
    NotConnectedException,
    UnknownCommand,
    UnsupportedZone,
)
from .packets import Command, LineSplitter, encode_commands, write_commands

__all__ = [
    "COMMANDS",
    "DEFAULT_MAX_VOLUME",
    "DEFAULT_PORT",
    "INPUTS",
    "INPUTS_BY_ID",
    "MATCH_ORDER",
    "MAX_VOLUME",
    "POWER_OFF",
    "POWER_ON",
    "POWER_STANDBY",
    "POWER_VALUES",
    "QUERY",
    "UNKNOWN",
    "Command",
    "CommandSpec",
    "ConnectionFailed",
    "ConnectionState",
    "ControllerConfig",
    "DecodeSkip",
    "DecoderKind",
    "DenonMarantzException",
    "Input",
    "LineSplitter",
    "NotConnectedException",
    "StateUpdate",
    "UnknownCommand",
    "UnsupportedZone",
    "Zone",
    "clamp_volume",
    "decode",
    "encode_commands",
    "format_volume",
    "match_line",
    "parse_volume",
    "resolve",
    "round_volume",
    "write_commands",
]
