"""Command table for the Denon/Marantz telnet protocol.

Each registered command code maps to a :class:`CommandSpec` naming the decoder
used for its status lines. Zone codes route through the zone decoder, which
understands the nested ``MV``/``SI`` readings a zone status line can carry.
"""

import attr

from .enums import DecoderKind, Zone
from .exceptions import UnknownCommand


@attr.s(slots=True, frozen=True)
class CommandSpec:
    label: str = attr.ib()
    decoder: DecoderKind = attr.ib(default=DecoderKind.GENERIC)
    zone: Zone | None = attr.ib(default=None)

    @zone.validator
    def _check_zone(self, attribute, value):
        if (self.decoder is DecoderKind.ZONE) != (value is not None):
            raise ValueError(f"{self.label}: a zone is required exactly for zone decoders")


def _zone(label: str, zone: Zone) -> CommandSpec:
    return CommandSpec(label, DecoderKind.ZONE, zone)


COMMANDS: dict[str, CommandSpec] = {
    "PW": CommandSpec("Power"),
    "ZM": CommandSpec("Main Zone"),
    "Z2": _zone("Zone 2", Zone.ZONE2),
    "Z3": _zone("Zone 3", Zone.ZONE3),
    "MU": CommandSpec("Muted"),
    "Z2MU": CommandSpec("Z2 Muted"),
    "Z3MU": CommandSpec("Z3 Muted"),
    "MV": CommandSpec("Volume", DecoderKind.VOLUME),
    "Z2MV": _zone("Z2 Volume", Zone.ZONE2),
    "Z3MV": _zone("Z3 Volume", Zone.ZONE3),
    "SI": CommandSpec("Source"),
    "Z2SI": _zone("Z2 Source", Zone.ZONE2),
    "Z3SI": _zone("Z3 Source", Zone.ZONE3),
}

# Longer codes first so "Z2MU..." never resolves to "Z2". sorted() is stable,
# equal lengths keep table order.
MATCH_ORDER: tuple[str, ...] = tuple(sorted(COMMANDS, key=len, reverse=True))


def resolve(code: str) -> CommandSpec:
    try:
        return COMMANDS[code]
    except KeyError:
        raise UnknownCommand(code) from None


def match_line(line: str) -> tuple[str, CommandSpec]:
    """Return the longest registered code that prefixes ``line``."""
    for code in MATCH_ORDER:
        if line.startswith(code):
            return code, COMMANDS[code]
    raise UnknownCommand(line)
