"""Enumerations and protocol constants for the Denon/Marantz telnet protocol."""

from enum import Enum

DEFAULT_PORT = 23
DEFAULT_MAX_VOLUME = 98.0

UNKNOWN = "-"

POWER_ON = "ON"
POWER_OFF = "OFF"
POWER_STANDBY = "STANDBY"
POWER_VALUES = frozenset({POWER_ON, POWER_OFF})

QUERY = "?"
MAX_VOLUME = "MVMAX"


class Zone(str, Enum):
    """Independently controllable output region of the receiver."""

    MAIN = "main"
    ZONE2 = "zone2"
    ZONE3 = "zone3"
    ZONE4 = "zone4"

    @property
    def prefix(self) -> str:
        return _ZONE_PREFIX[self]

    @property
    def power_code(self) -> str:
        if self is Zone.MAIN:
            return "PW"
        return self.prefix


_ZONE_PREFIX = {
    Zone.MAIN: "",
    Zone.ZONE2: "Z2",
    Zone.ZONE3: "Z3",
    Zone.ZONE4: "Z4",
}


class DecoderKind(Enum):
    GENERIC = "generic"
    VOLUME = "volume"
    ZONE = "zone"


class ConnectionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
