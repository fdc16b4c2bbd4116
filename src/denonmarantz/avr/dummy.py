"""Dummy server for development and testing.

Provides a simulated Denon/Marantz receiver that answers status queries and
echoes set commands the way the real telnet interface does. Useful for
integration testing and development without physical hardware.
"""

from functools import partial

from . import (
    DEFAULT_MAX_VOLUME,
    INPUTS_BY_ID,
    POWER_OFF,
    POWER_ON,
    POWER_STANDBY,
    QUERY,
    clamp_volume,
    format_volume,
    parse_volume,
)
from .server import Server

_ZONES = ("Z2", "Z3")


class DummyServer(Server):
    """Simulated receiver with a main zone and zones 2 and 3.

    Main zone volume answers come as ``MV<vol>`` followed by
    ``MVMAX <max>``. Zone status lines carry no sub-code, so zone 2 volume
    is reported as ``Z2<vol>`` and its source as ``Z2<input>``.

    Args:
        host: Bind address for the TCP server.
        port: Port number (default 23).
        max_volume: Volume ceiling reported in ``MVMAX`` lines.
    """

    def __init__(self, host: str, port: int = 23, max_volume: float = DEFAULT_MAX_VOLUME) -> None:
        super().__init__(host, port)

        self._power = POWER_ON
        self._max_volume = max_volume
        self._volume = {"": 50.0, "Z2": 40.0, "Z3": 30.0}
        self._mute = {"": POWER_OFF, "Z2": POWER_OFF, "Z3": POWER_OFF}
        self._source = {"": "CD", "Z2": "TUNER", "Z3": "SOURCE"}
        self._zone_power = {"Z2": POWER_OFF, "Z3": POWER_OFF}

        self.register_handler("PW", QUERY, self.get_power)
        self.register_handler("PW", None, self.set_power)
        self.register_handler("ZM", QUERY, self.get_main_zone)
        self.register_handler("ZM", None, self.set_main_zone)
        self.register_handler("MV", QUERY, self.get_volume)
        self.register_handler("MV", None, self.set_volume)
        self.register_handler("SI", QUERY, self.get_source)
        self.register_handler("SI", None, self.set_source)

        for prefix in ("", *_ZONES):
            self.register_handler(f"{prefix}MU", QUERY, partial(self.get_mute, prefix))
            self.register_handler(f"{prefix}MU", None, partial(self.set_mute, prefix))

        for prefix in _ZONES:
            self.register_handler(prefix, QUERY, partial(self.get_zone, prefix))
            self.register_handler(prefix, None, partial(self.set_zone, prefix))
            self.register_handler(f"{prefix}MV", QUERY, partial(self.get_zone_volume, prefix))
            self.register_handler(f"{prefix}MV", None, partial(self.set_zone_volume, prefix))
            self.register_handler(f"{prefix}SI", QUERY, partial(self.get_zone_source, prefix))
            self.register_handler(f"{prefix}SI", None, partial(self.set_zone_source, prefix))

    def get_power(self, **kwargs: str) -> str:
        return f"PW{self._power}"

    def set_power(self, data: str, **kwargs: str) -> list[str] | None:
        if data not in (POWER_ON, POWER_STANDBY):
            return None
        self._power = data
        return [self.get_power(), self.get_main_zone()]

    def get_main_zone(self, **kwargs: str) -> str:
        return "ZMON" if self._power == POWER_ON else "ZMOFF"

    def set_main_zone(self, data: str, **kwargs: str) -> list[str] | None:
        if data not in (POWER_ON, POWER_OFF):
            return None
        self._power = POWER_ON if data == POWER_ON else POWER_STANDBY
        return [self.get_main_zone(), self.get_power()]

    def get_volume(self, **kwargs: str) -> list[str]:
        return [
            f"MV{format_volume(self._volume[''])}",
            f"MVMAX {format_volume(self._max_volume)}",
        ]

    def _step(self, prefix: str, data: str) -> bool:
        if data == "UP":
            volume = self._volume[prefix] + 0.5
        elif data == "DOWN":
            volume = self._volume[prefix] - 0.5
        else:
            volume = parse_volume(data)
            if volume is None:
                return False
        self._volume[prefix] = clamp_volume(volume, self._max_volume)
        return True

    def set_volume(self, data: str, **kwargs: str) -> list[str] | None:
        # "MVMAX <n>" accompanies every volume set and is acknowledged silently
        if data.startswith("MAX") or not self._step("", data):
            return None
        return self.get_volume()

    def get_mute(self, prefix: str, **kwargs: str) -> str:
        return f"{prefix}MU{self._mute[prefix]}"

    def set_mute(self, prefix: str, data: str, **kwargs: str) -> str | None:
        if data not in (POWER_ON, POWER_OFF):
            return None
        self._mute[prefix] = data
        return self.get_mute(prefix)

    def get_source(self, **kwargs: str) -> str:
        return f"SI{self._source['']}"

    def set_source(self, data: str, **kwargs: str) -> str | None:
        if data not in INPUTS_BY_ID:
            return None
        self._source[""] = data
        return self.get_source()

    def get_zone(self, prefix: str, **kwargs: str) -> list[str]:
        return [
            self.get_zone_source(prefix),
            f"{prefix}{self._zone_power[prefix]}",
            self.get_zone_volume(prefix),
        ]

    def set_zone(self, prefix: str, data: str, **kwargs: str) -> str | None:
        if data in (POWER_ON, POWER_OFF):
            self._zone_power[prefix] = data
            return f"{prefix}{data}"
        if data in INPUTS_BY_ID:
            return self.set_zone_source(prefix, data)
        if self._step(prefix, data):
            return self.get_zone_volume(prefix)
        return None

    def get_zone_volume(self, prefix: str, **kwargs: str) -> str:
        return f"{prefix}{format_volume(self._volume[prefix])}"

    def set_zone_volume(self, prefix: str, data: str, **kwargs: str) -> str | None:
        if data.startswith("MAX") or not self._step(prefix, data):
            return None
        return self.get_zone_volume(prefix)

    def get_zone_source(self, prefix: str, **kwargs: str) -> str:
        return f"{prefix}{self._source[prefix]}"

    def set_zone_source(self, prefix: str, data: str, **kwargs: str) -> str | None:
        if data not in INPUTS_BY_ID:
            return None
        self._source[prefix] = data
        return self.get_zone_source(prefix)
