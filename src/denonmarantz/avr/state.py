"""Device state management for Denon/Marantz receivers.

Provides the State class which maintains a cached view of the receiver's
status lines for every zone and exposes getter/setter methods for power,
mute, volume and input source. State is refreshed by sending a query for
every registered command (update()) and kept current by the listener
callback the Client invokes for every inbound line.
"""

import asyncio
import logging
from typing import Any

from . import (
    COMMANDS,
    DEFAULT_MAX_VOLUME,
    INPUTS_BY_ID,
    MAX_VOLUME,
    POWER_OFF,
    POWER_ON,
    POWER_STANDBY,
    UNKNOWN,
    Command,
    ConnectionFailed,
    DecodeSkip,
    NotConnectedException,
    StateUpdate,
    UnknownCommand,
    UnsupportedZone,
    Zone,
    clamp_volume,
    decode,
    format_volume,
    match_line,
)
from .client import ClientBase

_LOGGER = logging.getLogger(__name__)


def _zone(zone: Zone | str) -> Zone:
    try:
        return Zone(zone)
    except ValueError:
        raise UnsupportedZone(f"Unknown zone {zone!r}") from None


class State:
    """Cached state for one receiver, covering all of its zones.

    Maintains an in-memory cache of decoded status values keyed by command
    code. Every registered code starts as the ``UNKNOWN`` sentinel. Getter
    methods translate a zone into its code and never touch the network.
    Setter methods only send; the cache changes when the receiver echoes
    the new value.

    Use as an async context manager to automatically register/unregister
    the real-time listener::

        async with State(client) as state:
            await state.update()
            print(state.get_volume(Zone.MAIN))

    Args:
        client: Client instance used for sending commands.
        max_volume: Volume ceiling used until the receiver reports its own.
    """

    _state: dict[str, str | float]

    def __init__(self, client: ClientBase, max_volume: float = DEFAULT_MAX_VOLUME) -> None:
        self._client = client
        self._state = {code: UNKNOWN for code in COMMANDS}
        self._max_volume = max_volume
        self._changed: asyncio.Event = asyncio.Event()

    async def start(self) -> None:
        """Register the real-time listener for state updates."""
        self._client.add_listener(self._listen)

    async def stop(self) -> None:
        """Unregister the real-time listener."""
        self._client.remove_listener(self._listen)

    async def __aenter__(self) -> "State":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()

    async def wait_changed(self) -> None:
        """Wait until the state changes due to a received line."""
        await self._changed.wait()
        self._changed.clear()

    def to_dict(self) -> dict[str, Any]:
        """Return decoded values for every zone as a dictionary."""
        return {
            zone.value: {
                "POWER": self.get_power(zone),
                "MUTE": self.get_mute(zone),
                "VOLUME": self.get_volume(zone),
                "SOURCE": self.get_source(zone),
            }
            for zone in Zone
        } | {"MAX_VOLUME": self._max_volume}

    def __repr__(self) -> str:
        return f"State ({self._state}) Max ({self._max_volume})"

    def _listen(self, line: str) -> None:
        try:
            code, spec = match_line(line)
            update = decode(code, spec, line)
        except UnknownCommand:
            _LOGGER.debug("Ignoring unregistered line %r", line)
            return
        except DecodeSkip as e:
            _LOGGER.debug("Ignoring undecodable line %r: %s", line, e)
            return

        self._apply(update)

    def _apply(self, update: StateUpdate) -> None:
        if update.code == MAX_VOLUME:
            _LOGGER.debug("Max volume is now %s", update.value)
            self._max_volume = float(update.value)
        else:
            _LOGGER.debug("Set %s: %s", update.code, update.value)
            self._state[update.code] = update.value
        self._changed.set()

    @property
    def client(self) -> ClientBase:
        return self._client

    @property
    def max_volume(self) -> float:
        return self._max_volume

    def get(self, code: str) -> str | float | None:
        """Raw cached value for ``code``; None when never reported."""
        value = self._state.get(code, UNKNOWN)
        if value == UNKNOWN:
            return None
        return value

    def _get_bool(self, code: str) -> bool | None:
        value = self.get(code)
        if value is None:
            return None
        return value == POWER_ON

    async def _send(self, *commands: Command) -> None:
        try:
            await self._client.send(*commands)
        except (NotConnectedException, ConnectionFailed) as e:
            _LOGGER.error("Unable to send %s: %r", ", ".join(map(str, commands)), e)
            raise

    async def update(self) -> None:
        """Query every registered command. Answers arrive via the listener."""
        _LOGGER.debug("Requesting full state refresh")
        for code in COMMANDS:
            await self._client.send(Command.query(code))

    def get_power(self, zone: Zone | str = Zone.MAIN) -> bool | None:
        """Return power state (True=on, False=off/standby, None=unknown)."""
        return self._get_bool(_zone(zone).power_code)

    async def set_power(self, zone: Zone | str, power: bool) -> None:
        """Turn a zone on or off. Main zone goes to STANDBY rather than OFF."""
        zone = _zone(zone)
        if zone is Zone.MAIN:
            value = POWER_ON if power else POWER_STANDBY
        else:
            value = POWER_ON if power else POWER_OFF
        await self._send(Command(zone.power_code, value))

    def get_mute(self, zone: Zone | str = Zone.MAIN) -> bool | None:
        """Return mute state (True=muted, False=unmuted, None=unknown)."""
        return self._get_bool(f"{_zone(zone).prefix}MU")

    async def set_mute(self, zone: Zone | str, mute: bool) -> None:
        zone = _zone(zone)
        await self._send(Command(f"{zone.prefix}MU", POWER_ON if mute else POWER_OFF))

    def get_volume(self, zone: Zone | str = Zone.MAIN) -> float | None:
        value = self.get(f"{_zone(zone).prefix}MV")
        if value is None:
            return None
        return float(value)

    async def set_volume(self, zone: Zone | str, volume: float) -> None:
        """Set volume, clamped to the max volume and snapped to 0.5 steps.

        The receiver only applies the change when the max volume is restated
        in the same write, so both lines always go out together.
        """
        zone = _zone(zone)
        code = f"{zone.prefix}MV"
        value = clamp_volume(volume, self._max_volume)
        await self._send(
            Command(code, format_volume(value)),
            Command(code, f"MAX {format_volume(self._max_volume)}"),
        )

    def get_source(self, zone: Zone | str = Zone.MAIN) -> str | None:
        value = self.get(f"{_zone(zone).prefix}SI")
        if value is None:
            return None
        return str(value)

    async def set_source(self, zone: Zone | str, source: str) -> None:
        """Select an input by its catalog id. Main zone uses ``SI<id>``."""
        zone = _zone(zone)
        if source not in INPUTS_BY_ID:
            raise ValueError(f"Unknown input {source!r}")
        if zone is Zone.MAIN:
            await self._send(Command("SI", source))
        else:
            await self._send(Command(zone.prefix, source))
