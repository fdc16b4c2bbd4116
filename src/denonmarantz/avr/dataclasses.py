"""Data classes and static catalogs for the Denon/Marantz protocol."""

import attr

from .enums import DEFAULT_MAX_VOLUME, DEFAULT_PORT


@attr.s(slots=True, frozen=True)
class Input:
    """Selectable source input. ``id`` is the code used on the wire."""

    id: str = attr.ib()
    text: str = attr.ib()


INPUTS: tuple[Input, ...] = (
    Input("PHONO", "Phono"),
    Input("CD", "CD"),
    Input("TUNER", "Tuner"),
    Input("DVD", "DVD"),
    Input("BD", "Blu-ray"),
    Input("TV", "TV Audio"),
    Input("SAT/CBL", "CBL/SAT"),
    Input("SAT", "Satellite"),
    Input("MPLAY", "Media Player"),
    Input("GAME", "Game"),
    Input("HDRADIO", "HD Radio"),
    Input("NET", "HEOS Music"),
    Input("PANDORA", "Pandora"),
    Input("SIRIUSXM", "SiriusXM"),
    Input("SPOTIFY", "Spotify"),
    Input("LASTFM", "Last.fm"),
    Input("FLICKR", "Flickr"),
    Input("IRADIO", "Internet Radio"),
    Input("SERVER", "Media Server"),
    Input("FAVORITES", "Favorites"),
    Input("AUX1", "AUX 1"),
    Input("AUX2", "AUX 2"),
    Input("AUX3", "AUX 3"),
    Input("AUX4", "AUX 4"),
    Input("AUX5", "AUX 5"),
    Input("AUX6", "AUX 6"),
    Input("AUX7", "AUX 7"),
    Input("BT", "Bluetooth"),
    Input("USB/IPOD", "USB/iPod"),
    Input("USB", "USB"),
    Input("IPD", "iPod Direct"),
    Input("IRP", "Internet Radio Play"),
    Input("FVP", "Favorites Play"),
    Input("SOURCE", "Main Zone Source"),
)

INPUTS_BY_ID: dict[str, Input] = {item.id: item for item in INPUTS}


@attr.s(slots=True, frozen=True)
class ControllerConfig:
    """Connection and behaviour settings for one receiver.

    ``available_inputs`` limits the inputs offered for selection; ``None``
    offers the full catalog. ``reconnect`` lets ``Controller.refresh`` try to
    reopen a dropped connection instead of only reporting it.
    """

    host: str = attr.ib()
    port: int = attr.ib(default=DEFAULT_PORT)
    connect_timeout: float = attr.ib(default=1.5)
    send_delay: float = attr.ib(default=0.05)
    poll_interval: float = attr.ib(default=300.0)
    max_volume: float = attr.ib(default=DEFAULT_MAX_VOLUME)
    reconnect: bool = attr.ib(default=False)
    available_inputs: tuple[str, ...] | None = attr.ib(default=None)

    @available_inputs.validator
    def _check_inputs(self, attribute, value):
        if value is None:
            return
        unknown = [item for item in value if item not in INPUTS_BY_ID]
        if unknown:
            raise ValueError(f"Unknown inputs {unknown}")

    def inputs(self) -> list[Input]:
        if self.available_inputs is None:
            return list(INPUTS)
        return [INPUTS_BY_ID[item] for item in self.available_inputs]
