import argparse
import asyncio
import logging
import sys

from . import DEFAULT_PORT, INPUTS_BY_ID, Command, ControllerConfig, Zone
from .client import Client, ClientContext
from .controller import Controller
from .dummy import DummyServer
from .server import ServerContext

_LOGGER = logging.getLogger(__name__)


def auto_source(x: str) -> str:
    source = x.upper()
    if source not in INPUTS_BY_ID:
        raise argparse.ArgumentTypeError(f"unknown input {x!r}")
    return source


parser = argparse.ArgumentParser(description="Communicate with Denon/Marantz receivers.")
parser.add_argument("--verbose", action="store_true")

subparsers = parser.add_subparsers(dest="subcommand")

parser_state = subparsers.add_parser("state")
parser_state.add_argument("--host", required=True)
parser_state.add_argument("--port", default=DEFAULT_PORT, type=int)
parser_state.add_argument("--zone", default=Zone.MAIN, type=Zone, choices=list(Zone))
parser_state.add_argument("--volume", type=float)
parser_state.add_argument("--source", type=auto_source)
parser_state.add_argument("--mute", action=argparse.BooleanOptionalAction)
parser_state.add_argument("--monitor", action="store_true")
parser_state.add_argument("--power-on", action=argparse.BooleanOptionalAction)
parser_state.add_argument("--power-off", action=argparse.BooleanOptionalAction)
parser_state.add_argument("--wait", default=1.0, type=float)

parser_client = subparsers.add_parser("client")
parser_client.add_argument("--host", required=True)
parser_client.add_argument("--port", default=DEFAULT_PORT, type=int)
parser_client.add_argument("--command", required=True)
parser_client.add_argument("--wait", default=1.0, type=float)

parser_server = subparsers.add_parser("server")
parser_server.add_argument("--host", default="localhost")
parser_server.add_argument("--port", default=DEFAULT_PORT, type=int)


async def run_client(args: argparse.Namespace) -> None:
    client = Client(args.host, args.port)
    lines: list[str] = []
    async with ClientContext(client):
        with client.listen(lines.append):
            await client.send(Command(args.command))
            await asyncio.sleep(args.wait)
    for line in lines:
        print(line)


async def run_state(args: argparse.Namespace) -> None:
    from .display import print_state

    config = ControllerConfig(args.host, args.port)
    async with Controller(config) as avr:
        # answers to the refresh issued on connect arrive asynchronously
        await asyncio.sleep(args.wait)

        changed = False
        if args.volume is not None:
            await avr.set_volume(args.zone, args.volume)
            changed = True

        if args.source is not None:
            await avr.set_source(args.zone, args.source)
            changed = True

        if args.mute is not None:
            await avr.set_mute(args.zone, args.mute)
            changed = True

        if args.power_on:
            await avr.set_power(args.zone, True)
            changed = True

        if args.power_off:
            await avr.set_power(args.zone, False)
            changed = True

        if changed:
            await asyncio.sleep(args.wait)

        if args.monitor:
            print_state(avr.state)
            while avr.connected:
                await avr.state.wait_changed()
                print_state(avr.state)
        else:
            print_state(avr.state)


async def run_server(args: argparse.Namespace) -> None:
    server = DummyServer(args.host, args.port)
    async with ServerContext(server):
        while True:
            await asyncio.sleep(delay=1)


def main() -> None:
    args = parser.parse_args()

    if args.verbose:
        root = logging.getLogger()
        root.setLevel(logging.DEBUG)

        channel = logging.StreamHandler(sys.stdout)
        channel.setLevel(logging.DEBUG)
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        channel.setFormatter(formatter)
        root.addHandler(channel)

    if args.subcommand == "client":
        asyncio.run(run_client(args))
    elif args.subcommand == "state":
        asyncio.run(run_state(args))
    elif args.subcommand == "server":
        asyncio.run(run_server(args))


if __name__ == "__main__":
    main()
