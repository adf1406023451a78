"""Main entry point for the bluectl command line."""

import argparse
import logging
import re
import sys

from bluectl.api.client import BluOSClient
from bluectl.api.protocol import BluOSError, NotFoundError
from bluectl.core.config import ConfigManager
from bluectl.core.controller import Controller
from bluectl.core.discovery import MdnsDiscovery, discover_players, identify_all
from bluectl.models.endpoint import DEFAULT_PORT, Endpoint

logger = logging.getLogger(__name__)

# Host names, IPv4 and IPv6 literals, optionally bracketed and with a port
_ADDRESS_RE = re.compile(r"[\w.:\[\]-]+")


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for all commands."""
    parser = argparse.ArgumentParser(
        prog="bluectl",
        description="bluectl - BluOS player control",
    )
    parser.add_argument("--host", default=None, help="player hostname or IP (overrides config)")
    parser.add_argument(
        "--port", type=int, default=None, help=f"HTTP API port (default: {DEFAULT_PORT})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    discover = commands.add_parser("discover", help="list players on the network")
    discover.add_argument("--mdns", action="store_true", help="browse with zeroconf")
    discover.add_argument(
        "--timeout", type=float, default=3.0, help="mDNS browse time in seconds",
    )

    use = commands.add_parser("use", help="select the player to control")
    use.add_argument("player", help="discovered player name, or IP/host.domain[:port]")

    commands.add_parser("status", help="show what is playing")

    volume = commands.add_parser("volume", help="show or set the volume")
    volume.add_argument("level", nargs="?", type=int, default=None)

    commands.add_parser("up", help="raise the volume one step")
    commands.add_parser("down", help="lower the volume one step")
    commands.add_parser("pause", help="toggle play/pause")

    play = commands.add_parser("play", help="resume, or play a stream URL")
    play.add_argument("url", nargs="?", default=None)

    commands.add_parser("skip", help="next track")
    commands.add_parser("back", help="previous track")
    commands.add_parser("albums", help="list the local album catalog")

    album = commands.add_parser("album", help="play an album from the catalog")
    album.add_argument("query", nargs="+", help='"artist - title" or part of it')

    commands.add_parser("presets", help="list presets")

    preset = commands.add_parser("preset", help="play a preset by name")
    preset.add_argument("name", nargs="+")

    return parser


def _discover(config: ConfigManager, mdns: bool, browse_time: float) -> dict[str, Endpoint]:
    if mdns:
        return identify_all(MdnsDiscovery.discover_all(timeout=browse_time), config.get_timeout())
    return discover_players(config.get_browse_tool(), timeout=config.get_timeout())


def _looks_like_address(player: str) -> bool:
    """Return True for IP literals and dotted host names, with optional port."""
    return bool(_ADDRESS_RE.fullmatch(player)) and ("." in player or ":" in player)


def _resolve_player(config: ConfigManager, player: str) -> Endpoint:
    """Resolve ``host[:port]`` directly, anything else by discovered name."""
    player = player.strip()
    if _looks_like_address(player):
        try:
            return Endpoint.parse(player)
        except ValueError as e:
            raise NotFoundError(f"Invalid player address {player!r}") from e

    wanted = player.lower()
    for name, endpoint in _discover(config, mdns=False, browse_time=0.0).items():
        if name.lower() == wanted:
            return endpoint
    raise NotFoundError(f"No player named {player!r}")


def _endpoint_from_args(args: argparse.Namespace, config: ConfigManager) -> Endpoint | None:
    if args.host:
        return Endpoint(args.host, args.port or DEFAULT_PORT)
    endpoint = config.get_endpoint()
    if endpoint is not None and args.port:
        return Endpoint(endpoint.host, args.port)
    return endpoint


def run(args: argparse.Namespace, config: ConfigManager) -> int:  # noqa: PLR0911, PLR0912
    """Execute one parsed command.

    Returns:
        Exit code (0 for success).

    Raises:
        BluOSError: If the command fails.
    """
    if args.command == "discover":
        players = _discover(config, args.mdns, args.timeout)
        if not players:
            print("No players found")
            return 1
        for name, endpoint in players.items():
            print(f"{name}\t{endpoint.address}")
        return 0

    if args.command == "use":
        endpoint = _resolve_player(config, args.player)
        config.set_endpoint(endpoint)
        config.sync()
        print(f"Using {endpoint.address}")
        return 0

    client = BluOSClient(_endpoint_from_args(args, config), timeout=config.get_timeout())
    controller = Controller(client, volume_step=config.get_volume_step())

    if args.command == "status":
        print(controller.status_line())
    elif args.command == "volume":
        if args.level is None:
            print(f"{controller.player_name()}: volume {client.volume()}")
        else:
            print(controller.set_volume(args.level))
    elif args.command == "up":
        print(controller.volume_up())
    elif args.command == "down":
        print(controller.volume_down())
    elif args.command == "pause":
        print(controller.toggle_pause())
    elif args.command == "play":
        if args.url:
            print(controller.play_url(args.url))
        else:
            print(controller.resume())
    elif args.command == "skip":
        print(controller.skip())
    elif args.command == "back":
        print(controller.back())
    elif args.command == "albums":
        for name in controller.list_albums():
            print(name)
    elif args.command == "album":
        print(controller.play_album(" ".join(args.query)))
    elif args.command == "presets":
        for name in controller.list_presets():
            print(name)
    elif args.command == "preset":
        print(controller.play_preset(" ".join(args.name)))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the bluectl command line.

    Returns:
        Exit code (0 for success).
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return run(args, ConfigManager())
    except BluOSError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
