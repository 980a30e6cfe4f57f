import argparse
import os
from pathlib import Path
from typing import Sequence


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="msgframe",
        description=(
            "Run one side of the msgframe interoperability fixture.\n\n"
            "The server echoes every MessagePack payload it receives, re-framed\n"
            "with its own length unit. The client checks that a server is\n"
            "reachable, or runs the full round-trip table with --roundtrip."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a msgframe configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity.\n"
            "Defaults to the configured log_level (INFO).\n\n"
            "Example:\n"
            "  --log-level DEBUG"
        ),
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser(
        "server",
        help="Bind an ephemeral port, print host:port and echo frames."
    )

    client = commands.add_parser(
        "client",
        help="Connect to ADDRESS (host:port) and close the connection."
    )
    client.add_argument("address", help="Listener address, as host:port")
    client.add_argument(
        "--roundtrip",
        action="store_true",
        help="Exchange the compliance value table instead of just connecting."
    )

    return parser


def get_cli_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def get_configfile() -> Path | None:
    # Priority: ENV (set from --config by the bootstrap) > default file in cwd
    raw = os.getenv("MSGFRAMECONFIG")

    if raw is None:
        file = Path.cwd() / "msgframe.yaml"
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the MSGFRAMECONFIG environment variable\n"
            "  - Or place a 'msgframe.yaml' file in the current working directory."
        )

    return file
