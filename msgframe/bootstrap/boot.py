import argparse
import os
from typing import Sequence

from msgframe.bootstrap.config.loader import get_cli_args
from msgframe.bootstrap.deps import get_config, get_cp
from msgframe.core.controlplane import ControlPlane
from msgframe.core.errors import MsgFrameError
from msgframe.core.helpers.utils import setup_signal_handler, setup_logging
from msgframe.core.models.address import Address


def announce(address: Address) -> None:
    # Harnesses read this line to find the listener.
    print(address, flush=True)


def run_server(controlplane: ControlPlane) -> None:
    loop = controlplane.loop

    try:
        with setup_signal_handler(loop) as stop_event:
            loop.run_until_complete(controlplane.serve(stop_event, announce))
    except KeyboardInterrupt:
        pass
    finally:
        try:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.run_until_complete(loop.shutdown_default_executor())
        finally:
            loop.close()


def run_client(controlplane: ControlPlane, cli: argparse.Namespace) -> None:
    loop = controlplane.loop

    try:
        if cli.roundtrip:
            count = loop.run_until_complete(controlplane.roundtrip(cli.address))
            print(f"{count} round-trip(s) ok")
        else:
            loop.run_until_complete(controlplane.probe(cli.address))
            print("bye now!")
    finally:
        loop.close()


def main(argv: Sequence[str] | None = None) -> None:
    cli = get_cli_args(argv)
    if cli.config:
        os.environ["MSGFRAMECONFIG"] = cli.config

    config = get_config()
    setup_logging(cli.log_level or config.log_level)

    controlplane = get_cp()
    try:
        if cli.command == "server":
            run_server(controlplane)
        else:
            run_client(controlplane, cli)
    except MsgFrameError as ex:
        raise SystemExit(f"Error: {ex}")


if __name__ == "__main__":
    main()
