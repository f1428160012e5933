"""Command line entry point.

Processes JSON AIS weather data emitted from AIS-catcher in HTTP mode, then
sends the processed data as HTTP GET requests to an ERDDAP server. The
ERDDAP server must be operating in a TLS-secured manner for the GET to be
accepted as a data write.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

import uvicorn

from erddap_feeder.ais.config import FeederConfigError
from erddap_feeder.config import get_settings
from erddap_feeder.main import build_processor, create_app

logger = logging.getLogger(__name__)


def parse_bind_address(value: str) -> tuple[str, int]:
    """Split HOST:PORT into its parts."""
    host, sep, port = value.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise argparse.ArgumentTypeError(f"expected HOST:PORT, got '{value}'")
    return host.strip("[]"), int(port)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="erddap-feeder",
        description=(
            "Processes JSON AIS weather data emitted from AIS-catcher in HTTP mode, "
            "then sends it to an ERDDAP server."
        ),
    )
    parser.add_argument(
        "--bind-address",
        type=parse_bind_address,
        default=(settings.bind_host, settings.bind_port),
        help=f"IP address and port to listen on (default: {settings.bind_host}:{settings.bind_port})",
    )
    parser.add_argument(
        "-d",
        "--dump-all-packets",
        action="store_true",
        default=settings.dump_all_packets,
        help="Log every received JSON packet",
    )
    parser.add_argument(
        "--config",
        default=settings.config_file,
        help=f"Feeder configuration file (default: {settings.config_file})",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    host, port = args.bind_address

    settings = get_settings().model_copy(
        update={
            "config_file": args.config,
            "bind_host": host,
            "bind_port": port,
            "dump_all_packets": args.dump_all_packets,
        }
    )

    try:
        processor = build_processor(settings)
    except FeederConfigError as e:
        logger.error(f"{e}")
        sys.exit(int(e.exit_code))

    logger.info(f"Listening on {host}:{port}")
    uvicorn.run(
        create_app(settings, processor),
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
