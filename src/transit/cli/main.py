"""Main CLI entry point for the transit datagram inspector."""

from __future__ import annotations

import argparse
import logging
import sys

from .. import __version__
from ..address import bind_udp
from .sniffer import inspect_datagrams


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the transit-udpc CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="transit-udpc",
        description="transit-udpc: print every UDP datagram received on an address",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output any received packets as a byte array, or as text with --string.

Examples:
  transit-udpc 127.0.0.1:9000            Print datagrams as byte lists
  transit-udpc -s 0.0.0.0:9000           Print datagrams as UTF-8 text
  transit-udpc -c 1 127.0.0.1:9000       Exit after the first datagram
        """,
    )

    parser.add_argument(
        "address",
        metavar="ADDRESS",
        help="Local address to bind, as host:port",
    )

    parser.add_argument(
        "-s",
        "--string",
        action="store_true",
        help="Output data as a string",
    )

    parser.add_argument(
        "-c",
        "--count",
        type=int,
        default=None,
        metavar="N",
        help="Exit after N datagrams",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log sender addresses and sizes to stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"transit {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.count is not None and args.count < 1:
        print("Error: --count must be at least 1", file=sys.stderr)
        return 1

    try:
        sock = bind_udp(args.address)
    except OSError as e:
        print(f"Error: Could not bind socket: {e}", file=sys.stderr)
        return 1

    try:
        inspect_datagrams(sock, sys.stdout, as_string=args.string, count=args.count)
    except OSError as e:
        print(f"Error: Could not receive packet: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: Packet is not valid UTF-8: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    finally:
        sock.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
