#!/usr/bin/env python3
"""
samlink Command Line Entry Point

Usage:
    samlink lookup zzz.i2p                  # Resolve a name
    samlink lookup zzz.i2p --port 7656      # Custom gateway port
    samlink me --style datagram             # Create a session, print its destination
    samlink --debug lookup zzz.i2p          # Log wire traffic

Environment Variables:
    SAMLINK_HOST        - Gateway address
    SAMLINK_TCP_PORT    - Gateway TCP port
    SAMLINK_TIMEOUT     - Socket timeout in seconds
    SAMLINK_DEBUG       - Enable debug mode (true/false)
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config.settings import settings
from .errors import DoesntExistError, SamError, TcpConnectionError
from .handlers.hello import hello
from .handlers.naming import lookup
from .handlers.session import SessionType
from .network.transport import SamSocket, SocketType, TransportError
from .session import Session

logger = logging.getLogger(__name__)

STYLES = {
    "stream": SessionType.VIRTUAL_STREAM,
    "datagram": SessionType.REPLIABLE_DATAGRAM,
    "raw": SessionType.ANONYMOUS_DATAGRAM,
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="samlink",
        description="samlink: SAM bridge client",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--host",
        type=str,
        default=settings.SAM_HOST,
        help="Gateway host address",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=settings.SAM_TCP_PORT,
        help="Gateway TCP port",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.SOCKET_TIMEOUT,
        help="Socket timeout in seconds",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.DEBUG,
        help="Enable debug logging",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    lookup_parser = commands.add_parser("lookup", help="Resolve a name to a destination")
    lookup_parser.add_argument("name", help="Name to resolve, e.g. zzz.i2p")

    me_parser = commands.add_parser("me", help="Create a session and print its destination")
    me_parser.add_argument(
        "--style",
        choices=sorted(STYLES),
        default="stream",
        help="Session style",
    )

    return parser.parse_args(argv)


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


def run_lookup(args: argparse.Namespace) -> int:
    sock = SamSocket(SocketType.TCP, args.host, args.port, args.timeout)
    try:
        sock.connect()
    except TransportError as e:
        raise TcpConnectionError(str(e)) from e

    with sock:
        hello(sock)
        name, value = lookup(sock, args.name)

    print(f"{name} {value}")
    return 0


def run_me(args: argparse.Namespace) -> int:
    with Session.create(STYLES[args.style], args.host, args.port, args.timeout) as session:
        print(f"nick: {session.nick}")
        print(f"destination: {session.local}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the client."""
    args = parse_args(argv)
    setup_logging(debug=args.debug)

    logger.debug(f"Using gateway {args.host}:{args.port}")

    try:
        if args.command == "lookup":
            return run_lookup(args)
        return run_me(args)
    except DoesntExistError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except SamError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
