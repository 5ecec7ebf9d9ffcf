"""
Exchange Primitive

One synchronous request/response round trip with the gateway: write a
command line, read exactly one reply line, hand it to a reply parser.
The protocol carries no request IDs, so a socket must never have more
than one exchange in flight.
"""

import logging
from typing import Callable, TypeVar

from ..errors import TcpConnectionError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def exchange(sock, message: str, reply_parser: Callable[[str], T]) -> T:
    """
    Send ``message`` and return ``reply_parser`` applied to the reply.

    Args:
        sock: Connected socket exposing write_line() and read_line()
        message: Outbound command line, including its trailing newline
        reply_parser: Turns the raw reply line into a result, raising
            SamError subclasses for protocol-level failures

    Returns:
        Whatever ``reply_parser`` returns.

    Raises:
        TcpConnectionError: If writing or reading fails. The reply parser
            is not invoked in that case.
    """
    logger.debug(f">> {message.rstrip()}")
    try:
        sock.write_line(message)
        reply = sock.read_line()
    except OSError as e:
        logger.warning(f"Exchange with gateway failed: {e}")
        raise TcpConnectionError(str(e)) from e

    logger.debug(f"<< {reply.rstrip()}")
    return reply_parser(reply)
