"""
HELLO Handshake Handler

Every SAM connection opens with a version negotiation before any other
command is accepted.
"""

import logging
from typing import Optional

from ..config.settings import settings
from ..errors import InvalidValueError, ProtocolParseError, UnexpectedStatusError
from ..protocol.commands import Command, HelloResult, Subcommand
from ..protocol.parser import ProtocolParser
from .exchange import exchange

logger = logging.getLogger(__name__)

_parser = ProtocolParser()


def _parse_hello_reply(reply: str) -> str:
    try:
        parsed = _parser.parse_reply(reply, Command.HELLO, Subcommand.REPLY)
    except ProtocolParseError as e:
        logger.warning(f"Failed to parse HELLO reply: {e}")
        raise InvalidValueError(f"malformed HELLO reply: {e}") from e

    status = parsed.get_value("RESULT")
    if status is None:
        raise InvalidValueError("HELLO reply has no RESULT")

    result = HelloResult.from_wire(status)
    if result is None:
        raise UnexpectedStatusError(status)
    if result != HelloResult.OK:
        message = parsed.get_value("MESSAGE") or status
        raise InvalidValueError(f"handshake refused: {message}")

    version = parsed.get_value("VERSION")
    if not version:
        raise InvalidValueError("HELLO reply has no VERSION")
    return version


def hello(
        sock,
        min_version: Optional[str] = None,
        max_version: Optional[str] = None,
) -> str:
    """
    Negotiate the protocol version.

    Args:
        sock: Freshly connected socket to the gateway
        min_version: Lowest acceptable version (default from settings)
        max_version: Highest acceptable version (default from settings)

    Returns:
        The version the gateway selected.
    """
    msg = _parser.format_message(Command.HELLO, Subcommand.VERSION, {
        "MIN": min_version or settings.MIN_VERSION,
        "MAX": max_version or settings.MAX_VERSION,
    })
    version = exchange(sock, msg, _parse_hello_reply)
    logger.debug(f"Gateway speaks SAM {version}")
    return version
