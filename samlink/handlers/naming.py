"""
Name Resolution Handler

NAMING LOOKUP resolves a name (``zzz.i2p``, a b32 address, or ``ME``
for the session's own destination) to a destination.
"""

import logging
from typing import Tuple

from ..errors import (
    DoesntExistError,
    InvalidValueError,
    ProtocolParseError,
    UnexpectedStatusError,
)
from ..protocol.commands import Command, NamingResult, Subcommand
from ..protocol.parser import ProtocolParser
from .exchange import exchange

logger = logging.getLogger(__name__)

_parser = ProtocolParser()


def _parse_lookup_reply(reply: str) -> Tuple[str, str]:
    try:
        parsed = _parser.parse_reply(reply, Command.NAMING, Subcommand.REPLY)
    except ProtocolParseError as e:
        logger.warning(f"Failed to parse NAMING reply: {e}")
        raise InvalidValueError(f"malformed NAMING reply: {e}") from e

    status = parsed.get_value("RESULT")
    if status is None:
        logger.warning("Gateway NAMING reply did not contain RESULT")
        raise InvalidValueError("NAMING reply has no RESULT")

    result = NamingResult.from_wire(status)
    if result is None:
        logger.warning(f"Gateway NAMING reply has unknown RESULT={status}")
        raise UnexpectedStatusError(status)
    if result == NamingResult.KEY_NOT_FOUND:
        raise DoesntExistError(f"no destination for {parsed.get_value('NAME')!r}")
    if result in (NamingResult.INVALID_KEY, NamingResult.INVALID):
        raise InvalidValueError(f"gateway rejected lookup: RESULT={status}")

    value = parsed.get_value("VALUE") or ""

    name = parsed.get_value("NAME")
    if name is None:
        logger.warning("Gateway NAMING reply did not contain NAME")
        raise InvalidValueError("NAMING reply has no NAME")

    return name, value


def lookup(sock, name: str) -> Tuple[str, str]:
    """
    Resolve ``name`` to a destination.

    Args:
        sock: Connected socket to the gateway
        name: Name to resolve

    Returns:
        ``(name, value)`` exactly as reported by the gateway. ``value``
        is the empty string when the gateway omits VALUE.

    Raises:
        DoesntExistError: The name has no known destination.
        InvalidValueError: The reply was malformed, lacked RESULT or
            NAME, or reported INVALID_KEY/INVALID/an unknown status.
        TcpConnectionError: The transport failed.
    """
    try:
        msg = _parser.format_message(Command.NAMING, Subcommand.LOOKUP, {"NAME": name})
    except ValueError as e:
        raise InvalidValueError(f"cannot look up {name!r}: {e}") from e

    return exchange(sock, msg, _parse_lookup_reply)
