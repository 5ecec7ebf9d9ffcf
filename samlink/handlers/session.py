"""SESSION CREATE handler."""

import logging
from enum import Enum

from ..errors import InvalidValueError, ProtocolParseError, UnexpectedStatusError
from ..protocol.commands import Command, SessionResult, Subcommand
from ..protocol.parser import ProtocolParser
from .exchange import exchange

logger = logging.getLogger(__name__)

_parser = ProtocolParser()


class SessionType(Enum):
    """Session styles, valued by their wire STYLE."""
    VIRTUAL_STREAM = "STREAM"
    REPLIABLE_DATAGRAM = "DATAGRAM"
    ANONYMOUS_DATAGRAM = "RAW"


def _parse_status_reply(reply: str) -> str:
    try:
        parsed = _parser.parse_reply(reply, Command.SESSION, Subcommand.STATUS)
    except ProtocolParseError as e:
        logger.warning(f"Failed to parse SESSION reply: {e}")
        raise InvalidValueError(f"malformed SESSION reply: {e}") from e

    status = parsed.get_value("RESULT")
    if status is None:
        raise InvalidValueError("SESSION reply has no RESULT")

    result = SessionResult.from_wire(status)
    if result is None:
        raise UnexpectedStatusError(status)
    if result != SessionResult.OK:
        message = parsed.get_value("MESSAGE") or status
        raise InvalidValueError(f"session refused ({status}): {message}")

    return parsed.get_value("DESTINATION") or ""


def create(
        sock,
        session_type: SessionType,
        nick: str,
        destination: str = "TRANSIENT",
) -> str:
    """
    Create a session bound to ``sock``.

    Args:
        sock: Control socket that has completed the HELLO handshake
        session_type: Session style
        nick: Session ID, unique on the gateway
        destination: Private key to reuse, or TRANSIENT for a fresh one

    Returns:
        The DESTINATION reported by the gateway ('' if absent).
    """
    if not nick:
        raise InvalidValueError("session nickname must not be empty")

    try:
        msg = _parser.format_message(Command.SESSION, Subcommand.CREATE, {
            "STYLE": session_type.value,
            "ID": nick,
            "DESTINATION": destination,
        })
    except ValueError as e:
        raise InvalidValueError(str(e)) from e

    return exchange(sock, msg, _parse_status_reply)
