"""
Protocol Parser Module

This module handles parsing of raw gateway replies and formatting of
outbound command lines.

Protocol Format:
    Request:  <COMMAND> [SUBCOMMAND] [KEY=VALUE ...]\n
    Reply:    <COMMAND> [SUBCOMMAND] [KEY=VALUE ...]\n
"""

import logging
from typing import List, Mapping, Optional

from ..errors import ProtocolParseError
from .commands import Command, ParsedReply, Subcommand

logger = logging.getLogger(__name__)


class ProtocolParser:
    """
    Parser for the SAM text protocol.

    Replies:
        NAMING REPLY RESULT=OK NAME=zzz.i2p VALUE=<dest>
        SESSION STATUS RESULT=OK DESTINATION=<privkey>
        HELLO REPLY RESULT=OK VERSION=3.1

    Constraints:
        - The reply must open with the expected command and subcommand
        - Every remaining token must be KEY=VALUE; VALUE may be empty
        - A token is split on its first '=' only (base64 padding survives)
    """

    def parse_reply(
            self,
            data: str,
            command: Command,
            subcommand: Optional[Subcommand] = None,
    ) -> ParsedReply:
        """
        Parse a raw reply line into a ParsedReply.

        Args:
            data: Raw reply string (may include trailing newline)
            command: The command the reply must announce
            subcommand: The subcommand the reply must announce, if any

        Returns:
            ParsedReply with all fields in encounter order.

        Raises:
            ProtocolParseError: If the reply is empty, announces a different
                command/subcommand, or contains a token without '='.

        Examples:
            >>> parser = ProtocolParser()
            >>> reply = parser.parse_reply(
            ...     "NAMING REPLY RESULT=OK NAME=zzz.i2p VALUE=AAAA\\n",
            ...     Command.NAMING, Subcommand.REPLY)
            >>> reply.get_value("NAME")
            'zzz.i2p'
        """
        raw = data.strip()
        parts = raw.split()
        if not parts:
            raise ProtocolParseError("empty reply", raw=raw)

        expected = [command.value]
        if subcommand is not None:
            expected.append(subcommand.value)

        header = parts[:len(expected)]
        if header != expected:
            raise ProtocolParseError(
                f"expected {' '.join(expected)!r}, got {' '.join(header)!r}",
                raw=raw,
            )

        reply = ParsedReply(command=command, subcommand=subcommand)
        for token in parts[len(expected):]:
            key, sep, value = token.partition("=")
            if not sep or not key:
                raise ProtocolParseError(f"malformed field {token!r}", raw=raw)
            if key in reply.fields:
                logger.debug(f"Duplicate field {key} in reply, keeping last")
            reply.fields[key] = value

        return reply

    def format_message(
            self,
            command: Command,
            subcommand: Optional[Subcommand] = None,
            fields: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Format a command line for the gateway.

        Args:
            command: Command family
            subcommand: Optional subcommand
            fields: KEY=VALUE pairs, written in mapping order

        Returns:
            Formatted line WITH trailing newline.

        Raises:
            ValueError: If a key or value could not be parsed back
                (whitespace anywhere, '=' in a key, or an empty key).

        Examples:
            >>> parser = ProtocolParser()
            >>> parser.format_message(Command.NAMING, Subcommand.LOOKUP,
            ...                       {"NAME": "zzz.i2p"})
            'NAMING LOOKUP NAME=zzz.i2p\\n'
        """
        parts: List[str] = [command.value]
        if subcommand is not None:
            parts.append(subcommand.value)

        for key, value in (fields or {}).items():
            if not key or "=" in key or _has_whitespace(key):
                raise ValueError(f"invalid field name {key!r}")
            if _has_whitespace(value):
                raise ValueError(f"field {key} has whitespace in its value")
            parts.append(f"{key}={value}")

        return " ".join(parts) + "\n"


def _has_whitespace(text: str) -> bool:
    return any(ch.isspace() for ch in text)
