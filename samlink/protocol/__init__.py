"""Protocol module for samlink."""

from .commands import (
    Command,
    HelloResult,
    NamingResult,
    ParsedReply,
    SessionResult,
    Subcommand,
)
from .parser import ProtocolParser

__all__ = [
    "Command",
    "Subcommand",
    "ParsedReply",
    "NamingResult",
    "HelloResult",
    "SessionResult",
    "ProtocolParser",
]
