"""
Protocol Command and Reply Definitions

This module defines the vocabulary of the SAM text protocol and the
data structure a reply line is parsed into.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, ItemsView, Optional


class Command(Enum):
    """Enumeration of protocol command families."""
    HELLO = "HELLO"
    SESSION = "SESSION"
    NAMING = "NAMING"
    STREAM = "STREAM"
    DEST = "DEST"


class Subcommand(Enum):
    """Enumeration of subcommands qualifying a Command."""
    VERSION = "VERSION"
    REPLY = "REPLY"
    CREATE = "CREATE"
    STATUS = "STATUS"
    LOOKUP = "LOOKUP"
    CONNECT = "CONNECT"
    ACCEPT = "ACCEPT"
    GENERATE = "GENERATE"


class _ResultCode(Enum):
    """Base for closed sets of RESULT codes."""

    @classmethod
    def from_wire(cls, text: str) -> Optional["_ResultCode"]:
        """Return the member for ``text``, or None if it is not recognized."""
        try:
            return cls(text)
        except ValueError:
            return None


class NamingResult(_ResultCode):
    """RESULT codes of a NAMING REPLY."""
    OK = "OK"
    KEY_NOT_FOUND = "KEY_NOT_FOUND"
    INVALID_KEY = "INVALID_KEY"
    INVALID = "INVALID"


class HelloResult(_ResultCode):
    """RESULT codes of a HELLO REPLY."""
    OK = "OK"
    NOVERSION = "NOVERSION"
    I2P_ERROR = "I2P_ERROR"


class SessionResult(_ResultCode):
    """RESULT codes of a SESSION STATUS."""
    OK = "OK"
    DUPLICATED_ID = "DUPLICATED_ID"
    DUPLICATED_DEST = "DUPLICATED_DEST"
    INVALID_ID = "INVALID_ID"
    INVALID_KEY = "INVALID_KEY"
    I2P_ERROR = "I2P_ERROR"


@dataclass
class ParsedReply:
    """
    Represents a parsed protocol reply.

    Attributes:
        command: The command family the reply was parsed under
        subcommand: The subcommand, or None for commands without one
        fields: KEY=VALUE pairs in the order they were received
    """
    command: Command
    subcommand: Optional[Subcommand] = None
    fields: Dict[str, str] = field(default_factory=dict)

    def get_value(self, name: str) -> Optional[str]:
        """Look up a field by its exact, case-sensitive name."""
        return self.fields.get(name)

    def items(self) -> ItemsView[str, str]:
        return self.fields.items()

    def __contains__(self, name: str) -> bool:
        return name in self.fields

    def __len__(self) -> int:
        return len(self.fields)
