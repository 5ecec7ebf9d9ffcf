"""
Error Taxonomy

Every failure a caller can observe from a protocol exchange is a
SamError tagged with an ErrorKind. Parse failures are a separate
ProtocolParseError which handlers convert into InvalidValueError.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Enumeration of caller-visible error kinds."""
    INVALID_VALUE = "InvalidValue"
    DOESNT_EXIST = "DoesntExist"
    TCP_CONNECTION_ERROR = "TcpConnectionError"


class SamError(Exception):
    """Base class for errors surfaced by the SAM client."""

    kind: ErrorKind = ErrorKind.INVALID_VALUE

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind.value)


class InvalidValueError(SamError):
    """Malformed reply, missing required field or a negative status."""
    kind = ErrorKind.INVALID_VALUE


class UnexpectedStatusError(InvalidValueError):
    """
    The gateway answered with a RESULT code outside the known set.

    Reported as InvalidValue; the offending code is kept in ``status``.
    """

    def __init__(self, status: str, message: Optional[str] = None):
        super().__init__(message or f"unexpected status {status!r}")
        self.status = status


class DoesntExistError(SamError):
    """The name has no known destination."""
    kind = ErrorKind.DOESNT_EXIST


class TcpConnectionError(SamError):
    """The transport to the gateway failed."""
    kind = ErrorKind.TCP_CONNECTION_ERROR


class ProtocolParseError(ValueError):
    """A reply line does not match the expected grammar."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw
