"""Network transport for samlink."""

from .transport import SamSocket, SocketType, TransportError

__all__ = ["SamSocket", "SocketType", "TransportError"]
