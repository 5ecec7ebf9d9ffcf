"""
Transport Module

Thin blocking socket wrapper used to talk to the SAM gateway. It moves
lines of text and nothing else; all protocol logic lives in the
handlers.
"""

import logging
import socket
from enum import Enum
from typing import Optional

from ..config.settings import settings

logger = logging.getLogger(__name__)


class SocketType(Enum):
    """Supported transport socket types."""
    TCP = "tcp"
    UDP = "udp"


class TransportError(OSError):
    """Raised when the socket cannot be opened, written or read."""


class SamSocket:
    """
    Blocking line-oriented socket to the gateway.

    Usage:
        with SamSocket(SocketType.TCP, "127.0.0.1", 7656) as sock:
            sock.write_line("HELLO VERSION MIN=3.1 MAX=3.1\\n")
            reply = sock.read_line()

    Attributes:
        socket_type: TCP or UDP
        host: Gateway host
        port: Gateway port
        timeout: Socket timeout in seconds (None blocks forever)
    """

    def __init__(
            self,
            socket_type: SocketType = SocketType.TCP,
            host: Optional[str] = None,
            port: Optional[int] = None,
            timeout: Optional[float] = None,
    ):
        self.socket_type = socket_type
        self.host = host if host is not None else settings.SAM_HOST
        if port is not None:
            self.port = port
        elif socket_type == SocketType.UDP:
            self.port = settings.SAM_UDP_PORT
        else:
            self.port = settings.SAM_TCP_PORT
        self.timeout = timeout if timeout is not None else settings.SOCKET_TIMEOUT
        self._sock: Optional[socket.socket] = None
        self._buffer = b""

    def connect(self) -> "SamSocket":
        """Open the socket to the gateway."""
        kind = socket.SOCK_STREAM if self.socket_type == SocketType.TCP else socket.SOCK_DGRAM
        try:
            sock = socket.socket(socket.AF_INET, kind)
        except OSError as e:
            raise TransportError(f"cannot create socket: {e}") from e

        try:
            sock.settimeout(self.timeout)
            sock.connect((self.host, self.port))
        except OSError as e:
            sock.close()
            raise TransportError(f"cannot connect to {self.host}:{self.port}: {e}") from e

        self._sock = sock
        logger.debug(f"Connected to {self.host}:{self.port} over {self.socket_type.value}")
        return self

    @property
    def is_connected(self) -> bool:
        return self._sock is not None

    def write_line(self, line: str) -> None:
        """Send ``line`` verbatim; the caller supplies the terminator."""
        sock = self._require_socket()
        try:
            sock.sendall(line.encode("utf-8"))
        except OSError as e:
            self.close()
            raise TransportError(f"write failed: {e}") from e

    def read_line(self) -> str:
        """
        Block until one full line is available and return it.

        Any failure closes the socket: the rest of a half-read reply may
        still be in flight and would be taken as the next reply.
        """
        sock = self._require_socket()
        try:
            if self.socket_type == SocketType.UDP:
                data = sock.recv(settings.READ_BUFFER_SIZE)
            else:
                data = self._read_stream_line(sock)
            return data.decode("utf-8")
        except socket.timeout as e:
            self.close()
            raise TransportError("read timed out") from e
        except UnicodeDecodeError as e:
            self.close()
            raise TransportError(f"invalid encoding: {e}") from e
        except OSError as e:
            self.close()
            if isinstance(e, TransportError):
                raise
            raise TransportError(f"read failed: {e}") from e

    def _read_stream_line(self, sock: socket.socket) -> bytes:
        while b"\n" not in self._buffer:
            chunk = sock.recv(settings.READ_BUFFER_SIZE)
            if not chunk:
                raise TransportError("connection closed by gateway")
            self._buffer += chunk

        line, _, self._buffer = self._buffer.partition(b"\n")
        return line + b"\n"

    def close(self) -> None:
        """Close the socket. Safe to call more than once."""
        if self._sock is None:
            return
        try:
            self._sock.close()
        finally:
            self._sock = None
            self._buffer = b""
            logger.debug(f"Closed connection to {self.host}:{self.port}")

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise TransportError("socket is not connected")
        return self._sock

    def __enter__(self):
        if self._sock is None:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
