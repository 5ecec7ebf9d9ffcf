"""
Session Bootstrap

Opens a control socket to the gateway, performs the handshake, creates
a session under a random nickname and fetches the session's own
destination.
"""

import logging
import random
import string
from typing import Optional

from .config.settings import settings
from .errors import InvalidValueError, TcpConnectionError
from .handlers.hello import hello
from .handlers.naming import lookup
from .handlers.session import SessionType, create as create_session
from .network.transport import SamSocket, SocketType, TransportError

logger = logging.getLogger(__name__)


def generate_nick(length: Optional[int] = None) -> str:
    """Return a random alphanumeric session nickname."""
    alphabet = string.ascii_letters + string.digits
    return "".join(random.choices(alphabet, k=length or settings.NICK_LENGTH))


class Session:
    """
    A live session with the gateway.

    The session exclusively owns its control socket; closing the socket
    ends the session on the gateway side.

    Usage:
        with Session.create(SessionType.VIRTUAL_STREAM) as session:
            print(session.local)

    Attributes:
        socket: The control socket
        nick: Session nickname (ID) used on the gateway
        local: The session's own destination
    """

    def __init__(self, socket: SamSocket, nick: str, local: str):
        self.socket = socket
        self.nick = nick
        self.local = local

    @classmethod
    def create(
            cls,
            session_type: SessionType,
            host: Optional[str] = None,
            port: Optional[int] = None,
            timeout: Optional[float] = None,
    ) -> "Session":
        """
        Start a new session with the gateway.

        Args:
            session_type: Virtual stream, repliable or anonymous datagram
            host: Gateway host (default from settings)
            port: Gateway TCP port (default from settings)
            timeout: Socket timeout in seconds (default from settings)

        Raises:
            TcpConnectionError: The gateway is unreachable.
            InvalidValueError: The gateway refused the session or did not
                report a local destination.
        """
        sock = SamSocket(SocketType.TCP, host, port, timeout)
        try:
            sock.connect()
        except TransportError as e:
            logger.error(f"Failed to connect to the gateway: {e}")
            raise TcpConnectionError(str(e)) from e

        nick = generate_nick()
        try:
            hello(sock)
            create_session(sock, session_type, nick)

            _, dest = lookup(sock, "ME")
            if not dest:
                raise InvalidValueError("gateway returned an empty local destination")
        except Exception:
            sock.close()
            raise

        logger.info(f"Session {nick} created ({session_type.value})")
        return cls(socket=sock, nick=nick, local=dest)

    def lookup(self, name: str):
        """Resolve ``name`` over this session's control socket."""
        return lookup(self.socket, name)

    def destroy(self) -> None:
        """End the session by closing its control socket."""
        if self.socket.is_connected:
            logger.info(f"Destroying session {self.nick}")
        self.socket.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.destroy()
