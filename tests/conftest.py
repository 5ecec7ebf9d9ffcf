"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

import asyncio
import logging
import secrets
import socket
from contextlib import closing
from typing import AsyncGenerator, Callable, Dict, List, Optional

import pytest
import pytest_asyncio

from samlink.network.transport import SamSocket, SocketType, TransportError
from samlink.protocol.parser import ProtocolParser

logger = logging.getLogger(__name__)

ZZZ_DEST = "GKapJ8koUcBj~jmQzHsTYxDg1tpAWj-N5bp2-W7C0Bx" + "A" * 473 + "AAAA"


def find_free_port() -> int:
    """Find an available port for testing."""
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(('', 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


def random_destination() -> str:
    """A destination-shaped base64 token, unique per call."""
    return secrets.token_urlsafe(384).replace("_", "~") + "AAAA"


# ============================================================================
# Protocol Fixtures
# ============================================================================

@pytest.fixture
def parser() -> ProtocolParser:
    """Create a ProtocolParser instance."""
    return ProtocolParser()


class ScriptedSocket:
    """
    In-memory stand-in for SamSocket.

    Replies are handed out in order, one per read_line(). Everything
    written is recorded in ``written``.
    """

    def __init__(
            self,
            replies: Optional[List[str]] = None,
            write_error: Optional[Exception] = None,
            read_error: Optional[Exception] = None,
    ):
        self.replies = list(replies or [])
        self.written: List[str] = []
        self.reads = 0
        self.write_error = write_error
        self.read_error = read_error

    def write_line(self, line: str) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.written.append(line)

    def read_line(self) -> str:
        self.reads += 1
        if self.read_error is not None:
            raise self.read_error
        if not self.replies:
            raise TransportError("connection closed by gateway")
        return self.replies.pop(0)


@pytest.fixture
def scripted_socket() -> Callable[..., ScriptedSocket]:
    """
    Factory fixture for scripted sockets.

    Usage:
        def test_something(scripted_socket):
            sock = scripted_socket("NAMING REPLY RESULT=OK NAME=a VALUE=b\\n")
    """
    def factory(*replies: str, **kwargs) -> ScriptedSocket:
        return ScriptedSocket(list(replies), **kwargs)
    return factory


# ============================================================================
# Gateway Fixtures
# ============================================================================

class FakeGateway:
    """
    Minimal asyncio SAM gateway for tests.

    Each connection gets its own random destination, returned for
    ``NAMING LOOKUP NAME=ME``. Known names live in ``names``; any exact
    command line listed in ``replies`` is answered verbatim instead.
    """

    def __init__(self, host: str, port: int):
        self.host = host
        self.port = port
        self.names: Dict[str, str] = {"zzz.i2p": ZZZ_DEST}
        self.replies: Dict[str, str] = {}
        self.nicks: set = set()
        self.received: List[str] = []
        self._server: Optional[asyncio.Server] = None

    async def handle_client(
            self,
            reader: asyncio.StreamReader,
            writer: asyncio.StreamWriter,
    ) -> None:
        local = random_destination()
        try:
            while True:
                data = await reader.readline()
                if not data:
                    break
                line = data.decode().rstrip('\r\n')
                self.received.append(line)
                reply = self.replies.get(line) or self._answer(line, local)
                writer.write(reply.encode())
                await writer.drain()
        except ConnectionResetError:
            logger.debug("Connection reset by client")
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:
                pass

    def _answer(self, line: str, local: str) -> str:
        parts = line.split()
        fields = dict(token.partition("=")[::2] for token in parts[2:])
        head = " ".join(parts[:2])

        if head == "HELLO VERSION":
            return "HELLO REPLY RESULT=OK VERSION=3.1\n"

        if head == "SESSION CREATE":
            nick = fields.get("ID", "")
            if nick in self.nicks:
                return "SESSION STATUS RESULT=DUPLICATED_ID MESSAGE=duplicate\n"
            self.nicks.add(nick)
            return f"SESSION STATUS RESULT=OK DESTINATION={random_destination()}\n"

        if head == "NAMING LOOKUP":
            name = fields.get("NAME", "")
            if name == "ME":
                return f"NAMING REPLY RESULT=OK NAME=ME VALUE={local}\n"
            if name in self.names:
                return f"NAMING REPLY RESULT=OK NAME={name} VALUE={self.names[name]}\n"
            return f"NAMING REPLY RESULT=KEY_NOT_FOUND NAME={name}\n"

        return f"{parts[0] if parts else 'UNKNOWN'} REPLY RESULT=I2P_ERROR\n"

    async def start(self) -> None:
        self._server = await asyncio.start_server(self.handle_client, self.host, self.port)
        try:
            async with self._server:
                await self._server.serve_forever()
        except asyncio.CancelledError:
            logger.debug("Gateway start cancelled")

    async def stop(self) -> None:
        if self._server is None:
            return
        self._server.close()
        try:
            await self._server.wait_closed()
        finally:
            self._server = None


@pytest.fixture
def gateway_port() -> int:
    """Get a free port for the fake gateway."""
    return find_free_port()


@pytest_asyncio.fixture
async def gateway(gateway_port: int) -> AsyncGenerator[FakeGateway, None]:
    """Start a FakeGateway in a background task."""
    gw = FakeGateway(host='127.0.0.1', port=gateway_port)

    gateway_task = asyncio.create_task(gw.start())

    # Wait for gateway to be ready
    await asyncio.sleep(0.1)

    yield gw

    await gw.stop()
    gateway_task.cancel()
    try:
        await gateway_task
    except asyncio.CancelledError:
        pass


@pytest.fixture
def socket_factory(gateway: FakeGateway, gateway_port: int):
    """
    Factory fixture for SamSockets connected to the fake gateway.

    Sockets are closed after the test.
    """
    opened: List[SamSocket] = []

    def factory() -> SamSocket:
        sock = SamSocket(SocketType.TCP, '127.0.0.1', gateway_port, timeout=5.0)
        sock.connect()
        opened.append(sock)
        return sock

    yield factory

    for sock in opened:
        sock.close()


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
