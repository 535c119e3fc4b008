"""TCP plumbing shared by the chat server and client."""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass

from .protocol import (
    BUFFER_SIZE,
    MAX_CLIENTS,
    Message,
    MessageType,
    ProtocolError,
    deserialize_message,
    serialize_message,
)

log = logging.getLogger(__name__)

SERVER_NAME = "SERVER"
AUTH_PROMPT = "USER:"


@dataclass(eq=False)
class ClientConnection:
    """A connected peer as seen by the server."""

    sock: socket.socket
    address: tuple[str, int]
    name: str = ""

    def close(self) -> None:
        """Shut down and close the connection; closing twice is harmless."""
        if self.sock.fileno() == -1:
            return
        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self.sock.close()


def init_server(hostname: str, port: int) -> socket.socket:
    """Create a TCP socket bound to ``hostname:port`` and listening."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
        sock.bind((hostname, port))
        sock.listen(MAX_CLIENTS)
    except OSError:
        sock.close()
        raise
    return sock


def send_message(
    sock: socket.socket, message: str, sender: str, message_type: MessageType
) -> int:
    """Serialize and send one packet; return the number of bytes sent."""
    payload = serialize_message(
        Message(MessageType(message_type), sender, message), BUFFER_SIZE
    )
    sock.sendall(payload)
    return len(payload)


def receive_message(sock: socket.socket) -> Message | None:
    """Receive one packet, or return None when the peer has closed."""
    data = sock.recv(BUFFER_SIZE)
    if not data:
        return None
    return deserialize_message(data)


def accept_client(server_socket: socket.socket) -> ClientConnection:
    """Accept a connection and ask the peer for its user name."""
    conn, address = server_socket.accept()
    client = ClientConnection(conn, (address[0], address[1]))
    log.info("connection from %s:%d", client.address[0], client.address[1])
    try:
        send_message(conn, AUTH_PROMPT, SERVER_NAME, MessageType.AUTHQ)
        answer = receive_message(conn)
        if answer is None:
            raise ProtocolError("client closed the connection during authentication")
    except (OSError, ProtocolError):
        client.close()
        raise
    client.name = answer.text
    return client


def connect(hostname: str, port: int) -> socket.socket:
    """Open a TCP connection to a server at an IPv4 address."""
    try:
        socket.inet_pton(socket.AF_INET, hostname)
    except OSError:
        raise ValueError(f"invalid IPv4 address: {hostname!r}") from None
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
    try:
        sock.connect((hostname, port))
    except OSError:
        sock.close()
        raise
    return sock


def remove_client(
    client: ClientConnection | None, clients: list[ClientConnection]
) -> None:
    """Close ``client`` and drop it from ``clients``, moving the last one into its slot."""
    if client is None:
        return
    for index, candidate in enumerate(clients):
        if candidate is client or candidate.sock is client.sock:
            break
    else:
        raise ValueError("client is not in the list")
    candidate.close()
    clients[index] = clients[-1]
    clients.pop()
    log.info(
        "closed connection from %s:%d", client.address[0], client.address[1]
    )