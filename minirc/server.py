"""Interactive chat server that talks with a single client."""

from __future__ import annotations

import sys
from typing import TextIO

from .console import read_line
from .network import SERVER_NAME, ClientConnection, accept_client, init_server, send_message
from .protocol import BUFFER_SIZE, MessageType, ProtocolError, deserialize_message


class _InputReader:
    """Wraps a text stream and notes when it runs dry."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self.exhausted = False

    def read(self, size: int = -1) -> str:
        data = self._stream.read(size)
        if size and not data:
            self.exhausted = True
        return data

    def readline(self) -> str:
        data = self._stream.readline()
        if not data:
            self.exhausted = True
        return data


def _converse(client: ClientConnection, reader: _InputReader, stdout: TextIO) -> None:
    while True:
        stdout.write(f"\n{SERVER_NAME}: ")
        stdout.flush()
        line = read_line(reader, BUFFER_SIZE)
        if not line and reader.exhausted:
            break
        if line.startswith("/bye"):
            break

        try:
            send_message(client.sock, line or " ", SERVER_NAME, MessageType.MSG)
        except ProtocolError as exc:
            print(f"[ERROR] Unable to send message: {exc}", file=sys.stderr)
            continue

        data = client.sock.recv(BUFFER_SIZE)
        if not data:
            break
        print(f"[INFO] Bytes Received: {len(data)}", file=stdout)
        try:
            message = deserialize_message(data)
        except ProtocolError as exc:
            print(f"[ERROR] Failed to deserialize message: {exc}", file=sys.stderr)
            continue
        stdout.write(f"\n{message.sender}: {message.text}")
        stdout.flush()


def run_server(hostname: str, port: int, stdin: TextIO, stdout: TextIO) -> int:
    """Serve one client, alternating lines typed on ``stdin`` with its replies."""
    reader = _InputReader(stdin)
    server_socket = init_server(hostname, port)
    try:
        print(f"[INFO] Server listening on {hostname}:{port}", file=stdout)
        client = accept_client(server_socket)
        print(f"[INFO] Received User name: {client.name}", file=stdout)
        try:
            _converse(client, reader, stdout)
        finally:
            client.close()
    finally:
        server_socket.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Command entry point: ``HOST PORT``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        return 1
    hostname, port_text = args
    try:
        port = int(port_text)
    except ValueError:
        return 1
    try:
        return run_server(hostname, port, sys.stdin, sys.stdout)
    except (OSError, ProtocolError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())