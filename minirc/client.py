"""Interactive chat client."""

from __future__ import annotations

import socket
import sys
from typing import TextIO

from .console import read_line
from .network import connect, send_message
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


def _send(sock: socket.socket, text: str, sender: str, message_type: MessageType) -> None:
    try:
        send_message(sock, text, sender, message_type)
    except ProtocolError as exc:
        print(f"[ERROR] Unable to send message: {exc}", file=sys.stderr)


def run_client(hostname: str, port: int, stdin: TextIO, stdout: TextIO) -> int:
    """Connect to a server and answer its packets with lines from ``stdin``."""
    reader = _InputReader(stdin)
    sock = connect(hostname, port)
    name = ""
    try:
        while True:
            data = sock.recv(BUFFER_SIZE)
            if not data:
                break
            try:
                message = deserialize_message(data)
            except ProtocolError as exc:
                print(f"[ERROR] Unable to deserialize: {exc}", file=sys.stderr)
                continue

            if message.message_type is MessageType.AUTHQ:
                stdout.write(f"{message.text} ")
                stdout.flush()
                name = read_line(reader, BUFFER_SIZE, flush=True)
                if not name and reader.exhausted:
                    break
                print(
                    f"[DEBUG] Sending {name} as username with length "
                    f"{len(name.encode())}",
                    file=stdout,
                )
                _send(sock, name, name, MessageType.AUTHA)

            elif message.message_type is MessageType.MSG:
                print(
                    f"[DEBUG] Received {message.text} from server with length "
                    f"{len(message.text.encode())}",
                    file=stdout,
                )
                print(f"{message.sender}: {message.text}", file=stdout)
                stdout.write(f"\n{name}: ")
                stdout.flush()
                line = read_line(reader, BUFFER_SIZE, flush=True)
                if not line and reader.exhausted:
                    break
                _send(sock, line or " ", name, MessageType.MSG)
    finally:
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        sock.close()
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
        return run_client(hostname, port, sys.stdin, sys.stdout)
    except (OSError, ValueError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())