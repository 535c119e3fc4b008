import io
import socket
import threading
import time

from minirc.network import AUTH_PROMPT, SERVER_NAME, receive_message, send_message
from minirc.protocol import Message, MessageType
from minirc.server import main, run_server


def _start(target, *args):
    outcome = {}

    def runner():
        try:
            outcome["value"] = target(*args)
        except BaseException as exc:  # noqa: BLE001
            outcome["error"] = exc

    thread = threading.Thread(target=runner, daemon=True)
    thread.start()
    return thread, outcome


def _free_port():
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def _connect_retry(port):
    deadline = time.monotonic() + 5
    while True:
        try:
            return socket.create_connection(("127.0.0.1", port), timeout=5)
        except ConnectionRefusedError:
            if time.monotonic() > deadline:
                raise
            time.sleep(0.02)


def _serve(stdin_text):
    port = _free_port()
    stdout = io.StringIO()
    thread, outcome = _start(run_server, "127.0.0.1", port, io.StringIO(stdin_text), stdout)
    peer = _connect_retry(port)
    return thread, outcome, stdout, peer


def test_conversation_and_bye():
    thread, outcome, stdout, peer = _serve("hello\n/bye\n")
    try:
        question = receive_message(peer)
        send_message(peer, "bob", "bob", MessageType.AUTHA)
        greeting = receive_message(peer)
        send_message(peer, "hi", "bob", MessageType.MSG)
        thread.join(5)
        assert question == Message(MessageType.AUTHQ, SERVER_NAME, AUTH_PROMPT)
        assert greeting == Message(MessageType.MSG, SERVER_NAME, "hello")
        assert outcome["value"] == 0
        output = stdout.getvalue()
        assert "[INFO] Received User name: bob" in output
        assert "\nbob: hi" in output
        assert receive_message(peer) is None
    finally:
        peer.close()


def test_end_of_input_closes_connection():
    thread, outcome, _, peer = _serve("")
    try:
        receive_message(peer)
        send_message(peer, "bob", "bob", MessageType.AUTHA)
        assert receive_message(peer) is None
        thread.join(5)
        assert outcome["value"] == 0
    finally:
        peer.close()


def test_empty_line_is_sent_as_space():
    thread, outcome, _, peer = _serve("\n/bye\n")
    try:
        receive_message(peer)
        send_message(peer, "bob", "bob", MessageType.AUTHA)
        received = receive_message(peer)
        send_message(peer, "ok", "bob", MessageType.MSG)
        thread.join(5)
        assert received == Message(MessageType.MSG, SERVER_NAME, " ")
        assert outcome["value"] == 0
    finally:
        peer.close()


def test_main_requires_two_arguments():
    assert main(["127.0.0.1"]) == 1


def test_main_rejects_non_numeric_port():
    assert main(["127.0.0.1", "port"]) == 1