"""Wire format for chat messages exchanged between server and clients."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

MSG_SIZE = 1024
SENDER_SIZE = 128
BUFFER_SIZE = 2048
MAX_CLIENTS = 100

# Type tag (4 bytes, little-endian), then sender and message lengths
# (4 bytes each, network byte order).
_TYPE = struct.Struct("<I")
_LENGTHS = struct.Struct("!II")
HEADER_SIZE = _TYPE.size + _LENGTHS.size

_ENCODING = "utf-8"


class ProtocolError(ValueError):
    """Raised when a message cannot be encoded or decoded."""


class MessageType(IntEnum):
    """Kinds of packets understood by the protocol."""

    AUTHQ = 0
    AUTHA = 1
    CMD = 2
    MSG = 3


@dataclass(frozen=True)
class Message:
    """A single chat packet: its kind, who sent it and what it says."""

    message_type: MessageType
    sender: str
    text: str


def serialize_message(message: Message, size: int = BUFFER_SIZE) -> bytes:
    """Pack a message into bytes, refusing results larger than ``size``."""
    sender = message.sender.encode(_ENCODING)
    text = message.text.encode(_ENCODING)
    total = HEADER_SIZE + len(sender) + len(text)
    if total > size:
        raise ProtocolError(
            f"message needs {total} bytes but only {size} are available"
        )
    return (
        _TYPE.pack(int(message.message_type))
        + _LENGTHS.pack(len(sender), len(text))
        + sender
        + text
    )


def _field(data: bytes, start: int, length: int) -> str:
    raw = data[start:start + length]
    return raw.split(b"\0", 1)[0].decode(_ENCODING, errors="replace")


def deserialize_message(data: bytes) -> Message:
    """Unpack bytes produced by :func:`serialize_message` into a Message."""
    data = bytes(data)
    if len(data) < HEADER_SIZE:
        raise ProtocolError(
            f"packet of {len(data)} bytes is shorter than the {HEADER_SIZE}-byte header"
        )
    (raw_type,) = _TYPE.unpack_from(data, 0)
    sender_len, text_len = _LENGTHS.unpack_from(data, _TYPE.size)

    if not 1 <= sender_len < SENDER_SIZE:
        raise ProtocolError(f"sender length {sender_len} out of range")
    if not 1 <= text_len < MSG_SIZE:
        raise ProtocolError(f"message length {text_len} out of range")

    try:
        message_type = MessageType(raw_type)
    except ValueError:
        raise ProtocolError(f"unknown message type {raw_type}") from None

    sender = _field(data, HEADER_SIZE, sender_len)
    text = _field(data, HEADER_SIZE + sender_len, text_len)
    return Message(message_type, sender, text)