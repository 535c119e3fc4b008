# minirc

A minimal one-to-one chat over TCP. A server waits for a single client
and asks it for a user name. After that the two sides take turns sending
lines of text to each other.

## Installation

```
pip install .
```

## Running

Start the server on an address and port:

```
minirc-server 127.0.0.1 6667
```

Then connect a client to it. The client needs an IPv4 address:

```
minirc-client 127.0.0.1 6667
```

The client is shown the server's `USER:` prompt and sends the name typed
in. After that the server writes first, and each side answers the other
in turn. An empty line is sent as a single space. The conversation ends
when a line typed at the server prompt starts with `/bye`, when either
side's input runs out, or when the other side closes the connection.

Both commands take exactly two arguments, the host address and the port.
They exit with status 1 when the arguments are wrong, the port is not a
number, or a socket or protocol error occurs.

## The wire format

Every packet built by `minirc.protocol.serialize_message` and read by
`minirc.protocol.deserialize_message` is laid out as follows:

| Field          | Size                          |
|----------------|-------------------------------|
| message type   | 4 bytes, little-endian        |
| sender length  | 4 bytes, big-endian           |
| message length | 4 bytes, big-endian           |
| sender         | sender length bytes, UTF-8    |
| message        | message length bytes, UTF-8   |

The type is one of `MessageType.AUTHQ`, `MessageType.AUTHA`,
`MessageType.CMD` and `MessageType.MSG`. `serialize_message` raises a
`ProtocolError` when the packet would be larger than the size it is
given. `deserialize_message` raises a `ProtocolError` in these cases:

- the packet is shorter than the 12-byte header;
- the sender is not 1 to 127 bytes long;
- the message is not 1 to 1023 bytes long;
- the type is unknown.

## Using the library

```python
from minirc.protocol import Message, MessageType, serialize_message, deserialize_message

packet = serialize_message(Message(MessageType.MSG, "alice", "hello"), 2048)
message = deserialize_message(packet)
print(message.sender, message.text)
```

`minirc.network` provides these socket helpers:

- `init_server` and `connect` set up the sockets.
- `accept_client` returns a `ClientConnection` holding the socket, the
  address and the user name.
- `send_message` and `receive_message` move single packets.
- `remove_client` closes a client and drops it from a list.

`minirc.console` has `read_line`, which reads a bounded line from a text
stream, and `format_buffer_hex`, which renders bytes as a hex dump.
`minirc.server.run_server` and `minirc.client.run_client` run a whole
session against any pair of text streams.

## Limitations

The server talks with exactly one client per run. It does not relay
messages between several clients or broadcast to them. `CMD` packets can
be encoded and decoded, but neither program acts on them.

## Tests

```
pip install .[test]
pytest
```