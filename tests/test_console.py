import io

import pytest

from minirc.console import format_buffer_hex, read_line


def test_read_line_stops_at_newline():
    stream = io.StringIO("hello\nworld\n")
    assert read_line(stream, 100) == "hello"
    assert read_line(stream, 100) == "world"


def test_read_line_at_eof():
    stream = io.StringIO("tail")
    assert read_line(stream, 100) == "tail"
    assert read_line(stream, 100) == ""


def test_read_line_empty_line():
    assert read_line(io.StringIO("\nnext"), 10) == ""


def test_read_line_limit_without_flush_keeps_rest():
    stream = io.StringIO("abcdefgh\nz\n")
    assert read_line(stream, 3) == "abc"
    assert read_line(stream, 100) == "defgh"


def test_read_line_limit_with_flush_discards_rest():
    stream = io.StringIO("abcdefgh\nz\n")
    assert read_line(stream, 3, flush=True) == "abc"
    assert read_line(stream, 100) == "z"


def test_read_line_flush_after_full_line_keeps_next():
    stream = io.StringIO("ab\ncd\n")
    assert read_line(stream, 10, flush=True) == "ab"
    assert read_line(stream, 10, flush=True) == "cd"


@pytest.mark.parametrize("limit", [0, -1])
def test_read_line_rejects_bad_limit(limit):
    with pytest.raises(ValueError):
        read_line(io.StringIO("x"), limit)


def test_format_hex_small():
    assert format_buffer_hex(bytes(range(5))) == (
        "\n----------BUFFER----------\n"
        "00 01 02 03  04 "
        "\n--------------------------\n"
    )


def test_format_hex_empty():
    assert format_buffer_hex(b"") == (
        "\n----------BUFFER----------\n\n--------------------------\n"
    )


def test_format_hex_rows_of_sixteen():
    out = format_buffer_hex(bytes(range(33)))
    body = out.split("\n")[2:-2]
    assert len(body) == 3
    assert body[0].split() == [f"{i:02x}" for i in range(16)]
    assert body[2].split() == ["20"]


def test_format_hex_high_bytes_unsigned():
    out = format_buffer_hex(b"\xff\x80")
    assert "ff 80 " in out
    assert "ffffff" not in out