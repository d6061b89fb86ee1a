import pytest

from buffer import Buffer, InvalidArgumentError, check_buffer
from bitops import write_byte


def test_new_buffer_is_empty_and_aligned(buf):
    assert len(buf) == 0
    assert buf.position == 0
    assert buf.aligned
    assert buf.remaining() == 0
    assert buf.getvalue() == b""


def test_prefilled_buffer_is_ready_to_read():
    b = Buffer(b"\x01\x02\x03")
    assert b.remaining() == 3
    assert bytes(b) == b"\x01\x02\x03"


def test_flip_resets_cursor(buf):
    write_byte(buf, 7)
    write_byte(buf, 8)
    buf.bit_offset = 3
    buf.flip()
    assert buf.position == 0
    assert buf.bit_offset == 0
    assert buf.remaining() == 2


def test_check_buffer_rejects_non_buffers():
    for bad in (bytearray(), [], {}, None, "abc"):
        with pytest.raises(InvalidArgumentError):
            check_buffer(bad)


def test_invalid_argument_is_type_error():
    assert issubclass(InvalidArgumentError, TypeError)
