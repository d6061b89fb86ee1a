import math
from typing import Optional

from buffer import Buffer, InvalidArgumentError, check_buffer


def to_int(value) -> int:
    """Coerce ``value`` to an integer, rounding toward negative infinity.

    :param value: Number (or numeric string) to coerce.
    :returns: ``value`` as an int.
    :rtype: int
    :raises InvalidArgumentError: If ``value`` is not a finite number.
    """
    if isinstance(value, int):
        return int(value)
    try:
        return math.floor(float(value))
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidArgumentError(f"Expected a number, got {value!r}") from e


def _store(buffer: Buffer, value: int) -> None:
    if buffer.position < len(buffer.data):
        buffer.data[buffer.position] = value
    else:
        buffer.data.append(value)


def write_bit(buffer: Buffer, bit) -> None:
    """Write a single bit at the cursor, MSB first.

    Starting a new byte stores a zero byte first, so a partial trailing byte
    is always zero padded.

    :param buffer: Buffer to write to.
    :type buffer: Buffer
    :param bit: ``1`` or ``True`` sets the bit; anything else clears it.
    :returns: None
    :rtype: None
    """
    check_buffer(buffer)
    if buffer.bit_offset == 0:
        _store(buffer, 0)
    if bit == 1:
        buffer.data[buffer.position] |= 0x80 >> buffer.bit_offset
    buffer.bit_offset += 1
    if buffer.bit_offset == 8:
        buffer.bit_offset = 0
        buffer.position += 1


def read_bit(buffer: Buffer) -> bool:
    """Read a single bit at the cursor, MSB first.

    :param buffer: Buffer to read from.
    :type buffer: Buffer
    :returns: ``True`` if the bit is set.
    :rtype: bool
    :raises EOFError: If there is no byte under the cursor.
    """
    check_buffer(buffer)
    if buffer.position >= len(buffer.data):
        raise EOFError("Unexpected end of data")
    bit = (buffer.data[buffer.position] >> (7 - buffer.bit_offset)) & 1
    buffer.bit_offset += 1
    if buffer.bit_offset == 8:
        buffer.bit_offset = 0
        buffer.position += 1
    return bit == 1


def write_bits(buffer: Buffer, value: int, nbits: int) -> None:
    """Write the lowest ``nbits`` of ``value``, MSB first.

    :param buffer: Buffer to write to.
    :type buffer: Buffer
    :param value: Integer whose bits will be written.
    :type value: int
    :param nbits: Number of bits from ``value`` to write.
    :type nbits: int
    :returns: None
    :rtype: None
    """
    value = to_int(value)
    for i in range(nbits - 1, -1, -1):
        write_bit(buffer, (value >> i) & 1)


def read_bits(buffer: Buffer, nbits: int) -> int:
    """Read ``nbits`` bits and return them as an integer, MSB first.

    :param buffer: Buffer to read from.
    :type buffer: Buffer
    :param nbits: Number of bits to read.
    :type nbits: int
    :returns: The integer composed of the next ``nbits`` bits.
    :rtype: int
    :raises EOFError: If the buffer ends before ``nbits`` bits were read.
    """
    result = 0
    for _ in range(nbits):
        result = (result << 1) | int(read_bit(buffer))
    return result


def align(buffer: Buffer) -> int:
    """Move the cursor to the next byte boundary.

    Ends a bit-write sequence (the partial byte is already zero padded) or
    skips the padding of a partial byte on the read side.

    :param buffer: Buffer whose cursor to align.
    :type buffer: Buffer
    :returns: Number of bits skipped (0 if already aligned).
    :rtype: int
    """
    check_buffer(buffer)
    if buffer.bit_offset == 0:
        return 0
    skipped = 8 - buffer.bit_offset
    buffer.bit_offset = 0
    buffer.position += 1
    return skipped


def write_byte(buffer: Buffer, value) -> None:
    """Write one byte, wrapping ``value`` modulo 256.

    If the cursor is mid-byte the value is written as 8 single bits so the
    bit-level stream continues across the write.

    :param buffer: Buffer to write to.
    :type buffer: Buffer
    :param value: Number to write; floored, then masked to 8 bits.
    :returns: None
    :rtype: None
    :raises InvalidArgumentError: If ``buffer`` is not a Buffer or
        ``value`` is not a number.
    """
    check_buffer(buffer)
    value = to_int(value) & 0xFF
    if buffer.bit_offset == 0:
        _store(buffer, value)
        buffer.position += 1
    else:
        for shift in range(7, -1, -1):
            write_bit(buffer, (value >> shift) & 1)


def read_byte(buffer: Buffer) -> Optional[int]:
    """Read one byte.

    :param buffer: Buffer to read from.
    :type buffer: Buffer
    :returns: The byte (0-255), or ``None`` at end of buffer (including a
        mid-byte cursor with fewer than 8 bits left).
    :rtype: Optional[int]
    """
    check_buffer(buffer)
    left = buffer.remaining()
    if left == 0:
        return None
    if buffer.bit_offset == 0:
        value = buffer.data[buffer.position]
        buffer.position += 1
        return value
    if left < 2:
        return None
    return read_bits(buffer, 8)
