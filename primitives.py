import struct
from typing import Optional, Tuple

from bitops import read_byte, to_int, write_byte
from buffer import Buffer, InvalidArgumentError, check_buffer

NEAR_ZERO = 0.01  #: Doubles below this magnitude are written as 0.0
DOUBLE_SIZE = 8  #: Bytes per encoded double

_MANTISSA_MASK = (1 << 52) - 1


def write_bool(buffer: Buffer, value) -> None:
    write_byte(buffer, 1 if value else 0)


def read_bool(buffer: Buffer) -> Optional[bool]:
    byte = read_byte(buffer)
    if byte is None:
        return None
    return byte == 1


def _write_unsigned(buffer: Buffer, value, width: int) -> None:
    value = to_int(value)
    for shift in range(8 * (width - 1), -8, -8):
        write_byte(buffer, value >> shift)


def _read_unsigned(buffer: Buffer, width: int) -> Optional[int]:
    value = 0
    for _ in range(width):
        byte = read_byte(buffer)
        if byte is None:
            return None
        value = (value << 8) | byte
    return value


def _to_signed(value: Optional[int], bits: int) -> Optional[int]:
    if value is not None and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def write_short(buffer: Buffer, value) -> None:
    """Write a 16-bit integer, big-endian. Out-of-range values wrap."""
    _write_unsigned(check_buffer(buffer), value, 2)


def read_short(buffer: Buffer, signed: bool = False) -> Optional[int]:
    """Read a 16-bit big-endian integer.

    :param buffer: Buffer to read from.
    :type buffer: Buffer
    :param signed: Interpret the value as two's complement.
    :type signed: bool
    :returns: The value, or ``None`` if the buffer ran out.
    :rtype: Optional[int]
    """
    value = _read_unsigned(check_buffer(buffer), 2)
    return _to_signed(value, 16) if signed else value


def write_int(buffer: Buffer, value) -> None:
    """Write a 32-bit integer, big-endian. Out-of-range values wrap."""
    _write_unsigned(check_buffer(buffer), value, 4)


def read_int(buffer: Buffer, signed: bool = False) -> Optional[int]:
    """Read a 32-bit big-endian integer.

    :param buffer: Buffer to read from.
    :type buffer: Buffer
    :param signed: Interpret the value as two's complement.
    :type signed: bool
    :returns: The value, or ``None`` if the buffer ran out.
    :rtype: Optional[int]
    """
    value = _read_unsigned(check_buffer(buffer), 4)
    return _to_signed(value, 32) if signed else value


def split_double(raw: bytes) -> Tuple[int, int, int]:
    """Split an encoded double into its IEEE-754 binary64 fields.

    Layout (big-endian): sign in bit 7 of byte 1, 11-bit biased exponent in
    the low 7 bits of byte 1 and the high nibble of byte 2, 52-bit mantissa
    in the low nibble of byte 2 and bytes 3-8.

    :param raw: Eight encoded bytes.
    :type raw: bytes
    :returns: Tuple ``(sign, biased_exponent, mantissa)``.
    :rtype: Tuple[int, int, int]
    """
    sign = raw[0] >> 7
    exponent = ((raw[0] & 0x7F) << 4) | (raw[1] >> 4)
    mantissa = int.from_bytes(bytes(raw), "big") & _MANTISSA_MASK
    return sign, exponent, mantissa


def encode_double(value, lossy_zero: bool = True) -> bytes:
    """Encode ``value`` as 8 bytes of big-endian IEEE-754 binary64.

    With ``lossy_zero`` any magnitude below :data:`NEAR_ZERO` is written as
    eight zero bytes, which existing peers expect.

    :param value: Number to encode.
    :param lossy_zero: Collapse near-zero values to 0.0.
    :type lossy_zero: bool
    :returns: The encoded bytes.
    :rtype: bytes
    :raises InvalidArgumentError: If ``value`` is not a number.
    """
    try:
        value = float(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidArgumentError(f"Expected a number, got {value!r}") from e
    if lossy_zero and abs(value) < NEAR_ZERO:
        return bytes(DOUBLE_SIZE)
    return struct.pack(">d", value)


def decode_double(raw: bytes) -> float:
    """Decode 8 bytes produced by :func:`encode_double`.

    A zero exponent field decodes to 0.0, so subnormals collapse to zero.

    :param raw: Eight encoded bytes.
    :type raw: bytes
    :returns: The decoded value.
    :rtype: float
    """
    if len(raw) != DOUBLE_SIZE:
        raise ValueError(f"Expected {DOUBLE_SIZE} bytes, got {len(raw)}")
    _, exponent, _ = split_double(raw)
    if exponent == 0:
        return 0.0
    return struct.unpack(">d", bytes(raw))[0]


def write_double(buffer: Buffer, value, lossy_zero: bool = True) -> None:
    check_buffer(buffer)
    for byte in encode_double(value, lossy_zero):
        write_byte(buffer, byte)


def read_double(buffer: Buffer) -> Optional[float]:
    check_buffer(buffer)
    raw = bytearray()
    for _ in range(DOUBLE_SIZE):
        byte = read_byte(buffer)
        if byte is None:
            return None
        raw.append(byte)
    return decode_double(raw)
