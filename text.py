from bitops import read_byte, write_byte
from buffer import Buffer, InvalidArgumentError, check_buffer


def write_string(buffer: Buffer, value) -> None:
    """Write ``value`` as length-prefixed UTF-8 characters.

    Each character is written as a length byte (1-4) followed by its UTF-8
    bytes; a length byte of 0 terminates the string. ``"AB"`` becomes
    ``01 41 01 42 00``.

    :param buffer: Buffer to write to.
    :type buffer: Buffer
    :param value: Text to write; converted with ``str()``, ``None`` is empty.
    :returns: None
    :rtype: None
    :raises InvalidArgumentError: If a character has no UTF-8 encoding.
    """
    check_buffer(buffer)
    text = "" if value is None else str(value)
    try:
        chunks = [char.encode("utf-8") for char in text]
    except UnicodeEncodeError as e:
        raise InvalidArgumentError(f"Text is not UTF-8 encodable: {e}") from e
    for chunk in chunks:
        write_byte(buffer, len(chunk))
        for byte in chunk:
            write_byte(buffer, byte)
    write_byte(buffer, 0)


def read_string(buffer: Buffer) -> str:
    """Read a string written by :func:`write_string`.

    Stops at a zero length byte or at end of buffer. Bytes are joined across
    characters before decoding, so peers that send one byte per group decode
    to the same text.

    :param buffer: Buffer to read from.
    :type buffer: Buffer
    :returns: The decoded text (empty at end of buffer).
    :rtype: str
    :raises UnicodeDecodeError: If the collected bytes are not valid UTF-8.
    """
    check_buffer(buffer)
    raw = bytearray()
    while True:
        length = read_byte(buffer)
        if not length:
            break
        for _ in range(length):
            byte = read_byte(buffer)
            if byte is None:
                break
            raw.append(byte)
    return raw.decode("utf-8")
