class InvalidArgumentError(TypeError):
    """Raised when a codec entry point receives an argument it cannot use."""


class Buffer:
    """Growable byte sequence with a single read/write cursor.

    A buffer is filled by write calls, flipped, then drained by read calls.
    Cursor bookkeeping lives in attributes, never inside ``data``.

    :ivar data: Payload bytes written so far (or received from a peer).
    :type data: bytearray
    :ivar position: 0-based index of the byte under the cursor.
    :type position: int
    :ivar bit_offset: Bits already produced/consumed in the byte at
        ``position`` (0-7). ``0`` means the cursor is byte aligned.
    :type bit_offset: int
    """

    def __init__(self, data: bytes = b""):
        """Create a buffer, optionally pre-filled with received ``data``.

        :param data: Initial payload. The cursor starts at the origin, so a
            pre-filled buffer is ready to be read.
        :type data: bytes
        :returns: None
        :rtype: None
        """
        self.data = bytearray(data)
        self.position = 0
        self.bit_offset = 0

    def __len__(self):
        return len(self.data)

    def __bytes__(self):
        return bytes(self.data)

    def __repr__(self):
        return (
            f"Buffer(len={len(self.data)}, position={self.position}, "
            f"bit_offset={self.bit_offset})"
        )

    @property
    def aligned(self) -> bool:
        return self.bit_offset == 0

    def flip(self) -> None:
        """Reset the cursor to the origin, switching from writing to reading.

        :returns: None
        :rtype: None
        """
        self.position = 0
        self.bit_offset = 0

    def remaining(self) -> int:
        """Return how many bytes are left to read.

        A byte whose bits are only partly consumed still counts.

        :returns: ``len(data) - position``; ``0`` at end of buffer.
        :rtype: int
        """
        return len(self.data) - self.position

    def getvalue(self) -> bytes:
        return bytes(self.data)


def check_buffer(buffer) -> Buffer:
    """Ensure ``buffer`` is a :class:`Buffer`.

    :param buffer: Object passed to a codec entry point.
    :returns: The same object.
    :rtype: Buffer
    :raises InvalidArgumentError: If ``buffer`` is not a :class:`Buffer`.
    """
    if not isinstance(buffer, Buffer):
        raise InvalidArgumentError(
            f"Buffer must be of type Buffer, got {type(buffer).__name__}"
        )
    return buffer
