from typing import Any, Callable, Dict, Iterable, List, Tuple

from bitops import align, read_bit, read_byte, write_bit, write_byte
from buffer import Buffer, check_buffer
from primitives import (
    read_bool,
    read_double,
    read_int,
    read_short,
    write_bool,
    write_double,
    write_int,
    write_short,
)
from text import read_string, write_string
from vectors import read_vector2, read_vector3, write_vector2, write_vector3


def _read_bit(buffer: Buffer):
    if check_buffer(buffer).remaining() == 0:
        return None
    return read_bit(buffer)


class Codec:
    """Typed front-end over the buffer codecs.

    Values are written and read by kind name, so a message layout can be
    described as a list of kinds shared by both peers.

    :ivar KINDS: Supported kind names.
    :type KINDS: Tuple[str, ...]
    :ivar lossy_zero: Whether doubles below ``primitives.NEAR_ZERO`` are
        collapsed to 0.0 when written.
    :type lossy_zero: bool
    """

    KINDS = (
        "bit",
        "byte",
        "bool",
        "short",
        "int",
        "double",
        "string",
        "vector2",
        "vector3",
    )

    _READERS: Dict[str, Callable[[Buffer], Any]] = {
        "bit": _read_bit,
        "byte": read_byte,
        "bool": read_bool,
        "short": read_short,
        "int": read_int,
        "double": read_double,
        "string": read_string,
        "vector2": read_vector2,
        "vector3": read_vector3,
    }

    def __init__(self, lossy_zero: bool = True):
        """Create a codec.

        :param lossy_zero: Collapse near-zero doubles to 0.0 on write, as
            existing peers expect.
        :type lossy_zero: bool
        :returns: None
        :rtype: None
        """
        self.lossy_zero = lossy_zero
        self._writers: Dict[str, Callable[[Buffer, Any], None]] = {
            "bit": write_bit,
            "byte": write_byte,
            "bool": write_bool,
            "short": write_short,
            "int": write_int,
            "double": self._write_double,
            "string": write_string,
            "vector2": self._write_vector2,
            "vector3": self._write_vector3,
        }

    def _write_double(self, buffer: Buffer, value) -> None:
        write_double(buffer, value, self.lossy_zero)

    def _write_vector2(self, buffer: Buffer, value) -> None:
        write_vector2(buffer, value, self.lossy_zero)

    def _write_vector3(self, buffer: Buffer, value) -> None:
        write_vector3(buffer, value, self.lossy_zero)

    @staticmethod
    def flip(buffer: Buffer) -> None:
        check_buffer(buffer).flip()

    @staticmethod
    def remaining(buffer: Buffer) -> int:
        return check_buffer(buffer).remaining()

    @classmethod
    def _check_kind(cls, kind: str) -> str:
        if kind not in cls.KINDS:
            raise ValueError(f"Unknown kind: {kind!r}")
        return kind

    def write(self, buffer: Buffer, kind: str, value) -> None:
        """Write ``value`` as ``kind``.

        :param buffer: Buffer to write to.
        :type buffer: Buffer
        :param kind: One of :attr:`KINDS`.
        :type kind: str
        :param value: Value to write.
        :returns: None
        :rtype: None
        :raises ValueError: If ``kind`` is unknown.
        """
        self._writers[self._check_kind(kind)](buffer, value)

    def read(self, buffer: Buffer, kind: str):
        """Read one value of ``kind``; ``None`` once the buffer runs out.

        :raises ValueError: If ``kind`` is unknown.
        """
        return self._READERS[self._check_kind(kind)](buffer)

    def encode(self, items: Iterable[Tuple[str, Any]]) -> bytes:
        """Encode ``(kind, value)`` pairs into a fresh byte string.

        A trailing partial byte left by bit writes is zero padded.

        :param items: Pairs to write, in order.
        :type items: Iterable[Tuple[str, Any]]
        :returns: Encoded bytes.
        :rtype: bytes
        """
        buffer = Buffer()
        for kind, value in items:
            self.write(buffer, kind, value)
        align(buffer)
        return buffer.getvalue()

    def decode(self, data: bytes, kinds: Iterable[str]) -> List[Any]:
        """Decode one value per entry of ``kinds`` from ``data``.

        :param data: Bytes produced by :meth:`encode` or a peer.
        :type data: bytes
        :param kinds: Kinds to read, in order.
        :type kinds: Iterable[str]
        :returns: Decoded values; exhausted reads give ``None``.
        :rtype: List[Any]
        """
        buffer = Buffer(data)
        return [self.read(buffer, kind) for kind in kinds]
