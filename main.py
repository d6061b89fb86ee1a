import argparse
import sys

from typing import Any, List, Optional, Tuple
from buffer import InvalidArgumentError
from codec import Codec
from vectors import Vector2, Vector3

END_OF_BUFFER = "<end of buffer>"  #: Shown for reads past the end
_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off")


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Encode and decode typed values as big-endian bytes"
    )
    subparsers = parser.add_subparsers(
        title="subcommands", dest="cmd", required=True
    )

    encode = subparsers.add_parser(
        "encode", aliases=["e"], help="Encode kind:value items to bytes"
    )
    encode.add_argument(
        "items",
        nargs="+",
        help="Items such as int:-1, double:1.5, string:AB, vector3:1,2,3",
    )
    encode.add_argument(
        "-o", "--output", help="Write raw bytes here instead of printing hex"
    )
    encode.add_argument(
        "--exact-zero",
        action="store_true",
        help="Encode doubles below 0.01 exactly instead of as 0.0",
    )

    decode = subparsers.add_parser(
        "decode", aliases=["d"], help="Decode bytes into typed values"
    )
    decode.add_argument(
        "source", help="File to decode, or hex text when --hex is given"
    )
    decode.add_argument(
        "-t",
        "--types",
        nargs="+",
        required=True,
        choices=Codec.KINDS,
        help="Kinds to read, in order",
    )
    decode.add_argument(
        "--hex", action="store_true", help="Treat source as hex text"
    )

    return parser


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise ValueError(f"Not a boolean: {text!r}")


def _parse_item(token: str) -> Tuple[str, Any]:
    """Parse a ``kind:value`` command-line item.

    :param token: Item text, e.g. ``"int:-1"`` or ``"vector2:0.5,2"``.
    :type token: str
    :returns: Pair ``(kind, value)`` ready for :meth:`Codec.write`.
    :rtype: Tuple[str, Any]
    :raises ValueError: If the kind is unknown or the value malformed.
    """
    kind, sep, text = token.partition(":")
    if not sep:
        raise ValueError(f"Expected kind:value, got {token!r}")
    if kind not in Codec.KINDS:
        raise ValueError(f"Unknown kind: {kind!r}")
    if kind in ("bit", "bool"):
        return kind, _parse_bool(text)
    if kind in ("byte", "short", "int"):
        return kind, int(text, 0)
    if kind == "double":
        return kind, float(text)
    if kind == "string":
        return kind, text
    parts = [float(p) for p in text.split(",")]
    vector_type = Vector2 if kind == "vector2" else Vector3
    if len(parts) != len(vector_type._fields):
        raise ValueError(
            f"{kind} needs {len(vector_type._fields)} components, "
            f"got {len(parts)}"
        )
    return kind, vector_type(*parts)


def _fmt_hex(data: bytes) -> str:
    """Format bytes as space-separated lowercase hex pairs.

    :param data: Bytes to format.
    :type data: bytes
    :returns: Text such as ``"01 41 00"``.
    :rtype: str
    """
    return " ".join(f"{b:02x}" for b in data)


def _fmt_value(kind: str, value) -> str:
    if value is None:
        return f"{kind}: {END_OF_BUFFER}"
    if kind == "string":
        return f"{kind}: {value!r}"
    if kind in ("vector2", "vector3"):
        return f"{kind}: ({', '.join(repr(c) for c in value)})"
    return f"{kind}: {value}"


def encode_values(
    tokens: List[str], output_path: Optional[str], exact_zero: bool
) -> Optional[bytes]:
    """Encode command-line items and write or print the result.

    :param tokens: ``kind:value`` items, in wire order.
    :type tokens: List[str]
    :param output_path: Destination file; ``None`` prints hex to stdout.
    :type output_path: Optional[str]
    :param exact_zero: Disable the near-zero double shortcut.
    :type exact_zero: bool
    :returns: The encoded bytes, or ``None`` if an item was rejected.
    :rtype: Optional[bytes]
    """
    try:
        items = [_parse_item(token) for token in tokens]
        data = Codec(lossy_zero=not exact_zero).encode(items)
    except (ValueError, InvalidArgumentError) as e:
        print(f"[!] Cannot encode: {e}")
        return None
    if output_path is None:
        print(_fmt_hex(data))
    else:
        with open(output_path, "wb") as out:
            out.write(data)
        print(f"Wrote {len(data)} bytes to {output_path}")
    return data


def decode_values(source: str, kinds: List[str], is_hex: bool) -> List[Any]:
    """Decode ``source`` as the given kinds and print one line per value.

    :param source: File path, or hex text when ``is_hex`` is set.
    :type source: str
    :param kinds: Kinds to read, in order.
    :type kinds: List[str]
    :param is_hex: Whether ``source`` is hex text.
    :type is_hex: bool
    :returns: Decoded values (empty if the source could not be read).
    :rtype: List[Any]
    """
    if is_hex:
        try:
            data = bytes.fromhex(source)
        except ValueError:
            print(f"[!] Not valid hex: {source}")
            return []
    else:
        try:
            with open(source, "rb") as f:
                data = f.read()
        except FileNotFoundError:
            print(f"[!] Input file not found: {source}")
            return []
    try:
        values = Codec().decode(data, kinds)
    except UnicodeDecodeError as e:
        print(f"[!] Malformed text in input: {e}")
        return []
    for kind, value in zip(kinds, values):
        print(_fmt_value(kind, value))
    return values


def main(argv: Optional[List[str]] = None):
    """Entry point for the CLI tool.

    :param argv: Arguments to parse; ``None`` uses ``sys.argv``.
    :type argv: Optional[List[str]]
    :returns: None
    :rtype: None
    """
    parser = get_parser()
    args = parser.parse_args(argv)

    if args.cmd in ["encode", "e"]:
        encode_values(args.items, args.output, args.exact_zero)
    elif args.cmd in ["decode", "d"]:
        decode_values(args.source, args.types, args.hex)
    sys.stdout.flush()


if __name__ == "__main__":
    main()
