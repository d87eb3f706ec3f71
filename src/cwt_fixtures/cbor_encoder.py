"""Minimal CBOR encoder.

This module implements the subset of CBOR (RFC 8949) needed to build CWT and
COSE_Sign1 fixtures: unsigned and negative integers, byte strings, text
strings, arrays and maps. Everything else (floats, tags, simple values,
indefinite lengths) is rejected with an explicit error.

Items are appended to a buffer owned by a ``CBOREncoder`` instance. Map
entries are written in the order the caller supplies them; no canonical
sorting is applied.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Union

from .errors import CBOREncodeError, InvalidItemType, UnsupportedLength

# Major types (high 3 bits of the initial byte)
MAJOR_UNSIGNED_INT = 0
MAJOR_NEGATIVE_INT = 1
MAJOR_BYTE_STRING = 2
MAJOR_TEXT_STRING = 3
MAJOR_ARRAY = 4
MAJOR_MAP = 5

SUPPORTED_MAJOR_TYPES = frozenset(range(6))

# Arguments below this value are packed into the initial byte
IMMEDIATE_LIMIT = 24

MAX_ARGUMENT = 2**64 - 1

# (largest argument, additional-information marker, follow-on byte count)
_ARGUMENT_LADDER = (
    (0xFF, 24, 1),
    (0xFFFF, 25, 2),
    (0xFFFFFFFF, 26, 4),
    (MAX_ARGUMENT, 27, 8),
)

BytesLike = Union[bytes, bytearray, memoryview]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def encode_head(major_type: int, argument: int) -> bytes:
    """Encode the initial byte and argument of a CBOR item.

    The shortest possible form is always chosen: an immediate value for
    arguments below 24, otherwise the smallest of the 1, 2, 4 or 8 byte
    big-endian forms.

    Args:
        major_type: CBOR major type (0-5)
        argument: Integer value, length or entry count

    Returns:
        The encoded head (1 to 9 bytes)

    Raises:
        InvalidItemType: If the major type is not one of the supported six
        UnsupportedLength: If the argument is negative or needs more than 8 bytes
    """
    if not _is_int(major_type) or major_type not in SUPPORTED_MAJOR_TYPES:
        raise InvalidItemType(major_type, "major type 0-5")
    if not _is_int(argument):
        raise InvalidItemType(argument, "integer argument")
    if argument < 0:
        raise UnsupportedLength(major_type, argument, "argument must not be negative")
    if argument > MAX_ARGUMENT:
        raise UnsupportedLength(major_type, argument, "argument does not fit in 8 bytes")

    initial = major_type << 5
    if argument < IMMEDIATE_LIMIT:
        return bytes([initial | argument])

    for limit, marker, size in _ARGUMENT_LADDER:
        if argument <= limit:
            return bytes([initial | marker]) + argument.to_bytes(size, byteorder="big")

    # Unreachable: MAX_ARGUMENT is the last rung of the ladder
    raise UnsupportedLength(major_type, argument)


class CBOREncoder:
    """Accumulates encoded CBOR items in an owned byte buffer."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def getvalue(self) -> bytes:
        """Return a snapshot of everything encoded so far."""
        return bytes(self._buffer)

    def reset(self) -> None:
        """Discard the buffer contents."""
        self._buffer.clear()

    def _write_head(self, major_type: int, argument: int) -> None:
        self._buffer += encode_head(major_type, argument)

    def encode_uint(self, value: int) -> None:
        """Encode an unsigned integer (major type 0).

        Args:
            value: Integer in the range 0 to 2**64 - 1

        Raises:
            InvalidItemType: If value is not a non-negative integer
            UnsupportedLength: If value is 2**64 or larger
        """
        if not _is_int(value) or value < 0:
            raise InvalidItemType(value, "non-negative integer")
        self._write_head(MAJOR_UNSIGNED_INT, value)

    def encode_negative_int(self, value: int) -> None:
        """Encode a negative integer (major type 1).

        CBOR stores ``-1 - value``, so -1 becomes argument 0 and -7 becomes 6.

        Args:
            value: Integer in the range -2**64 to -1

        Raises:
            InvalidItemType: If value is not a negative integer
            UnsupportedLength: If value is below -2**64
        """
        if not _is_int(value) or value >= 0:
            raise InvalidItemType(value, "negative integer")
        magnitude = -1 - value
        if magnitude > MAX_ARGUMENT:
            raise UnsupportedLength(
                MAJOR_NEGATIVE_INT, value, "negative integers stop at -2**64"
            )
        self._write_head(MAJOR_NEGATIVE_INT, magnitude)

    def encode_int(self, value: int) -> None:
        """Encode an integer using major type 0 or 1 depending on its sign."""
        if _is_int(value) and value < 0:
            self.encode_negative_int(value)
        else:
            self.encode_uint(value)

    def encode_bytes(self, data: BytesLike) -> None:
        """Encode a byte string (major type 2).

        Args:
            data: The raw bytes

        Raises:
            InvalidItemType: If data is not bytes-like
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidItemType(data, "bytes")
        raw = bytes(data)
        self._write_head(MAJOR_BYTE_STRING, len(raw))
        self._buffer += raw

    def encode_text(self, text: str) -> None:
        """Encode a text string (major type 3).

        The length prefix counts UTF-8 bytes, not code points.

        Args:
            text: The string to encode

        Raises:
            InvalidItemType: If text is not a str or cannot be encoded as UTF-8
        """
        if not isinstance(text, str):
            raise InvalidItemType(text, "str")
        try:
            raw = text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidItemType(text, "UTF-8 encodable text") from e
        self._write_head(MAJOR_TEXT_STRING, len(raw))
        self._buffer += raw

    def encode_array_header(self, length: int) -> None:
        """Encode an array head (major type 4).

        The caller must encode exactly ``length`` items afterwards.
        """
        if not _is_int(length):
            raise InvalidItemType(length, "integer length")
        self._write_head(MAJOR_ARRAY, length)

    def encode_map_header(self, length: int) -> None:
        """Encode a map head (major type 5).

        The caller must encode exactly ``length`` key/value pairs afterwards.
        """
        if not _is_int(length):
            raise InvalidItemType(length, "integer length")
        self._write_head(MAJOR_MAP, length)

    def encode_raw(self, data: BytesLike) -> None:
        """Append bytes that are already a complete CBOR encoding."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidItemType(data, "bytes")
        self._buffer += bytes(data)

    def encode_array(self, items: Iterable[Any]) -> None:
        """Encode an array and its items."""
        self._guarded(self._encode_array, items)

    def encode_map(self, entries: Union[Mapping[Any, Any], Iterable[tuple[Any, Any]]]) -> None:
        """Encode a map, preserving the order of ``entries``.

        Args:
            entries: A mapping, or an iterable of ``(key, value)`` pairs.
                Pairs allow duplicate or unhashable keys to be written as-is.
        """
        self._guarded(self._encode_map, entries)

    def encode(self, value: Any) -> None:
        """Encode any supported Python value.

        ``int``, ``bytes``, ``str``, ``list``/``tuple`` and ``dict`` map onto
        the six supported major types. If encoding fails part way through a
        nested value, the buffer is restored to its state before the call.

        Raises:
            InvalidItemType: If the value (or a nested value) is unsupported
            UnsupportedLength: If an integer or length is out of range
        """
        self._guarded(self._encode_item, value)

    def _guarded(self, func: Any, value: Any) -> None:
        mark = len(self._buffer)
        try:
            func(value)
        except CBOREncodeError:
            del self._buffer[mark:]
            raise

    def _encode_item(self, value: Any) -> None:
        if isinstance(value, bool):
            raise InvalidItemType(value, "int, bytes, str, list or dict")
        if isinstance(value, int):
            self.encode_int(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            self.encode_bytes(value)
        elif isinstance(value, str):
            self.encode_text(value)
        elif isinstance(value, Mapping):
            self._encode_map(value)
        elif isinstance(value, (list, tuple)):
            self._encode_array(value)
        else:
            raise InvalidItemType(value, "int, bytes, str, list or dict")

    def _encode_array(self, items: Iterable[Any]) -> None:
        items = list(items)
        self.encode_array_header(len(items))
        for item in items:
            self._encode_item(item)

    def _encode_map(self, entries: Union[Mapping[Any, Any], Iterable[tuple[Any, Any]]]) -> None:
        pairs = list(entries.items()) if isinstance(entries, Mapping) else list(entries)
        for pair in pairs:
            if not isinstance(pair, tuple) or len(pair) != 2:
                raise InvalidItemType(pair, "(key, value) pair")
        self.encode_map_header(len(pairs))
        for key, value in pairs:
            self._encode_item(key)
            self._encode_item(value)


def dumps(value: Any) -> bytes:
    """Encode a single value to CBOR bytes.

    Args:
        value: Any supported value (see ``CBOREncoder.encode``)

    Returns:
        CBOR-encoded bytes
    """
    encoder = CBOREncoder()
    encoder.encode(value)
    return encoder.getvalue()
