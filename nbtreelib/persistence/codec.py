"""Binary encoding of numeric binary trees.

Layout of an encoded tree::

    offset  size  field
    0       4     magic b"NBTR"
    4       2     format version, big-endian unsigned
    6       n     body: one record per subtree, in pre-order
    6+n     4     CRC-32 of the body, big-endian unsigned

A record is ``0x00`` for an empty subtree, or ``0x01`` followed by the
node's value, its left record and its right record. A value is a one-byte
type tag followed by its payload:

    i  int       4-byte length, two's-complement big-endian bytes
    f  float     IEEE-754 double
    c  complex   two doubles (real, imaginary)
    q  Fraction  numerator int, denominator int (each as for ``i``)
    d  Decimal   4-byte length, UTF-8 text

Anything else, including trailing bytes after the root record, is rejected
with TreeDecodeError.
"""

import logging
import numbers
import struct
import zlib
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import List, Optional, Tuple

from ..config import FORMAT_VERSION
from ..core.tree import NumericBinaryTree
from ..errors import TreeDecodeError, TreeEncodeError

logger = logging.getLogger(__name__)

MAGIC = b"NBTR"
SUPPORTED_VERSIONS = frozenset({FORMAT_VERSION})

_HEADER = struct.Struct(">4sH")
_CRC = struct.Struct(">I")
_LENGTH = struct.Struct(">I")
_DOUBLE = struct.Struct(">d")
_COMPLEX = struct.Struct(">dd")

_EMPTY_RECORD = 0x00
_NODE_RECORD = 0x01

_TAG_INT = b"i"
_TAG_FLOAT = b"f"
_TAG_COMPLEX = b"c"
_TAG_FRACTION = b"q"
_TAG_DECIMAL = b"d"


# ----------------------------------------------------------------------
# Encoding

def _encode_int(value: int) -> bytes:
    size = (value.bit_length() + 8) // 8
    raw = value.to_bytes(size, "big", signed=True)
    return _LENGTH.pack(len(raw)) + raw


def _encode_value(value) -> bytes:
    # Concrete builtin types first; other numbers.* implementations are
    # stored as the nearest builtin
    if isinstance(value, int):
        return _TAG_INT + _encode_int(value)
    if isinstance(value, float):
        return _TAG_FLOAT + _DOUBLE.pack(value)
    if isinstance(value, complex):
        return _TAG_COMPLEX + _COMPLEX.pack(value.real, value.imag)
    if isinstance(value, Fraction):
        return _TAG_FRACTION + _encode_int(value.numerator) + _encode_int(value.denominator)
    if isinstance(value, Decimal):
        text = str(value).encode("utf-8")
        return _TAG_DECIMAL + _LENGTH.pack(len(text)) + text
    if isinstance(value, numbers.Integral):
        return _TAG_INT + _encode_int(int(value))
    if isinstance(value, numbers.Real):
        return _TAG_FLOAT + _DOUBLE.pack(float(value))
    if isinstance(value, numbers.Complex):
        value = complex(value)
        return _TAG_COMPLEX + _COMPLEX.pack(value.real, value.imag)
    raise TreeEncodeError(value)


def encode_tree(tree: NumericBinaryTree) -> bytes:
    """Encode tree (possibly empty) as bytes.

    Raises:
        TreeEncodeError: If a node holds a value the format cannot carry
    """
    body = bytearray()
    stack = [tree]
    while stack:
        node = stack.pop()
        if node is None or node.is_empty():
            body.append(_EMPTY_RECORD)
            continue
        body.append(_NODE_RECORD)
        body += _encode_value(node.value())
        stack.append(node.right_child())
        stack.append(node.left_child())

    return (
        _HEADER.pack(MAGIC, FORMAT_VERSION)
        + bytes(body)
        + _CRC.pack(zlib.crc32(body) & 0xFFFFFFFF)
    )


# ----------------------------------------------------------------------
# Decoding

class _Reader:
    """Cursor over an encoded body that raises TreeDecodeError on overrun."""

    def __init__(self, data: bytes, start: int, end: int):
        self.data = data
        self.pos = start
        self.end = end

    def take(self, size: int) -> bytes:
        if self.pos + size > self.end:
            raise TreeDecodeError(
                f"Truncated data: needed {size} bytes, {self.end - self.pos} left",
                self.pos,
            )
        chunk = self.data[self.pos:self.pos + size]
        self.pos += size
        return chunk

    def byte(self) -> int:
        return self.take(1)[0]

    def int_value(self) -> int:
        (size,) = _LENGTH.unpack(self.take(_LENGTH.size))
        if size == 0:
            raise TreeDecodeError("Integer with zero-length payload", self.pos)
        return int.from_bytes(self.take(size), "big", signed=True)

    def value(self):
        offset = self.pos
        tag = self.take(1)
        if tag == _TAG_INT:
            return self.int_value()
        if tag == _TAG_FLOAT:
            return _DOUBLE.unpack(self.take(_DOUBLE.size))[0]
        if tag == _TAG_COMPLEX:
            real, imag = _COMPLEX.unpack(self.take(_COMPLEX.size))
            return complex(real, imag)
        if tag == _TAG_FRACTION:
            numerator = self.int_value()
            denominator = self.int_value()
            if denominator == 0:
                raise TreeDecodeError("Fraction with zero denominator", offset)
            return Fraction(numerator, denominator)
        if tag == _TAG_DECIMAL:
            (size,) = _LENGTH.unpack(self.take(_LENGTH.size))
            try:
                value = Decimal(self.take(size).decode("utf-8"))
            except (UnicodeDecodeError, InvalidOperation):
                raise TreeDecodeError("Malformed decimal value", offset)
            if value.is_snan():
                raise TreeDecodeError("Signaling NaN decimal value", offset)
            return value
        raise TreeDecodeError(f"Unknown value tag {tag!r}", offset)


def decode_tree(data: bytes) -> NumericBinaryTree:
    """Decode bytes produced by encode_tree into a new tree.

    Raises:
        TreeDecodeError: If data is not a complete, intact encoding in a
            supported format version
    """
    data = bytes(data)
    minimum = _HEADER.size + 1 + _CRC.size
    if len(data) < minimum:
        raise TreeDecodeError(f"Data too short to hold a tree ({len(data)} bytes)")

    magic, version = _HEADER.unpack_from(data, 0)
    if magic != MAGIC:
        raise TreeDecodeError(f"Bad magic {magic!r}, expected {MAGIC!r}", 0)
    if version not in SUPPORTED_VERSIONS:
        raise TreeDecodeError(f"Unsupported format version {version}", 4)

    body_end = len(data) - _CRC.size
    (expected_crc,) = _CRC.unpack_from(data, body_end)
    actual_crc = zlib.crc32(data[_HEADER.size:body_end]) & 0xFFFFFFFF
    if actual_crc != expected_crc:
        raise TreeDecodeError(
            f"Checksum mismatch: stored {expected_crc:#010x}, computed {actual_crc:#010x}"
        )

    reader = _Reader(data, _HEADER.size, body_end)
    root = NumericBinaryTree()
    # Each pending slot is (parent, side); the root slot has no parent
    pending: List[Tuple[Optional[NumericBinaryTree], str]] = [(None, "root")]
    count = 0

    while pending:
        parent, side = pending.pop()
        offset = reader.pos
        tag = reader.byte()
        if tag == _EMPTY_RECORD:
            continue
        if tag != _NODE_RECORD:
            raise TreeDecodeError(f"Unknown record tag {tag:#04x}", offset)

        node = NumericBinaryTree(reader.value())
        count += 1
        if parent is None:
            root = node
        elif side == "left":
            parent.set_left_child(node)
        else:
            parent.set_right_child(node)
        pending.append((node, "right"))
        pending.append((node, "left"))

    if reader.pos != body_end:
        raise TreeDecodeError(
            f"{body_end - reader.pos} unexpected bytes after the tree", reader.pos
        )

    logger.debug("Decoded tree with %d nodes from %d bytes", count, len(data))
    return root
