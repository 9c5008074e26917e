"""Tests for the binary tree encoding.

Checks the header layout and that every kind of malformed or incompatible
input is rejected rather than decoded into a partial tree.
"""

import struct
import sys
import zlib
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from nbtreelib import NumericBinaryTree, TreeDecodeError, TreeEncodeError
from nbtreelib.persistence import MAGIC, decode_tree, encode_tree
from nbtreelib.testing.fixtures import standard_tree, degenerate_tree


def _frame(body: bytes, version: int = 1, magic: bytes = MAGIC) -> bytes:
    """Wrap a hand-written body in a header and checksum."""
    return magic + struct.pack(">H", version) + body + struct.pack(">I", zlib.crc32(body))


def test_header_layout():
    data = encode_tree(NumericBinaryTree())
    assert data[:4] == MAGIC
    assert struct.unpack(">H", data[4:6]) == (1,)
    assert data[6:-4] == b"\x00"
    assert struct.unpack(">I", data[-4:]) == (zlib.crc32(b"\x00"),)


def test_leaf_body():
    data = encode_tree(NumericBinaryTree(5))
    # node, int tag, 1-byte length, value, empty left, empty right
    assert data[6:-4] == b"\x01i\x00\x00\x00\x01\x05\x00\x00"


def test_hand_written_body_decodes():
    body = (
        b"\x01f" + struct.pack(">d", 2.5)   # root
        + b"\x00"                             # no left
        + b"\x01i\x00\x00\x00\x01\xff"        # right = -1
        + b"\x00\x00"
    )
    tree = decode_tree(_frame(body))
    assert tree == NumericBinaryTree(2.5, None, NumericBinaryTree(-1))


def test_empty_tree_decodes_to_new_empty_tree():
    tree = decode_tree(encode_tree(NumericBinaryTree()))
    assert tree.is_empty()
    assert tree.node_count() == 0


def test_decode_accepts_bytearray_and_memoryview():
    data = encode_tree(standard_tree())
    assert decode_tree(bytearray(data)) == standard_tree()
    assert decode_tree(memoryview(data)) == standard_tree()


def test_deep_tree():
    tree = degenerate_tree(sys.getrecursionlimit() * 2)
    assert decode_tree(encode_tree(tree)) == tree


@pytest.mark.parametrize("value", [0, -1, 127, 128, -129, 2 ** 200, -(2 ** 200)])
def test_integer_widths(value):
    assert decode_tree(encode_tree(NumericBinaryTree(value))).value() == value


def test_special_floats():
    restored = decode_tree(encode_tree(NumericBinaryTree(float("inf"), NumericBinaryTree(-0.0))))
    assert restored.value() == float("inf")
    assert str(restored.left_child().value()) == "-0.0"


class TestRejection:
    """Every defect in the stream raises TreeDecodeError."""

    def test_too_short(self):
        with pytest.raises(TreeDecodeError, match="too short"):
            decode_tree(b"NBTR\x00")

    def test_bad_magic(self):
        with pytest.raises(TreeDecodeError, match="magic"):
            decode_tree(_frame(b"\x00", magic=b"XXXX"))

    def test_incompatible_version(self):
        with pytest.raises(TreeDecodeError, match="version 2"):
            decode_tree(_frame(b"\x00", version=2))

    def test_checksum_mismatch(self):
        data = bytearray(encode_tree(standard_tree()))
        data[10] ^= 0x01
        with pytest.raises(TreeDecodeError, match="Checksum"):
            decode_tree(bytes(data))

    def test_unknown_record_tag(self):
        with pytest.raises(TreeDecodeError, match="record tag"):
            decode_tree(_frame(b"\x07"))

    def test_unknown_value_tag(self):
        with pytest.raises(TreeDecodeError, match="value tag"):
            decode_tree(_frame(b"\x01z\x00\x00"))

    def test_truncated_body(self):
        # Root node whose right record is missing
        body = b"\x01i\x00\x00\x00\x01\x05\x00"
        with pytest.raises(TreeDecodeError, match="Truncated"):
            decode_tree(_frame(body))

    def test_trailing_bytes(self):
        with pytest.raises(TreeDecodeError, match="unexpected bytes"):
            decode_tree(_frame(b"\x00\x00"))

    def test_zero_denominator(self):
        body = b"\x01q" + b"\x00\x00\x00\x01\x01" + b"\x00\x00\x00\x01\x00" + b"\x00\x00"
        with pytest.raises(TreeDecodeError, match="denominator"):
            decode_tree(_frame(body))

    def test_malformed_decimal(self):
        body = b"\x01d\x00\x00\x00\x03abc\x00\x00"
        with pytest.raises(TreeDecodeError, match="decimal"):
            decode_tree(_frame(body))

    def test_signaling_nan_decimal(self):
        body = b"\x01d\x00\x00\x00\x04sNaN\x00\x00"
        with pytest.raises(TreeDecodeError, match="Signaling NaN"):
            decode_tree(_frame(body))

    def test_error_reports_offset(self):
        with pytest.raises(TreeDecodeError) as ctx:
            decode_tree(_frame(b"\x07"))
        assert ctx.value.offset == 6


def test_unencodable_value():
    import numbers

    class Exotic(numbers.Number):
        pass

    with pytest.raises(TreeEncodeError):
        encode_tree(NumericBinaryTree(Exotic()))
