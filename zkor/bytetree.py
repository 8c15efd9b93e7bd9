"""
ByteTree: canonical recursive byte encoding used as input to transcript hashes.

A ByteTree is either a leaf holding a byte string or a node holding an ordered list of ByteTrees.
The serialized form keeps the nesting, so two trees with the same bytes but different shapes hash
differently:

* leaf: ``0x01 || uint32(len(data)) || data``
* node: ``0x00 || uint32(len(children)) || child_0 || ... || child_n``

>>> tree = ByteTreeNode([as_byte_tree(b"\\x00\\xff"), ByteTreeNode([])])
>>> tree.to_hex()
'0000000002010000000200ff0000000000'
>>> ByteTree.from_bytes(tree.to_bytes()) == tree
True
"""

import struct

import attr

from zkor.consts import BYTETREE_LEAF, BYTETREE_NODE, BYTETREE_LENGTH_BYTES
from zkor.exceptions import ByteTreeFormatError


_LENGTH_FORMAT = ">I"


class ByteTree:
    """
    Common interface of :py:class:`ByteTreeLeaf` and :py:class:`ByteTreeNode`.
    """

    is_leaf = False

    def to_bytes(self):
        raise NotImplementedError

    def to_hex(self):
        return self.to_bytes().hex()

    @classmethod
    def from_bytes(cls, raw):
        """
        Parse a serialized ByteTree.

        Raises:
            :py:class:`zkor.exceptions.ByteTreeFormatError`: If the data is truncated, has an
                unknown tag, or has bytes left over after the tree.
        """
        raw = bytes(raw)
        tree, offset = _parse(raw, 0)
        if offset != len(raw):
            raise ByteTreeFormatError(
                "Trailing data after ByteTree: {} bytes".format(len(raw) - offset)
            )
        return tree

    @classmethod
    def from_hex(cls, text):
        return cls.from_bytes(bytes.fromhex(text))


@attr.s(frozen=True)
class ByteTreeLeaf(ByteTree):
    """
    Leaf of a ByteTree.

    Args:
        data: Bytes held by the leaf.
    """

    data = attr.ib(converter=bytes)

    is_leaf = True

    def to_bytes(self):
        return (
            bytes([BYTETREE_LEAF])
            + struct.pack(_LENGTH_FORMAT, len(self.data))
            + self.data
        )

    def __len__(self):
        return len(self.data)


def _check_children(instance, attribute, value):
    for child in value:
        if not isinstance(child, ByteTree):
            raise TypeError("ByteTree node children must be ByteTrees. Got: {}".format(child))


@attr.s(frozen=True)
class ByteTreeNode(ByteTree):
    """
    Inner node of a ByteTree.

    Args:
        children: Ordered ByteTrees.
    """

    children = attr.ib(converter=tuple, validator=_check_children)

    def to_bytes(self):
        parts = [bytes([BYTETREE_NODE]), struct.pack(_LENGTH_FORMAT, len(self.children))]
        parts.extend(child.to_bytes() for child in self.children)
        return b"".join(parts)

    def __len__(self):
        return len(self.children)

    def __getitem__(self, index):
        return self.children[index]


def as_byte_tree(data):
    """Wrap a byte string into a :py:class:`ByteTreeLeaf`."""
    return ByteTreeLeaf(data)


def expect_node(tree, size=None):
    """
    Check that a tree is a node, optionally with a given number of children.

    Returns the children of the node.
    """
    if not isinstance(tree, ByteTreeNode):
        raise ByteTreeFormatError("Expected a ByteTree node. Got: {!r}".format(tree))
    if size is not None and len(tree.children) != size:
        raise ByteTreeFormatError(
            "Expected a node with {} children, got {}".format(size, len(tree.children))
        )
    return tree.children


def _read_length(raw, offset):
    end = offset + BYTETREE_LENGTH_BYTES
    if end > len(raw):
        raise ByteTreeFormatError("Truncated ByteTree length at offset {}".format(offset))
    (length,) = struct.unpack(_LENGTH_FORMAT, raw[offset:end])
    return length, end


def _parse(raw, offset):
    if offset >= len(raw):
        raise ByteTreeFormatError("Truncated ByteTree at offset {}".format(offset))

    tag = raw[offset]
    length, offset = _read_length(raw, offset + 1)

    if tag == BYTETREE_LEAF:
        end = offset + length
        if end > len(raw):
            raise ByteTreeFormatError(
                "Leaf announces {} bytes but only {} remain".format(length, len(raw) - offset)
            )
        return ByteTreeLeaf(raw[offset:end]), end

    if tag == BYTETREE_NODE:
        children = []
        for _ in range(length):
            child, offset = _parse(raw, offset)
            children.append(child)
        return ByteTreeNode(children), offset

    raise ByteTreeFormatError("Unknown ByteTree tag: {}".format(tag))
