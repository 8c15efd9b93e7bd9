"""
Conversions between decimal integers, hexadecimal text, fixed-length byte strings and group
elements.

Statement values usually reach us as decimal strings (e.g., the components of a ciphertext in an
election record). They are turned into big-endian byte strings of the exact length the group
expects, and then into group elements:

>>> decimal_to_hex("255")
'ff'
>>> decimal_to_fixed_byte_tree("255", 2).unwrap().data
b'\\x00\\xff'
>>> decimal_to_fixed_byte_tree("256", 1).kind
<class 'zkor.exceptions.OversizeError'>

Encoders that may fail on valid-looking input return :py:class:`zkor.result.Ok` or
:py:class:`zkor.result.Err` instead of raising.
"""

import re

from petlib.bn import Bn

from zkor.bytetree import ByteTreeLeaf, as_byte_tree
from zkor.exceptions import (
    OversizeError,
    ElementConstructionError,
    InvalidDecimalError,
    ByteTreeFormatError,
)
from zkor.result import Ok, Err


_DECIMAL_DIGITS = re.compile(r"\A[0-9]+\Z")
_WHITESPACE = re.compile(r"[ \t\n]")


def _decimal_hex_digits(value):
    """
    Minimal lowercase hex digits of a decimal string, an ``int`` or a ``Bn``.

    Decimal strings are read with ``Bn.from_decimal``, so their length is not bounded by the
    interpreter's limit on integer string conversion.

    Raises:
        :py:class:`zkor.exceptions.InvalidDecimalError`: On negative values, signs, fractional
            values, or unsupported types.
    """
    if isinstance(value, bool):
        raise InvalidDecimalError("Booleans are not decimal integers")

    if isinstance(value, int):
        if value < 0:
            raise InvalidDecimalError("Negative values cannot be encoded: {}".format(value))
        return format(value, "x")

    if isinstance(value, str):
        if not _DECIMAL_DIGITS.match(value):
            raise InvalidDecimalError("Not a non-negative decimal integer: {!r}".format(value))
        value = Bn.from_decimal(value)

    if isinstance(value, Bn):
        if value < 0:
            raise InvalidDecimalError("Negative values cannot be encoded: {}".format(value))
        return value.hex().lower().lstrip("0") or "0"

    raise InvalidDecimalError(
        "Expected a decimal string or an integer. Got: {!r}".format(value)
    )


def strip_whitespace(text):
    """
    Remove spaces, tabs and newlines.

    >>> strip_whitespace(" 12 34\\t\\n5")
    '12345'
    """
    return _WHITESPACE.sub("", text)


def decimal_to_hex(value):
    """
    Lowercase hexadecimal representation of a decimal integer, with minimal digits.

    >>> decimal_to_hex(0)
    '0'
    >>> decimal_to_hex("4096")
    '1000'

    Args:
        value: Decimal string, ``int`` or ``Bn``.
    """
    return _decimal_hex_digits(value)


def decimal_to_bytes(value):
    """
    Minimal big-endian byte string of a decimal integer.

    An odd number of hex digits gets one leading zero nibble, so zero encodes to a single zero byte.

    >>> decimal_to_bytes(0)
    b'\\x00'
    >>> decimal_to_bytes("4096")
    b'\\x10\\x00'
    """
    hex_value = decimal_to_hex(value)
    if len(hex_value) % 2 == 1:
        hex_value = "0" + hex_value
    return bytes.fromhex(hex_value)


def decimal_to_fixed_byte_tree(value, target_length):
    """
    Encode a decimal integer as a ByteTree leaf of exactly ``target_length`` bytes.

    The minimal encoding is left-padded with zero bytes. Values are never truncated: a value whose
    minimal encoding is longer than ``target_length`` is reported as an
    :py:class:`zkor.exceptions.OversizeError`. A value of exactly ``target_length`` bytes is
    accepted.

    Args:
        value: Decimal string, ``int`` or ``Bn``.
        target_length (int): Number of bytes of the result, at least one.

    Returns:
        :py:class:`zkor.result.Ok` with a :py:class:`zkor.bytetree.ByteTreeLeaf`, or
        :py:class:`zkor.result.Err` with an :py:class:`zkor.exceptions.OversizeError` or an
        :py:class:`zkor.exceptions.InvalidDecimalError`.

    Raises:
        ValueError: If ``target_length`` is not a positive integer.
    """
    if isinstance(target_length, bool) or not isinstance(target_length, int):
        raise ValueError("Target length must be an integer. Got: {!r}".format(target_length))
    if target_length < 1:
        raise ValueError("Target length must be positive. Got: {}".format(target_length))

    try:
        data = decimal_to_bytes(value)
    except InvalidDecimalError as e:
        return Err(e)

    if len(data) > target_length:
        return Err(
            OversizeError(
                "Number is too big for encoding: needs {} bytes, {} available".format(
                    len(data), target_length
                )
            )
        )

    padding = bytes(target_length - len(data))
    return Ok(as_byte_tree(padding + data))


def decimal_to_group_element(value, group):
    """
    Decode a decimal integer into an element of a modular group.

    Args:
        value: Decimal string, ``int`` or ``Bn``.
        group (:py:class:`zkor.modgroup.ModPGroup`): Target group.

    Returns:
        :py:class:`zkor.result.Ok` with a :py:class:`zkor.modgroup.ModPGroupElement`, or
        :py:class:`zkor.result.Err`. Oversize and invalid-decimal failures are passed on as they
        are; values that are not elements of the group yield an
        :py:class:`zkor.exceptions.ElementConstructionError`.
    """
    tree = decimal_to_fixed_byte_tree(value, group.modulus_byte_length)
    if tree.is_err:
        return tree

    try:
        element = group.to_element(tree.value)
    except ElementConstructionError as e:
        return Err(e)

    return Ok(element)


def int_to_fixed_byte_tree(value, target_length):
    """
    Raising variant of :py:func:`decimal_to_fixed_byte_tree`, for values known to fit.

    >>> int_to_fixed_byte_tree(1, 3).data
    b'\\x00\\x00\\x01'
    """
    return decimal_to_fixed_byte_tree(value, target_length).unwrap()


def byte_tree_to_int(tree):
    """
    Big-endian integer held by a ByteTree leaf.

    >>> byte_tree_to_int(as_byte_tree(b"\\x00\\xff"))
    255
    """
    if not isinstance(tree, ByteTreeLeaf):
        raise ByteTreeFormatError("Integers are encoded as ByteTree leaves")
    return int.from_bytes(tree.data, "big")
