import pytest

from petlib.bn import Bn

from zkor.encoding import (
    decimal_to_hex,
    decimal_to_bytes,
    decimal_to_fixed_byte_tree,
    decimal_to_group_element,
    int_to_fixed_byte_tree,
    byte_tree_to_int,
    strip_whitespace,
)
from zkor.exceptions import OversizeError, ElementConstructionError, InvalidDecimalError
from zkor.modgroup import DEFAULT_GROUP
from zkor.result import Ok, Err


def test_decimal_to_hex():
    assert decimal_to_hex(0) == "0"
    assert decimal_to_hex("0") == "0"
    assert decimal_to_hex("255") == "ff"
    assert decimal_to_hex(2 ** 64) == "1" + "0" * 16
    assert decimal_to_hex(Bn(4096)) == "1000"


def test_decimal_to_hex_large_string():
    value = 3 ** 500
    assert decimal_to_hex(str(value)) == format(value, "x")


@pytest.mark.parametrize("value", ["-1", -1, "1.5", 1.5, "+3", " 3", "1_000", "", "0x10", True])
def test_invalid_decimals_are_rejected(value):
    with pytest.raises(InvalidDecimalError):
        decimal_to_hex(value)


def test_decimal_to_bytes_even_padding():
    assert decimal_to_bytes(0) == b"\x00"
    assert decimal_to_bytes(15) == b"\x0f"
    assert decimal_to_bytes(256) == b"\x01\x00"


def test_fixed_byte_tree_example():
    res = decimal_to_fixed_byte_tree("255", 2)
    assert res.is_ok
    assert res.value.data == bytes([0x00, 0xFF])


def test_fixed_byte_tree_oversize_example():
    res = decimal_to_fixed_byte_tree("256", 1)
    assert res.is_err
    assert res.kind is OversizeError
    with pytest.raises(OversizeError):
        res.unwrap()


@pytest.mark.parametrize("length", [1, 2, 7, 32])
def test_fixed_byte_tree_zero(length):
    assert decimal_to_fixed_byte_tree(0, length).unwrap().data == bytes(length)


@pytest.mark.parametrize(
    "value", [1, 127, 128, 255, 256, 65535, 65536, 2 ** 127 - 1, 2 ** 255 + 12345]
)
def test_fixed_byte_tree_pads_and_preserves_value(value):
    natural = (value.bit_length() + 7) // 8
    for length in (natural, natural + 1, natural + 9):
        leaf = decimal_to_fixed_byte_tree(str(value), length).unwrap()
        assert len(leaf.data) == length
        assert leaf.data[: length - natural] == bytes(length - natural)
        assert byte_tree_to_int(leaf) == value


@pytest.mark.parametrize("value", [256, 65536, 2 ** 64])
def test_fixed_byte_tree_never_truncates(value):
    natural = (value.bit_length() + 7) // 8
    res = decimal_to_fixed_byte_tree(value, natural - 1)
    assert isinstance(res, Err)
    assert isinstance(res.error, OversizeError)


def test_fixed_byte_tree_reports_invalid_decimal():
    res = decimal_to_fixed_byte_tree("-5", 4)
    assert res.kind is InvalidDecimalError


@pytest.mark.parametrize("length", [0, -1, 1.0, "2"])
def test_fixed_byte_tree_bad_length(length):
    with pytest.raises(ValueError):
        decimal_to_fixed_byte_tree(1, length)


def test_int_to_fixed_byte_tree_raises():
    assert int_to_fixed_byte_tree(1, 2).data == b"\x00\x01"
    with pytest.raises(OversizeError):
        int_to_fixed_byte_tree(2 ** 16, 2)


def test_strip_whitespace():
    assert strip_whitespace(" 12\t34\n 56 ") == "123456"
    assert strip_whitespace("") == ""


def test_group_element_round_trip(small_group):
    p = int(small_group.modulus)
    q = int(small_group.order())
    for value in range(0, p + 10):
        res = decimal_to_group_element(str(value), small_group)
        if 0 < value < p and pow(value, q, p) == 1:
            assert isinstance(res, Ok)
            assert res.value.to_int() == value
        else:
            assert res.kind is ElementConstructionError


def test_group_element_round_trip_generated(group):
    element = 1234567 * group.generator()
    res = decimal_to_group_element(str(element.to_int()), group)
    assert res.unwrap() == element


def test_group_element_too_large_for_modulus(small_group):
    res = decimal_to_group_element(2 ** 16, small_group)
    assert res.kind is OversizeError


def test_long_decimal_string_is_oversize():
    res = decimal_to_fixed_byte_tree("9" * 5000, 128)
    assert res.kind is OversizeError


def test_long_decimal_string_is_oversize_for_group():
    res = decimal_to_group_element("9" * 5000, DEFAULT_GROUP)
    assert res.kind is OversizeError


def test_long_decimal_string_fits_large_target():
    value = 10 ** 5000 - 1
    res = decimal_to_fixed_byte_tree("9" * 5000, 4096)
    assert res.unwrap().data == value.to_bytes(4096, "big")
    assert decimal_to_hex("0" * 5000 + "255") == "ff"


def test_group_element_not_below_modulus(group):
    res = decimal_to_group_element(int(group.modulus), group)
    assert res.kind is ElementConstructionError


def test_group_element_non_residue(small_group):
    # -1 is not a square modulo p when p = 3 mod 4.
    res = decimal_to_group_element(int(small_group.modulus) - 1, small_group)
    assert res.kind is ElementConstructionError


def test_group_element_invalid_decimal(small_group):
    res = decimal_to_group_element("12a", small_group)
    assert res.kind is InvalidDecimalError


def test_result_helpers():
    assert Ok(3).unwrap_or(4) == 3
    err = Err(OversizeError("too big"))
    assert err.unwrap_or(4) == 4
    assert err.is_err and not err.is_ok
    with pytest.raises(TypeError):
        Err("not an exception")
