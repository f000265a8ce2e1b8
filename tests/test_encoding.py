import pytest

from schnorr_attest.encoding import encode, is_field_element


def test_short_input_is_right_padded():
    assert encode(b"abc") == b"abc" + bytes(29)


def test_string_is_utf8_encoded():
    assert encode("Test message") == b"Test message" + bytes(20)
    assert encode("é") == "é".encode("utf-8") + bytes(30)


def test_empty_input():
    assert encode(b"") == bytes(32)
    assert encode("") == bytes(32)


def test_exact_width_is_unchanged():
    data = bytes(range(32))
    assert encode(data) == data


def test_long_input_is_truncated():
    data = bytes(range(40))
    assert encode(data) == data[:32]


def test_shared_prefix_collides():
    prefix = "x" * 32
    assert encode(prefix + "first") == encode(prefix + "second")


def test_bytearray_input():
    assert encode(bytearray(b"ab")) == b"ab" + bytes(30)


def test_rejects_other_types():
    with pytest.raises(TypeError):
        encode(42)


def test_is_field_element():
    assert is_field_element(bytes(32))
    assert not is_field_element(bytes(31))
    assert not is_field_element("a" * 32)


if __name__ == "__main__":
    pytest.main()
