"""Tests for DER length decoding."""

from issuer_trust.crypto.der import decode_length


# =============================================================================
# Short form
# =============================================================================


def test_short_form():
    assert decode_length(b"\x05abcde", 0) == (5, 1)


def test_short_form_zero():
    assert decode_length(b"\x00", 0) == (0, 1)


def test_short_form_is_not_bounds_checked():
    # The value bound is checked by the caller
    assert decode_length(b"\x7f", 0) == (127, 1)


def test_cursor_mid_buffer():
    assert decode_length(b"\x82\x03abc", 1) == (3, 2)


# =============================================================================
# Rejections
# =============================================================================


def test_cursor_out_of_bounds():
    assert decode_length(b"\x01a", 2) is None
    assert decode_length(b"", 0) is None
    assert decode_length(b"\x01a", -1) is None


def test_indefinite_length_rejected():
    assert decode_length(b"\x80" + b"\x00" * 10, 0) is None


def test_reserved_ff_rejected():
    assert decode_length(b"\xff" + b"\x00" * 10, 0) is None


def test_too_many_length_octets():
    assert decode_length(b"\x85\x00\x00\x00\x00\x01" + b"a", 0) is None


def test_length_octets_run_past_end():
    assert decode_length(b"\x82\x01", 0) is None


def test_length_exceeds_31_bits():
    assert decode_length(b"\x84\xff\xff\xff\xff" + b"a" * 8, 0) is None


def test_length_past_end_of_buffer():
    assert decode_length(b"\x81\x80" + b"a" * 127, 0) is None
    assert decode_length(b"\x84\x7f\xff\xff\xff" + b"a" * 8, 0) is None


# =============================================================================
# Long form
# =============================================================================


def test_long_form_one_octet():
    data = b"\x81\x80" + b"a" * 128
    assert decode_length(data, 0) == (128, 2)


def test_long_form_two_octets():
    data = b"\x82\x01\x00" + b"a" * 256
    assert decode_length(data, 0) == (256, 3)


def test_long_form_value_exactly_fills_buffer():
    data = b"\x30\x81\x81" + b"a" * 129
    assert decode_length(data, 1) == (129, 3)
