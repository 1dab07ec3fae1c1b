"""DER length field decoding (short and long form) with strict bounds checks."""
from typing import Optional


SEQUENCE_TAG = 0x30

# Lengths are limited to what fits a signed 32-bit index
MAX_LENGTH_OCTETS = 4
MAX_LENGTH = 0x7FFFFFFF


def decode_length(data: bytes, cursor: int) -> Optional[tuple[int, int]]:
    """
    Decode the DER length field starting at cursor.

    Malformed input is reported by returning None, never by raising.

    Args:
        data: Encoded bytes
        cursor: Index of the first length octet

    Returns:
        (length, cursor just past the length field), or None if the field
        is invalid, unsupported or does not fit inside data
    """
    if cursor < 0 or cursor >= len(data):
        return None
    first = data[cursor]
    cursor += 1

    # 0x80 is the BER indefinite form, 0xFF is reserved
    if first in (0x80, 0xFF):
        return None
    if first < 0x80:
        return (first, cursor)

    count = first - 0x80
    if count > MAX_LENGTH_OCTETS:
        return None
    end = cursor + count
    if end > len(data):
        return None

    length = 0
    while cursor < end:
        length = (length << 8) | data[cursor]
        cursor += 1
        if length > MAX_LENGTH:
            return None
    if length + cursor > len(data):
        return None
    return (length, cursor)
