#!/usr/bin/env python3
"""
Variable-length record length prefix (VarLen)

Big-endian 7-bit groups with a continuation bit, most-significant group
first (the reverse of Protocol Buffer varints):
- Lengths 1-127: 1 byte
- Lengths 128-16,383: 2 bytes
- Lengths 16,384-2,097,151: 3 bytes
- Lengths 2,097,152-268,435,455: 4 bytes

The prefix is capped at 4 bytes so a corrupt stream cannot make the decoder
accumulate an unbounded length. Zero is not a valid length: every record
carries at least its key length byte.
"""

from bkv.exceptions import InvalidLength
from bkv.models import DecodedLength

MAX_LENGTH_BYTES = 4
MAX_LENGTH = (1 << (7 * MAX_LENGTH_BYTES)) - 1

CONTINUATION_BIT = 0x80
GROUP_MASK = 0x7F


def encode_varlen(length: int) -> bytes:
    """
    Encode a record length as a VarLen prefix

    Args:
        length: Integer in [1, MAX_LENGTH]

    Returns:
        1-4 bytes, continuation bit set on all but the last

    Examples:
        >>> encode_varlen(2)
        b'\\x02'
        >>> encode_varlen(666).hex()
        '851a'
        >>> encode_varlen(88888888).hex()
        'aab1ac38'
    """
    if length <= 0:
        raise InvalidLength(f"Length must be positive, got {length}")
    if length > MAX_LENGTH:
        raise InvalidLength(f"Length {length} exceeds maximum {MAX_LENGTH}")

    groups = bytearray()
    while length:
        groups.append((length & GROUP_MASK) | CONTINUATION_BIT)
        length >>= 7

    groups.reverse()
    # Least-significant group terminates the field
    groups[-1] &= GROUP_MASK

    return bytes(groups)


def decode_varlen(data: bytes) -> DecodedLength:
    """
    Decode a VarLen prefix from the start of data

    Args:
        data: Bytes starting with a length prefix

    Returns:
        DecodedLength with the length and the bytes after the prefix

    Examples:
        >>> decode_varlen(b'\\x85\\x1a\\xff')
        DecodedLength(length=666, remaining=b'\\xff')
    """
    length, offset = decode_varlen_at(data)
    return DecodedLength(length, bytes(data[offset:]))


def decode_varlen_at(data: bytes, offset: int = 0) -> tuple[int, int]:
    """
    Decode a VarLen prefix starting at offset without copying data

    Args:
        data: Bytes containing a length prefix
        offset: Starting position in bytes

    Returns:
        Tuple of (length, offset of the first byte after the prefix)

    Examples:
        >>> decode_varlen_at(b'\\xff\\x85\\x1a', 1)
        (666, 3)
    """
    length = 0
    bytes_read = 0

    while True:
        if offset + bytes_read >= len(data):
            raise InvalidLength(
                f"Incomplete length prefix after {bytes_read} bytes"
            )
        if bytes_read >= MAX_LENGTH_BYTES:
            raise InvalidLength(
                f"Length prefix longer than {MAX_LENGTH_BYTES} bytes"
            )

        byte = data[offset + bytes_read]
        bytes_read += 1

        length = (length << 7) | (byte & GROUP_MASK)

        if not byte & CONTINUATION_BIT:
            break

    return length, offset + bytes_read


def varlen_size(length: int) -> int:
    """
    Number of bytes encode_varlen() produces for length

    Examples:
        >>> varlen_size(127)
        1
        >>> varlen_size(128)
        2
        >>> varlen_size(88888888)
        4
    """
    if length <= 0:
        raise InvalidLength(f"Length must be positive, got {length}")
    return (length.bit_length() + 6) // 7


if __name__ == '__main__':
    # Self-test
    import doctest
    doctest.testmod()
