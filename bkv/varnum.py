#!/usr/bin/env python3
"""
Minimal fixed-integer encoding (VarNum)

Big-endian encoding of a 64-bit integer using only as many bytes as needed:
- 0: 1 byte (0x00)
- 1-255: 1 byte
- 256-65,535: 2 bytes
- ... up to 8 bytes for the full 64-bit range

Used for numeric keys and values in BKV records. Small counters and flags
dominate real payloads, so dropping the leading zero bytes of a fixed
64-bit slot saves most of the space.
"""

from bkv.exceptions import InvalidBuffer, NumberOverflow

MAX_NUMBER_BYTES = 8
UINT64_MASK = (1 << 64) - 1
INT64_MIN = -(1 << 63)


def encode_varnum(value: int) -> bytes:
    """
    Encode integer as minimal big-endian bytes

    Negative values are written by their unsigned 64-bit two's-complement
    bit pattern, so they always take 8 bytes.

    Args:
        value: Integer in [-2**63, 2**64 - 1]

    Returns:
        1-8 bytes, no leading zero byte unless value is 0

    Examples:
        >>> encode_varnum(0)
        b'\\x00'
        >>> encode_varnum(0x010203)
        b'\\x01\\x02\\x03'
        >>> encode_varnum(-1)
        b'\\xff\\xff\\xff\\xff\\xff\\xff\\xff\\xff'
    """
    if value < INT64_MIN or value > UINT64_MASK:
        raise NumberOverflow(f"Cannot encode {value} in 64 bits")

    value &= UINT64_MASK
    if value == 0:
        return b'\x00'

    return value.to_bytes(varnum_size(value), 'big')


def decode_varnum(data: bytes, signed: bool = False) -> int:
    """
    Decode big-endian bytes into an integer

    Missing high bytes count as zero, so b'' and b'\\x00\\x01' are valid.

    Args:
        data: At most 8 bytes
        signed: Interpret the result as a signed 64-bit integer

    Returns:
        Decoded integer (unsigned unless signed=True)

    Examples:
        >>> decode_varnum(b'\\x01\\x02\\x03')
        66051
        >>> decode_varnum(b'\\x00\\x01')
        1
        >>> decode_varnum(b'\\xff' * 8, signed=True)
        -1
    """
    if len(data) > MAX_NUMBER_BYTES:
        raise InvalidBuffer(
            f"Buffer of {len(data)} bytes does not fit in {MAX_NUMBER_BYTES} bytes"
        )

    value = int.from_bytes(data, 'big')
    if signed and value >> 63:
        value -= 1 << 64
    return value


def varnum_size(value: int) -> int:
    """
    Number of bytes encode_varnum() produces for value

    Examples:
        >>> varnum_size(0)
        1
        >>> varnum_size(255)
        1
        >>> varnum_size(256)
        2
        >>> varnum_size(-1)
        8
    """
    value &= UINT64_MASK
    if value == 0:
        return 1
    return (value.bit_length() + 7) // 8


if __name__ == '__main__':
    # Self-test
    import doctest
    doctest.testmod()
