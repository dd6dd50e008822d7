"""
Error types raised by the BKV codec.

Every error derives from BKVError, which is a ValueError, so callers that
already guard decoding with ``except ValueError`` keep working.
"""

from typing import Optional

__all__ = [
    'BKVError',
    'InvalidKeyOrValueType',
    'InvalidBuffer',
    'InvalidLength',
    'KeyTooLong',
    'MalformedRecord',
    'NumberOverflow',
]


class BKVError(ValueError):
    """Base class for all codec errors."""


class InvalidKeyOrValueType(BKVError, TypeError):
    """Key or value given in a type the codec cannot encode."""


class InvalidBuffer(BKVError):
    """VarNum buffer too long to fit a 64-bit integer."""


class InvalidLength(BKVError):
    """VarLen value out of range, or length prefix unterminated."""


class KeyTooLong(BKVError):
    """Encoded key does not fit in the 7-bit key length field."""


class NumberOverflow(BKVError):
    """Integer outside the signed/unsigned 64-bit range."""


class MalformedRecord(BKVError):
    """A record's declared lengths do not match the buffer."""

    def __init__(self, message: str, buffer: Optional[bytes] = None):
        super().__init__(message)
        self.buffer = buffer
