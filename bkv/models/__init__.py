"""
Data models for BKV decode results.

This module contains pure data structures with no codec logic.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
from enum import Enum

if TYPE_CHECKING:
    from bkv.kv import KV
    from bkv.container import BKV

__all__ = [
    'DecodedLength',
    'StepStatus',
    'KVStep',
    'UnpackBKVResult',
]


@dataclass(frozen=True)
class DecodedLength:
    """A VarLen length prefix and the bytes that follow it."""
    length: int
    remaining: bytes


class StepStatus(Enum):
    """Outcome of decoding a single record."""
    DECODED = "decoded"
    END_OF_INPUT = "end_of_input"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class KVStep:
    """
    Result of one KV decode step.

    DECODED carries the record and the bytes after it, MALFORMED carries
    the untouched input buffer and a reason, END_OF_INPUT carries nothing.
    """
    status: StepStatus
    kv: Optional['KV'] = None
    remaining: Optional[bytes] = None
    reason: Optional[str] = None

    @classmethod
    def decoded(cls, kv: 'KV', remaining: bytes) -> 'KVStep':
        return cls(StepStatus.DECODED, kv=kv, remaining=remaining)

    @classmethod
    def end_of_input(cls) -> 'KVStep':
        return cls(StepStatus.END_OF_INPUT)

    @classmethod
    def malformed(cls, buffer: bytes, reason: str) -> 'KVStep':
        return cls(StepStatus.MALFORMED, remaining=buffer, reason=reason)


@dataclass
class UnpackBKVResult:
    """Container decoded from a stream, plus whatever could not be decoded."""
    bkv: 'BKV'
    remaining: Optional[bytes] = None

    @property
    def complete(self) -> bool:
        """True when the whole input was consumed."""
        return not self.remaining
