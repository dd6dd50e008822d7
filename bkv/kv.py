"""
KV: a single BKV record

Wire layout:
    [VarLen(total_length)] [key_length_byte] [key] [value]

    total_length    = 1 + len(key) + len(value)
    key_length_byte = bit 7: string key flag | bits 0-6: len(key)

Numeric keys and values are VarNum-encoded, strings are UTF-8. Values carry
no type tag: the reader decides whether to read them as text, number or
raw bytes.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from bkv.exceptions import (
    InvalidKeyOrValueType, InvalidLength, KeyTooLong, MalformedRecord
)
from bkv.models import KVStep, StepStatus
from bkv.varlen import encode_varlen, decode_varlen_at
from bkv.varnum import (
    encode_varnum, decode_varnum, INT64_MIN, MAX_NUMBER_BYTES, UINT64_MASK
)

__all__ = [
    'KV',
    'Key',
    'Value',
    'MAX_KEY_LENGTH',
    'TEXT_ENCODING',
]

MAX_KEY_LENGTH = 0x7F
STRING_KEY_FLAG = 0x80
TEXT_ENCODING = 'utf-8'

Key = Union[int, str]
Value = Union[int, str, bytes, bytearray, memoryview]


def _encode_value(value: Value) -> bytes:
    """Convert a number, string or bytes-like value to record bytes"""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode(TEXT_ENCODING)
    if isinstance(value, int) and not isinstance(value, bool):
        return encode_varnum(value)
    raise InvalidKeyOrValueType(
        f"Unsupported value type: {type(value).__name__}"
    )


@dataclass(frozen=True)
class KV:
    """One key/value record, immutable once built."""
    key: bytes
    is_string_key: bool
    value: bytes

    @classmethod
    def from_number(cls, key: int, value: Value) -> 'KV':
        """Record with a VarNum-encoded numeric key"""
        if not isinstance(key, int) or isinstance(key, bool):
            raise InvalidKeyOrValueType(
                f"Numeric key must be int, got {type(key).__name__}"
            )
        return cls(encode_varnum(key), False, _encode_value(value))

    @classmethod
    def from_string(cls, key: str, value: Value) -> 'KV':
        """Record with a UTF-8 string key"""
        if not isinstance(key, str):
            raise InvalidKeyOrValueType(
                f"String key must be str, got {type(key).__name__}"
            )
        return cls(key.encode(TEXT_ENCODING), True, _encode_value(value))

    @classmethod
    def of(cls, key: Key, value: Value) -> 'KV':
        """Build a record from an int or str key"""
        if isinstance(key, str):
            return cls.from_string(key, value)
        if isinstance(key, int) and not isinstance(key, bool):
            return cls.from_number(key, value)
        raise InvalidKeyOrValueType(
            f"Unsupported key type: {type(key).__name__}"
        )

    # Accessors reinterpret the stored bytes on demand

    @property
    def string_key(self) -> str:
        return self.key.decode(TEXT_ENCODING)

    @property
    def number_key(self) -> int:
        return decode_varnum(self.key)

    @property
    def number_key_signed(self) -> int:
        return decode_varnum(self.key, signed=True)

    @property
    def typed_key(self) -> Key:
        """Key as str or int, according to the key flag"""
        if self.is_string_key:
            return self.string_key
        return self.number_key

    @property
    def string_value(self) -> str:
        return self.value.decode(TEXT_ENCODING)

    @property
    def number_value(self) -> int:
        return decode_varnum(self.value)

    @property
    def number_value_signed(self) -> int:
        return decode_varnum(self.value, signed=True)

    def matches(self, key: Key) -> bool:
        """True if this record's key equals key, by type and value"""
        if isinstance(key, str):
            return self.is_string_key and self.key == key.encode(TEXT_ENCODING)
        if isinstance(key, int) and not isinstance(key, bool):
            if self.is_string_key or len(self.key) > MAX_NUMBER_BYTES:
                return False
            if key < INT64_MIN or key > UINT64_MASK:
                return False
            return self.number_key == key & UINT64_MASK
        return False

    def pack(self) -> bytes:
        """
        Serialize this record

        Raises:
            KeyTooLong: key longer than 127 bytes
            InvalidLength: record longer than a VarLen prefix can describe
        """
        key_length = len(self.key)
        if key_length > MAX_KEY_LENGTH:
            raise KeyTooLong(
                f"Key length {key_length} exceeds maximum {MAX_KEY_LENGTH}"
            )

        total_length = 1 + key_length + len(self.value)

        key_length_byte = key_length
        if self.is_string_key:
            key_length_byte |= STRING_KEY_FLAG

        result = bytearray(encode_varlen(total_length))
        result.append(key_length_byte)
        result.extend(self.key)
        result.extend(self.value)

        return bytes(result)

    @classmethod
    def decode_step(cls, data: Optional[bytes]) -> KVStep:
        """
        Decode one record from the start of data without raising

        Only the bytes covered by the record's declared length are read, so
        garbage after a valid record does not affect it.
        """
        if not data:
            return KVStep.end_of_input()

        data = bytes(data)
        kv, next_offset, reason = cls._decode_at(data, 0)
        if kv is None:
            return KVStep.malformed(data, reason)
        return KVStep.decoded(kv, data[next_offset:])

    @classmethod
    def _decode_at(cls, data: bytes, offset: int) -> Tuple[Optional['KV'], int, Optional[str]]:
        """
        Decode the record starting at offset

        Only the key and value are copied out of data.

        Returns:
            (kv, offset after the record, None) on success,
            (None, offset, reason) when the record is malformed
        """
        try:
            total_length, start = decode_varlen_at(data, offset)
        except InvalidLength as e:
            return None, offset, str(e)

        pending = len(data) - start
        if total_length == 0 or pending < total_length:
            return None, offset, (
                f"Invalid total length {total_length}, {pending} bytes pending"
            )

        key_length_byte = data[start]
        key_length = key_length_byte & MAX_KEY_LENGTH
        is_string_key = bool(key_length_byte & STRING_KEY_FLAG)

        if key_length + 1 > total_length:
            return None, offset, (
                f"Key length {key_length} exceeds total length {total_length}"
            )

        key_start = start + 1
        value_start = key_start + key_length
        end = start + total_length

        kv = cls(
            key=data[key_start:value_start],
            is_string_key=is_string_key,
            value=data[value_start:end],
        )
        return kv, end, None


    @classmethod
    def unpack(cls, data: Optional[bytes]) -> Optional[Tuple['KV', bytes]]:
        """
        Decode one record from the start of data

        Returns:
            (kv, remaining bytes), or None when data is empty

        Raises:
            MalformedRecord: the record's lengths do not fit the buffer
        """
        step = cls.decode_step(data)
        if step.status is StepStatus.END_OF_INPUT:
            return None
        if step.status is StepStatus.MALFORMED:
            raise MalformedRecord(step.reason, buffer=step.remaining)
        return step.kv, step.remaining
