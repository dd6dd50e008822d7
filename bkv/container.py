"""
BKV: an ordered sequence of KV records

Packing concatenates records in insertion order. Unpacking is streaming and
tolerant: it decodes records until the input ends or a record is malformed,
and in the latter case hands back what it decoded together with the bytes
it could not.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bkv.exceptions import BKVError
from bkv.kv import KV, Key, Value, TEXT_ENCODING
from bkv.models import UnpackBKVResult

__all__ = ['BKV']

logger = logging.getLogger(__name__)


class BKV:
    """Ordered, append-only collection of records. Duplicate keys are kept."""

    def __init__(self, kvs: Optional[List[KV]] = None):
        self._kvs: List[KV] = []
        for kv in kvs or ():
            self.add(kv)

    def add(self, kv: KV) -> 'BKV':
        """Append a record; returns self so calls can be chained"""
        if not isinstance(kv, KV):
            raise TypeError(f"Expected KV, got {type(kv).__name__}")
        self._kvs.append(kv)
        return self

    def add_pair(self, key: Key, value: Value) -> 'BKV':
        """Build a record from key and value and append it"""
        return self.add(KV.of(key, value))

    # Lookup

    def get(self, key: Key) -> Optional[KV]:
        """First record whose key matches by type and value, or None"""
        for kv in self._kvs:
            if kv.matches(key):
                return kv
        return None

    def get_by_string_key(self, key: str) -> Optional[KV]:
        if not isinstance(key, str):
            raise TypeError(f"Expected str key, got {type(key).__name__}")
        return self.get(key)

    def get_by_number_key(self, key: int) -> Optional[KV]:
        if not isinstance(key, int) or isinstance(key, bool):
            raise TypeError(f"Expected int key, got {type(key).__name__}")
        return self.get(key)

    def get_by_index(self, index: int) -> KV:
        return self._kvs[index]

    def get_number_value(self, key: Key) -> Optional[int]:
        kv = self.get(key)
        if kv is None:
            return None
        return kv.number_value

    def get_string_value(self, key: Key) -> Optional[str]:
        kv = self.get(key)
        if kv is None:
            return None
        return kv.string_value

    def contains_key(self, key: Key) -> bool:
        return self.get(key) is not None

    @property
    def items(self) -> Tuple[KV, ...]:
        return tuple(self._kvs)

    def __len__(self) -> int:
        return len(self._kvs)

    def __iter__(self) -> Iterator[KV]:
        return iter(self._kvs)

    def __getitem__(self, index: int) -> KV:
        return self._kvs[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, BKV):
            return NotImplemented
        return self._kvs == other._kvs

    def __repr__(self) -> str:
        return f"BKV({self._kvs!r})"

    # Serialization

    def pack(self) -> bytes:
        """
        Serialize all records in insertion order

        Raises:
            KeyTooLong: a record's key does not fit the key length field
            InvalidLength: a record is too large for its length prefix
        """
        result = bytearray()
        for kv in self._kvs:
            result.extend(kv.pack())
        return bytes(result)

    @classmethod
    def unpack(cls, data: Optional[bytes]) -> UnpackBKVResult:
        """
        Decode a stream of records

        Never raises on bad input. A clean end of stream gives
        ``remaining=None``; a malformed or truncated record stops decoding
        and ``remaining`` holds every byte from that record onwards.

        Args:
            data: Packed records, possibly followed by garbage

        Returns:
            UnpackBKVResult with the decoded records and any leftover bytes
        """
        bkv = cls()
        if not data:
            return UnpackBKVResult(bkv, None)

        data = bytes(data)
        offset = 0

        while offset < len(data):
            kv, next_offset, reason = KV._decode_at(data, offset)

            if kv is None:
                remaining = data[offset:]
                logger.debug(
                    "Stopped unpacking after %d records, %d bytes left: %s",
                    len(bkv), len(remaining), reason
                )
                return UnpackBKVResult(bkv, remaining)

            bkv.add(kv)
            offset = next_offset

        return UnpackBKVResult(bkv, None)

    def dump(self, console: Optional[Console] = None, text: bool = False) -> Table:
        """
        Render the records as a table

        Args:
            console: Console to print to (a new one if omitted)
            text: Show values as UTF-8 text where they decode cleanly

        Returns:
            The rendered rich Table
        """
        table = Table(title=f"BKV ({len(self._kvs)} records)")
        table.add_column("#", justify="right")
        table.add_column("Key")
        table.add_column("Type")
        table.add_column("Value")

        for index, kv in enumerate(self._kvs):
            table.add_row(
                str(index),
                escape(_format_key(kv)),
                "string" if kv.is_string_key else "number",
                escape(_format_value(kv.value, text)),
            )

        (console or Console()).print(table)
        return table


def _format_key(kv: KV) -> str:
    try:
        return str(kv.typed_key)
    except (BKVError, UnicodeDecodeError):
        return kv.key.hex().upper()


def _format_value(value: bytes, text: bool) -> str:
    if text:
        try:
            decoded = value.decode(TEXT_ENCODING)
            if decoded.isprintable():
                return decoded
        except UnicodeDecodeError:
            pass
    return value.hex().upper()
