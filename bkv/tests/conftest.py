"""
Pytest configuration and shared fixtures for BKV tests
"""

import pytest
from typing import List
from bkv import BKV, KV

# Four-record reference stream shared with other BKV implementations
SAMPLE_HEX = "0E010248656C6C6F2C20776F726C6405010203040506826464303132050163030405"


@pytest.fixture
def sample_hex() -> str:
    """Hex of the reference stream"""
    return SAMPLE_HEX


@pytest.fixture
def sample_bytes() -> bytes:
    """Packed bytes of the reference stream"""
    return bytes.fromhex(SAMPLE_HEX)


@pytest.fixture
def sample_records() -> List[KV]:
    """Records that pack to the reference stream"""
    return [
        KV.from_number(2, b"Hello, world"),
        KV.from_number(2, bytes([0x03, 0x04, 0x05])),
        KV.from_string("dd", b"012"),
        KV.from_number(99, bytes([0x03, 0x04, 0x05])),
    ]


@pytest.fixture
def sample_bkv(sample_records) -> BKV:
    """Container holding the reference records"""
    bkv = BKV()
    for kv in sample_records:
        bkv.add(kv)
    return bkv


@pytest.fixture
def mixed_bkv() -> BKV:
    """Container mixing every key and value source type"""
    bkv = BKV()
    bkv.add_pair(1, 42)
    bkv.add_pair(0, "zero")
    bkv.add_pair("name", "bkv")
    bkv.add_pair("blob", bytes(range(16)))
    bkv.add_pair("big", 2**64 - 1)
    bkv.add_pair(-5, -5)
    bkv.add_pair("empty", b"")
    return bkv
