"""
BKV - Compact Binary Key-Value Encoding

A miniature TLV wire format for ordered key/value records with integer or
string keys and integer, string or raw byte values.

Layers:
- Encodings: VarNum (minimal integers), VarLen (record length prefix)
- Models: Pure data structures (DecodedLength, KVStep, UnpackBKVResult)
- Records: KV (single record), BKV (ordered record stream)
- CLI: User interface (encode, decode commands)
"""

__version__ = "1.0.0"
__license__ = "MIT"

from bkv import models
from bkv.exceptions import (
    BKVError,
    InvalidKeyOrValueType,
    InvalidBuffer,
    InvalidLength,
    KeyTooLong,
    MalformedRecord,
    NumberOverflow,
)
from bkv.varnum import encode_varnum, decode_varnum, varnum_size
from bkv.varlen import encode_varlen, decode_varlen, decode_varlen_at, varlen_size
from bkv.models import DecodedLength, StepStatus, KVStep, UnpackBKVResult
from bkv.kv import KV
from bkv.container import BKV

__all__ = [
    'models',
    'KV',
    'BKV',
    'encode_varnum',
    'decode_varnum',
    'varnum_size',
    'encode_varlen',
    'decode_varlen',
    'decode_varlen_at',
    'varlen_size',
    'DecodedLength',
    'StepStatus',
    'KVStep',
    'UnpackBKVResult',
    'BKVError',
    'InvalidKeyOrValueType',
    'InvalidBuffer',
    'InvalidLength',
    'KeyTooLong',
    'MalformedRecord',
    'NumberOverflow',
]
