"""
Unit tests for VarNum minimal integer encoding
"""

import pytest
from bkv.varnum import encode_varnum, decode_varnum, varnum_size
from bkv.exceptions import InvalidBuffer, NumberOverflow, BKVError


class TestEncodeVarnum:
    """Test minimal big-endian encoding"""

    @pytest.mark.parametrize("value, expected", [
        (0x01, "01"),
        (0x010203, "010203"),
        (0x0000000000000001, "01"),
        (0x12345678, "12345678"),
        (0xFF, "ff"),
        (0x100, "0100"),
        (2**64 - 1, "ff" * 8),
    ])
    def test_known_vectors(self, value, expected):
        """Test encoding matches reference vectors"""
        assert encode_varnum(value).hex() == expected

    def test_zero_is_single_byte(self):
        """Test that zero encodes to exactly one zero byte"""
        assert encode_varnum(0) == b"\x00"

    @pytest.mark.parametrize("value", [1, 255, 256, 65535, 2**32, 2**56 + 7, 2**64 - 1])
    def test_no_leading_zero_byte(self, value):
        """Test nonzero values never start with 0x00"""
        encoded = encode_varnum(value)
        assert encoded[0] != 0
        assert len(encoded) == varnum_size(value)

    def test_negative_uses_twos_complement(self):
        """Test negative values are encoded by their 64-bit pattern"""
        assert encode_varnum(-1) == b"\xff" * 8
        assert encode_varnum(-2**63) == b"\x80" + b"\x00" * 7

    @pytest.mark.parametrize("value", [2**64, -2**63 - 1])
    def test_out_of_range(self, value):
        """Test values outside 64 bits are rejected"""
        with pytest.raises(NumberOverflow):
            encode_varnum(value)


class TestDecodeVarnum:
    """Test big-endian decoding"""

    def test_known_vectors(self):
        """Test decoding matches reference vectors"""
        assert decode_varnum(bytes.fromhex("010203")) == 0x010203
        assert decode_varnum(bytes.fromhex("01")) == 0x01

    def test_leading_zeros_ignored(self):
        """Test that missing or zero high bytes read as zero"""
        assert decode_varnum(bytes.fromhex("0001")) == 1
        assert decode_varnum(b"") == 0

    def test_nine_bytes_rejected(self):
        """Test that buffers longer than 8 bytes fail"""
        with pytest.raises(InvalidBuffer):
            decode_varnum(b"\x01" * 9)

    def test_error_is_value_error(self):
        """Test codec errors can be caught as ValueError"""
        with pytest.raises(ValueError):
            decode_varnum(b"\x00" * 10)
        assert issubclass(InvalidBuffer, BKVError)

    def test_signed_interpretation(self):
        """Test signed decoding recovers negative numbers"""
        assert decode_varnum(b"\xff" * 8) == 2**64 - 1
        assert decode_varnum(b"\xff" * 8, signed=True) == -1
        assert decode_varnum(b"\x7f", signed=True) == 127

    @pytest.mark.parametrize("value", [0, 1, 127, 128, 255, 256, 666, 2**31, 2**63, 2**64 - 1])
    def test_round_trip(self, value):
        """Test decode(encode(n)) == n across the unsigned range"""
        assert decode_varnum(encode_varnum(value)) == value


class TestModuleSelfTest:
    """Test the module's docstring examples"""

    def test_doctests(self):
        import doctest
        import bkv.varnum

        results = doctest.testmod(bkv.varnum)
        assert results.attempted > 0
        assert results.failed == 0
