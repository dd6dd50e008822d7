"""
Command line interface for BKV.
"""

from bkv.cli.commands import encode, decode

__all__ = ['encode', 'decode']
