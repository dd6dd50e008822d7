"""
CLI commands for BKV.
"""

import click
import logging
import sys
from pathlib import Path
from rich.console import Console

from bkv.container import BKV
from bkv.exceptions import BKVError
from bkv.kv import KV

STRING_KEY_PREFIX = 'str:'
HEX_VALUE_PREFIX = 'hex:'
INT_VALUE_PREFIX = 'int:'


def parse_item(item: str) -> KV:
    """
    Parse a KEY=VALUE command line item into a record.

    Keys made only of ASCII digits are numeric unless prefixed with 'str:'.
    Values prefixed with 'hex:' are raw bytes, 'int:' are numbers,
    anything else is text.
    """
    if '=' not in item:
        raise click.BadParameter(f"Expected KEY=VALUE, got {item!r}")

    raw_key, raw_value = item.split('=', 1)

    if raw_value.startswith(HEX_VALUE_PREFIX):
        try:
            value = bytes.fromhex(raw_value[len(HEX_VALUE_PREFIX):])
        except ValueError:
            raise click.BadParameter(f"Invalid hex value in {item!r}")
    elif raw_value.startswith(INT_VALUE_PREFIX):
        try:
            value = int(raw_value[len(INT_VALUE_PREFIX):], 0)
        except ValueError:
            raise click.BadParameter(f"Invalid integer value in {item!r}")
    else:
        value = raw_value

    if raw_key.startswith(STRING_KEY_PREFIX):
        return KV.from_string(raw_key[len(STRING_KEY_PREFIX):], value)
    if raw_key.isascii() and raw_key.isdigit():
        return KV.from_number(int(raw_key), value)
    return KV.from_string(raw_key, value)


def _setup_logging(verbose: bool):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(levelname)s %(name)s: %(message)s',
        )


@click.command()
@click.argument('items', nargs=-1, required=True)
@click.option('--output', '-o', help='Write packed bytes to this file instead of printing hex')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def encode(items, output, verbose):
    """
    Pack KEY=VALUE items into a BKV stream.

    Example:
        bkv encode 2="Hello, world" 2=hex:030405 dd=012 99=hex:030405
    """
    _setup_logging(verbose)

    bkv = BKV()
    try:
        for item in items:
            bkv.add(parse_item(item))
        packed = bkv.pack()
    except BKVError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(packed)
        click.echo(f"✓ Packed {len(bkv)} records ({len(packed)} bytes) to {output_path}")
    else:
        click.echo(packed.hex().upper())


@click.command()
@click.argument('hex_data', required=False)
@click.option('--input', '-i', 'input_file', help='Read raw packed bytes from this file')
@click.option('--text', '-t', is_flag=True, help='Show values as UTF-8 text where possible')
@click.option('--strict', is_flag=True, help='Exit with status 1 if undecodable bytes remain')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def decode(hex_data, input_file, text, strict, verbose):
    """
    Unpack a BKV stream and display its records.

    Example:
        bkv decode 0E010248656C6C6F2C20776F726C64 --text
    """
    _setup_logging(verbose)

    if input_file:
        input_path = Path(input_file)
        if not input_path.exists():
            click.echo(f"Error: Input file not found: {input_file}", err=True)
            sys.exit(1)
        data = input_path.read_bytes()
    elif hex_data:
        try:
            data = bytes.fromhex(hex_data)
        except ValueError:
            click.echo(f"Error: Invalid hex input: {hex_data}", err=True)
            sys.exit(1)
    else:
        click.echo("Error: Specify HEX_DATA or --input", err=True)
        sys.exit(1)

    result = BKV.unpack(data)
    result.bkv.dump(console=Console(), text=text)

    if result.complete:
        click.echo(f"\n✓ Decoded {len(result.bkv)} records")
    else:
        click.echo(f"\nDecoded {len(result.bkv)} records, "
                   f"{len(result.remaining)} bytes could not be decoded:")
        click.echo(result.remaining.hex().upper())
        if strict:
            sys.exit(1)
