"""
Entry point for python -m bkv
"""

import click
from bkv import __version__
from bkv.cli import encode, decode

@click.group()
@click.version_option(version=__version__)
def cli():
    """BKV - Compact Binary Key-Value Encoding"""
    pass

cli.add_command(encode)
cli.add_command(decode)

if __name__ == '__main__':
    cli()
