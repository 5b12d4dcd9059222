"""
metapivot CLI - pivot wide tables to long format with column metadata.

Commands:
    run     Reshape, join metadata, apply orderings, write the result
    check   Report metadata coverage of the measure columns
"""
import logging

import click

from metapivot.cli.check import check_command
from metapivot.cli.console import console, custom_theme
from metapivot.cli.run import run_command


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose: bool):
    """metapivot - wide-to-long reshaping that keeps column metadata"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


cli.add_command(run_command)
cli.add_command(check_command)

__all__ = [
    'cli',
    'console',
    'custom_theme',
    'run_command',
    'check_command',
]
