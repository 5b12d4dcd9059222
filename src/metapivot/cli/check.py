"""
Check command - pre-flight coverage of measure columns by metadata keys.
"""
import sys
from typing import Optional, Tuple

import click

from metapivot.cli.console import console
from metapivot.cli.helpers import build_config, cli_errors, coverage_table, print_suggestions, read_inputs
from metapivot.cli.run import pivot_options
from metapivot.metadata import check_coverage
from metapivot.transform import measure_columns


@click.command('check')
@pivot_options
def check_command(
    wide: str, metadata: str, id_columns: Tuple[str, ...], key_name: Optional[str],
    value_name: Optional[str], metadata_key: Optional[str], config_path: Optional[str]
):
    """
    Check every measure column of WIDE has exactly one row in METADATA.

    Exits with status 1 when coverage is incomplete.
    """
    with cli_errors():
        config = build_config(config_path, id_columns, key_name, value_name, metadata_key, ())
        wide_df, metadata_df = read_inputs(wide, metadata, config)
        measures = measure_columns(wide_df, config.id_columns)
        report = check_coverage(measures, metadata_df, config.key_name, config.metadata_key_name)

    console.print(coverage_table(report))
    print_suggestions(report)

    if not report.is_complete:
        console.print("[error]Coverage incomplete[/]")
        sys.exit(1)
    console.print("[success]Every measure column has exactly one metadata row[/]")
