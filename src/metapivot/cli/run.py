"""
Run command - reshape a wide table, join column metadata, apply orderings.
"""
import warnings
from typing import Optional, Tuple

import click
from rich.markup import escape
from rich.table import Table

from metapivot.cli.console import console
from metapivot.cli.helpers import build_config, cli_errors, coverage_table, print_suggestions, read_inputs
from metapivot.exceptions import UnclassifiedOrderingWarning, UnmatchedKeyWarning
from metapivot.loader import write_table
from metapivot.pipeline import run_pipeline
from metapivot.summarize import summarize_mean


def pivot_options(func):
    """Options shared by run and check."""
    options = [
        click.argument('wide', type=click.Path(exists=True, dir_okay=False)),
        click.argument('metadata', type=click.Path(exists=True, dir_okay=False)),
        click.option('--id', 'id_columns', multiple=True, help='Identifier column (repeatable)'),
        click.option('--key-name', help='Column receiving measure column names [default: key]'),
        click.option('--value-name', help='Column receiving cell values [default: value]'),
        click.option('--metadata-key', help='Key column in the metadata file [default: key name]'),
        click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
                     help='JSON pivot configuration'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.command('run')
@pivot_options
@click.option('--order', 'orders', multiple=True,
              help="Order a field: FIELD (order from metadata) or FIELD=level1,level2")
@click.option('--strict-join', is_flag=True, help='Fail when keys have no metadata instead of dropping rows')
@click.option('--strict-ordering', is_flag=True, help='Fail when values are missing from an order')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write result (.csv, .tsv, .xlsx)')
@click.option('--summary', 'summary_by', multiple=True, help='Print mean value grouped by this field (repeatable)')
def run_command(
    wide: str, metadata: str, id_columns: Tuple[str, ...], key_name: Optional[str],
    value_name: Optional[str], metadata_key: Optional[str], config_path: Optional[str],
    orders: Tuple[str, ...], strict_join: bool, strict_ordering: bool,
    output: Optional[str], summary_by: Tuple[str, ...]
):
    """Pivot WIDE to long format and attach the column metadata in METADATA."""
    with cli_errors():
        config = build_config(
            config_path, id_columns, key_name, value_name, metadata_key, orders,
            strict_join, strict_ordering
        )
        wide_df, metadata_df = read_inputs(wide, metadata, config)

        with warnings.catch_warnings():
            # reported through the coverage table instead
            warnings.simplefilter('ignore', UnmatchedKeyWarning)
            warnings.simplefilter('ignore', UnclassifiedOrderingWarning)
            result = run_pipeline(wide_df, metadata_df, config)

        console.print(coverage_table(result.coverage))
        print_suggestions(result.coverage)

        counts = Table(title="Row Counts", header_style="table.header")
        counts.add_column("Stage")
        counts.add_column("Rows", justify="right", style="count")
        counts.add_row("Wide", str(len(wide_df)))
        counts.add_row("Long", str(len(result.long)))
        counts.add_row("Joined", str(len(result.joined)))
        console.print(counts)

        if result.dropped_rows:
            console.print(f"[warning]{result.dropped_rows} row(s) dropped by the join[/]")

        if summary_by:
            summary = summarize_mean(result.table, list(summary_by), config.value_name)
            table = Table(title=f"Mean {config.value_name}", header_style="table.header")
            for col in summary.columns:
                table.add_column(str(col), justify="right" if col in ('mean', 'count') else "left")
            for row in summary.itertuples(index=False):
                table.add_row(*[f"{v:.3f}" if isinstance(v, float) else escape(str(v)) for v in row])
            console.print(table)

        if output:
            write_table(result.table, output)
            console.print(f"[success]Wrote {len(result.table)} rows to {output}[/]")
