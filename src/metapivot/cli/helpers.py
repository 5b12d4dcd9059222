"""
Shared helpers for metapivot CLI commands.
"""
import sys
from contextlib import contextmanager
from typing import Generator, List, Optional, Sequence

from rich.markup import escape
from rich.table import Table

from metapivot.cli.console import console
from metapivot.exceptions import MetapivotError
from metapivot.loader import read_table
from metapivot.metadata import CoverageReport
from metapivot.pipeline import OrderingRule, PivotConfig, load_config


def parse_order_option(value: str) -> OrderingRule:
    """
    Parse an --order value.

    "group"              -> order taken from the metadata column "group"
    "group=low,mid,high" -> explicit levels
    """
    field, sep, levels = value.partition('=')
    field = field.strip()
    if not field:
        raise ValueError(f"Invalid --order value: '{value}'")
    if not sep:
        return OrderingRule(field=field)
    return OrderingRule(field=field, levels=[lvl.strip() for lvl in levels.split(',') if lvl.strip()])


def build_config(
    config_path: Optional[str], id_columns: Sequence[str], key_name: Optional[str],
    value_name: Optional[str], metadata_key: Optional[str], orders: Sequence[str],
    strict_join: bool = False, strict_ordering: bool = False,
) -> PivotConfig:
    """Config file (or environment defaults) overridden by command-line flags."""
    config = load_config(config_path) if config_path else PivotConfig.from_env()
    if id_columns:
        config.id_columns = list(id_columns)
    if key_name:
        config.key_name = key_name
    if value_name:
        config.value_name = value_name
    if metadata_key:
        config.metadata_key = metadata_key
    if orders:
        config.orderings = [parse_order_option(o) for o in orders]
    config.strict_join = config.strict_join or strict_join
    config.strict_ordering = config.strict_ordering or strict_ordering
    return config


def read_inputs(wide_path: str, metadata_path: str, config: PivotConfig):
    """Read the wide table and the metadata table (metadata keys as strings)."""
    wide = read_table(wide_path)
    metadata = read_table(metadata_path, dtype={config.metadata_key_name: str})
    return wide, metadata


@contextmanager
def cli_errors() -> Generator[None, None, None]:
    """Print pipeline errors in the error style and exit with status 2."""
    try:
        yield
    except (MetapivotError, ValueError, FileNotFoundError) as e:
        console.print(f"[error]Error:[/] {escape(str(e))}")
        sys.exit(2)


def coverage_table(report: CoverageReport) -> Table:
    """Rich table of a coverage report."""
    table = Table(title="Metadata Coverage", header_style="table.header")
    table.add_column("Check")
    table.add_column("Count", justify="right", style="count")
    table.add_column("Keys")

    def _fmt(keys: List) -> str:
        shown = escape(', '.join(str(k) for k in keys[:8]))
        return shown + (f" ... ({len(keys) - 8} more)" if len(keys) > 8 else '')

    table.add_row("Data keys", str(len(report.data_keys)), _fmt(report.data_keys))
    table.add_row("Missing from metadata", str(len(report.missing_keys)), _fmt(report.missing_keys))
    table.add_row("Unused metadata keys", str(len(report.unused_keys)), _fmt(report.unused_keys))
    table.add_row(
        "Duplicate metadata keys", str(len(report.duplicate_keys)),
        _fmt([f"{k} (x{n})" for k, n in report.duplicate_keys.items()])
    )
    return table


def print_suggestions(report: CoverageReport) -> None:
    for key, match in report.suggestions.items():
        console.print(
            f"  [warning]'{escape(str(key))}'[/] has no metadata - did you mean [highlight]'{escape(match)}'[/]?"
        )
