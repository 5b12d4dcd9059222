"""Run the four stages: reshape, join, order."""
import logging
from dataclasses import dataclass
from typing import Dict

import pandas as pd

from ..exceptions import InvalidColumnError
from ..metadata import CoverageReport, check_coverage, join_metadata
from ..ordering import CategoryOrder, apply_ordering
from ..transform import reshape_long
from .config import OrderingRule, PivotConfig

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Intermediate and final tables of one run."""
    long: pd.DataFrame
    joined: pd.DataFrame
    table: pd.DataFrame          # joined table with orderings applied
    coverage: CoverageReport
    key_name: str = 'key'

    @property
    def dropped_rows(self) -> int:
        """Long rows lost in the join because their key had no metadata."""
        return int(self.long[self.key_name].isin(self.coverage.missing_keys).sum())


def _resolve_order(rule: OrderingRule, metadata: pd.DataFrame, config: PivotConfig) -> CategoryOrder:
    if rule.levels is not None:
        return CategoryOrder(rule.levels)
    if rule.from_metadata is not None:
        return CategoryOrder.from_column(metadata, rule.from_metadata)
    if rule.field == config.key_name:
        return CategoryOrder.from_column(metadata, config.metadata_key_name)
    if rule.field in metadata.columns:
        return CategoryOrder.from_column(metadata, rule.field)
    raise InvalidColumnError(
        f"No levels for ordering field '{rule.field}': give levels or a metadata column", [rule.field]
    )


def run_pipeline(wide: pd.DataFrame, metadata: pd.DataFrame, config: PivotConfig) -> PipelineResult:
    """
    Reshape `wide`, join `metadata` onto it, then apply configured orderings.

    Orderings without explicit levels take their order from the metadata
    table: `from_metadata` names the column, the key field uses the metadata
    key column, any other field uses the metadata column of the same name.
    """
    long = reshape_long(wide, config.id_columns, config.key_name, config.value_name)
    coverage = check_coverage(long, metadata, config.key_name, config.metadata_key_name)
    joined = join_metadata(
        long, metadata, config.key_name, config.metadata_key_name, strict=config.strict_join
    )

    orderings: Dict[str, CategoryOrder] = {
        rule.field: _resolve_order(rule, metadata, config) for rule in config.orderings
    }
    table = apply_ordering(joined, orderings, strict=config.strict_ordering) if orderings else joined

    logger.info(
        f"Pipeline: {len(wide)} wide rows -> {len(long)} long -> {len(joined)} joined "
        f"({len(coverage.missing_keys)} unmatched keys)"
    )
    return PipelineResult(
        long=long, joined=joined, table=table, coverage=coverage, key_name=config.key_name
    )
