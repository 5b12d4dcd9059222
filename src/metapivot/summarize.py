"""Summaries handed to charting layers."""
import logging
from typing import Any, Dict, List, Sequence, Union

import pandas as pd

from .exceptions import InvalidColumnError

logger = logging.getLogger(__name__)


def summarize_mean(
    table: pd.DataFrame, by: Union[str, Sequence[str]], value_name: str = 'value'
) -> pd.DataFrame:
    """
    Mean of `value_name` per group.

    Groups over ordered categorical fields come out in category order; only
    groups present in the data are returned. Non-numeric values count as
    missing.
    """
    by = [by] if isinstance(by, str) else list(by)
    missing = [c for c in by + [value_name] if c not in table.columns]
    if missing:
        raise InvalidColumnError(f"Columns not found: {missing}", missing)

    values = pd.to_numeric(table[value_name], errors='coerce')
    frame = table[by].assign(**{value_name: values})
    summary = (
        frame.groupby(by, observed=True, sort=True, dropna=True)[value_name]
        .agg(['mean', 'count'])
        .reset_index()
    )
    logger.debug(f"Summarized {len(table)} rows into {len(summary)} groups by {by}")
    return summary


def to_records(table: pd.DataFrame) -> List[Dict[str, Any]]:
    """Rows as a list of field -> value mappings."""
    return table.to_dict('records')
