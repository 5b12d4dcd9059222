"""Reshaper - transforms a wide table into key/value long format."""
import logging
from typing import List, Optional, Sequence, Union

import pandas as pd

from ..exceptions import InvalidColumnError

logger = logging.getLogger(__name__)

Columns = Union[str, Sequence[str]]

_KEY = '__metapivot_key__'
_VALUE = '__metapivot_value__'


def _as_list(columns: Optional[Columns]) -> List[str]:
    if columns is None:
        return []
    if isinstance(columns, str):
        return [columns]
    return list(dict.fromkeys(columns))


def _split_columns(wide: pd.DataFrame, ids: List[str]) -> List[str]:
    missing = [c for c in ids if c not in wide.columns]
    if missing:
        raise InvalidColumnError(f"Identifier columns not found: {missing}", missing)
    return [c for c in wide.columns if c not in ids]


def measure_columns(wide: pd.DataFrame, id_columns: Columns) -> List[str]:
    """Return the columns that will be pivoted, in original order."""
    return _split_columns(wide, _as_list(id_columns))


def reshape_long(
    wide: pd.DataFrame, id_columns: Columns, key_name: str = 'key',
    value_name: str = 'value', measure_columns: Optional[Sequence[str]] = None
) -> pd.DataFrame:
    """
    Transform wide format to long format.

    Every input row yields one output row per measure column. Identifier
    columns are carried unchanged, the measure column name goes to `key_name`
    and the cell goes to `value_name`.

    Rows come out grouped by input row, then by measure-column order:

        id | a | b          id | key | value
        1  | 5 | 6    ->    1  | a   | 5
                            1  | b   | 6

    Raises:
        InvalidColumnError: identifier or measure columns are missing, overlap,
            or the key/value names collide with an identifier column.
    """
    ids = _as_list(id_columns)
    if wide.columns.duplicated().any():
        dupes = wide.columns[wide.columns.duplicated()].tolist()
        raise InvalidColumnError(f"Column names must be unique, duplicated: {dupes}", dupes)

    measures = _split_columns(wide, ids)
    if measure_columns is not None:
        requested = _as_list(measure_columns)
        missing = [c for c in requested if c not in wide.columns]
        if missing:
            raise InvalidColumnError(f"Measure columns not found: {missing}", missing)
        overlap = [c for c in requested if c in ids]
        if overlap:
            raise InvalidColumnError(f"Columns cannot be both identifier and measure: {overlap}", overlap)
        measures = requested

    clashes = [n for n in (key_name, value_name) if n in ids]
    if clashes or key_name == value_name:
        bad = clashes or [key_name]
        raise InvalidColumnError(f"Key/value column names collide: {bad}", bad)

    if not measures or wide.empty:
        logger.debug(f"Nothing to pivot ({len(wide)} rows, {len(measures)} measure columns)")
        columns = ids + [key_name, value_name]
        return pd.DataFrame({c: pd.Series(dtype=wide[c].dtype if c in ids else object) for c in columns})

    # melt emits column-major blocks; a stable sort on the original row
    # position restores row-major order. Temporary names avoid melt rejecting
    # a value_name that is also a measure column.
    df_long = pd.melt(
        wide.reset_index(drop=True), id_vars=ids, value_vars=measures,
        var_name=_KEY, value_name=_VALUE, ignore_index=False
    )
    df_long = df_long.sort_index(kind='stable').reset_index(drop=True)
    df_long = df_long.rename(columns={_KEY: key_name, _VALUE: value_name})

    logger.debug(
        f"Reshaped {len(wide)} rows x {len(measures)} measure columns -> {len(df_long)} rows"
    )
    return df_long[ids + [key_name, value_name]]
