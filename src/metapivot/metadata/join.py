"""MetadataJoiner - attach column metadata to long-format rows."""
import logging
import warnings
from typing import Optional

import pandas as pd

from ..exceptions import InvalidColumnError, UnmatchedKeyError, UnmatchedKeyWarning
from .builder import validate_metadata

logger = logging.getLogger(__name__)

_ROW = '__metapivot_row__'
_META_ROW = '__metapivot_meta_row__'


def join_metadata(
    long: pd.DataFrame, metadata: pd.DataFrame, key_name: str = 'key',
    metadata_key: Optional[str] = None, strict: bool = False
) -> pd.DataFrame:
    """
    Inner-join metadata attributes onto a long table by key equality.

    - Rows whose key has no metadata row are dropped. A warning
      (UnmatchedKeyWarning) names the keys and the number of rows lost.
    - A key listed n times in the metadata yields n output rows (fan-out),
      adjacent and in metadata row order.
    - Output keeps the long table's row order and appends every non-key
      metadata attribute.

    Args:
        long: Output of reshape_long
        metadata: Table with one row per key (normally)
        key_name: Key column in `long`; also the key column name in the output
        metadata_key: Key column in `metadata` if named differently
        strict: Raise UnmatchedKeyError instead of dropping rows
    """
    metadata_key = metadata_key or key_name
    if key_name not in long.columns:
        raise InvalidColumnError(f"Key column '{key_name}' not found in long table", [key_name])
    validate_metadata(metadata, metadata_key)

    attributes = [c for c in metadata.columns if c != metadata_key]
    clashes = [c for c in attributes if c in long.columns or c == key_name]
    if clashes:
        raise InvalidColumnError(f"Metadata attributes collide with long table columns: {clashes}", clashes)

    known = set(metadata[metadata_key])
    unmatched_mask = ~long[key_name].isin(known)
    if unmatched_mask.any():
        unmatched = list(dict.fromkeys(long.loc[unmatched_mask, key_name]))
        dropped = int(unmatched_mask.sum())
        message = f"{dropped} row(s) have keys missing from metadata: {unmatched}"
        if strict:
            raise UnmatchedKeyError(message, unmatched, dropped)
        logger.warning(f"Dropping {message}")
        warnings.warn(message, UnmatchedKeyWarning, stacklevel=2)

    left = long.assign(**{_ROW: range(len(long))})
    right = metadata.rename(columns={metadata_key: key_name}).assign(**{_META_ROW: range(len(metadata))})
    joined = pd.merge(left, right, on=key_name, how='inner')
    joined = joined.sort_values([_ROW, _META_ROW], kind='stable')
    joined = joined.drop(columns=[_ROW, _META_ROW]).reset_index(drop=True)

    logger.debug(f"Joined {len(long)} long rows with {len(metadata)} metadata rows -> {len(joined)} rows")
    return joined
