"""Build column-metadata tables - one row per measure column name."""
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from ..exceptions import MetadataKeyError

logger = logging.getLogger(__name__)

# (regex over column name, attributes) - first match wins
Pattern = Tuple[str, Mapping[str, Any]]


def build_metadata(
    mapping: Mapping[str, Any], key_name: str = 'key', attribute: str = 'group'
) -> pd.DataFrame:
    """
    Build a metadata table from a dict keyed by measure column name.

    Values are either a scalar, stored under `attribute`, or a dict of
    attributes:

        build_metadata({'a': 'group1', 'c': 'group2'})
        build_metadata({'a': {'group': 'g1', 'label': 'Alpha'}})

    Row order follows the dict order, which OrderingAnnotator can reuse as
    the canonical category order.
    """
    records = []
    for key, attrs in mapping.items():
        if isinstance(attrs, Mapping):
            if key_name in attrs:
                raise MetadataKeyError(f"Attributes for '{key}' must not contain the key column '{key_name}'")
            record = {key_name: key, **attrs}
        else:
            record = {key_name: key, attribute: attrs}
        records.append(record)
    return metadata_from_records(records, key_name=key_name)


def metadata_from_records(records: Iterable[Mapping[str, Any]], key_name: str = 'key') -> pd.DataFrame:
    """Build a metadata table from a list of dicts, each carrying `key_name`."""
    records = [dict(r) for r in records]
    missing = [i for i, r in enumerate(records) if key_name not in r]
    if missing:
        raise MetadataKeyError(f"Records without '{key_name}' at positions: {missing}")

    columns = [key_name]
    for r in records:
        columns.extend(c for c in r if c not in columns)
    meta = pd.DataFrame(records, columns=columns)
    logger.debug(f"Built metadata: {len(meta)} keys, attributes {columns[1:]}")
    return meta


def metadata_from_patterns(
    columns: Sequence[str], patterns: Sequence[Pattern], key_name: str = 'key',
    default: Optional[Mapping[str, Any]] = None
) -> pd.DataFrame:
    """
    Assign attributes to column names by regex.

    Columns matching no pattern get `default` attributes, or are left out of
    the table when `default` is None (they will then drop out of the join).

    Example:
        metadata_from_patterns(
            ['q1_trust', 'q2_trust', 'q3_speed'],
            [(r'.*_trust$', {'scale': 'trust'}), (r'.*_speed$', {'scale': 'speed'})],
        )
    """
    compiled = [(re.compile(p, re.IGNORECASE), attrs) for p, attrs in patterns]
    records: List[Dict[str, Any]] = []
    for col in columns:
        attrs = next((a for rx, a in compiled if rx.match(str(col))), default)
        if attrs is None:
            logger.debug(f"No pattern matched column '{col}'")
            continue
        records.append({key_name: col, **attrs})

    if not records:
        return pd.DataFrame(columns=[key_name])
    return metadata_from_records(records, key_name=key_name)


def duplicate_keys(metadata: pd.DataFrame, key_name: str = 'key') -> Dict[Any, int]:
    """Keys that occur more than once, with their counts."""
    counts = metadata[key_name].value_counts(sort=False)
    return {k: int(n) for k, n in counts.items() if n > 1}


def validate_metadata(metadata: pd.DataFrame, key_name: str = 'key') -> pd.DataFrame:
    """
    Check the metadata key column is usable for a join.

    Duplicate keys are allowed (they fan out on join) and only logged.

    Raises:
        MetadataKeyError: key column absent or containing nulls.
    """
    if key_name not in metadata.columns:
        raise MetadataKeyError(
            f"Metadata has no key column '{key_name}'. Available: {list(metadata.columns)}"
        )
    nulls = int(metadata[key_name].isna().sum())
    if nulls:
        raise MetadataKeyError(f"Metadata key column '{key_name}' has {nulls} null value(s)")

    dupes = duplicate_keys(metadata, key_name)
    if dupes:
        logger.info(f"Metadata keys repeated (rows will fan out on join): {dupes}")
    return metadata
