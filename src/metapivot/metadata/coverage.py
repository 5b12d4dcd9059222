"""Pre-flight coverage checks between long-table keys and metadata keys.

The inner join drops unmatched rows silently, so a typo in a metadata key
shows up as missing data far downstream. These checks make the gap visible
before (or after) joining.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import pandas as pd

from ..exceptions import InvalidColumnError
from ..utils.similarity import closest_name
from .builder import duplicate_keys, validate_metadata

logger = logging.getLogger(__name__)


@dataclass
class CoverageReport:
    """Comparison of the keys found in data against the metadata keys."""
    data_keys: List[Any] = field(default_factory=list)
    missing_keys: List[Any] = field(default_factory=list)      # in data, not in metadata
    unused_keys: List[Any] = field(default_factory=list)       # in metadata, not in data
    duplicate_keys: Dict[Any, int] = field(default_factory=dict)
    suggestions: Dict[Any, str] = field(default_factory=dict)  # missing key -> closest metadata key

    @property
    def is_complete(self) -> bool:
        """Every data key matches exactly one metadata row."""
        return not self.missing_keys and not self.duplicate_keys

    @property
    def matched_keys(self) -> List[Any]:
        missing = set(self.missing_keys)
        return [k for k in self.data_keys if k not in missing]

    def to_dict(self) -> dict:
        return {
            'data_keys': self.data_keys,
            'missing_keys': self.missing_keys,
            'unused_keys': self.unused_keys,
            'duplicate_keys': self.duplicate_keys,
            'suggestions': self.suggestions,
            'is_complete': self.is_complete,
        }


def check_coverage(
    data: Union[pd.DataFrame, Iterable[Any]], metadata: pd.DataFrame, key_name: str = 'key',
    metadata_key: Optional[str] = None, threshold: float = 0.5
) -> CoverageReport:
    """
    Compare distinct data keys with metadata keys.

    Args:
        data: Long table (its `key_name` column is used) or the keys
            themselves, e.g. measure_columns(wide, ids)
        metadata: Metadata table
        key_name: Key column in the long table
        metadata_key: Key column in metadata, defaults to `key_name`
        threshold: Minimum similarity for a typo suggestion
    """
    metadata_key = metadata_key or key_name
    if isinstance(data, pd.DataFrame):
        if key_name not in data.columns:
            raise InvalidColumnError(f"Key column '{key_name}' not found", [key_name])
        keys: Sequence[Any] = list(dict.fromkeys(data[key_name]))
    else:
        keys = list(dict.fromkeys(data))
    validate_metadata(metadata, metadata_key)

    meta_keys = list(dict.fromkeys(metadata[metadata_key]))
    meta_set = set(meta_keys)
    key_set = set(keys)

    missing = [k for k in keys if k not in meta_set]
    unused = [k for k in meta_keys if k not in key_set]
    candidates = [str(k) for k in unused] or [str(k) for k in meta_keys]

    suggestions = {}
    for k in missing:
        match, _ = closest_name(str(k), candidates, threshold)
        if match is not None:
            suggestions[k] = match

    report = CoverageReport(
        data_keys=keys,
        missing_keys=missing,
        unused_keys=unused,
        duplicate_keys=duplicate_keys(metadata, metadata_key),
        suggestions=suggestions,
    )
    if missing:
        logger.info(f"Keys without metadata: {missing}")
    logger.debug(f"Coverage: {len(keys) - len(missing)}/{len(keys)} keys matched, {len(unused)} unused")
    return report


def crosstab(joined: pd.DataFrame, key_name: str, attribute: Union[str, Sequence[str]]) -> pd.DataFrame:
    """Frequency table of key x attribute, for eyeballing join completeness."""
    attributes = [attribute] if isinstance(attribute, str) else list(attribute)
    missing = [c for c in [key_name] + attributes if c not in joined.columns]
    if missing:
        raise InvalidColumnError(f"Columns not found: {missing}", missing)
    columns = joined[attributes[0]] if len(attributes) == 1 else [joined[a] for a in attributes]
    return pd.crosstab(joined[key_name], columns)
