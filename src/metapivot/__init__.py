"""metapivot: reshape wide tables to long format while carrying column metadata.

    long = reshape_long(wide, 'id')
    joined = join_metadata(long, build_metadata({'a': 'group1', 'b': 'group2'}))
    table = apply_ordering(joined, {'group': ['group2', 'group1']})
"""
from .exceptions import (
    MetapivotError,
    InvalidColumnError,
    MetadataKeyError,
    UnmatchedKeyError,
    UnclassifiedOrderingValueError,
    UnmatchedKeyWarning,
    UnclassifiedOrderingWarning,
)
from .transform import reshape_long, measure_columns
from .metadata import (
    build_metadata,
    metadata_from_records,
    metadata_from_patterns,
    validate_metadata,
    join_metadata,
    CoverageReport,
    check_coverage,
    crosstab,
)
from .ordering import CategoryOrder, apply_ordering, ordering_of
from .summarize import summarize_mean, to_records
from .pipeline import PivotConfig, OrderingRule, PipelineResult, run_pipeline, save_config, load_config
from .loader import read_table, write_table

__version__ = '0.1.0'

__all__ = [
    'MetapivotError',
    'InvalidColumnError',
    'MetadataKeyError',
    'UnmatchedKeyError',
    'UnclassifiedOrderingValueError',
    'UnmatchedKeyWarning',
    'UnclassifiedOrderingWarning',
    'reshape_long',
    'measure_columns',
    'build_metadata',
    'metadata_from_records',
    'metadata_from_patterns',
    'validate_metadata',
    'join_metadata',
    'CoverageReport',
    'check_coverage',
    'crosstab',
    'CategoryOrder',
    'apply_ordering',
    'ordering_of',
    'summarize_mean',
    'to_records',
    'PivotConfig',
    'OrderingRule',
    'PipelineResult',
    'run_pipeline',
    'save_config',
    'load_config',
    'read_table',
    'write_table',
]
