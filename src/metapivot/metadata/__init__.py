"""Column metadata: building, validating, joining and coverage checks"""
from .builder import build_metadata, metadata_from_records, metadata_from_patterns, duplicate_keys, validate_metadata
from .join import join_metadata
from .coverage import CoverageReport, check_coverage, crosstab
