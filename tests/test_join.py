"""Tests for joining column metadata onto long-format rows."""

import warnings

import pandas as pd
import pytest

from metapivot.exceptions import (
    InvalidColumnError,
    MetadataKeyError,
    UnmatchedKeyError,
    UnmatchedKeyWarning,
)
from metapivot.metadata import join_metadata, metadata_from_records


# ============================================================================
# Full coverage
# ============================================================================

class TestFullCoverage:
    """Every key has exactly one metadata row."""

    def test_no_rows_dropped(self, long, metadata):
        with warnings.catch_warnings():
            warnings.simplefilter('error', UnmatchedKeyWarning)
            joined = join_metadata(long, metadata)
        assert len(joined) == len(long) == 6

    def test_group_counts(self, long, metadata):
        joined = join_metadata(long, metadata)
        assert (joined['group'] == 'group1').sum() == 4
        assert (joined['group'] == 'group2').sum() == 2

    def test_long_order_and_columns_preserved(self, long, metadata):
        joined = join_metadata(long, metadata)
        assert list(joined.columns) == ['id', 'key', 'value', 'group']
        pd.testing.assert_frame_equal(joined[['id', 'key', 'value']], long)

    def test_metadata_key_with_different_name(self, long):
        meta = pd.DataFrame({'column': ['a', 'b', 'c'], 'label': ['A', 'B', 'C']})
        joined = join_metadata(long, meta, metadata_key='column')
        assert 'column' not in joined.columns
        assert list(joined['label']) == ['A', 'B', 'C', 'A', 'B', 'C']


# ============================================================================
# Missing keys (inner join shrinks the output)
# ============================================================================

class TestMissingKeys:
    """Rows whose key has no metadata vanish."""

    def test_rows_with_missing_key_dropped(self, long, metadata):
        partial = metadata[metadata['key'] != 'c']
        with pytest.warns(UnmatchedKeyWarning, match="'c'"):
            joined = join_metadata(long, partial)
        assert len(joined) == 4
        assert 'c' not in set(joined['key'])
        assert set(joined['group']) == {'group1'}

    def test_strict_raises(self, long, metadata):
        partial = metadata[metadata['key'] != 'c']
        with pytest.raises(UnmatchedKeyError) as exc:
            join_metadata(long, partial, strict=True)
        assert exc.value.keys == ['c']
        assert exc.value.dropped_rows == 2

    def test_empty_metadata_drops_everything(self, long):
        meta = pd.DataFrame({'key': pd.Series(dtype=object), 'group': pd.Series(dtype=object)})
        with pytest.warns(UnmatchedKeyWarning):
            joined = join_metadata(long, meta)
        assert joined.empty
        assert list(joined.columns) == ['id', 'key', 'value', 'group']


# ============================================================================
# Duplicate metadata keys (fan-out)
# ============================================================================

class TestFanOut:
    """A key listed n times yields n output rows per long row."""

    @pytest.fixture
    def fanned(self):
        return metadata_from_records([
            {'key': 'a', 'group': 'g1'},
            {'key': 'b', 'group': 'g1'},
            {'key': 'a', 'group': 'g2'},
            {'key': 'c', 'group': 'g3'},
        ])

    def test_row_count(self, long, fanned):
        joined = join_metadata(long, fanned)
        assert len(joined) == 8
        assert (joined['key'] == 'a').sum() == 4

    def test_each_match_carries_its_attributes(self, long, fanned):
        joined = join_metadata(long, fanned)
        first = joined[joined['id'] == 1]
        assert list(first['key']) == ['a', 'a', 'b', 'c']
        assert list(first['group']) == ['g1', 'g2', 'g1', 'g3']

    def test_fan_out_is_not_a_warning(self, long, fanned):
        with warnings.catch_warnings():
            warnings.simplefilter('error', UnmatchedKeyWarning)
            join_metadata(long, fanned, strict=True)


# ============================================================================
# Invalid inputs
# ============================================================================

class TestInvalidInputs:

    def test_missing_metadata_key_column(self, long):
        meta = pd.DataFrame({'name': ['a'], 'group': ['g']})
        with pytest.raises(MetadataKeyError):
            join_metadata(long, meta)

    def test_null_metadata_key(self, long):
        meta = pd.DataFrame({'key': ['a', None], 'group': ['g1', 'g2']})
        with pytest.raises(MetadataKeyError):
            join_metadata(long, meta)

    def test_missing_long_key_column(self, long, metadata):
        with pytest.raises(InvalidColumnError):
            join_metadata(long, metadata, key_name='question')

    def test_attribute_collides_with_long_column(self, long):
        meta = pd.DataFrame({'key': ['a', 'b', 'c'], 'value': [1, 2, 3]})
        with pytest.raises(InvalidColumnError) as exc:
            join_metadata(long, meta)
        assert exc.value.columns == ['value']
