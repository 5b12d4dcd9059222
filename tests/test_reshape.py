"""Tests for wide-to-long reshaping."""

import pandas as pd
import pytest

from metapivot.exceptions import InvalidColumnError
from metapivot.transform import measure_columns, reshape_long


class TestRowLayout:
    """Row count, row order and carried identifiers."""

    def test_row_count_is_rows_times_measures(self, wide):
        long = reshape_long(wide, 'id')
        assert len(long) == len(wide) * 3

    def test_row_major_order(self, wide):
        long = reshape_long(wide, 'id')
        assert list(long['id']) == [1, 1, 1, 2, 2, 2]
        assert list(long['key']) == ['a', 'b', 'c', 'a', 'b', 'c']
        assert list(long['value']) == [10, 11, 12, 20, 21, 22]

    def test_identifier_values_match_source_row(self):
        wide = pd.DataFrame({
            'id': [1, 2, 3],
            'site': ['north', 'south', 'east'],
            'x': [0.1, 0.2, 0.3],
            'y': [1.1, 1.2, 1.3],
        })
        long = reshape_long(wide, ['id', 'site'])
        lookup = wide.set_index('id')['site']
        for _, row in long.iterrows():
            assert row['site'] == lookup[row['id']]
            assert row['value'] == wide.loc[wide['id'] == row['id'], row['key']].iloc[0]

    def test_output_columns(self, wide):
        long = reshape_long(wide, 'id', key_name='question', value_name='score')
        assert list(long.columns) == ['id', 'question', 'score']

    def test_index_is_reset(self, wide):
        wide.index = ['x', 'y']
        long = reshape_long(wide, 'id')
        assert list(long.index) == list(range(6))

    def test_input_not_modified(self, wide):
        before = wide.copy()
        reshape_long(wide, 'id')
        pd.testing.assert_frame_equal(wide, before)

    def test_measure_column_named_like_value_field(self):
        wide = pd.DataFrame({'id': [1], 'value': [5], 'other': [6]})
        long = reshape_long(wide, 'id')
        assert list(long['key']) == ['value', 'other']
        assert list(long['value']) == [5, 6]


class TestMeasureSelection:
    """Explicit and implicit measure columns."""

    def test_measure_columns_default_to_non_identifiers(self, wide):
        assert measure_columns(wide, 'id') == ['a', 'b', 'c']

    def test_explicit_subset(self, wide):
        long = reshape_long(wide, 'id', measure_columns=['c', 'a'])
        assert len(long) == 4
        assert list(long['key']) == ['c', 'a', 'c', 'a']

    def test_repeated_identifier_counted_once(self, wide):
        long = reshape_long(wide, ['id', 'id'])
        assert list(long.columns) == ['id', 'key', 'value']
        assert len(long) == 6

    def test_no_measure_columns_gives_empty_table(self, wide):
        long = reshape_long(wide[['id']], 'id')
        assert long.empty
        assert list(long.columns) == ['id', 'key', 'value']

    def test_no_rows_gives_empty_table(self, wide):
        long = reshape_long(wide.iloc[0:0], 'id')
        assert long.empty
        assert list(long.columns) == ['id', 'key', 'value']


class TestInvalidColumns:
    """InvalidColumnError for bad column names."""

    def test_missing_identifier(self, wide):
        with pytest.raises(InvalidColumnError) as exc:
            reshape_long(wide, ['id', 'nope'])
        assert exc.value.columns == ['nope']

    def test_invalid_column_error_is_value_error(self, wide):
        with pytest.raises(ValueError):
            reshape_long(wide, 'missing')

    def test_missing_measure(self, wide):
        with pytest.raises(InvalidColumnError):
            reshape_long(wide, 'id', measure_columns=['a', 'zzz'])

    def test_measure_overlapping_identifier(self, wide):
        with pytest.raises(InvalidColumnError):
            reshape_long(wide, 'id', measure_columns=['id', 'a'])

    def test_key_name_collides_with_identifier(self, wide):
        with pytest.raises(InvalidColumnError):
            reshape_long(wide, 'id', key_name='id')

    def test_key_and_value_names_equal(self, wide):
        with pytest.raises(InvalidColumnError):
            reshape_long(wide, 'id', key_name='x', value_name='x')
