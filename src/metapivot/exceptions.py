"""Errors and warnings raised by the pivot-with-metadata pipeline."""
from typing import Iterable, List


class MetapivotError(Exception):
    """Base class for all metapivot errors."""


class InvalidColumnError(MetapivotError, ValueError):
    """Caller named columns that do not exist (or collide) in a table."""

    def __init__(self, message: str, columns: Iterable[str] = ()):
        super().__init__(message)
        self.columns: List[str] = list(columns)


class MetadataKeyError(MetapivotError, ValueError):
    """Metadata table has no usable key column."""


class UnmatchedKeyError(MetapivotError):
    """Strict join found keys with no metadata row."""

    def __init__(self, message: str, keys: Iterable[str] = (), dropped_rows: int = 0):
        super().__init__(message)
        self.keys: List[str] = list(keys)
        self.dropped_rows = dropped_rows


class UnclassifiedOrderingValueError(MetapivotError):
    """Strict ordering found values not listed in the category order."""

    def __init__(self, message: str, field: str = "", values: Iterable = ()):
        super().__init__(message)
        self.field = field
        self.values = list(values)


class UnmatchedKeyWarning(UserWarning):
    """Lenient join dropped rows whose key had no metadata row."""


class UnclassifiedOrderingWarning(UserWarning):
    """Lenient ordering turned unlisted values into missing values."""
