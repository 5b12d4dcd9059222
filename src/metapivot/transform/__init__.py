"""Transform module for wide-to-long reshaping.

Functions for pivoting measure columns into key/value pairs while carrying
identifier columns through unchanged.
"""
from .reshape import (
    measure_columns,
    reshape_long,
)

__all__ = [
    'measure_columns',
    'reshape_long',
]
