"""OrderingAnnotator - explicit category order for presentation fields."""
import logging
import warnings
from typing import Any, Dict, Hashable, Iterator, Mapping, Sequence, Tuple, Union

import pandas as pd

from .exceptions import InvalidColumnError, UnclassifiedOrderingValueError, UnclassifiedOrderingWarning

logger = logging.getLogger(__name__)


class CategoryOrder:
    """
    Immutable ordered sequence of permissible values.

    rank() is a dict lookup, so comparisons never fall back to string order:

        order = CategoryOrder(['low', 'mid', 'high'])
        order.rank('high')  # 2
    """

    __slots__ = ('_levels', '_ranks')

    def __init__(self, levels: Sequence[Hashable]):
        levels = tuple(levels)
        ranks: Dict[Hashable, int] = {}
        dupes = []
        for i, level in enumerate(levels):
            if level in ranks:
                dupes.append(level)
            ranks.setdefault(level, i)
        if dupes:
            raise ValueError(f"Category levels must be unique, repeated: {dupes}")
        self._levels = levels
        self._ranks = ranks

    @classmethod
    def from_column(cls, frame: pd.DataFrame, column: str) -> 'CategoryOrder':
        """Use first-seen order of a column, e.g. the metadata key column."""
        if column not in frame.columns:
            raise InvalidColumnError(f"Column '{column}' not found", [column])
        return cls(list(dict.fromkeys(frame[column].dropna())))

    @property
    def levels(self) -> Tuple[Hashable, ...]:
        return self._levels

    def rank(self, value: Hashable) -> int:
        """Position of `value` in the order; KeyError if unlisted."""
        return self._ranks[value]

    def __contains__(self, value: Any) -> bool:
        try:
            return value in self._ranks
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._levels)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._levels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoryOrder):
            return NotImplemented
        return self._levels == other._levels

    def __hash__(self) -> int:
        return hash(self._levels)

    def __repr__(self) -> str:
        return f"CategoryOrder({list(self._levels)!r})"


Ordering = Union[CategoryOrder, Sequence[Hashable]]


def _as_order(ordering: Ordering) -> CategoryOrder:
    if isinstance(ordering, CategoryOrder):
        return ordering
    if isinstance(ordering, str):
        raise TypeError("Category levels must be a sequence of values, not a string")
    return CategoryOrder(ordering)


def apply_ordering(
    table: pd.DataFrame, orderings: Mapping[str, Ordering], strict: bool = False
) -> pd.DataFrame:
    """
    Turn fields into ordered categoricals following the given level sequences.

    Values not listed in a field's order become missing (unclassified) and a
    UnclassifiedOrderingWarning is issued; with strict=True an
    UnclassifiedOrderingValueError is raised instead. Applying the same
    orderings twice gives the same result as applying them once.

    Raises:
        InvalidColumnError: a named field is not in the table.
    """
    missing = [f for f in orderings if f not in table.columns]
    if missing:
        raise InvalidColumnError(f"Ordering fields not found: {missing}", missing)

    out = table.copy()
    for field, ordering in orderings.items():
        order = _as_order(ordering)
        values = out[field]
        present = values.dropna().unique()
        unlisted = [v for v in present if v not in order]
        if unlisted:
            message = f"Field '{field}' has values not in category order: {unlisted}"
            if strict:
                raise UnclassifiedOrderingValueError(message, field, unlisted)
            logger.warning(f"{message} (left unclassified)")
            warnings.warn(message, UnclassifiedOrderingWarning, stacklevel=2)

        if isinstance(values.dtype, pd.CategoricalDtype):
            values = values.astype(object)
        values = values.where(values.isin(list(order.levels)))
        out[field] = pd.Categorical(values, categories=list(order.levels), ordered=True)
        logger.debug(f"Ordered field '{field}' with {len(order)} levels")
    return out


def ordering_of(table: pd.DataFrame, field: str) -> CategoryOrder:
    """Read back the category order of an ordered field."""
    if field not in table.columns:
        raise InvalidColumnError(f"Column '{field}' not found", [field])
    dtype = table[field].dtype
    if not isinstance(dtype, pd.CategoricalDtype):
        raise TypeError(f"Field '{field}' is not categorical")
    return CategoryOrder(list(dtype.categories))
