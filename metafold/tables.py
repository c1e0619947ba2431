# ==============================================
# Tables (Tagged Variants)
# ==============================================
#
# PURPOSE:
#   A DataFrame alone does not say what it is. Operations need
#   to know whether they were handed a conventional wide table,
#   a table with known keys, a folded (normal form) table, or
#   the result of an unfold. Table carries that tag explicitly.
#
# ENUMS:
# ------
# - TableKind(Enum): WIDE, GROUPED, FOLDED, UNFOLDED
#
# CLASSES:
# --------
# - Table (frozen dataclass)
#     kind: TableKind
#     frame: pandas.DataFrame
#     groups: tuple[str, ...]   → key columns (GROUPED / UNFOLDED)
#
#     Constructors: wide(), grouped(), folded(), unfolded(), wrap()
#
# CONSTANTS:
# ----------
#   VARIABLE, META, VALUE     → reserved normal-form column names
#
# ==============================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence, Tuple, Union

import pandas as pd

VARIABLE = "VARIABLE"
META = "META"
VALUE = "VALUE"
CONSTITUTIVE = (VARIABLE, META, VALUE)

GROUPS_ATTR = "groups"


class TableKind(Enum):
    """
    What a table represents.

    - WIDE: conventional data frame, keys unknown
    - GROUPED: conventional data frame with known key columns
    - FOLDED: normal form (VARIABLE, META, VALUE, keys...)
    - UNFOLDED: wide table rebuilt from normal form, keys recorded
    """
    WIDE = "wide"
    GROUPED = "grouped"
    FOLDED = "folded"
    UNFOLDED = "unfolded"


@dataclass(frozen=True, eq=False)
class Table:
    """A DataFrame tagged with its kind and, where known, its key columns."""

    kind: TableKind
    frame: pd.DataFrame = field(repr=False)
    groups: Tuple[str, ...] = ()

    @classmethod
    def wide(cls, frame: pd.DataFrame) -> "Table":
        return cls(TableKind.WIDE, frame)

    @classmethod
    def grouped(cls, frame: pd.DataFrame, groups: Iterable[str]) -> "Table":
        return cls(TableKind.GROUPED, frame, tuple(groups))

    @classmethod
    def folded(cls, frame: pd.DataFrame) -> "Table":
        return cls(TableKind.FOLDED, frame)

    @classmethod
    def unfolded(cls, frame: pd.DataFrame, groups: Iterable[str]) -> "Table":
        return cls(TableKind.UNFOLDED, frame, tuple(groups))

    @classmethod
    def wrap(cls, obj: Union["Table", pd.DataFrame]) -> "Table":
        """
        Tag an untagged DataFrame.

        A DataFrame whose attrs carry "groups" is GROUPED, anything
        else is WIDE. Tables pass through untouched.

        Raises:
            TypeError: obj is neither a Table nor a DataFrame
        """
        if isinstance(obj, Table):
            return obj
        if isinstance(obj, pd.DataFrame):
            groups = obj.attrs.get(GROUPS_ATTR)
            if groups:
                return cls.grouped(obj, _as_names(groups))
            return cls.wide(obj)
        raise TypeError(f"expected a Table or DataFrame, got {type(obj).__name__}")

    @property
    def keys(self) -> Tuple[str, ...]:
        """Key columns: the non-constitutive columns of a folded table, else groups."""
        if self.kind is TableKind.FOLDED:
            return tuple(c for c in self.frame.columns if c not in CONSTITUTIVE)
        return self.groups

    def __len__(self) -> int:
        return len(self.frame)


def _as_names(groups: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    if isinstance(groups, str):
        return (groups,)
    return tuple(groups)
