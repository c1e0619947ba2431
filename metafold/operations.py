# ==============================================
# Operations — Public Entry Points
# ==============================================
#
# PURPOSE:
#   The functions users call. Each one looks at the kind of table
#   it was handed and dispatches explicitly.
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                                                          │
#   │   WIDE / GROUPED / UNFOLDED table                        │
#   │                 │ fold()                                 │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ FOLDING                                      │        │
#   │  │  relations → stack → simplify → encodings    │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ NORMAL FORM                                  │        │
#   │  │  as_folded: validate, dedup, sort            │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ FOLDED table                           │
#   │                 │ unfold()                               │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ UNFOLDING                                    │        │
#   │  │  distill per item → merge → key metadata     │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 ▼                                        │
#   │          UNFOLDED table (with groups)                    │
#   └──────────────────────────────────────────────────────────┘
#
# DISPATCH:
# ---------
#   fold:       FOLDED → unchanged
#               GROUPED, UNFOLDED → keys default to table.groups
#               WIDE → keys from the argument or config
#   unfold:     FOLDED → unfold
#               WIDE → must already be normal form (as_folded first)
#               GROUPED, UNFOLDED → TypeError
#   as_folded:  FOLDED → unchanged, anything else validated
#   simplify, sort: coerce to FOLDED first
#
# ==============================================

from typing import Any, Optional, Sequence, Union

import pandas as pd

from metafold.config import FoldConfig, get_config
from metafold.folding import fold_frame
from metafold.normal_form import as_folded_frame, simplify_frame, sort_folded
from metafold.tables import Table, TableKind
from metafold.unfolding import distill as distill_frame
from metafold.unfolding import unfold_frame

TableLike = Union[Table, pd.DataFrame]


def as_folded(x: TableLike, sort: bool = True, decreasing: bool = False) -> Table:
    """
    Coerce a table to normal form.

    A FOLDED table is returned as is. Anything else must carry VARIABLE,
    META and VALUE columns.

    Raises:
        StructuralError: a required column is missing
    """
    table = Table.wrap(x)
    if table.kind is TableKind.FOLDED:
        return table
    return Table.folded(as_folded_frame(table.frame, sort=sort, decreasing=decreasing))


def fold(
    x: TableLike,
    groups: Optional[Sequence[str]] = None,
    meta: Any = None,
    simplify: Optional[bool] = None,
    sort: Optional[bool] = None,
    tol: Optional[int] = None,
    config: Optional[FoldConfig] = None,
) -> Table:
    """
    Fold a table into normal form.

    Args:
        x: Table or DataFrame. Folding a FOLDED table does nothing.
        groups: Key columns, in priority order. Override the groups a
                GROUPED or UNFOLDED table carries.
        meta: Metadata relations ("DV~BLQ", ("DV", "BLQ"), MetaRelation or
              {column: "X~Y"}); None infers them from X_Y column names
        simplify: Drop keys that do not distinguish values
        sort: Sort the result
        tol: Maximum distinct values of an item for an inferred encoding
        config: Defaults (see FoldConfig)

    Returns:
        FOLDED Table
    """
    table = Table.wrap(x)
    if table.kind is TableKind.FOLDED:
        return table

    if groups is None and table.kind in (TableKind.GROUPED, TableKind.UNFOLDED):
        groups = table.groups

    frame = fold_frame(
        table.frame,
        groups=groups,
        meta=meta,
        simplify=simplify,
        sort=sort,
        tol=tol,
        config=config,
    )
    return Table.folded(frame)


def unfold(
    x: TableLike,
    variables: Optional[Sequence[str]] = None,
    sort: Optional[bool] = None,
    config: Optional[FoldConfig] = None,
) -> Table:
    """
    Unfold a normal-form table.

    Args:
        x: FOLDED Table, or a DataFrame already in normal form
        variables: Items to unfold (default: all data items)
        sort: Sort rows by the resulting groups
        config: Defaults (see FoldConfig)

    Returns:
        UNFOLDED Table whose groups are the key columns of the result

    Raises:
        TypeError: x is a GROUPED or UNFOLDED table
        StructuralError: a WIDE frame is not in normal form
    """
    config = config or get_config()
    sort = config.sort if sort is None else sort

    table = Table.wrap(x)
    if table.kind in (TableKind.GROUPED, TableKind.UNFOLDED):
        raise TypeError(f"cannot unfold a {table.kind.value} table; fold it first")
    if table.kind is TableKind.WIDE:
        table = as_folded(table, sort=False)

    frame, groups = unfold_frame(table.frame, variables=variables, sort=sort, separator=config.separator)
    return Table.unfolded(frame, groups)


def distill(
    x: TableLike,
    mission: str,
    parent: Sequence[str] = (),
    config: Optional[FoldConfig] = None,
) -> pd.DataFrame:
    """Wide fragment for one item of a normal-form table, metadata included."""
    config = config or get_config()
    table = as_folded(x, sort=False)
    return distill_frame(table.frame, mission, parent=parent, separator=config.separator)


def simplify(x: TableLike) -> Table:
    """Blank out key values that do not distinguish VALUE, per (VARIABLE, META)."""
    table = as_folded(x, sort=False)
    return Table.folded(simplify_frame(table.frame))


def sort(x: TableLike, decreasing: bool = False) -> Table:
    table = as_folded(x, sort=False)
    return Table.folded(sort_folded(table.frame, decreasing=decreasing))
