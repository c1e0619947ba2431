# ==============================================
# Fragment Merging
# ==============================================
#
# PURPOSE:
#   Helpers the Distiller and Unfolder use to combine wide
#   fragments. Fragments are merged on every column they share;
#   fragments that share nothing are cross-joined (a constant
#   attribute such as a label then repeats on every row).
#
# FUNCTIONS:
# ----------
# - informative(frame)             → drop columns with no values at all
# - is_empty(frame)                → no rows or no columns
# - outer_merge(x, y, how)         → merge on shared columns / cross join
# - weld(x, y)                     → outer_merge, tolerating empty sides
# - meta_merge(fragments)          → fold a list of fragments with outer_merge
# - move_after(frame, cols, after) → reposition columns after another one
#
# ==============================================

import logging
from typing import Iterable, List, Optional, Sequence

import pandas as pd

logger = logging.getLogger(__name__)


def informative(frame: pd.DataFrame) -> pd.DataFrame:
    return frame.loc[:, frame.notna().any(axis=0)]


def is_empty(frame: Optional[pd.DataFrame]) -> bool:
    return frame is None or len(frame.index) == 0 or len(frame.columns) == 0


def outer_merge(x: pd.DataFrame, y: pd.DataFrame, how: str = "outer") -> pd.DataFrame:
    common = [name for name in x.columns if name in y.columns]
    if not common:
        return x.merge(y, how="cross")
    return x.merge(y, how=how, on=common, sort=False)


def weld(x: pd.DataFrame, y: pd.DataFrame) -> pd.DataFrame:
    """
    Outer-merge two fragments, keeping whichever one has content.

    Returns:
        x if both are empty, the non-empty one if only one is,
        otherwise their outer merge
    """
    if is_empty(y):
        return x
    if is_empty(x):
        return y
    return outer_merge(x, y)


def meta_merge(fragments: Iterable[Optional[pd.DataFrame]]) -> pd.DataFrame:
    """
    Outer-merge a sequence of fragments left to right.

    Absent or empty fragments are skipped with a warning. Row order is
    not meaningful; the Unfolder sorts afterwards.

    Returns:
        The merged frame, or an empty DataFrame if nothing was merged
    """
    merged: Optional[pd.DataFrame] = None
    for fragment in fragments:
        if is_empty(fragment):
            logger.warning("merging with an absent or empty fragment; treating it as empty")
            continue
        merged = fragment if merged is None else outer_merge(merged, fragment)
    if merged is None:
        return pd.DataFrame()
    return merged


def move_after(frame: pd.DataFrame, columns: Sequence[str], after: str) -> pd.DataFrame:
    moving: List[str] = [name for name in columns if name in frame.columns and name != after]
    rest = [name for name in frame.columns if name not in moving]
    position = rest.index(after) + 1 if after in rest else len(rest)
    return frame.loc[:, rest[:position] + moving + rest[position:]]
