# ==============================================
# Unfolder
# ==============================================
#
# PURPOSE:
#   Rebuild a wide table from the normal form, for all data items
#   or a chosen subset.
#
# HOW IT WORKS:
#   1. Variables default to every VARIABLE that has rows with
#      META missing, in order of appearance.
#   2. Each is distilled; empty fragments are skipped.
#   3. Fragments are outer-merged on the columns they share.
#   4. For every key column present in the result, the key itself
#      is distilled (seeded with its distinct values) to recover
#      metadata attached to keys, e.g. a label or a derived value.
#      New columns are left-merged and placed right after the key.
#   5. groups = key columns present in the result. With sort, rows
#      are stably sorted on groups, missing values first.
#
# FUNCTION:
# ---------
# - unfold_frame(frame, variables=None, sort=True, separator="_")
#       -> (DataFrame, groups)
#
# ==============================================

import logging
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from metafold.normal_form import check_structure, key_columns
from metafold.tables import META, VARIABLE
from .distiller import distill
from .merge import is_empty, meta_merge, move_after

logger = logging.getLogger(__name__)


def data_variables(frame: pd.DataFrame) -> List[str]:
    """VARIABLE values that carry primary data (META missing), in order of appearance."""
    return list(pd.unique(frame.loc[frame[META].isna(), VARIABLE]))


def unfold_frame(
    frame: pd.DataFrame,
    variables: Optional[Sequence[str]] = None,
    sort: bool = True,
    separator: str = "_",
) -> Tuple[pd.DataFrame, Tuple[str, ...]]:
    """
    Unfold a normal-form frame.

    Args:
        frame: Normal-form frame
        variables: Items to unfold; defaults to all data items
        sort: Sort rows by the key columns of the result
        separator: Joins item and attribute names in column names

    Returns:
        (wide DataFrame, key columns whose combination identifies rows)
    """
    check_structure(frame)
    keys = key_columns(frame)
    if variables is None:
        variables = data_variables(frame)
    elif isinstance(variables, str):
        variables = [variables]

    fragments = []
    for variable in variables:
        fragment = distill(frame, variable, separator=separator)
        if is_empty(fragment):
            logger.debug("nothing to unfold for %s", variable)
            continue
        fragments.append(fragment)

    wide = meta_merge(fragments)

    for key in [name for name in keys if name in wide.columns]:
        seed = wide.loc[:, [key]].drop_duplicates()
        extra = distill(frame, key, seed=seed, separator=separator)
        added = [name for name in extra.columns if name not in wide.columns]
        if not added:
            continue
        shared = [name for name in extra.columns if name in wide.columns]
        extra = extra.loc[:, shared + added].drop_duplicates()
        wide = wide.merge(extra, how="left", on=shared, sort=False)
        wide = move_after(wide, added, after=key)

    if len(wide.columns) == 0:
        return pd.DataFrame(), ()

    groups = tuple(name for name in keys if name in wide.columns)
    if sort and groups:
        wide = wide.sort_values(by=list(groups), kind="mergesort", na_position="first")
    return wide.reset_index(drop=True), groups
