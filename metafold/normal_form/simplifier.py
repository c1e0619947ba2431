# ==============================================
# Key Simplifier
# ==============================================
#
# PURPOSE:
#   Find, per (VARIABLE, META) group, the minimal left prefix of
#   key columns that still identifies VALUE, and blank out the
#   rest.
#
# HOW IT WORKS:
#   Keys are visited strictly left to right. For key k, every
#   (VARIABLE, META) group is checked: if VALUE is already unique
#   within each sub-group of (VARIABLE, META, keys left of k), k
#   carries no information for that group and is set to missing
#   there. Once a group is satisfied it stays satisfied, so all
#   keys further right are blanked as well.
#
#   Afterwards, key columns that are entirely missing are dropped
#   and duplicate rows removed.
#
#   Different VARIABLEs can end up keyed by different prefixes.
#   That is how nested object types (subject-level vs
#   observation-level items) are expressed.
#
# ==============================================

from typing import List, Sequence

import pandas as pd

from metafold.tables import CONSTITUTIVE, META, VALUE, VARIABLE

# Stand-in for missing values when grouping; never stored.
_MISSING = "\r<missing>\r"


def group_ids(frame: pd.DataFrame, columns: Sequence[str]) -> pd.Series:
    """
    Number the distinct combinations of the given columns.

    Missing values form their own group instead of being dropped.

    Returns:
        Integer Series aligned with frame.index
    """
    if not len(columns):
        return pd.Series(0, index=frame.index)
    subset = frame.loc[:, list(columns)].astype(object)
    filled = subset.where(subset.notna(), _MISSING)
    return filled.groupby(list(columns), sort=False).ngroup()


def value_counts_within(frame: pd.DataFrame, columns: Sequence[str], target: str = VALUE) -> pd.Series:
    """Count distinct target values (missing counts as a value) per group of columns."""
    target_values = frame[target].astype(object)
    target_values = target_values.where(target_values.notna(), _MISSING)
    return target_values.groupby(group_ids(frame, columns)).transform("nunique")


def simplify_frame(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Minimize the key columns needed per (VARIABLE, META).

    Args:
        frame: A frame with VARIABLE, META, VALUE and key columns

    Returns:
        A new frame with redundant keys set to missing, all-missing key
        columns dropped and duplicate rows removed
    """
    simplified = frame.copy()
    modifiers = [name for name in simplified.columns if name not in CONSTITUTIVE]
    if simplified.empty:
        return simplified.drop(columns=modifiers).reset_index(drop=True)

    pairs = group_ids(simplified, [VARIABLE, META])
    key: List[str] = [VARIABLE, META]
    for column in modifiers:
        unique_value = value_counts_within(simplified, key) == 1
        satisfied = unique_value.groupby(pairs).transform("all").astype(bool)
        simplified[column] = simplified[column].mask(satisfied)
        key.append(column)

    empty = [name for name in modifiers if simplified[name].isna().all()]
    simplified = simplified.drop(columns=empty)
    return simplified.drop_duplicates().reset_index(drop=True)
