# ==============================================
# Normal-Form Constructor
# ==============================================
#
# PURPOSE:
#   Coerce an arbitrary table into the normal form and enforce
#   its structural rules.
#
# RULES:
# ------
#   1. VARIABLE, META and VALUE must exist (else StructuralError)
#   2. Column order becomes VARIABLE, META, VALUE, keys...
#   3. VALUE is stored as text
#   4. Exact duplicate rows are dropped (logged at INFO)
#   5. Rows repeating another row's VARIABLE/META/keys with a
#      different VALUE are dropped, first one kept (WARNING)
#   6. Optionally sorted (see sort_folded)
#
# FUNCTIONS:
# ----------
# - check_structure(frame) -> None
# - as_folded_frame(frame, sort=True, decreasing=False) -> DataFrame
# - sort_folded(frame, decreasing=False) -> DataFrame
#
# ==============================================

import logging
from typing import List

import pandas as pd

from metafold.errors import StructuralError
from metafold.tables import CONSTITUTIVE, VALUE
from .value_text import ValueText

logger = logging.getLogger(__name__)


def check_structure(frame: pd.DataFrame) -> None:
    """
    Verify that a frame can hold the normal form.

    Raises:
        StructuralError: a constitutive column is missing or a column
                         name is repeated
    """
    missing = [name for name in CONSTITUTIVE if name not in frame.columns]
    if missing:
        raise StructuralError(f"normal form requires columns {', '.join(missing)}")

    repeated = frame.columns[frame.columns.duplicated()].tolist()
    if repeated:
        raise StructuralError(f"duplicated column names: {', '.join(map(str, repeated))}")


def key_columns(frame: pd.DataFrame) -> List[str]:
    return [name for name in frame.columns if name not in CONSTITUTIVE]


def as_folded_frame(frame: pd.DataFrame, sort: bool = True, decreasing: bool = False) -> pd.DataFrame:
    """
    Build a normal-form frame from any frame with VARIABLE, META and VALUE.

    Args:
        frame: Input table; extra columns become keys and may hold missing values
        sort: Whether to sort the result
        decreasing: Passed to sort_folded

    Returns:
        A new DataFrame; the input is not modified
    """
    check_structure(frame)

    folded = frame.loc[:, list(CONSTITUTIVE) + key_columns(frame)].copy()
    for name in CONSTITUTIVE:
        folded[name] = ValueText.text_series(folded[name])

    distinct = folded.drop_duplicates()
    if len(distinct) < len(folded):
        logger.info("removing %d duplicate records", len(folded) - len(distinct))
        folded = distinct

    identifying = [name for name in folded.columns if name != VALUE]
    unique_keys = folded.drop_duplicates(subset=identifying, keep="first")
    if len(unique_keys) < len(folded):
        logger.warning(
            "removing %d records whose keys duplicate another record with a different VALUE",
            len(folded) - len(unique_keys),
        )
        folded = unique_keys

    if sort:
        return sort_folded(folded, decreasing=decreasing)
    return folded.reset_index(drop=True)


def sort_folded(frame: pd.DataFrame, decreasing: bool = False) -> pd.DataFrame:
    """
    Sort on every non-VALUE column, left to right, missing values first.

    The sort is stable. With decreasing=True the ascending result is
    reversed as a whole; columns are never compared in descending order.
    """
    by = [name for name in frame.columns if name != VALUE]
    ordered = frame
    if by and len(frame):
        ordered = frame.sort_values(by=by, kind="mergesort", na_position="first")
    if decreasing:
        ordered = ordered.iloc[::-1]
    return ordered.reset_index(drop=True)
