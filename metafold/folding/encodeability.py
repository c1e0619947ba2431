# ==============================================
# Encoding Decision
# ==============================================
#
# PURPOSE:
#   Decide whether a metadata column can be stored as a single
#   encoding (code -> label mapping keyed on the described item's
#   values) instead of one row per key, and build that encoding.
#
# RULES:
# ------
#   mapped:      every distinct value of the item maps to exactly
#                one value of the attribute
#
#   encodeable:  mapped AND
#                  (item or attribute is categorical
#                   OR (item has <= tol distinct values
#                       AND attribute has more than one))
#
#   Missing values count as a distinct value on both sides.
#
# ==============================================

import logging
from typing import Optional

import pandas as pd

from metafold.encoding import encode
from metafold.normal_form.value_text import ValueText
from .relations import MetaRelation

logger = logging.getLogger(__name__)


def _is_categorical(series: pd.Series) -> bool:
    return isinstance(series.dtype, pd.CategoricalDtype)


def _markers(series: pd.Series) -> pd.Series:
    return series.astype(object).map(ValueText.to_marker).reset_index(drop=True)


def is_mapped(x: pd.Series, y: pd.Series) -> bool:
    """True if there is only one y for each x."""
    xs = _markers(x)
    pairs = xs + "\r" + _markers(y)
    return xs.nunique() == pairs.nunique()


def is_encodeable(x: pd.Series, y: pd.Series, tol: int = 10) -> bool:
    """
    Check whether attribute y of item x may be stored as an encoding.

    Args:
        x: Values of the described item
        y: Values of the attribute, parallel to x
        tol: Maximum number of distinct x values for an inferred encoding

    Returns:
        True if an encoding should be attempted
    """
    if len(x) != len(y) or len(x) == 0:
        return False
    mapped = is_mapped(x, y)
    if not mapped:
        return False
    if _is_categorical(x) or _is_categorical(y):
        return True
    return x.nunique(dropna=False) <= tol and y.nunique(dropna=False) > 1


def build_encoding(x: pd.Series, y: pd.Series) -> str:
    """
    Encode the x -> y mapping.

    Categorical columns contribute their category order; otherwise
    codes appear in order of first occurrence.
    """
    data = pd.DataFrame({"x": x.reset_index(drop=True), "y": y.reset_index(drop=True)})
    if _is_categorical(data["y"]):
        data = data.sort_values("y", kind="mergesort")
    if _is_categorical(data["x"]):
        data = data.sort_values("x", kind="mergesort")

    data = pd.DataFrame({"code": _markers(data["x"]), "label": _markers(data["y"])})
    data = data.drop_duplicates(subset="code", keep="first")
    return encode(data["code"].tolist(), data["label"].tolist())


def supply_encoding(relation: MetaRelation, source: pd.DataFrame, tol: int = 10) -> Optional[str]:
    """
    Return the encoding for a relation, or None if it must be stored per key.

    The described item has to be a column of source; metadata of
    items that are not columns is never encoded.
    """
    if relation.variable not in source.columns or relation.column not in source.columns:
        return None
    if relation.variable == relation.column:
        return None

    x = source[relation.variable]
    y = source[relation.column]
    if not is_encodeable(x, y, tol=tol):
        return None

    try:
        return build_encoding(x, y)
    except ValueError as e:
        logger.warning("cannot encode %s (%s); storing it per key", relation.formula, e)
        return None
