# ==============================================
# Distiller
# ==============================================
#
# PURPOSE:
#   Recover everything the normal form knows about one item (the
#   "mission") as a wide fragment, recursively pulling in the
#   metadata of its metadata.
#
# HOW IT WORKS:
#
#   distill(folded, "DV")
#     │
#     ├─ rows VARIABLE=DV, META missing      → column DV
#     │
#     └─ for each attribute m of DV (META=m):
#          rows VARIABLE=DV, META=m          → column DV_m
#          ├─ single encoded value?          → decode onto DV (categorical)
#          └─ otherwise                      → outer-merge on shared keys
#          distill(folded, m, parent=(DV,))  → merged in as well
#
#   Column names use two segments only (BLQ_LLOQ, not DV_BLQ_LLOQ).
#   An attribute that already appears in the lineage raises
#   CyclicMetadataError instead of recursing forever.
#
# FUNCTIONS:
# ----------
# - distill(frame, mission, parent=(), seed=None, separator="_") -> DataFrame
# - decode_column(frame, encoded, encoding, decoded) -> DataFrame
#
# ==============================================

import logging
from typing import Any, Dict, Optional, Sequence

import pandas as pd

from metafold.encoding import codes, decodes, is_encoded
from metafold.errors import CyclicMetadataError
from metafold.normal_form import ValueText, key_columns
from metafold.tables import META, VALUE, VARIABLE
from .merge import informative, is_empty, weld

logger = logging.getLogger(__name__)


def distill(
    frame: pd.DataFrame,
    mission: str,
    parent: Sequence[str] = (),
    seed: Optional[pd.DataFrame] = None,
    separator: str = "_",
) -> pd.DataFrame:
    """
    Build the wide fragment for one VARIABLE of a normal-form frame.

    Args:
        frame: Normal-form frame (VARIABLE, META, VALUE, keys...)
        mission: The VARIABLE to recover
        parent: Lineage of items whose metadata led here
        seed: Starting fragment; the Unfolder passes the distinct values
              of a key column so that key metadata can merge or decode
              onto it
        separator: Joins mission and attribute names in column names

    Returns:
        A new DataFrame, possibly empty

    Raises:
        CyclicMetadataError: an attribute of the mission is already in
                             its lineage
    """
    lineage = tuple(parent) + (mission,)
    keys = key_columns(frame)
    is_mission = frame[VARIABLE] == mission
    has_meta = frame[META].notna()

    result = pd.DataFrame() if seed is None else seed.reset_index(drop=True)

    data = frame.loc[is_mission & ~has_meta, keys + [VALUE]]
    if len(data):
        data = data.rename(columns={VALUE: mission})
        data[mission] = ValueText.convert(data[mission])
        result = weld(result, informative(data).reset_index(drop=True))

    described = frame.loc[is_mission & has_meta]
    for attribute in pd.unique(described[META]):
        if attribute in lineage:
            raise CyclicMetadataError(lineage, attribute)

        canonical = f"{mission}{separator}{attribute}"
        values = described.loc[described[META] == attribute, keys + [VALUE]]
        values = informative(values.rename(columns={VALUE: canonical})).reset_index(drop=True)

        encoding = _single_encoding(values, canonical)
        if encoding is None and canonical in values.columns:
            values[canonical] = ValueText.convert(values[canonical])

        if is_empty(result):
            result = values
        elif encoding is not None:
            result = decode_column(result, encoded=mission, encoding=encoding, decoded=canonical)
        else:
            result = weld(result, values)

        nested = distill(frame, attribute, parent=lineage, separator=separator)
        result = weld(result, nested)

    return result


def _single_encoding(values: pd.DataFrame, column: str) -> Optional[str]:
    if len(values) != 1 or column not in values.columns:
        return None
    candidate = values[column].iloc[0]
    return candidate if is_encoded(candidate) else None


def decode_column(frame: pd.DataFrame, encoded: str, encoding: Any, decoded: str) -> pd.DataFrame:
    """
    Add a categorical column that translates codes in one column to labels.

    Args:
        frame: Fragment holding the coded column
        encoded: Name of the column holding codes
        encoding: The encoding string
        decoded: Name of the new column

    Returns:
        A new frame with the decoded column, or frame itself when the
        coded column is absent, the target already exists or the
        encoding is not an encoding
    """
    if encoded not in frame.columns:
        return frame
    if decoded in frame.columns:
        logger.warning("%s already present, skipping decode", decoded)
        return frame
    if not is_encoded(encoding):
        logger.warning("%r appears not to be encoded, no decode attempted", encoding)
        return frame

    code_list = [ValueText.from_marker(code) for code in codes(encoding)]
    label_list = [ValueText.from_marker(label) for label in decodes(encoding)]
    lookup: Dict[Optional[str], Optional[str]] = {}
    for code, label in zip(code_list, label_list):
        lookup.setdefault(code, label)

    labels = ValueText.text_series(frame[encoded]).map(lambda code: lookup.get(code))
    categories = list(dict.fromkeys(label for label in label_list if label is not None))

    decoded_frame = frame.copy()
    decoded_frame[decoded] = pd.Categorical(labels, categories=categories)
    return decoded_frame
