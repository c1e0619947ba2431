# ==============================================
# Folder
# ==============================================
#
# PURPOSE:
#   Convert a conventional wide table into the normal form.
#
# HOW IT WORKS:
#
#   wide table
#     │
#     ├─ keys (groups)      → kept as columns, moved to the front
#     ├─ metadata columns   → named by relations (DV~BLQ, or X_Y names)
#     └─ data columns       → everything else
#
#   1. Data columns are stacked: one row per (keys, column),
#      VARIABLE = column name, META missing, VALUE = text.
#   2. simplify → Key Simplifier on the stacked data.
#   3. Each relation's column is stacked the same way, with
#      VARIABLE = described item and META = bare attribute name.
#   4. Relations that qualify are replaced by one encoding
#      string (see encodeability.py).
#   5. An encoding is stored as one key-less row; simplify → Key
#      Simplifier on the remaining metadata rows.
#   6. Metadata rows + data rows → Normal-Form Constructor.
#
# FUNCTION:
# ---------
# - fold_frame(frame, groups, meta, simplify, sort, tol, config) -> DataFrame
#
# ==============================================

import logging
from typing import Any, Iterable, List, Optional, Sequence

import pandas as pd

from metafold.config import FoldConfig, get_config
from metafold.errors import ReservedColumnError, StructuralError
from metafold.normal_form import ValueText, as_folded_frame, simplify_frame
from metafold.tables import CONSTITUTIVE, META, VALUE, VARIABLE
from .encodeability import supply_encoding
from .relations import MetaRelation, attribute_collisions, resolve_relations, unanchored_relations

logger = logging.getLogger(__name__)

ROW = "ROW"


def fold_frame(
    frame: pd.DataFrame,
    groups: Optional[Sequence[str]] = None,
    meta: Any = None,
    simplify: Optional[bool] = None,
    sort: Optional[bool] = None,
    tol: Optional[int] = None,
    config: Optional[FoldConfig] = None,
) -> pd.DataFrame:
    """
    Fold a wide DataFrame into normal form.

    Args:
        frame: The wide table; it is not modified
        groups: Key columns whose combination identifies a record, in
                priority order. Defaults to config.groups.
        meta: Metadata relations. None infers them from column names
              (X_Y → X~Y); an empty list means there is no metadata.
        simplify: Blank out keys that do not help distinguish values
        sort: Sort the result
        tol: Maximum distinct values of an item for an inferred encoding
        config: Defaults for the arguments above

    Returns:
        Normal-form DataFrame: VARIABLE, META, VALUE, keys...

    Raises:
        StructuralError: a key or relation column does not exist
        ReservedColumnError: the table uses VARIABLE, META or VALUE
    """
    config = config or get_config()
    simplify = config.simplify if simplify is None else simplify
    sort = config.sort if sort is None else sort
    tol = config.tol if tol is None else tol
    keys = _key_list(config.groups if groups is None else groups)

    _check_wide(frame, keys)
    source = frame.reset_index(drop=True)

    if not keys:
        logger.info("groups not specified")
        if ROW in source.columns:
            logger.info("%s exists, not making default groups; do you need to supply groups?", ROW)
        else:
            logger.warning("using row position as groups (%s)", ROW)
            source[ROW] = range(1, len(source) + 1)
            keys = [ROW]

    source = source.loc[:, keys + [c for c in source.columns if c not in keys]]

    relations = resolve_relations(meta, list(source.columns), separator=config.separator, exclude=keys)
    absent = [r.column for r in relations if r.column not in source.columns]
    if absent:
        raise StructuralError(f"metadata columns not found: {', '.join(absent)}")
    if meta is None:
        for relation in unanchored_relations(relations, source.columns):
            logger.warning(
                "column %r read as %s, but there is no %r column to attach it to",
                relation.column, relation.formula, relation.variable,
            )

    meta_columns = {r.column for r in relations}
    data_columns = [c for c in source.columns if c not in keys and c not in meta_columns]

    for attribute, owners in attribute_collisions(relations, data_columns).items():
        logger.warning(
            "attribute %r describes %s; anything stored under %r is shared by all of them",
            attribute, ", ".join(owners), attribute,
        )

    folded = _stack(source, keys, data_columns)
    if simplify:
        folded = simplify_frame(folded)

    if relations:
        metadata = _stack_metadata(source, keys, relations, simplify=simplify, tol=tol)
        folded = pd.concat([metadata, folded], ignore_index=True, sort=False)

    folded = _restore_key_dtypes(folded, source, keys)
    return as_folded_frame(folded, sort=sort)


def _key_list(groups: Any) -> List[str]:
    if groups is None:
        return []
    if isinstance(groups, str):
        return [groups]
    return list(groups)


def _check_wide(frame: pd.DataFrame, keys: Sequence[str]) -> None:
    reserved = [name for name in CONSTITUTIVE if name in frame.columns or name in keys]
    if reserved:
        raise ReservedColumnError(
            f"column names {', '.join(reserved)} are reserved for the normal form"
        )

    repeated = frame.columns[frame.columns.duplicated()].tolist()
    if repeated:
        raise StructuralError(f"duplicated column names: {', '.join(map(str, repeated))}")

    missing = [name for name in keys if name not in frame.columns]
    if missing:
        raise StructuralError(f"groups not found: {', '.join(missing)}")

    if len(set(keys)) != len(keys):
        raise StructuralError("groups must not repeat")


def _empty_long(source: pd.DataFrame, keys: Sequence[str]) -> pd.DataFrame:
    long = pd.DataFrame({
        VARIABLE: pd.Series(dtype=object),
        META: pd.Series(dtype=object),
        VALUE: pd.Series(dtype=object),
    })
    for key in keys:
        long[key] = source[key].iloc[:0].reset_index(drop=True)
    return long


def _stack(source: pd.DataFrame, keys: Sequence[str], columns: Sequence[str]) -> pd.DataFrame:
    if not columns:
        return _empty_long(source, keys)

    values = pd.DataFrame({name: ValueText.text_series(source[name]) for name in columns}, index=source.index)
    wide = pd.concat([source.loc[:, list(keys)], values], axis=1)
    long = wide.melt(id_vars=list(keys), value_vars=list(columns), var_name=VARIABLE, value_name=VALUE)
    long[META] = None
    return long.loc[:, [VARIABLE, META, VALUE] + list(keys)]


def _stack_metadata(
    source: pd.DataFrame,
    keys: Sequence[str],
    relations: Iterable[MetaRelation],
    simplify: bool,
    tol: int,
) -> pd.DataFrame:
    parts = []
    for relation in relations:
        part = source.loc[:, list(keys)].reset_index(drop=True)
        part.insert(0, VARIABLE, relation.variable)
        part.insert(1, META, relation.meta)
        part.insert(2, VALUE, ValueText.text_series(source[relation.column]).reset_index(drop=True))

        encoding = supply_encoding(relation, source, tol=tol)
        if encoding is not None:
            part = _encoded_row(part, keys, encoding)
        parts.append(part)

    metadata = pd.concat(parts, ignore_index=True, sort=False).drop_duplicates()
    if simplify:
        metadata = simplify_frame(metadata)
    return metadata.reset_index(drop=True)


def _encoded_row(part: pd.DataFrame, keys: Sequence[str], encoding: str) -> pd.DataFrame:
    # An encoding describes the whole mapping, so it is stored once with no keys.
    row = part.iloc[:1].copy()
    row[VALUE] = encoding
    for key in keys:
        row[key] = row[key].mask(pd.Series(True, index=row.index))
    return row


def _restore_key_dtypes(folded: pd.DataFrame, source: pd.DataFrame, keys: Sequence[str]) -> pd.DataFrame:
    folded = folded.copy()
    for key in keys:
        if key not in folded.columns:
            continue
        original = source[key].dtype
        if isinstance(original, pd.CategoricalDtype):
            folded[key] = folded[key].astype(original)
        elif pd.api.types.is_integer_dtype(original) and not pd.api.types.is_integer_dtype(folded[key].dtype):
            folded[key] = folded[key].astype("Int64")
    return folded
