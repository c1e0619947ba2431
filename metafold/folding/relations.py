# ==============================================
# Metadata Relations
# ==============================================
#
# PURPOSE:
#   Describe which wide-table columns are metadata, and of what.
#   A relation "DV~BLQ" reads: column BLQ holds attribute "BLQ"
#   of data item "DV".
#
# CLASS: MetaRelation (frozen dataclass)
# --------------------------------------
#   - variable: str   → the described item (left of ~)
#   - meta: str       → the bare attribute name (right of ~)
#   - column: str     → the wide-table column holding the values
#
# FUNCTIONS:
# ----------
# - infer_relations(columns, separator, exclude) -> list[MetaRelation]
#     Naming convention: "X_Y" → X~Y stored in column "X_Y".
#     Splits on the FIRST separator only; left and right parts
#     must both be non-empty.
#
# - resolve_relations(meta, columns, separator, exclude) -> list[MetaRelation]
#     None → infer; a mapping {column: "X~Y"}; or a sequence of
#     "X~Y" strings, (X, Y) tuples or MetaRelation objects.
#     An empty sequence means "no metadata" (suppresses inference).
#
# - attribute_collisions(relations, data_variables) -> dict
#     Attribute names shared by several parents that are also
#     described themselves (or are data items). Their metadata
#     would be merged across unrelated parents.
#
# - unanchored_relations(relations, columns) -> list[MetaRelation]
#     Relations describing an item that is neither a column nor
#     an attribute of another relation, e.g. "first_name" when
#     there is no "first" column.
#
# ==============================================

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from metafold.tables import CONSTITUTIVE

FORMULA_SEPARATOR = "~"


@dataclass(frozen=True)
class MetaRelation:
    """One object ~ attribute relationship."""
    variable: str
    meta: str
    column: str

    @property
    def formula(self) -> str:
        return f"{self.variable}{FORMULA_SEPARATOR}{self.meta}"

    @classmethod
    def parse(cls, formula: Any, column: Optional[str] = None) -> "MetaRelation":
        """
        Build a relation from "X~Y", (X, Y) or an existing MetaRelation.

        Args:
            formula: "X~Y", a pair or a MetaRelation
            column: Column holding the attribute values. Defaults to the
                    attribute name itself (e.g. "DV~BLQ" reads column BLQ).

        Raises:
            ValueError: formula cannot be read as a relation
        """
        if isinstance(formula, MetaRelation):
            if column is None or column == formula.column:
                return formula
            return cls(formula.variable, formula.meta, column)

        if isinstance(formula, str):
            parts = [part.strip() for part in formula.split(FORMULA_SEPARATOR)]
        elif isinstance(formula, (tuple, list)):
            parts = [str(part).strip() for part in formula]
        else:
            raise ValueError(f"cannot read a metadata relation from {formula!r}")

        if len(parts) != 2 or not all(parts):
            raise ValueError(f"metadata relation must look like 'object~attribute', got {formula!r}")

        variable, meta = parts
        return cls(variable, meta, column or meta)


def infer_relations(
    columns: Iterable[str],
    separator: str = "_",
    exclude: Iterable[str] = (),
) -> List[MetaRelation]:
    excluded = set(exclude) | set(CONSTITUTIVE)
    relations = []
    for name in columns:
        if not isinstance(name, str) or name in excluded:
            continue
        variable, found, meta = name.partition(separator)
        if not found or not variable or not meta:
            continue
        relations.append(MetaRelation(variable, meta, name))
    return relations


def resolve_relations(
    meta: Any,
    columns: Sequence[str],
    separator: str = "_",
    exclude: Iterable[str] = (),
) -> List[MetaRelation]:
    if meta is None:
        return infer_relations(columns, separator=separator, exclude=exclude)
    if isinstance(meta, Mapping):
        return [MetaRelation.parse(formula, column=column) for column, formula in meta.items()]
    if isinstance(meta, (str, MetaRelation)):
        return [MetaRelation.parse(meta)]
    return [MetaRelation.parse(formula) for formula in meta]


def attribute_collisions(
    relations: Sequence[MetaRelation],
    data_variables: Iterable[str] = (),
) -> Dict[str, Tuple[str, ...]]:
    parents: Dict[str, List[str]] = {}
    for relation in relations:
        owners = parents.setdefault(relation.meta, [])
        if relation.variable not in owners:
            owners.append(relation.variable)

    described = {relation.variable for relation in relations} | set(data_variables)
    return {
        meta: tuple(owners)
        for meta, owners in parents.items()
        if len(owners) > 1 and meta in described
    }


def unanchored_relations(relations: Sequence[MetaRelation], columns: Iterable[str]) -> List[MetaRelation]:
    """
    Relations whose described item is neither a column nor the attribute
    of another relation. Unfolding has nothing to attach them to, so
    their values only come back through distill().
    """
    anchors = set(columns) | {relation.meta for relation in relations}
    return [relation for relation in relations if relation.variable not in anchors]
