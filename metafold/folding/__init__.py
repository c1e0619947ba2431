# ==============================================
# FOLDING
# ==============================================
#
# Wide table → normal form.
#
# Modules:
# --------
# - relations.py      → object~attribute relations, explicit or by naming convention
# - encodeability.py  → decide whether a relation is stored as one encoding
# - folder.py         → stack data and metadata, simplify keys, build normal form
#
# ==============================================

from .relations import MetaRelation, attribute_collisions, infer_relations, resolve_relations, unanchored_relations
from .encodeability import build_encoding, is_encodeable, is_mapped, supply_encoding
from .folder import ROW, fold_frame

__all__ = [
    "MetaRelation",
    "attribute_collisions",
    "infer_relations",
    "resolve_relations",
    "unanchored_relations",
    "build_encoding",
    "is_encodeable",
    "is_mapped",
    "supply_encoding",
    "ROW",
    "fold_frame",
]
