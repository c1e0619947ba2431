# ==============================================
# UNFOLDING
# ==============================================
#
# Normal form → wide table.
#
# Modules:
# --------
# - merge.py      → combine wide fragments (outer merge, cross join, reposition)
# - distiller.py  → one item plus its metadata tree, decoding encodings
# - unfolder.py   → all (or selected) items, key metadata, groups, sort
#
# ==============================================

from .merge import informative, is_empty, meta_merge, move_after, outer_merge, weld
from .distiller import decode_column, distill
from .unfolder import data_variables, unfold_frame

__all__ = [
    "informative",
    "is_empty",
    "meta_merge",
    "move_after",
    "outer_merge",
    "weld",
    "decode_column",
    "distill",
    "data_variables",
    "unfold_frame",
]
