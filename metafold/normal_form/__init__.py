# ==============================================
# NORMAL FORM
# ==============================================
#
# Everything about the folded table itself, independent of
# how it was produced: construction, validation, ordering,
# key simplification and value text.
#
# Modules:
# --------
# - value_text.py   → Stringify values for VALUE, convert them back
# - constructor.py  → Coerce/validate a frame into normal form, sort it
# - simplifier.py   → Minimal key prefix per (VARIABLE, META)
#
# ==============================================

from .value_text import ValueText
from .constructor import as_folded_frame, check_structure, key_columns, sort_folded
from .simplifier import group_ids, simplify_frame

__all__ = [
    "ValueText",
    "as_folded_frame",
    "check_structure",
    "key_columns",
    "sort_folded",
    "group_ids",
    "simplify_frame",
]
