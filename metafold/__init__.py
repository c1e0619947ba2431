# ==============================================
# metafold — Folded Normal Form for Tabular Data
# ==============================================
#
# Package Structure:
#
# metafold/
# ├── normal_form/     # The folded table: construct, validate, sort, simplify keys
# ├── encoding/        # Code -> label mappings stored as one string
# ├── folding/         # Wide table -> normal form
# ├── unfolding/       # Normal form -> wide table (distill, merge, unfold)
# ├── persistence/     # CSV import / export
# ├── tables.py        # Tagged table variants (WIDE, GROUPED, FOLDED, UNFOLDED)
# ├── operations.py    # Public entry points with explicit dispatch
# ├── display.py       # Shortened rendering of encodings
# ├── config.py        # Configuration management
# ├── errors.py        # Exceptions
# └── cli.py           # Command line entry point
#
# ==============================================

__version__ = "0.1.0"

from metafold.config import FoldConfig, get_config, reset_config
from metafold.display import format_folded
from metafold.errors import CyclicMetadataError, ReservedColumnError, StructuralError
from metafold.folding import MetaRelation
from metafold.operations import as_folded, distill, fold, simplify, sort, unfold
from metafold.tables import META, VALUE, VARIABLE, Table, TableKind

__all__ = [
    "FoldConfig",
    "get_config",
    "reset_config",
    "format_folded",
    "CyclicMetadataError",
    "ReservedColumnError",
    "StructuralError",
    "MetaRelation",
    "as_folded",
    "distill",
    "fold",
    "simplify",
    "sort",
    "unfold",
    "META",
    "VALUE",
    "VARIABLE",
    "Table",
    "TableKind",
]
