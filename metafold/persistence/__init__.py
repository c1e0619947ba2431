# ==============================================
# PERSISTENCE (CSV import / export)
# ==============================================
#
# The normal form is the interchange format; this package
# moves it (and wide tables) in and out of CSV files.
#
# Modules:
# --------
# - csv_store.py  → write_table / read_folded / read_table
#
# ==============================================

from .csv_store import read_folded, read_table, write_table

__all__ = ["read_folded", "read_table", "write_table"]
