# ==============================================
# Display
# ==============================================
#
# PURPOSE:
#   Render a folded table for people. Encodings can be very long,
#   so encoded values over a character limit are cut short with
#   "..." appended. Display only; the data is never changed.
#
# FUNCTIONS:
# ----------
# - shorten(value, limit=8) -> value
# - shorten_column(series, limit=8) -> Series
# - format_folded(table, limit=None, rows=None, config=None) -> str
#     "showing n of N records" followed by the first n rows.
#
# ==============================================

from typing import Any, Optional, Union

import pandas as pd

from metafold.config import FoldConfig, get_config
from metafold.encoding import is_encoded
from metafold.tables import Table

ELLIPSIS = "..."


def shorten(value: Any, limit: int = 8) -> Any:
    if isinstance(value, str) and len(value) > limit and is_encoded(value):
        return value[:limit] + ELLIPSIS
    return value


def shorten_column(series: pd.Series, limit: int = 8) -> pd.Series:
    if not (pd.api.types.is_object_dtype(series) or pd.api.types.is_string_dtype(series)):
        return series
    return series.map(lambda value: shorten(value, limit=limit))


def format_folded(
    table: Union[Table, pd.DataFrame],
    limit: Optional[int] = None,
    rows: Optional[int] = None,
    config: Optional[FoldConfig] = None,
) -> str:
    """
    Format the first rows of a table with long encodings shortened.

    Args:
        table: A Table or DataFrame
        limit: Characters of an encoding to show (default config.display_limit)
        rows: Number of rows to show (default config.display_rows)
        config: Display defaults

    Returns:
        The rendered text
    """
    config = config or get_config()
    limit = config.display_limit if limit is None else limit
    rows = config.display_rows if rows is None else rows

    frame = table.frame if isinstance(table, Table) else table
    total = len(frame)
    shown = max(0, min(rows, total))

    head = frame.head(shown).copy()
    for name in head.columns:
        head[name] = shorten_column(head[name], limit=limit)

    return f"showing {shown} of {total} records\n{head.to_string(index=False)}"
