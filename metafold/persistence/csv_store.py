# ==============================================
# CSV Store
# ==============================================
#
# PURPOSE:
#   Read and write wide and folded tables as CSV with a header.
#
# WHAT IS WRITTEN:
#   - one column per DataFrame column, no index
#   - missing values as empty fields
#   - VALUE written exactly as stored (text, encodings included)
#
# WHAT IS READ:
#   - read_folded: VARIABLE, META and VALUE are read as text and
#     only empty fields count as missing, so a literal "NA" VALUE
#     survives; the frame is validated as normal form
#   - read_table: pandas defaults; optional groups tag the table
#
# FUNCTIONS:
# ----------
# - write_table(table, path) -> Path
# - read_folded(path) -> Table (FOLDED)
# - read_table(path, groups=None) -> Table (WIDE or GROUPED)
#
# ==============================================

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import pandas as pd

from metafold.normal_form import as_folded_frame
from metafold.tables import META, VALUE, VARIABLE, Table

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def write_table(table: Union[Table, pd.DataFrame], path: PathLike) -> Path:
    """
    Write a table to CSV.

    Args:
        table: Table or DataFrame
        path: Target file; parent directories are created

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    frame = table.frame if isinstance(table, Table) else table
    frame.to_csv(path, index=False)
    logger.info("saved %d records to %s", len(frame), path)
    return path


def read_folded(path: PathLike) -> Table:
    """
    Read a folded table written by write_table.

    Raises:
        FileNotFoundError: path does not exist
        StructuralError: the file is not in normal form
    """
    path = Path(path)
    frame = pd.read_csv(
        path,
        dtype={VARIABLE: str, META: str, VALUE: str},
        keep_default_na=False,
        na_values=[""],
    )
    logger.info("loaded %d folded records from %s", len(frame), path)
    return Table.folded(as_folded_frame(frame, sort=False))


def read_table(path: PathLike, groups: Optional[Sequence[str]] = None) -> Table:
    """Read a wide table; with groups it is tagged GROUPED."""
    path = Path(path)
    frame = pd.read_csv(path)
    logger.info("loaded %d records from %s", len(frame), path)
    if groups:
        return Table.grouped(frame, groups)
    return Table.wide(frame)
