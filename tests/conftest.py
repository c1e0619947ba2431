# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - clean_config (autouse): no METAFOLD_* variables, fresh singleton
# - pk_events:  dosing records; BLQ is determined by DV and LLOQ is
#               constant, so DV~BLQ encodes and BLQ~LLOQ collapses
# - theoph:     concentrations with labels on both the data item and
#               the Time key (X_Y naming convention)
# - mixed_levels: a per-observation item next to a per-subject item
# - as_text:    helper comparing columns by their text rendering
#
# NOTES:
# ------
# - Use tmp_path for temporary files
# ==============================================

import pandas as pd
import pytest

from metafold.config import reset_config
from metafold.normal_form import ValueText

ENV_VARS = (
    "METAFOLD_GROUPS",
    "METAFOLD_SEPARATOR",
    "METAFOLD_TOL",
    "METAFOLD_SIMPLIFY",
    "METAFOLD_SORT",
    "METAFOLD_DISPLAY_LIMIT",
    "METAFOLD_DISPLAY_ROWS",
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Every test starts from default configuration."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def pk_events() -> pd.DataFrame:
    return pd.DataFrame({
        "ID": [1, 1, 1, 2, 2, 2],
        "TIME": [0, 1, 2, 0, 1, 2],
        "DV": [0.0, 5.5, 2.1, 0.0, 4.8, 1.9],
        "BLQ": [1, 0, 0, 1, 0, 0],
        "LLOQ": [0.5] * 6,
    })


@pytest.fixture
def theoph() -> pd.DataFrame:
    return pd.DataFrame({
        "Subject": [1, 1, 2, 2],
        "Time": [0.0, 1.0, 0.0, 1.0],
        "conc": [0.74, 2.84, 0.0, 1.72],
        "conc_LABEL": ["theophylline concentration"] * 4,
        "conc_GUIDE": ["mg/L"] * 4,
        "Time_LABEL": ["time since drug administration"] * 4,
        "Time_HALF": [0.0, 0.5, 0.0, 0.5],
    })


@pytest.fixture
def mixed_levels() -> pd.DataFrame:
    return pd.DataFrame({
        "ID": [1, 1, 2, 2],
        "TIME": [0, 1, 0, 1],
        "DV": [5, 6, 7, 8],
        "WT": [70, 70, 80, 80],
    })


@pytest.fixture
def as_text():
    """Render a column as the text the normal form would store."""
    def render(series: pd.Series) -> list:
        return ValueText.text_series(series).tolist()
    return render
