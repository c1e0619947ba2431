# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load fold/unfold defaults from environment variables / .env
#   file. The resulting FoldConfig is passed explicitly through
#   the Folder, Distiller and Unfolder; nothing reads global
#   options behind the caller's back.
#
# CLASSES:
# --------
# - FoldConfig (dataclass)
#     groups: tuple[str, ...]  (default ())    → key columns, in priority order
#     separator: str           (default "_")   → metadata naming separator (X_Y)
#     tol: int                 (default 10)    → max categories for inferred encoding
#     simplify: bool           (default True)  → drop redundant keys per item
#     sort: bool               (default True)  → sort fold/unfold results
#     display_limit: int       (default 8)     → chars shown of an encoding
#     display_rows: int        (default 10)    → rows shown by format_folded
#
# FUNCTIONS:
# ----------
# - get_config() -> FoldConfig
#     Load .env using python-dotenv, construct FoldConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton (tests, reloading .env).
#
# ENVIRONMENT:
# ------------
#   METAFOLD_GROUPS          "ID,TIME"
#   METAFOLD_SEPARATOR       "_"
#   METAFOLD_TOL             "10"
#   METAFOLD_SIMPLIFY        "true" / "false"
#   METAFOLD_SORT            "true" / "false"
#   METAFOLD_DISPLAY_LIMIT   "8"
#   METAFOLD_DISPLAY_ROWS    "10"
#
# ==============================================

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


@dataclass(frozen=True)
class FoldConfig:
    """Defaults for fold, unfold and display."""
    groups: Tuple[str, ...] = ()
    separator: str = "_"
    tol: int = 10
    simplify: bool = True
    sort: bool = True
    display_limit: int = 8
    display_rows: int = 10

    def __post_init__(self):
        if not self.separator:
            raise ValueError("separator must be a non-empty string")
        if self.tol < 0:
            raise ValueError("tol must be zero or positive")


# Singleton instance
_config_instance: Optional[FoldConfig] = None


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_groups(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def get_config() -> FoldConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        FoldConfig: Fold/unfold defaults
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    _config_instance = FoldConfig(
        groups=_env_groups("METAFOLD_GROUPS"),
        separator=os.getenv("METAFOLD_SEPARATOR") or "_",
        tol=int(os.getenv("METAFOLD_TOL", "10")),
        simplify=_env_flag("METAFOLD_SIMPLIFY", True),
        sort=_env_flag("METAFOLD_SORT", True),
        display_limit=int(os.getenv("METAFOLD_DISPLAY_LIMIT", "8")),
        display_rows=int(os.getenv("METAFOLD_DISPLAY_ROWS", "10")),
    )

    return _config_instance


def reset_config() -> None:
    global _config_instance
    _config_instance = None
