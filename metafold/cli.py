# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Fold and unfold CSV files from the shell.
#
# COMMANDS:
# ---------
# 1. Fold a wide CSV into normal form:
#    metafold fold data.csv folded.csv --groups ID TIME --meta DV~BLQ BLQ~LLOQ
#    metafold fold data.csv folded.csv --groups ID TIME --tol 3 --no-simplify
#
# 2. Unfold a folded CSV (optionally only some items):
#    metafold unfold folded.csv wide.csv
#    metafold unfold folded.csv wide.csv --variables DV SEX
#
# 3. Show the first records of a folded CSV:
#    metafold show folded.csv --limit 8 --rows 10
#
#   Also runnable as: python -m metafold.cli ...
#
# ==============================================

import argparse
import logging
import sys
from typing import List, Optional

from metafold.config import get_config
from metafold.display import format_folded
from metafold.errors import CyclicMetadataError, StructuralError
from metafold.operations import fold, unfold
from metafold.persistence import read_folded, read_table, write_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metafold",
        description="Fold wide tables into VARIABLE/META/VALUE normal form and back.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log informational messages")
    commands = parser.add_subparsers(dest="command", required=True)

    fold_cmd = commands.add_parser("fold", help="wide CSV -> folded CSV")
    fold_cmd.add_argument("input", help="wide CSV file")
    fold_cmd.add_argument("output", help="folded CSV file to write")
    fold_cmd.add_argument("--groups", nargs="*", default=None, help="key columns, in priority order")
    fold_cmd.add_argument(
        "--meta", nargs="*", default=None,
        help="relations like DV~BLQ; give --meta with no values to disable inference",
    )
    fold_cmd.add_argument("--tol", type=int, default=None, help="max categories for an inferred encoding")
    fold_cmd.add_argument("--no-simplify", dest="simplify", action="store_false", default=None)
    fold_cmd.add_argument("--no-sort", dest="sort", action="store_false", default=None)

    unfold_cmd = commands.add_parser("unfold", help="folded CSV -> wide CSV")
    unfold_cmd.add_argument("input", help="folded CSV file")
    unfold_cmd.add_argument("output", help="wide CSV file to write")
    unfold_cmd.add_argument("--variables", nargs="*", default=None, help="items to unfold")
    unfold_cmd.add_argument("--no-sort", dest="sort", action="store_false", default=None)

    show_cmd = commands.add_parser("show", help="print the first records of a folded CSV")
    show_cmd.add_argument("input", help="folded CSV file")
    show_cmd.add_argument("--limit", type=int, default=None, help="characters of an encoding to show")
    show_cmd.add_argument("--rows", type=int, default=None, help="records to show")

    return parser


def _fold(args: argparse.Namespace) -> None:
    table = read_table(args.input, groups=args.groups)
    folded = fold(table, meta=args.meta, simplify=args.simplify, sort=args.sort, tol=args.tol)
    write_table(folded, args.output)
    print(f"✓ Folded {len(table)} records into {len(folded)} rows → {args.output}")


def _unfold(args: argparse.Namespace) -> None:
    folded = read_folded(args.input)
    wide = unfold(folded, variables=args.variables, sort=args.sort)
    write_table(wide, args.output)
    groups = ", ".join(wide.groups) or "none"
    print(f"✓ Unfolded {len(folded)} rows into {len(wide)} records (groups: {groups}) → {args.output}")


def _show(args: argparse.Namespace) -> None:
    folded = read_folded(args.input)
    print(format_folded(folded, limit=args.limit, rows=args.rows))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    get_config()

    handlers = {"fold": _fold, "unfold": _unfold, "show": _show}
    try:
        handlers[args.command](args)
    except (StructuralError, CyclicMetadataError, FileNotFoundError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
