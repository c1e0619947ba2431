# ==============================================
# Tests for the Command Line Entry Point
# ==============================================

import pandas as pd
import pytest

from metafold.cli import build_parser, main
from metafold.persistence import read_folded
from metafold.tables import META, VALUE, VARIABLE


@pytest.fixture
def wide_csv(pk_events, tmp_path):
    path = tmp_path / "pk.csv"
    pk_events.to_csv(path, index=False)
    return path


class TestParser:

    def test_fold_arguments(self):
        args = build_parser().parse_args(["fold", "in.csv", "out.csv", "--groups", "ID", "TIME", "--tol", "3"])
        assert args.groups == ["ID", "TIME"]
        assert args.tol == 3
        assert args.meta is None
        assert args.simplify is None

    def test_no_simplify(self):
        args = build_parser().parse_args(["fold", "in.csv", "out.csv", "--no-simplify"])
        assert args.simplify is False

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:
    """fold, unfold and show on real files."""

    def test_fold(self, wide_csv, tmp_path, capsys):
        out = tmp_path / "folded.csv"
        code = main(["fold", str(wide_csv), str(out), "--groups", "ID", "TIME", "--meta", "DV~BLQ", "BLQ~LLOQ"])
        assert code == 0
        assert "Folded 6 records into 8 rows" in capsys.readouterr().out

        folded = read_folded(out).frame
        blq = folded[(folded[VARIABLE] == "DV") & (folded[META] == "BLQ")]
        assert blq[VALUE].tolist() == ["//0/1//5.5/0//2.1/0//4.8/0//1.9/0//"]

    def test_unfold(self, wide_csv, tmp_path, capsys):
        folded = tmp_path / "folded.csv"
        wide = tmp_path / "wide.csv"
        main(["fold", str(wide_csv), str(folded), "--groups", "ID", "TIME", "--meta", "DV~BLQ", "BLQ~LLOQ"])

        assert main(["unfold", str(folded), str(wide)]) == 0
        assert "(groups: ID, TIME)" in capsys.readouterr().out
        result = pd.read_csv(wide)
        assert list(result.columns) == ["ID", "TIME", "DV", "DV_BLQ", "BLQ_LLOQ"]
        assert result["DV_BLQ"].tolist() == [1, 0, 0, 1, 0, 0]

    def test_show(self, wide_csv, tmp_path, capsys):
        folded = tmp_path / "folded.csv"
        main(["fold", str(wide_csv), str(folded), "--groups", "ID", "TIME", "--meta", "DV~BLQ", "BLQ~LLOQ"])
        capsys.readouterr()

        assert main(["show", str(folded), "--rows", "2"]) == 0
        assert capsys.readouterr().out.startswith("showing 2 of 8 records")

    def test_missing_input(self, tmp_path, capsys):
        code = main(["unfold", str(tmp_path / "absent.csv"), str(tmp_path / "wide.csv")])
        assert code == 1
        assert "✗" in capsys.readouterr().err

    def test_bad_groups(self, wide_csv, tmp_path, capsys):
        code = main(["fold", str(wide_csv), str(tmp_path / "out.csv"), "--groups", "SUBJECT"])
        assert code == 1
        assert "groups not found: SUBJECT" in capsys.readouterr().err
