# ==============================================
# Tests for Tables and Public Operations
# ==============================================

import pandas as pd
import pytest

from metafold import (
    META,
    VALUE,
    VARIABLE,
    StructuralError,
    Table,
    TableKind,
    as_folded,
    distill,
    fold,
    simplify,
    sort,
    unfold,
)

PK_META = ["DV~BLQ", "BLQ~LLOQ"]


# ==============================================
# Table Variants
# ==============================================

class TestTable:
    """Tests for Table.wrap and friends."""

    def test_plain_frame_is_wide(self, pk_events):
        assert Table.wrap(pk_events).kind is TableKind.WIDE

    def test_frame_with_groups_attr(self, pk_events):
        pk_events.attrs["groups"] = ["ID", "TIME"]
        table = Table.wrap(pk_events)
        assert table.kind is TableKind.GROUPED
        assert table.keys == ("ID", "TIME")

    def test_wrap_rejects_other_types(self):
        with pytest.raises(TypeError):
            Table.wrap([1, 2, 3])

    def test_folded_keys(self, pk_events):
        folded = fold(pk_events, groups=["ID", "TIME"], meta=PK_META)
        assert folded.kind is TableKind.FOLDED
        assert folded.keys == ("ID", "TIME")
        assert len(folded) == 8


# ==============================================
# Dispatch
# ==============================================

class TestFold:
    """Tests for fold dispatch."""

    def test_folding_folded_is_identity(self, pk_events):
        folded = fold(pk_events, groups=["ID", "TIME"], meta=PK_META)
        assert fold(folded) is folded
        assert as_folded(folded) is folded

    def test_grouped_table_supplies_groups(self, pk_events):
        folded = fold(Table.grouped(pk_events, ["ID", "TIME"]), meta=PK_META)
        assert folded.keys == ("ID", "TIME")

    def test_groups_argument_wins(self, mixed_levels):
        folded = fold(Table.grouped(mixed_levels, ["ID", "TIME"]), groups=["TIME", "ID"], meta=[])
        assert folded.keys == ("TIME", "ID")

    def test_unfolded_table_folds_with_its_groups(self, pk_events):
        folded = fold(pk_events, groups=["ID", "TIME"], meta=PK_META)
        unfolded = unfold(folded)
        refolded = fold(unfolded, meta=[])
        assert refolded.keys == ("ID", "TIME")
        dv = refolded.frame[(refolded.frame[VARIABLE] == "DV") & refolded.frame[META].isna()]
        assert dv[VALUE].tolist() == ["0", "5.5", "2.1", "0", "4.8", "1.9"]


class TestUnfold:
    """Tests for unfold dispatch."""

    def test_result_records_groups(self, pk_events):
        unfolded = unfold(fold(pk_events, groups=["ID", "TIME"], meta=PK_META))
        assert unfolded.kind is TableKind.UNFOLDED
        assert unfolded.groups == ("ID", "TIME")
        assert len(unfolded) == 6

    def test_grouped_table_rejected(self, pk_events):
        with pytest.raises(TypeError):
            unfold(Table.grouped(pk_events, ["ID"]))

    def test_plain_frame_in_normal_form(self):
        frame = pd.DataFrame({VARIABLE: ["DV", "DV"], META: [None, None], VALUE: ["1", "2"], "ID": [1, 2]})
        unfolded = unfold(frame)
        assert unfolded.frame["DV"].tolist() == [1, 2]

    def test_plain_frame_not_in_normal_form(self, pk_events):
        with pytest.raises(StructuralError):
            unfold(pk_events)


class TestHelpers:

    def test_distill(self, pk_events):
        folded = fold(pk_events, groups=["ID", "TIME"], meta=PK_META)
        fragment = distill(folded, "BLQ")
        assert fragment["BLQ_LLOQ"].tolist() == [0.5]

    def test_simplify(self, pk_events):
        unsimplified = fold(pk_events, groups=["ID", "TIME"], meta=[], simplify=False)
        simplified = simplify(unsimplified)
        assert simplified.kind is TableKind.FOLDED
        assert len(simplified) < len(unsimplified)

    def test_sort_decreasing(self, pk_events):
        folded = fold(pk_events, groups=["ID", "TIME"], meta=PK_META)
        ascending = sort(folded).frame[VALUE].tolist()
        descending = sort(folded, decreasing=True).frame[VALUE].tolist()
        assert descending == ascending[::-1]

    def test_as_folded_validates(self):
        with pytest.raises(StructuralError):
            as_folded(pd.DataFrame({VARIABLE: ["a"]}))
