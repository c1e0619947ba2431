# ==============================================
# Tests for the Distiller
# ==============================================

import logging

import pandas as pd
import pytest

from metafold.errors import CyclicMetadataError
from metafold.folding import fold_frame
from metafold.normal_form import as_folded_frame
from metafold.tables import META, VALUE, VARIABLE
from metafold.unfolding import decode_column, distill


def normal_form(records) -> pd.DataFrame:
    return as_folded_frame(pd.DataFrame(records, columns=[VARIABLE, META, VALUE]))


# ==============================================
# Distill
# ==============================================

class TestDistill:
    """Tests for distill."""

    def test_data_item_with_encoded_attribute(self, pk_events):
        folded = fold_frame(pk_events, groups=["ID", "TIME"], meta=["DV~BLQ", "BLQ~LLOQ"])
        fragment = distill(folded, "DV")
        assert list(fragment.columns) == ["ID", "TIME", "DV", "DV_BLQ", "BLQ_LLOQ"]
        assert fragment["DV_BLQ"].astype(str).tolist() == ["1", "0", "0", "1", "0", "0"]
        assert list(fragment["DV_BLQ"].cat.categories) == ["1", "0"]
        assert fragment["BLQ_LLOQ"].tolist() == [0.5] * 6

    def test_attribute_only_item(self, pk_events):
        """BLQ has no data rows; only its metadata comes back."""
        folded = fold_frame(pk_events, groups=["ID", "TIME"], meta=["DV~BLQ", "BLQ~LLOQ"])
        fragment = distill(folded, "BLQ")
        assert list(fragment.columns) == ["BLQ_LLOQ"]
        assert fragment["BLQ_LLOQ"].tolist() == [0.5]

    def test_unknown_item(self, pk_events):
        folded = fold_frame(pk_events, groups=["ID", "TIME"], meta=[])
        assert distill(folded, "AMT").empty

    def test_numbers_converted(self, pk_events):
        folded = fold_frame(pk_events, groups=["ID", "TIME"], meta=[])
        fragment = distill(folded, "DV")
        assert fragment["DV"].tolist() == [0.0, 5.5, 2.1, 0.0, 4.8, 1.9]

    def test_seed_receives_decoded_labels(self):
        folded = normal_form([
            ["SEX", "LABEL", "//0/female//1/male//"],
        ])
        seed = pd.DataFrame({"SEX": [1, 0]})
        fragment = distill(folded, "SEX", seed=seed)
        assert fragment["SEX_LABEL"].astype(str).tolist() == ["male", "female"]

    def test_cycle(self):
        folded = normal_form([
            ["A", None, "1"],
            ["A", "B", "x"],
            ["B", "A", "y"],
        ])
        with pytest.raises(CyclicMetadataError) as excinfo:
            distill(folded, "A")
        assert excinfo.value.lineage == ("A", "B")
        assert excinfo.value.attribute == "A"
        assert "A -> B -> A" in str(excinfo.value)

    def test_self_reference(self):
        folded = normal_form([["A", None, "1"], ["A", "A", "z"]])
        with pytest.raises(CyclicMetadataError):
            distill(folded, "A")


# ==============================================
# Decode
# ==============================================

class TestDecodeColumn:
    """Tests for decode_column."""

    def test_decode(self):
        frame = pd.DataFrame({"BLQ": [0, 1, 0]})
        decoded = decode_column(frame, "BLQ", "//0/no//1/yes//", "BLQ_LABEL")
        assert decoded["BLQ_LABEL"].astype(str).tolist() == ["no", "yes", "no"]
        assert list(decoded["BLQ_LABEL"].cat.categories) == ["no", "yes"]
        assert "BLQ_LABEL" not in frame.columns

    def test_unlisted_code_is_missing(self):
        frame = pd.DataFrame({"BLQ": [0, 2]})
        decoded = decode_column(frame, "BLQ", "//0/no//1/yes//", "BLQ_LABEL")
        assert pd.isna(decoded["BLQ_LABEL"].iloc[1])

    def test_target_exists(self, caplog):
        frame = pd.DataFrame({"BLQ": [0], "BLQ_LABEL": ["kept"]})
        with caplog.at_level(logging.WARNING):
            decoded = decode_column(frame, "BLQ", "//0/no//1/yes//", "BLQ_LABEL")
        assert decoded["BLQ_LABEL"].tolist() == ["kept"]
        assert "already present" in caplog.text

    def test_not_an_encoding(self, caplog):
        frame = pd.DataFrame({"BLQ": [0]})
        with caplog.at_level(logging.WARNING):
            decoded = decode_column(frame, "BLQ", "plain", "BLQ_LABEL")
        assert decoded is frame
        assert "appears not to be encoded" in caplog.text

    def test_absent_column(self):
        frame = pd.DataFrame({"DV": [1]})
        assert decode_column(frame, "BLQ", "//0/no//1/yes//", "BLQ_LABEL") is frame
