# ==============================================
# Tests for the Encodeability Decision
# ==============================================

import logging

import pandas as pd

from metafold.folding import MetaRelation
from metafold.folding.encodeability import build_encoding, is_encodeable, is_mapped, supply_encoding


class TestIsMapped:

    def test_mapped(self):
        assert is_mapped(pd.Series([1, 1, 2]), pd.Series(["a", "a", "b"]))

    def test_not_mapped(self):
        """One x with two y values"""
        assert not is_mapped(pd.Series([1, 1]), pd.Series(["a", "b"]))

    def test_missing_is_a_value(self):
        assert is_mapped(pd.Series([None, None, 1.0]), pd.Series(["m", "m", "p"]))


class TestIsEncodeable:
    """Tests for is_encodeable."""

    def test_few_categories(self):
        assert is_encodeable(pd.Series([0, 1, 0]), pd.Series(["no", "yes", "no"]))

    def test_constant_attribute(self):
        """A constant attribute is kept as a plain value."""
        assert not is_encodeable(pd.Series([0, 1, 0]), pd.Series(["x", "x", "x"]))

    def test_too_many_categories(self):
        x = pd.Series(range(5))
        y = pd.Series(["a", "b", "a", "b", "a"])
        assert is_encodeable(x, y, tol=5)
        assert not is_encodeable(x, y, tol=3)

    def test_categorical_overrides_tolerance(self):
        x = pd.Series(range(20))
        y = pd.Series(pd.Categorical([f"c{i}" for i in range(20)]))
        assert is_encodeable(x, y, tol=3)

    def test_not_mapped(self):
        assert not is_encodeable(pd.Series([1, 1]), pd.Series(["a", "b"]))

    def test_empty_or_unequal(self):
        assert not is_encodeable(pd.Series([], dtype=float), pd.Series([], dtype=float))
        assert not is_encodeable(pd.Series([1, 2]), pd.Series(["a"]))


class TestBuildEncoding:

    def test_first_appearance_order(self):
        x = pd.Series([1, 0, 1])
        y = pd.Series(["yes", "no", "yes"])
        assert build_encoding(x, y) == "//1/yes//0/no//"

    def test_categorical_order(self):
        x = pd.Series(pd.Categorical(["hi", "lo", "hi"], categories=["lo", "hi"]))
        y = pd.Series(["H", "L", "H"])
        assert build_encoding(x, y) == "//lo/L//hi/H//"


class TestSupplyEncoding:
    """Tests for supply_encoding."""

    def test_encodes_relation(self, pk_events):
        encoding = supply_encoding(MetaRelation("DV", "BLQ", "BLQ"), pk_events)
        assert encoding == "//0/1//5.5/0//2.1/0//4.8/0//1.9/0//"

    def test_tolerance(self, pk_events):
        assert supply_encoding(MetaRelation("DV", "BLQ", "BLQ"), pk_events, tol=3) is None

    def test_described_item_not_a_column(self, pk_events):
        assert supply_encoding(MetaRelation("AMT", "BLQ", "BLQ"), pk_events) is None

    def test_unencodable_values_warn(self, caplog):
        every = "/|:;~^#!"
        source = pd.DataFrame({"X": [every, "b"], "X_LABEL": ["one", "two"]})
        relation = MetaRelation("X", "LABEL", "X_LABEL")
        with caplog.at_level(logging.WARNING):
            assert supply_encoding(relation, source) is None
        assert "cannot encode X~LABEL" in caplog.text
