# ==============================================
# Errors
# ==============================================
#
# Only structural problems are fatal. Data-quality issues
# (duplicates, undecodable values, empty fragments) are
# logged and recovered where they occur.
#
# ==============================================


class StructuralError(ValueError):
    """A table is missing a required column or names one that does not exist."""


class ReservedColumnError(StructuralError):
    """VARIABLE, META or VALUE was used as a key or data column name."""


class CyclicMetadataError(RuntimeError):
    """Metadata describes an item already present in its own lineage."""

    def __init__(self, lineage, attribute):
        self.lineage = tuple(lineage)
        self.attribute = attribute
        chain = " -> ".join(self.lineage + (attribute,))
        super().__init__(f"cyclic metadata: {chain}")
