import math
import numbers
from typing import Any, Optional

import numpy as np
import pandas as pd


class ValueText:
    MISSING_MARKER = "NA"
    TRUE_TEXT = "TRUE"
    FALSE_TEXT = "FALSE"

    @classmethod
    def is_missing(cls, value: Any) -> bool:
        if not pd.api.types.is_scalar(value):
            return False
        return bool(pd.isna(value))

    @classmethod
    def to_text(cls, value: Any) -> Optional[str]:
        if cls.is_missing(value):
            return None

        if isinstance(value, str):
            return value

        if isinstance(value, (bool, np.bool_)):
            return cls.TRUE_TEXT if value else cls.FALSE_TEXT

        if isinstance(value, numbers.Integral):
            return str(int(value))

        if isinstance(value, numbers.Real):
            number = float(value)
            if math.isinf(number):
                return "Inf" if number > 0 else "-Inf"
            if number.is_integer():
                return str(int(number))
            return repr(number)

        return str(value)

    @classmethod
    def to_marker(cls, value: Any) -> str:
        text = cls.to_text(value)
        return cls.MISSING_MARKER if text is None else text

    @classmethod
    def from_marker(cls, text: str) -> Optional[str]:
        return None if text == cls.MISSING_MARKER else text

    @classmethod
    def text_series(cls, series: pd.Series) -> pd.Series:
        return series.astype(object).map(cls.to_text)

    @classmethod
    def convert(cls, series: pd.Series) -> pd.Series:
        present = series.dropna()
        if present.empty:
            return series

        if present.isin([cls.TRUE_TEXT, cls.FALSE_TEXT]).all():
            flags = series.map({cls.TRUE_TEXT: True, cls.FALSE_TEXT: False})
            return flags.astype("boolean")

        try:
            return pd.to_numeric(series)
        except (ValueError, TypeError):
            return series
