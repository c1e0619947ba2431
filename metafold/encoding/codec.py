# ==============================================
# Encoding Codec
# ==============================================
#
# PURPOSE:
#   Serialize a finite code -> label mapping as one opaque
#   string, and read it back.
#
# FORMAT:
#   "//1/male//2/female//"
#     - the separator is doubled at both ends and between entries
#     - a single separator splits code from label
#     - missing codes or labels are written as the literal "NA"
#
#   The separator is the first candidate that does not occur in
#   any code or label, so "/" is used unless the values contain it.
#
# FUNCTIONS:
# ----------
# - encode(codes, labels) -> str
# - is_encoded(value) -> bool
# - codes(encoding) -> list[str]
# - decodes(encoding) -> list[str]
#
# ==============================================

from typing import Any, Iterable, List, Optional, Sequence, Tuple

from metafold.normal_form.value_text import ValueText

SEPARATOR_CANDIDATES = ("/", "|", ":", ";", "~", "^", "#", "!")


def _choose_separator(values: Sequence[str]) -> Optional[str]:
    for candidate in SEPARATOR_CANDIDATES:
        if not any(candidate in value for value in values):
            return candidate
    return None


def encode(codes: Iterable[Any], labels: Optional[Iterable[Any]] = None) -> str:
    """
    Build an encoding from parallel sequences of codes and labels.

    Args:
        codes: Category codes; each is stringified, missing becomes "NA"
        labels: Descriptive labels, same length as codes. Defaults to
                empty labels.

    Returns:
        The encoded string, e.g. "//0/no//1/yes//"

    Raises:
        ValueError: if lengths differ, a code is empty or repeated, or no
                    separator can represent the values unambiguously
    """
    code_text = [ValueText.to_marker(code) for code in codes]
    if labels is None:
        label_text = ["" for _ in code_text]
    else:
        label_text = [ValueText.to_marker(label) for label in labels]

    if len(code_text) != len(label_text):
        raise ValueError(
            f"codes and labels differ in length ({len(code_text)} vs {len(label_text)})"
        )
    if not code_text:
        raise ValueError("cannot encode an empty mapping")
    if any(code == "" for code in code_text):
        raise ValueError("codes must be non-empty")
    if len(set(code_text)) != len(code_text):
        raise ValueError("codes must be unique")

    separator = _choose_separator(code_text + label_text)
    if separator is None:
        raise ValueError("no separator available for these codes and labels")

    # An empty label directly before the entry break would read as a
    # tripled separator.
    if any(label == "" for label in label_text) and len(label_text) > 1:
        raise ValueError("labels must be non-empty when encoding several codes")

    double = separator * 2
    entries = [f"{code}{separator}{label}" for code, label in zip(code_text, label_text)]
    return double + double.join(entries) + double


def _parse(value: Any) -> Optional[List[Tuple[str, str]]]:
    if not isinstance(value, str):
        return None
    text = value.strip()
    if len(text) < 5:
        return None

    separator = text[0]
    if separator.isalnum() or separator.isspace():
        return None
    double = separator * 2
    if not (text.startswith(double) and text.endswith(double)):
        return None

    body = text[2:-2]
    if not body:
        return None

    pairs = []
    for entry in body.split(double):
        parts = entry.split(separator)
        if len(parts) == 1:
            parts.append("")
        if len(parts) != 2 or parts[0] == "":
            return None
        pairs.append((parts[0], parts[1]))
    return pairs


def is_encoded(value: Any) -> bool:
    """Return True if value is a string laid out as an encoding."""
    return _parse(value) is not None


def codes(encoding: str) -> List[str]:
    pairs = _parse(encoding)
    if pairs is None:
        raise ValueError(f"not an encoding: {encoding!r}")
    return [code for code, _ in pairs]


def decodes(encoding: str) -> List[str]:
    pairs = _parse(encoding)
    if pairs is None:
        raise ValueError(f"not an encoding: {encoding!r}")
    return [label for _, label in pairs]
