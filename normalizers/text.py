"""
Text Normalization

Canonicalizes free-text EXIF strings into lookup keys.

Two policies exist side by side:

- ``normalize`` (loose) keeps word boundaries: "Canon  IXY 610F" becomes
  "CANON IXY 610F". The catalog index and every resolver use it.
- ``collapse`` (strict) keeps only ASCII letters and digits: "Canon IXY 610F"
  becomes "CANONIXY610F". Only the canonical model-name helper uses it.

The two policies disagree on separators and are not interchangeable. Keys
produced by one must never be looked up in a table built with the other.
"""

import re
import unicodedata
from typing import Any, List, Optional

_WHITESPACE = re.compile(r'\s+')
_NON_ALNUM = re.compile(r'[^A-Z0-9]+')
_ALPHA_DIGIT_RUN = re.compile(r'[A-Z]+|[0-9]+')


def _fold(value: str) -> str:
    # Uppercasing can leave decomposed sequences behind; recompose so that
    # folding twice gives the same key.
    folded = unicodedata.normalize('NFKC', value).upper()
    return unicodedata.normalize('NFKC', folded)


def normalize(value: Any) -> Optional[str]:
    """
    Loosely normalize a free-text value into a lookup key.

    Applies NFKC, uppercases, collapses whitespace runs to a single space
    and trims.

    Args:
        value: Raw string (anything else is treated as missing)

    Returns:
        Normalized key, or None when nothing is left

    Example:
        >>> normalize("  Canon   PowerShot G7 ")
        'CANON POWERSHOT G7'
        >>> normalize("   ") is None
        True
    """
    if not isinstance(value, str) or not value:
        return None
    normalized = _WHITESPACE.sub(' ', _fold(value)).strip()
    return normalized or None


def collapse(value: Any) -> Optional[str]:
    """
    Strictly collapse a value to its ASCII letters and digits.

    Example:
        >>> collapse("Canon IXY-610F")
        'CANONIXY610F'
    """
    if not isinstance(value, str) or not value:
        return None
    collapsed = _NON_ALNUM.sub('', _fold(value))
    return collapsed or None


def tokenize(value: Any) -> List[str]:
    """
    Split a model string into alphabetic and numeric tokens.

    The value is split into alphanumeric runs, then each run is split again
    at every letter/digit boundary. Tokens keep their first-seen order and
    appear once.

    Example:
        >>> tokenize("IXY610F")
        ['IXY', '610', 'F']
        >>> tokenize("Canon IXY 610F")
        ['CANON', 'IXY', '610', 'F']
    """
    if not isinstance(value, str) or not value:
        return []
    tokens: List[str] = []
    for run in _NON_ALNUM.split(_fold(value)):
        for token in _ALPHA_DIGIT_RUN.findall(run):
            if token not in tokens:
                tokens.append(token)
    return tokens


def join_parts(*parts: Any) -> str:
    """Join the non-empty string parts with single spaces."""
    return " ".join(part for part in parts if isinstance(part, str) and part)
