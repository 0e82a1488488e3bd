"""
Approximate token ("unit") estimation and counting views of text.
"""

import re
import unicodedata
from collections import Counter
from enum import Enum
from typing import List, NamedTuple, Tuple

from ..core.errors import ConfigurationError

# One unit per 4 characters of counted text
UNIT_CHAR_RATIO = 4

_KEPT_CATEGORIES = ("L", "N", "P", "Z")
_WORD_RE = re.compile(r"(?:[^\W_]|')+")


class CleanMode(Enum):
    """Which characters survive in the counting view of a text."""

    RETAIN_ALL = "none"
    ASCII_ONLY = "ascii"
    RESTRICTED = "unicode"

    @classmethod
    def parse(cls, value: "str | CleanMode") -> "CleanMode":
        """Parse a CLI/config spelling (unicode|ascii|none)."""
        if isinstance(value, CleanMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown clean mode: {value!r} (use unicode|ascii|none)"
            ) from None


def _keep_restricted(ch: str) -> bool:
    return ch.isspace() or unicodedata.category(ch)[0] in _KEPT_CATEGORIES


def counting_view(text: str, mode: CleanMode = CleanMode.RESTRICTED) -> str:
    """Return the filtered copy of text used only for sizing.

    The emitted chunk text is never taken from this view.
    """
    if mode is CleanMode.RETAIN_ALL:
        return text
    if mode is CleanMode.ASCII_ONLY:
        return "".join(ch for ch in text if ord(ch) < 128)
    return "".join(ch for ch in text if _keep_restricted(ch))


def estimate_units(text: str, mode: CleanMode = CleanMode.RESTRICTED) -> int:
    """Estimate units as counted chars // 4, never less than 1."""
    return max(1, len(counting_view(text, mode)) // UNIT_CHAR_RATIO)


def count_words(text: str) -> int:
    """Count runs of letters, digits and apostrophes."""
    return sum(1 for _ in _WORD_RE.finditer(text))


def top_words(text: str, n: int = 10) -> List[Tuple[str, int]]:
    """Most frequent lower-cased words longer than two characters."""
    freq = Counter(
        word for word in _WORD_RE.findall(text.lower()) if len(word) > 2
    )
    return freq.most_common(n)


class TextStats(NamedTuple):
    """Whole-document statistics for the estimate command."""

    clean_mode: CleanMode
    cleaned_chars: int
    units: int
    words: int
    top_words: List[Tuple[str, int]]


def analyze_text(
    text: str, mode: CleanMode = CleanMode.RESTRICTED, top_n: int = 10
) -> TextStats:
    view = counting_view(text, mode)
    return TextStats(
        clean_mode=mode,
        cleaned_chars=len(view),
        units=max(1, len(view) // UNIT_CHAR_RATIO),
        words=count_words(view),
        top_words=top_words(view, top_n),
    )
