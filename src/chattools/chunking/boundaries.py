"""
Boundary detection for budgeted chunking.

Cut points are searched backward from a target offset: paragraph break first,
then sentence end, then a hard cut at the target itself.
"""

from typing import Optional, Tuple

PARAGRAPH_DELIMITER = "\n\n"
SENTENCE_TERMINATORS = ".!?"
CLOSING_PUNCTUATION = "\"')]}»”’"

# Tunable policy: a boundary that would fill less than this share of the
# full chunk budget is rejected in favor of the next strategy.
MIN_FILL_RATIO = 0.5


def fill_threshold(start: int, budget: int) -> int:
    """Earliest offset a soft boundary may land on.

    Measured against the full budget, not the window, so a short final
    window never yields to an early boundary.
    """
    return start + int(budget * MIN_FILL_RATIO)


def find_paragraph_end(text: str, start: int, target_end: int) -> Optional[int]:
    """Offset just after the last paragraph break inside [start, target_end)."""
    idx = text.rfind(PARAGRAPH_DELIMITER, start, target_end)
    if idx < 0:
        return None
    return idx + len(PARAGRAPH_DELIMITER)


def find_sentence_end(text: str, start: int, target_end: int) -> Optional[int]:
    """Offset just after the nearest sentence end before target_end.

    Trailing quotes, brackets and whitespace stay with the sentence, but the
    result never passes target_end.
    """
    for i in range(min(target_end, len(text)) - 1, start - 1, -1):
        if text[i] in SENTENCE_TERMINATORS:
            j = i + 1
            while j < target_end and (
                text[j].isspace() or text[j] in CLOSING_PUNCTUATION
            ):
                j += 1
            return j
    return None


def _acceptable(candidate: Optional[int], start: int, threshold: int) -> bool:
    return candidate is not None and candidate > start and candidate >= threshold


def locate_end(
    text: str, start: int, target_end: int, budget: Optional[int] = None
) -> Tuple[int, str]:
    """Find the best cut point and name the strategy that produced it.

    Args:
        text: Raw document text
        start: Primary start of the chunk
        target_end: Furthest allowed cut
        budget: Full chunk budget in chars; defaults to the window width

    Returns:
        (offset, strategy) where strategy is "paragraph", "sentence",
        "hard-cut" or "end-of-text".
    """
    if target_end >= len(text):
        # The rest of the document fits: one final chunk
        return len(text), "end-of-text"

    if budget is None:
        budget = target_end - start
    threshold = fill_threshold(start, budget)

    end = find_paragraph_end(text, start, target_end)
    if _acceptable(end, start, threshold):
        return end, "paragraph"  # type: ignore[return-value]

    end = find_sentence_end(text, start, target_end)
    if _acceptable(end, start, threshold):
        return end, "sentence"  # type: ignore[return-value]

    return target_end, "hard-cut"


def find_end(
    text: str, start: int, target_end: int, budget: Optional[int] = None
) -> int:
    """Best cut point in [start, target_end]; see locate_end."""
    return locate_end(text, start, target_end, budget)[0]
