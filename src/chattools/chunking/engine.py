"""
Chunk assembly: walk a document with a character budget, cut at the best
boundary and carry an overlap prefix from the source text into each chunk.
"""

from __future__ import annotations

import math
from typing import Callable, List, NamedTuple, Optional

from ..core.errors import ChunkingCancelled, ChunkingError, ConfigurationError
from .boundaries import locate_end
from .estimate import UNIT_CHAR_RATIO, CleanMode, estimate_units


class Budget(NamedTuple):
    """Per-chunk budget derived from a model limit and headroom."""

    max_units: int
    headroom: float
    unit_budget: int
    char_budget: int


def compute_budget(
    model_max: int, headroom: float, override_max: Optional[int] = None
) -> Budget:
    """Derive the per-chunk unit and character budget.

    Raises:
        ConfigurationError: if the resulting character budget is not positive.
    """
    if not math.isfinite(headroom):
        raise ConfigurationError(f"Headroom must be a finite fraction, got {headroom}")
    max_units = override_max if override_max is not None else model_max
    unit_budget = math.floor(max_units * (1.0 - headroom))
    char_budget = unit_budget * UNIT_CHAR_RATIO
    if char_budget <= 0:
        raise ConfigurationError(
            f"Non-positive chunk budget ({char_budget} chars) from "
            f"max={max_units}, headroom={headroom}"
        )
    return Budget(max_units, headroom, unit_budget, char_budget)


def overlap_chars_for(overlap_units: int) -> int:
    return max(0, overlap_units) * UNIT_CHAR_RATIO


class Chunk(NamedTuple):
    """One emitted span: overlap prefix plus the primary slice [start, end)."""

    index: int
    text: str
    start: int
    end: int
    overlap_start: int
    units: int
    split_strategy: str = "hard-cut"

    @property
    def overlap_text(self) -> str:
        return self.text[: self.start - self.overlap_start]

    @property
    def primary_text(self) -> str:
        return self.text[self.start - self.overlap_start :]


class ChunkPlan(NamedTuple):
    """Ordered chunks of one document with their unit estimates."""

    chunks: List[Chunk]
    clean_mode: CleanMode = CleanMode.RESTRICTED

    @property
    def total_units(self) -> int:
        """Sum of per-chunk estimates, overlap included."""
        return sum(chunk.units for chunk in self.chunks)

    def over_limit(self, max_units: int) -> List[Chunk]:
        return [chunk for chunk in self.chunks if chunk.units > max_units]


def assemble(
    document: str,
    char_budget: int,
    overlap_chars: int,
    mode: CleanMode = CleanMode.RESTRICTED,
    should_stop: Optional[Callable[[], bool]] = None,
) -> ChunkPlan:
    """
    Split a document into budgeted, overlapping chunks.

    Overlap is copied from the source text immediately before each chunk's
    primary start, so its length is exact regardless of earlier overlap.

    Args:
        document: Raw text; never modified
        char_budget: Maximum primary characters per chunk
        overlap_chars: Characters of preceding context to prepend
        mode: Clean mode used for the per-chunk unit estimate
        should_stop: Optional flag checked between chunks

    Returns:
        ChunkPlan with 1-based chunk indexes; empty for an empty document
    """
    if char_budget <= 0:
        raise ConfigurationError(f"Non-positive chunk budget: {char_budget} chars")

    n = len(document)
    chunks: List[Chunk] = []
    pos = 0

    while pos < n:
        if should_stop is not None and should_stop():
            raise ChunkingCancelled(f"Stopped at offset {pos} of {n}")

        target_end = min(n, pos + char_budget)
        end, strategy = locate_end(document, pos, target_end, char_budget)
        if end <= pos:
            raise ChunkingError(f"No forward progress at offset {pos} (end={end})")

        overlap_start = pos
        if chunks and overlap_chars > 0:
            overlap_start = max(0, pos - overlap_chars)

        text = document[overlap_start:end]
        chunks.append(
            Chunk(
                index=len(chunks) + 1,
                text=text,
                start=pos,
                end=end,
                overlap_start=overlap_start,
                units=estimate_units(text, mode),
                split_strategy=strategy,
            )
        )
        pos = end

    return ChunkPlan(chunks=chunks, clean_mode=mode)


def chunk_text(
    document: str,
    budget: Budget,
    overlap_units: int,
    mode: CleanMode = CleanMode.RESTRICTED,
) -> ChunkPlan:
    """Assemble a plan from a Budget and an overlap expressed in units."""
    return assemble(document, budget.char_budget, overlap_chars_for(overlap_units), mode)
