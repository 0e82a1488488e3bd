"""
Chattools Chunking Package

Budgeted text segmentation with paragraph-first boundaries, exact source
overlap and approximate unit estimation.
"""

from .boundaries import MIN_FILL_RATIO, find_end, locate_end
from .engine import Budget, Chunk, ChunkPlan, assemble, chunk_text, compute_budget
from .estimate import UNIT_CHAR_RATIO, CleanMode, counting_view, estimate_units

__all__ = [
    "Budget",
    "Chunk",
    "ChunkPlan",
    "CleanMode",
    "MIN_FILL_RATIO",
    "UNIT_CHAR_RATIO",
    "assemble",
    "chunk_text",
    "compute_budget",
    "counting_view",
    "estimate_units",
    "find_end",
    "locate_end",
]
