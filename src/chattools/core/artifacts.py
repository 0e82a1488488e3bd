"""Reading documents and writing chunk artifacts.

Layout for an input ``notes.txt``::

    notes__chunks/
        notes__part01.txt, notes__part02.txt, ...
        chunk_plan.txt
        summary_prompts.txt
"""

import re
from pathlib import Path
from typing import List

from ..chunking.engine import Budget, ChunkPlan
from .errors import InputError
from .prompts import render_prompts

PLAN_FILENAME = "chunk_plan.txt"
PROMPTS_FILENAME = "summary_prompts.txt"


def read_document(path: Path) -> str:
    """Decode a whole file as UTF-8, keeping line endings as-is."""
    if not path.is_file():
        raise InputError(f"Input file not found: {path}")
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Cannot read {path}: {e}") from e


def base_name(path: Path) -> str:
    return path.stem


def default_output_dir(input_path: Path) -> Path:
    """``<parent>/<name without .txt>__chunks``"""
    name = re.sub(r"\.txt$", "", input_path.name)
    return input_path.parent / f"{name}__chunks"


def part_filename(base: str, index: int) -> str:
    return f"{base}__part{index:02d}.txt"


def render_plan(plan: ChunkPlan, model_key: str, budget: Budget, overlap_units: int) -> str:
    """Human-readable plan with a [>MAX!] flag on oversized chunks."""
    lines = [
        f"Model: {model_key} (max {budget.max_units} tokens), "
        f"budget ~{budget.unit_budget} tokens, overlap {overlap_units} tokens",
        f"Total chunks: {len(plan.chunks)}",
        "",
    ]
    for chunk in plan.chunks:
        flag = "  [>MAX!]" if chunk.units > budget.max_units else ""
        lines.append(f"part{chunk.index:02d}\t~{chunk.units} tokens{flag}")
    lines.append("")
    lines.append(f"Approx combined tokens (without overlap dedup): ~{plan.total_units}")
    lines.append("Note: Each chunk is intended to be processed independently.")
    return "\n".join(lines) + "\n"


def _write_text(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def write_chunks(plan: ChunkPlan, out_dir: Path, base: str) -> List[Path]:
    """Write each chunk verbatim to its part file."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for chunk in plan.chunks:
        path = out_dir / part_filename(base, chunk.index)
        _write_text(path, chunk.text)
        written.append(path)
    return written


def write_plan(
    plan: ChunkPlan, out_dir: Path, model_key: str, budget: Budget, overlap_units: int
) -> Path:
    path = out_dir / PLAN_FILENAME
    _write_text(path, render_plan(plan, model_key, budget, overlap_units))
    return path


def write_prompts(out_dir: Path) -> Path:
    path = out_dir / PROMPTS_FILENAME
    _write_text(path, render_prompts())
    return path
