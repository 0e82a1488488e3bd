"""Tests for document reading and artifact writing."""

from pathlib import Path

import pytest

from chattools.chunking.engine import chunk_text, compute_budget
from chattools.chunking.estimate import CleanMode
from chattools.core import artifacts
from chattools.core.errors import InputError

pytestmark = pytest.mark.unit


def _plan():
    budget = compute_budget(10, 0.0)
    return chunk_text("x" * 200, budget, 10, CleanMode.RETAIN_ALL), budget


def test_read_document_missing(tmp_path):
    with pytest.raises(InputError, match="not found"):
        artifacts.read_document(tmp_path / "missing.txt")


def test_read_document_directory(tmp_path):
    with pytest.raises(InputError):
        artifacts.read_document(tmp_path)


def test_read_document_invalid_utf8(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(InputError, match="Cannot read"):
        artifacts.read_document(path)


def test_read_document_keeps_line_endings(tmp_path):
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"a\r\n\r\nb")
    assert artifacts.read_document(path) == "a\r\n\r\nb"


def test_output_naming():
    assert artifacts.default_output_dir(Path("/a/b/notes.txt")) == Path("/a/b/notes__chunks")
    assert artifacts.default_output_dir(Path("notes.md")) == Path("notes.md__chunks")
    assert artifacts.base_name(Path("/a/notes.md")) == "notes"
    assert artifacts.part_filename("notes", 3) == "notes__part03.txt"
    assert artifacts.part_filename("notes", 120) == "notes__part120.txt"


def test_render_plan_flags_oversized_chunks():
    plan, budget = _plan()
    rendered = artifacts.render_plan(plan, "tiny", budget, 10)

    assert rendered.startswith(
        "Model: tiny (max 10 tokens), budget ~10 tokens, overlap 10 tokens\n"
    )
    assert "Total chunks: 5\n" in rendered
    assert "part01\t~10 tokens\n" in rendered
    assert "part02\t~20 tokens  [>MAX!]\n" in rendered
    assert "Approx combined tokens (without overlap dedup): ~90\n" in rendered
    assert rendered.endswith("Note: Each chunk is intended to be processed independently.\n")


def test_write_outputs(tmp_path):
    plan, budget = _plan()
    out_dir = tmp_path / "out"

    paths = artifacts.write_chunks(plan, out_dir, "doc")
    plan_path = artifacts.write_plan(plan, out_dir, "tiny", budget, 10)
    prompts_path = artifacts.write_prompts(out_dir)

    assert [p.name for p in paths] == [f"doc__part0{i}.txt" for i in range(1, 6)]
    assert paths[1].read_text(encoding="utf-8") == plan.chunks[1].text
    assert plan_path.name == "chunk_plan.txt"
    assert "Checkpoint Summary" in prompts_path.read_text(encoding="utf-8")
    assert "Master Summary" in prompts_path.read_text(encoding="utf-8")
