"""Global test configuration for chattools tests."""

import pytest
from typer.testing import CliRunner


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep CHATTOOLS_* variables from the developer shell out of tests."""
    import os

    for name in list(os.environ):
        if name.startswith("CHATTOOLS_"):
            monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def prose():
    """Multi-paragraph text with sentence and paragraph boundaries."""
    paragraphs = []
    for p in range(12):
        sentences = [
            f"Paragraph {p} sentence {s} talks about chunk boundaries and overlap."
            for s in range(5)
        ]
        paragraphs.append(" ".join(sentences))
    return "\n\n".join(paragraphs)
