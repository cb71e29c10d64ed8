"""Tests for the authors_and_books example script."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

EXAMPLE = Path(__file__).resolve().parents[2] / "examples" / "authors_and_books.py"


def _load_example(monkeypatch):
    spec = importlib.util.spec_from_file_location("authors_and_books", EXAMPLE)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    # dataclasses resolves string annotations through sys.modules
    monkeypatch.setitem(sys.modules, spec.name, module)
    spec.loader.exec_module(module)
    return module


def test_example_reports_null_email_and_short_strings(monkeypatch, capsys):
    example = _load_example(monkeypatch)

    paths = example.main()

    out = capsys.readouterr().out
    assert "  books[0].authors[1].email" in out
    assert paths == [
        "books[0].authors[1].books[1].title",
        "books[0].authors[1].books[1].authors[1].name",
    ]
