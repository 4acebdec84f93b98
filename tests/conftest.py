"""Shared fixtures for the folio test suite."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

PUBLISHED_POST = """\
---
title: Pointers in Go
description: What a pointer is, and when to reach for one.
publishedOn: 2024-03-02T09:00:00Z
status: published
coverImage:
  url: /img/pointers.png
  alt: Two boxes joined by an arrow
tags:
  - go
---

## Why pointers

A pointer holds the *address* of a value. See [the tour](https://go.dev/tour).

```go
var p *int
```
"""

DRAFT_POST = """\
---
title: Typer for small CLIs
status: draft
---

Notes on building command line tools.
"""


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep FOLIO_* variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("FOLIO_"):
            monkeypatch.delenv(key)


@pytest.fixture
def published_post() -> str:
    return PUBLISHED_POST


@pytest.fixture
def draft_post() -> str:
    return DRAFT_POST


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "content"
    directory.mkdir()
    return directory


@pytest.fixture
def write_doc(content_dir: Path):
    """Write a document into the content directory and return its path."""

    def _write(name: str, text: str) -> Path:
        path = content_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
