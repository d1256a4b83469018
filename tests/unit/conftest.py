"""Shared test fixtures."""

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from tests.unit.builders import SAMPLE_DOC, SAMPLE_RECORD


@pytest.fixture
def sample_doc() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_DOC)


@pytest.fixture
def sample_record_file(tmp_path: Path) -> Path:
    """Write a blog record JSON (title + content) and return its path."""
    path = tmp_path / "record.json"
    path.write_text(json.dumps(SAMPLE_RECORD))
    return path


@pytest.fixture
def sample_doc_file(tmp_path: Path) -> Path:
    """Write a bare TipTap document JSON and return its path."""
    path = tmp_path / "doc.json"
    path.write_text(json.dumps(SAMPLE_DOC))
    return path
