# tests/conftest.py - v1
"""Shared test fixtures for unit and integration tests.

Provides sample items, a frozen clock, and an in-memory failure recorder.
No external dependencies; all I/O stays under tmp_path.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from itembatch.batch.processor import BatchProcessor
from itembatch.batch.transforms import make_normalizer
from itembatch.core.models import Item
from itembatch.logging.context import clear_context
from itembatch.policy.type_policy import TypePolicy
from itembatch.tracking.failure_recorder import CollectingFailureRecorder

FIXED_NOW = datetime(2026, 2, 7, 14, 0, 0, tzinfo=timezone.utc)


# === FIXTURES: Sample data ===


@pytest.fixture
def image_item() -> Item:
    return Item(name="a.png", type="image", size=10)


@pytest.fixture
def binary_item() -> Item:
    return Item(name="b.exe", type="binary", size=5)


@pytest.fixture
def mixed_items() -> list[Item]:
    """Supported and unsupported items interleaved."""
    return [
        Item(name="a.png", type="image", size=10),
        Item(name="b.exe", type="binary", size=5),
        Item(name="c.pdf", type="document", size=300),
        Item(name="d.zip", type="archive", size=42),
        Item(name="e.py", type="code", size=0),
    ]


# === FIXTURES: Collaborators ===


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def recorder() -> CollectingFailureRecorder:
    return CollectingFailureRecorder()


@pytest.fixture
def processor(fixed_clock, recorder: CollectingFailureRecorder) -> BatchProcessor:
    """Sequential processor with the default policy and a frozen clock."""
    return BatchProcessor(
        policy=TypePolicy(),
        transform=make_normalizer(fixed_clock),
        recorder=recorder,
    )


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


# === FIXTURES: Temp dirs ===


@pytest.fixture
def tmp_scan_dir(tmp_path: Path) -> Path:
    """Directory with one file per category plus an unknown extension."""
    root = tmp_path / "uploads"
    for name, content in [
        ("photo.png", b"\x89PNG fake"),
        ("notes.md", b"# Notes"),
        ("script.py", b"print('hi')\n"),
        ("setup.exe", b"MZ fake"),
        ("sub/report.pdf", b"%PDF-1.4 fake"),
    ]:
        p = root / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content)
    return root
