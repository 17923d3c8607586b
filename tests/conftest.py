"""
Shared test fixtures and configuration.
"""

import os
import stat
from pathlib import Path

import pytest


@pytest.fixture
def chart_dir(tmp_path: Path) -> Path:
    """Return an empty chart directory to walk."""
    chart = tmp_path / "chart"
    chart.mkdir()
    return chart


@pytest.fixture
def write_file():
    """Write a file (creating parents) and return its path."""

    def _write(path: Path, content: str | bytes) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
        return path

    return _write


@pytest.fixture
def env_dump_script(tmp_path: Path) -> Path:
    """An executable that writes its environment to $HELM_GENERATE_DIR/../env.out.

    Lives outside the chart directory so the walk never sees it.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "dump-env"
    script.write_text('#!/bin/sh\nenv > "$HELM_GENERATE_DIR/../env.out"\n')
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def clean_helm_env(monkeypatch):
    """Make sure no HELM_GENERATE_* variables leak in from the caller."""
    for name in list(os.environ):
        if name.startswith("HELM_GENERATE_"):
            monkeypatch.delenv(name, raising=False)
