"""Pytest fixtures shared by the seqstats tests."""

from pathlib import Path
from typing import Callable, Iterable

import pytest


@pytest.fixture
def write_samples(tmp_path) -> Callable[..., Path]:
    """Return a helper that writes one sample per line and returns the path."""

    def _write(values: Iterable, name: str = "samples.txt", header: str = None) -> Path:
        path = tmp_path / name
        lines = []
        if header:
            lines.append(f"# {header}")
        lines.extend(str(v) for v in values)
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write


@pytest.fixture
def outlier_samples():
    """Tight cluster around 10 with one far outlier."""
    return [10, 11, 9, 10, 11, 9, 10, 1000]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep load_config() from picking up a real seqstats.yml or ~/.seqstats."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
