"""Global pytest configuration for trivy-plugin tests."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC_ROOT = _REPO_ROOT / "src"

# Make the src/ layout importable without an editable install, and the
# tests package importable for the shared fixtures module.
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

_PLUGIN_ENV = ("TRIVY_PLUGIN_TRIVY_BIN", "TRIVY_PLUGIN_QUIET", "TRIVY_PLUGIN_KEEP_TEMP")


@pytest.fixture(autouse=True)
def _isolated_plugin_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep every test away from the real scanner and the shared temp directory."""

    for name in _PLUGIN_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TRIVY_PLUGIN_TRIVY_BIN", str(tmp_path / "missing-trivy"))
    scratch = tmp_path / "tmp"
    scratch.mkdir()
    monkeypatch.setenv("TMPDIR", str(scratch))
    monkeypatch.setattr("tempfile.tempdir", None)


@pytest.fixture
def write_report(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes a report payload (dict or raw text) to tmp_path."""

    counter = {"value": 0}

    def _write(payload: Any, name: str = "") -> Path:
        counter["value"] += 1
        target = tmp_path / (name or f"report-{counter['value']}.json")
        text = payload if isinstance(payload, str) else json.dumps(payload)
        target.write_text(text, encoding="utf-8")
        return target

    return _write


@pytest.fixture
def scratch_dir() -> Path:
    return Path(os.environ["TMPDIR"])
