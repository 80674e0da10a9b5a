"""Test package helpers shared across trivy-plugin suites."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List


def load_results(path: Path) -> List[Dict[str, Any]]:
    """Read a saved result file and return its ``Results`` list."""

    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    assert list(payload) == ["Results"], f"unexpected result keys: {sorted(payload)}"
    return payload["Results"]


__all__ = ["load_results"]
