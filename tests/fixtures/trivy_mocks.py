"""Deterministic Trivy reports and a fake scanner executable for offline testing."""

from __future__ import annotations

import json
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional

FIXTURES_DIR = Path(__file__).resolve().parent

_FAKE_TRIVY = """#!{python}
import json
import sys

args = sys.argv[1:]
with open({log!r}, "a", encoding="utf-8") as handle:
    handle.write(json.dumps(args) + "\\n")
payload = {payload!r}
if payload is not None and "--output" in args:
    target = args[args.index("--output") + 1]
    with open(target, "w", encoding="utf-8") as handle:
        handle.write(payload)
sys.exit({returncode})
"""


def fixture_path(name: str) -> Path:
    return FIXTURES_DIR / name


def flat_report(results: List[Dict[str, Any]], **extra: Any) -> Dict[str, Any]:
    report: Dict[str, Any] = {"SchemaVersion": 2, "ArtifactName": "alpine:3.19"}
    report.update(extra)
    report["Results"] = deepcopy(results)
    return report


def k8s_report(
    vulnerabilities: List[List[Dict[str, Any]]],
    misconfigurations: List[List[Dict[str, Any]]],
) -> Dict[str, Any]:
    """Build a Kubernetes report with one resource per list of results."""

    def _resources(groups: List[List[Dict[str, Any]]], kind: str) -> List[Dict[str, Any]]:
        return [
            {"Namespace": "default", "Kind": kind, "Name": f"res-{index}", "Results": deepcopy(results)}
            for index, results in enumerate(groups)
        ]

    return {
        "ClusterName": "kind-test",
        "Vulnerabilities": _resources(vulnerabilities, "Deployment"),
        "Misconfigurations": _resources(misconfigurations, "ConfigMap"),
    }


def write_fake_trivy(
    directory: Path,
    *,
    payload: Optional[str] = None,
    returncode: int = 0,
) -> Path:
    """Write an executable that records its argv and writes ``payload`` to --output."""

    directory.mkdir(parents=True, exist_ok=True)
    binary = directory / "trivy"
    log_path = directory / "trivy-calls.jsonl"
    binary.write_text(
        _FAKE_TRIVY.format(
            python=sys.executable,
            log=str(log_path),
            payload=payload,
            returncode=returncode,
        ),
        encoding="utf-8",
    )
    binary.chmod(0o755)
    return binary


def recorded_calls(binary: Path) -> List[List[str]]:
    log_path = binary.parent / "trivy-calls.jsonl"
    if not log_path.exists():
        return []
    return [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines() if line]
