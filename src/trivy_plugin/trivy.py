"""Trivy invocation and plugin directory helpers."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from . import error_text
from .console import log
from .env_flags import trivy_binary
from .errors import TrivyNotFoundError, TrivyRunError


def build_trivy_command(
    trivy_args: Sequence[str],
    output_file: Path | str,
    binary: Optional[str] = None,
) -> List[str]:
    return [
        binary or trivy_binary(),
        *trivy_args,
        "--format",
        "json",
        "--output",
        str(output_file),
    ]


def make_trivy_json_report(
    trivy_args: Sequence[str],
    output_file: Path | str,
    *,
    binary: Optional[str] = None,
) -> None:
    """Run Trivy with JSON output written to ``output_file``.

    Trivy's own stdout and stderr stay attached to the terminal.
    """

    cmd = build_trivy_command(trivy_args, output_file, binary)
    log(f"Running {' '.join(cmd)}")
    try:
        proc = subprocess.run(cmd, check=False)
    except FileNotFoundError as exc:
        raise TrivyNotFoundError(error_text.trivy_not_found(cmd[0])) from exc
    except OSError as exc:
        raise TrivyRunError(error_text.trivy_failed(exc)) from exc
    if proc.returncode != 0:
        raise TrivyRunError(error_text.trivy_failed(f"exit status {proc.returncode}"))


def plugin_dir() -> Path:
    """Directory holding the plugin entry point; Trivy installs plugin files beside it."""

    return Path(sys.argv[0]).resolve().parent


def get_path_to_plugin_dir(file_name: str) -> Path:
    return plugin_dir() / file_name


def get_path_to_template(file_name: str) -> str:
    """Return a plugin file reference in Trivy's ``@path`` template syntax."""

    return f"@{get_path_to_plugin_dir(file_name)}"


def read_plugin_file(file_name: str) -> bytes:
    return get_path_to_plugin_dir(file_name).read_bytes()
