"""Scratch report paths for Trivy output."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Optional

from . import error_text
from .constants import TEMP_REPORT_NAME
from .errors import OutputError


def default_report_path(directory: Optional[Path | str] = None) -> Path:
    """Return the fixed scratch report location used when ``--output`` is absent."""

    dir_path = Path(directory) if directory else Path(tempfile.gettempdir())
    return dir_path / TEMP_REPORT_NAME


def remove_file(path: Path | str) -> None:
    try:
        Path(path).unlink()
    except FileNotFoundError:
        return
    except OSError as exc:
        raise OutputError(error_text.remove_file_failed(path, exc)) from exc
