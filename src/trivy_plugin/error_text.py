from __future__ import annotations

from pathlib import Path
from typing import Union

from .constants import PLUGIN_OUTPUT_FLAG

PathLike = Union[str, Path]

READ_REPORT_PREFIX = "failed to read report"
GET_REPORT_PREFIX = "failed to get report from json"


def _stringify(value: PathLike | None) -> str:
    if value is None:
        return "-"
    return str(value)


def plugin_output_required() -> str:
    return f"flag {PLUGIN_OUTPUT_FLAG} is required"


def read_report_failed(detail: object) -> str:
    return f"{READ_REPORT_PREFIX}: {detail}"


def get_report_failed(detail: object) -> str:
    return f"{GET_REPORT_PREFIX}: {detail}"


def unknown_field(field: str) -> str:
    return f'json: unknown field "{field}"'


def type_mismatch(location: str, expected: str, actual: str) -> str:
    return f"json: cannot unmarshal {actual} into {location} of type {expected}"


def invalid_json(path: PathLike | None, detail: object) -> str:
    return f"invalid JSON: {_stringify(path)}: {detail}"


def open_failed(path: PathLike, detail: object) -> str:
    return f"cannot open {_stringify(path)}: {detail}"


def trivy_failed(detail: object) -> str:
    return f"failed to run trivy: {detail}"


def trivy_not_found(binary: str) -> str:
    return f"failed to run trivy: executable not found: {binary}"


def make_report_failed(detail: object) -> str:
    return f"failed to make trivy report: {detail}"


def save_result_failed(path: PathLike, detail: object) -> str:
    return f"failed to save result to {_stringify(path)}: {detail}"


def remove_file_failed(path: PathLike, detail: object) -> str:
    return f"failed to remove file {_stringify(path)}: {detail}"
