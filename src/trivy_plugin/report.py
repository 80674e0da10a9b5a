"""Strict decoding and normalization of Trivy JSON reports.

Trivy writes one of two report shapes. A flat report carries ``Results`` at
the top level, while a Kubernetes report groups results under
``Vulnerabilities`` and ``Misconfigurations`` resources. Both shapes are
decoded strictly: a key the target shape does not declare raises
:class:`UnknownFieldError`, and only that error makes :func:`read_report`
retry the file as a Kubernetes report. Every other decode failure is final.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Dict, List, Mapping, Optional, Union, cast

from . import error_text
from .console import log
from .errors import OutputError, ReportDecodeError, ReportReadError, UnknownFieldError

PathLike = Union[str, Path]

KIND_INTEGER = "integer"
KIND_STRING = "string"
KIND_OBJECT = "object"
KIND_RESULTS = "results"
KIND_GROUPS = "groups"

_TYPE_LABELS = {
    KIND_INTEGER: "int",
    KIND_STRING: "string",
    KIND_OBJECT: "object",
    KIND_RESULTS: "[]Result",
}

_JSON_WHITESPACE = " \t\n\r"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid character {name!r} looking for beginning of value")


_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


@dataclass(frozen=True)
class FieldSpec:
    kind: str
    shape: Optional["ReportShape"] = None

    def __post_init__(self) -> None:
        if self.kind == KIND_GROUPS and self.shape is None:
            raise ValueError("a groups field needs the shape of its entries")

    def zero_value(self) -> Any:
        if self.kind == KIND_INTEGER:
            return 0
        if self.kind == KIND_STRING:
            return ""
        if self.kind == KIND_OBJECT:
            return {}
        return []

    def type_label(self) -> str:
        if self.kind == KIND_GROUPS and self.shape is not None:
            return f"[]{self.shape.name}"
        return _TYPE_LABELS.get(self.kind, self.kind)


@dataclass(frozen=True)
class ReportShape:
    """Schema of one JSON object: the only keys it may hold and their kinds."""

    name: str
    fields: Mapping[str, FieldSpec]

    def zero_value(self) -> Dict[str, Any]:
        return {key: spec.zero_value() for key, spec in self.fields.items()}


PRIMARY_REPORT = ReportShape(
    name="Report",
    fields={
        "SchemaVersion": FieldSpec(KIND_INTEGER),
        "CreatedAt": FieldSpec(KIND_STRING),
        "ArtifactName": FieldSpec(KIND_STRING),
        "ArtifactType": FieldSpec(KIND_STRING),
        "Metadata": FieldSpec(KIND_OBJECT),
        "Results": FieldSpec(KIND_RESULTS),
    },
)

RESOURCE_GROUP = ReportShape(
    name="Resource",
    fields={
        "Namespace": FieldSpec(KIND_STRING),
        "Kind": FieldSpec(KIND_STRING),
        "Name": FieldSpec(KIND_STRING),
        "Metadata": FieldSpec(KIND_OBJECT),
        "Results": FieldSpec(KIND_RESULTS),
        "Error": FieldSpec(KIND_STRING),
    },
)

AGGREGATED_REPORT = ReportShape(
    name="K8sReport",
    fields={
        "SchemaVersion": FieldSpec(KIND_INTEGER),
        "ClusterName": FieldSpec(KIND_STRING),
        "Vulnerabilities": FieldSpec(KIND_GROUPS, RESOURCE_GROUP),
        "Misconfigurations": FieldSpec(KIND_GROUPS, RESOURCE_GROUP),
    },
)


@dataclass
class Report:
    """Canonical report: one ordered list of opaque Trivy results."""

    results: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"Results": list(self.results)}


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _mismatch(location: str, expected: str, value: Any) -> ReportDecodeError:
    return ReportDecodeError(error_text.type_mismatch(location, expected, _json_type(value)))


def _decode_object(payload: Any, shape: ReportShape, location: str) -> Dict[str, Any]:
    if payload is None:
        return shape.zero_value()
    if not isinstance(payload, dict):
        raise _mismatch(location, shape.name, payload)

    decoded = shape.zero_value()
    # Keys are checked in document order so the first offending key decides the error.
    for key, value in payload.items():
        spec = shape.fields.get(key)
        if spec is None:
            raise UnknownFieldError(key, shape.name, error_text.unknown_field(key))
        decoded[key] = _decode_value(value, spec, f"{location}.{key}")
    return decoded


def _decode_value(value: Any, spec: FieldSpec, location: str) -> Any:
    if value is None:
        return spec.zero_value()

    if spec.kind == KIND_INTEGER:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _mismatch(location, spec.type_label(), value)
        return value
    if spec.kind == KIND_STRING:
        if not isinstance(value, str):
            raise _mismatch(location, spec.type_label(), value)
        return value
    if spec.kind == KIND_OBJECT:
        if not isinstance(value, dict):
            raise _mismatch(location, spec.type_label(), value)
        return value

    if not isinstance(value, list):
        raise _mismatch(location, spec.type_label(), value)
    if spec.kind == KIND_GROUPS:
        shape = cast(ReportShape, spec.shape)
        return [
            _decode_object(item, shape, f"{location}[{index}]")
            for index, item in enumerate(value)
        ]

    results: List[Dict[str, Any]] = []
    for index, item in enumerate(value):
        if item is None:
            item = {}
        elif not isinstance(item, dict):
            raise _mismatch(f"{location}[{index}]", "Result", item)
        results.append(item)
    return results


def decode_strict(
    stream: IO[Any],
    shape: ReportShape,
    *,
    source: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """Decode ``stream`` into ``shape``, rejecting keys the shape does not declare.

    Raises :class:`UnknownFieldError` for an undeclared key and
    :class:`ReportDecodeError` for anything else (I/O, syntax, wrong types).
    Missing keys and JSON ``null`` take the kind's zero value. Only the
    first JSON value is decoded; anything after it is ignored.
    """

    try:
        raw = stream.read()
    except OSError as exc:
        raise ReportDecodeError(error_text.open_failed(source or "<stream>", exc)) from exc
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        payload, _ = _DECODER.raw_decode(text.lstrip(_JSON_WHITESPACE))
    except (ValueError, RecursionError) as exc:
        raise ReportDecodeError(error_text.invalid_json(source, exc)) from exc
    return _decode_object(payload, shape, shape.name)


def decode_file(path: PathLike, shape: ReportShape) -> Dict[str, Any]:
    report_path = Path(path)
    try:
        handle = report_path.open("rb")
    except OSError as exc:
        raise ReportDecodeError(error_text.open_failed(report_path, exc)) from exc
    with handle:
        return decode_strict(handle, shape, source=report_path)


def flatten(aggregated: Mapping[str, Any]) -> Report:
    """Concatenate vulnerability then misconfiguration results, keeping all order."""

    results: List[Dict[str, Any]] = []
    for group in aggregated.get("Vulnerabilities") or []:
        results.extend(group.get("Results") or [])
    for group in aggregated.get("Misconfigurations") or []:
        results.extend(group.get("Results") or [])
    return Report(results=results)


def read_report(path: PathLike) -> Report:
    """Read a Trivy JSON report in either known shape and return the canonical report.

    The flat shape is tried first. Only an unknown-field failure leads to a
    second attempt as a Kubernetes report; the error raised after a failed
    second attempt comes from that attempt and keeps the abandoned
    first-attempt error on ``primary_error``.
    """

    log(f"Read report {path}")
    try:
        primary = decode_file(path, PRIMARY_REPORT)
    except UnknownFieldError as exc:
        primary_error = exc
    except ReportDecodeError as exc:
        raise ReportReadError(exc) from exc
    else:
        return Report(results=primary["Results"])

    log(f"{primary_error} in {PRIMARY_REPORT.name}; reading as {AGGREGATED_REPORT.name}")
    try:
        aggregated = decode_file(path, AGGREGATED_REPORT)
    except ReportDecodeError as exc:
        raise ReportReadError(exc, primary_error=primary_error) from exc
    return flatten(aggregated)


def save_result(path: PathLike, report: Report) -> Path:
    target = Path(path)
    try:
        payload = json.dumps(report.to_dict(), indent=2, ensure_ascii=False, allow_nan=False)
        target.write_text(payload + "\n", encoding="utf-8")
    except (OSError, ValueError, RecursionError) as exc:
        raise OutputError(error_text.save_result_failed(target, exc)) from exc
    return target
