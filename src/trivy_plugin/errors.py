"""Exception taxonomy for the plugin; every error knows its process exit code."""

from __future__ import annotations

from typing import Optional

from .constants import (
    EXIT_INVALID_INPUT,
    EXIT_OUTPUT_ERROR,
    EXIT_REPORT_ERROR,
    EXIT_TRIVY_ERROR,
)
from .error_text import read_report_failed


class PluginError(RuntimeError):
    """Base class for failures that end a plugin run."""

    exit_code = EXIT_INVALID_INPUT

    def __init__(self, message: str, exit_code: Optional[int] = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ReportDecodeError(PluginError):
    """The report bytes could not be decoded into the requested shape."""

    exit_code = EXIT_REPORT_ERROR


class UnknownFieldError(ReportDecodeError):
    """The report holds a key the requested shape does not declare."""

    def __init__(self, field: str, shape: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.shape = shape


class ReportReadError(PluginError):
    """Neither known report shape could be read from the file."""

    exit_code = EXIT_REPORT_ERROR

    def __init__(
        self,
        cause: ReportDecodeError,
        primary_error: Optional[UnknownFieldError] = None,
    ) -> None:
        super().__init__(read_report_failed(cause))
        self.primary_error = primary_error


class TrivyRunError(PluginError):
    exit_code = EXIT_TRIVY_ERROR


class TrivyNotFoundError(TrivyRunError):
    pass


class OutputError(PluginError):
    exit_code = EXIT_OUTPUT_ERROR
