"""Shared constants for the trivy-plugin CLI."""

from __future__ import annotations

PLUGIN_NAME = "trivy-plugin"
__version__ = "dev"

PLUGIN_OUTPUT_FLAG = "--plugin-output"
OUTPUT_FLAG = "--output"
PLUGIN_FLAGS = (PLUGIN_OUTPUT_FLAG, OUTPUT_FLAG)
HELP_FLAGS = ("-h", "--help")

TEMP_REPORT_NAME = "trivy-plugin-temp.json"
DEFAULT_TRIVY_BIN = "trivy"
LOG_PREFIX = f"[{PLUGIN_NAME}]"

EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 2
EXIT_TRIVY_ERROR = 3
EXIT_REPORT_ERROR = 4
EXIT_OUTPUT_ERROR = 5

__all__ = [
    "PLUGIN_NAME",
    "__version__",
    "PLUGIN_OUTPUT_FLAG",
    "OUTPUT_FLAG",
    "PLUGIN_FLAGS",
    "HELP_FLAGS",
    "TEMP_REPORT_NAME",
    "DEFAULT_TRIVY_BIN",
    "LOG_PREFIX",
    "EXIT_SUCCESS",
    "EXIT_INVALID_INPUT",
    "EXIT_TRIVY_ERROR",
    "EXIT_REPORT_ERROR",
    "EXIT_OUTPUT_ERROR",
]
