"""Trivy plugin that normalizes flat and Kubernetes JSON reports into one result file."""

from .constants import __version__
from .report import Report, read_report

__all__ = ["Report", "__version__", "read_report"]
