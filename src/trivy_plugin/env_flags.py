from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .constants import DEFAULT_TRIVY_BIN

_TRUTHY = {"1", "true", "yes", "on"}


def env_truthy(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


def _env_override(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def trivy_binary() -> str:
    """Return the scanner executable, honouring TRIVY_PLUGIN_TRIVY_BIN."""

    return _env_override("TRIVY_PLUGIN_TRIVY_BIN") or DEFAULT_TRIVY_BIN


def is_quiet() -> bool:
    return env_truthy(os.getenv("TRIVY_PLUGIN_QUIET"))


def keep_temp_report() -> bool:
    return env_truthy(os.getenv("TRIVY_PLUGIN_KEEP_TEMP"))


@dataclass(frozen=True)
class PluginSettings:
    trivy_bin: str
    keep_temp: bool


def load_settings() -> PluginSettings:
    """Snapshot the environment-driven settings for one plugin run."""

    return PluginSettings(
        trivy_bin=trivy_binary(),
        keep_temp=keep_temp_report(),
    )
