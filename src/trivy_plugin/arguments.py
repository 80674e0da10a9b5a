"""Split plugin-owned flags from the arguments forwarded to Trivy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .constants import HELP_FLAGS, OUTPUT_FLAG, PLUGIN_FLAGS, PLUGIN_OUTPUT_FLAG


@dataclass
class PluginArguments:
    values: Dict[str, str] = field(default_factory=dict)

    def get(self, flag: str) -> str:
        return self.values.get(flag, "")

    @property
    def plugin_output(self) -> str:
        return self.get(PLUGIN_OUTPUT_FLAG)

    @property
    def output(self) -> str:
        return self.get(OUTPUT_FLAG)


def is_help(argv: Sequence[str]) -> bool:
    return any(arg in HELP_FLAGS for arg in argv)


def retrieve_plugin_arguments(
    argv: Sequence[str],
    available: Optional[Sequence[str]] = None,
) -> Tuple[PluginArguments, List[str]]:
    """Return (plugin flag values, remaining Trivy arguments in original order).

    A plugin flag consumes the following token as its value, or ``""`` when
    it is the last token. ``--flag=value`` is accepted as well.
    """

    flags = tuple(available if available is not None else PLUGIN_FLAGS)
    values: Dict[str, str] = {}
    trivy_args: List[str] = []
    index = 0
    while index < len(argv):
        arg = argv[index]
        name, sep, inline = arg.partition("=")
        if sep and name in flags:
            values[name] = inline
        elif arg in flags:
            values[arg] = argv[index + 1] if index + 1 < len(argv) else ""
            index += 1
        else:
            trivy_args.append(arg)
        index += 1
    return PluginArguments(values), trivy_args
