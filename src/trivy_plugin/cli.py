from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import click

from . import error_text
from .arguments import PluginArguments, is_help, retrieve_plugin_arguments
from .console import error, log
from .constants import (
    EXIT_INVALID_INPUT,
    EXIT_SUCCESS,
    OUTPUT_FLAG,
    PLUGIN_NAME,
    PLUGIN_OUTPUT_FLAG,
    __version__,
)
from .env_flags import PluginSettings, load_settings
from .errors import OutputError, PluginError, ReportReadError, TrivyRunError
from .report import read_report, save_result
from .tempfiles import default_report_path, remove_file
from .trivy import make_trivy_json_report

HELP_TEMPLATE = """
{name} v{version}
Usage: trivy {name} [-h,--help] {plugin_output} FILE [{output} FILE] command target
  Runs Trivy with JSON output and writes its results, flat or Kubernetes
  report alike, as one {{"Results": [...]}} document to {plugin_output}.
Options:
  -h, --help         Show usage.
  {plugin_output}    Where to write the normalized result (required).
  {output}           Keep Trivy's raw JSON report at this path.
Environment:
  TRIVY_PLUGIN_TRIVY_BIN   Trivy executable (default: trivy)
  TRIVY_PLUGIN_QUIET       Suppress progress lines on stderr
  TRIVY_PLUGIN_KEEP_TEMP   Keep the scratch report when {output} is absent
Examples:
  trivy {name} {plugin_output} result.json image alpine:3.19
  trivy {name} {plugin_output} result.json k8s --report summary cluster
"""


def help_message() -> str:
    return HELP_TEMPLATE.format(
        name=PLUGIN_NAME,
        version=__version__,
        plugin_output=PLUGIN_OUTPUT_FLAG,
        output=OUTPUT_FLAG,
    )


@click.command(
    name=PLUGIN_NAME,
    add_help_option=False,
    context_settings={"ignore_unknown_options": True},
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def cli(args: Tuple[str, ...]) -> None:
    """Run Trivy and normalize its JSON report into a single result file."""

    argv = list(args)
    if is_help(argv):
        click.echo(help_message())
        return

    plugin_args, trivy_args = retrieve_plugin_arguments(argv)
    if not plugin_args.plugin_output:
        raise click.UsageError(error_text.plugin_output_required())

    exit_code = run_plugin(plugin_args, trivy_args, load_settings())
    if exit_code != EXIT_SUCCESS:
        raise click.exceptions.Exit(exit_code)


def run_plugin(
    plugin_args: PluginArguments,
    trivy_args: List[str],
    settings: PluginSettings,
) -> int:
    """Scan, normalize and save; returns the process exit code."""

    report_path = Path(plugin_args.output) if plugin_args.output else default_report_path()
    remove_after = not plugin_args.output and not settings.keep_temp

    exit_code = EXIT_SUCCESS
    try:
        exit_code = _execute(plugin_args, trivy_args, report_path, settings)
    finally:
        cleanup_code = _cleanup(report_path) if remove_after else EXIT_SUCCESS
    return exit_code if exit_code != EXIT_SUCCESS else cleanup_code


def _execute(
    plugin_args: PluginArguments,
    trivy_args: List[str],
    report_path: Path,
    settings: PluginSettings,
) -> int:
    try:
        make_trivy_json_report(trivy_args, report_path, binary=settings.trivy_bin)
    except TrivyRunError as exc:
        error(error_text.make_report_failed(exc))
        return exc.exit_code

    try:
        report = read_report(report_path)
    except ReportReadError as exc:
        error(error_text.get_report_failed(exc))
        return exc.exit_code

    try:
        target = save_result(plugin_args.plugin_output, report)
    except OutputError as exc:
        error(str(exc))
        return exc.exit_code

    log(f"Saved {len(report.results)} results to {target}")
    return EXIT_SUCCESS


def _cleanup(report_path: Path) -> int:
    try:
        remove_file(report_path)
    except PluginError as exc:
        error(str(exc))
        return exc.exit_code
    return EXIT_SUCCESS


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(argv if argv is not None else sys.argv[1:])
    ctx = None
    try:
        ctx = cli.make_context(PLUGIN_NAME, args, resilient_parsing=False)
        cli.invoke(ctx)
        return EXIT_SUCCESS
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code if exc.exit_code else EXIT_INVALID_INPUT
    finally:
        if ctx is not None:
            ctx.close()


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    raise SystemExit(main())
