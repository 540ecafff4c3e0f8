"""Command line interface entry point."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path

import click

from boom_verifier.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from boom_verifier.results_reporting import ReportSinks, TerminationPolicy
from boom_verifier.run_execution import (
    VerificationRequest,
    VerificationRunError,
    execute_verification_run,
)

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="boom-verifier")
def cli() -> None:
    """Compiles, verifies and benchmarks a BOOM design."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML suite configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML suite configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


# pylint: disable=too-many-arguments,too-many-locals
@cli.command(name="run")
@click.option(
    "-c",
    "--config",
    "config_name",
    required=True,
    help="Design config passed to the build system, e.g. SliceBoomConfig",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the log file storing the report",
)
@click.option("-x", "--compile", "build", is_flag=True, help="Compile the simulator first.")
@click.option("-a", "--asm", "run_assembly", is_flag=True, help="Run the RISC-V ISA tests.")
@click.option(
    "-b",
    "--bmark",
    "run_benchmark",
    is_flag=True,
    help="Run the benchmark suite and report cycles and instructions per program.",
)
@click.option(
    "-s",
    "--spectre",
    "spectre_path",
    type=click.Path(path_type=str),
    help="Run the Spectre Attack program at this path; exit status 0 means PASS.",
)
@click.option(
    "-p", "--print", "echo_to_console", is_flag=True, help="Print results to screen as well."
)
@click.option(
    "-t", "--terminate", is_flag=True, help="Terminate on the first failed test."
)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(path_type=str),
    help="Optional YAML suite configuration file",
)
@click.option("--isa-root", type=click.Path(path_type=str), help="Directory of ISA test binaries")
@click.option(
    "--bmark-root", type=click.Path(path_type=str), help="Directory of benchmark binaries"
)
@click.option(
    "-j",
    "--parallelism",
    type=click.IntRange(min=1),
    help="Number of simulator runs in flight (default: CPU count)",
)
@click.option(
    "--timeout",
    "timeout_seconds",
    type=click.IntRange(min=1),
    help="Kill and fail a simulator run after this many seconds",
)
@click.option(
    "--workbook",
    "workbook_path",
    type=click.Path(path_type=str),
    help="Optional .xlsx file summarising every reported outcome",
)
@click.option("--debug", is_flag=True, help="Enable verbose debug logging.")
@click.pass_context
def run_verification(
    ctx: click.Context,
    config_name: str,
    output_path: str,
    build: bool,
    run_assembly: bool,
    run_benchmark: bool,
    spectre_path: str | None,
    echo_to_console: bool,
    terminate: bool,
    settings_path: str | None,
    isa_root: str | None,
    bmark_root: str | None,
    parallelism: int | None,
    timeout_seconds: int | None,
    workbook_path: str | None,
    debug: bool,
) -> None:
    """Build the simulator and run the selected suites against it."""
    _configure_logging(debug)
    try:
        configuration = load_configuration(settings_path, environ=os.environ)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc
    configuration = _apply_overrides(
        configuration,
        isa_root=isa_root,
        bmark_root=bmark_root,
        parallelism=parallelism,
        timeout_seconds=timeout_seconds,
    )

    log_path = Path(output_path)
    request = VerificationRequest(
        config_name=config_name,
        configuration=configuration,
        build=build,
        run_assembly=run_assembly,
        run_benchmark=run_benchmark,
        probe_path=Path(spectre_path) if spectre_path else None,
        policy=TerminationPolicy.from_flag(terminate),
        log_path=log_path.resolve(),
        workbook_path=Path(workbook_path) if workbook_path else None,
    )
    try:
        log_file = log_path.open("w", encoding="utf-8")
    except OSError as exc:
        raise CliError(f"Couldn't create log-file: {log_path}: {exc}") from exc
    with log_file:
        try:
            exit_code = execute_verification_run(
                request, ReportSinks(log_file, echo_to_console=echo_to_console)
            )
        except VerificationRunError as exc:
            raise CliError(str(exc)) from exc
    if exit_code:
        ctx.exit(exit_code)


# pylint: enable=too-many-arguments,too-many-locals


def _apply_overrides(
    configuration: Configuration,
    *,
    isa_root: str | None,
    bmark_root: str | None,
    parallelism: int | None,
    timeout_seconds: int | None,
) -> Configuration:
    assembly = configuration.assembly
    if isa_root:
        assembly = dataclasses.replace(assembly, root=Path(isa_root))
    benchmark = configuration.benchmark
    if bmark_root:
        benchmark = dataclasses.replace(benchmark, root=Path(bmark_root))
    execution = configuration.execution
    if parallelism is not None:
        execution = dataclasses.replace(execution, parallelism=parallelism)
    if timeout_seconds is not None:
        execution = dataclasses.replace(execution, timeout_seconds=timeout_seconds)
    return dataclasses.replace(
        configuration, assembly=assembly, benchmark=benchmark, execution=execution
    )


def _configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=_LOG_FORMAT)
    root_logger.setLevel(level)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        exit_code = cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return exit_code if isinstance(exit_code, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
