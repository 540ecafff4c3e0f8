"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from boom_verifier.simulator_execution.parallel_runner import default_parallelism

from .runtime_settings import (
    Configuration,
    ExecutionSettings,
    SimulatorSettings,
    SuiteSettings,
)

RISCV_ENV_VAR = "RISCV"
ISA_TESTS_SUBPATH = Path("riscv64-unknown-elf") / "share" / "riscv-tests" / "isa"

DEFAULT_ASSEMBLY_PATTERN = "rv64*"
DEFAULT_ASSEMBLY_EXCLUDE_SUFFIX = "dump"
DEFAULT_BENCHMARK_PATTERN = "*.riscv"
DEFAULT_MAKE_COMMAND = "make"
DEFAULT_BUILD_JOBS = 6


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(
    config_path: Path | str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Configuration:
    """Load and validate the suite configuration.

    Args:
      config_path: Optional YAML/JSON file. Without one, defaults are used.
      environ: Environment values consulted for defaults (``RISCV``). Nothing
        is read from the process environment unless passed in here.
    """
    env = environ or {}
    parsed: Mapping[str, Any] = {}
    path: Path | None = None
    base_path = Path.cwd()
    if config_path is not None:
        path = Path(config_path)
        parsed = _read_configuration_file(path)
        base_path = path.resolve().parent

    suites = _optional_mapping(parsed.get("suites"), "suites")
    return Configuration(
        path=path,
        simulator=_parse_simulator_section(parsed.get("simulator"), base_path),
        assembly=_parse_suite_section(
            suites.get("assembly"),
            "suites.assembly",
            base_path,
            default_root=_default_isa_root(env),
            default_pattern=DEFAULT_ASSEMBLY_PATTERN,
            default_exclude_suffix=DEFAULT_ASSEMBLY_EXCLUDE_SUFFIX,
        ),
        benchmark=_parse_suite_section(
            suites.get("benchmark"),
            "suites.benchmark",
            base_path,
            default_root=None,
            default_pattern=DEFAULT_BENCHMARK_PATTERN,
            default_exclude_suffix=None,
        ),
        execution=_parse_execution_section(parsed.get("execution")),
    )


def _read_configuration_file(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")
    return parsed


def _default_isa_root(environ: Mapping[str, str]) -> Path | None:
    riscv = (environ.get(RISCV_ENV_VAR) or "").strip()
    if not riscv:
        return None
    return Path(riscv) / ISA_TESTS_SUBPATH


def _parse_simulator_section(value: Any, base_path: Path) -> SimulatorSettings:
    section = _optional_mapping(value, "simulator")
    directory = _optional_string(section.get("directory"), "simulator.directory")
    make_command = _optional_string(section.get("make_command"), "simulator.make_command")
    build_jobs = _require_positive_int(
        section.get("build_jobs", DEFAULT_BUILD_JOBS), "simulator.build_jobs"
    )
    return SimulatorSettings(
        directory=_resolve_path(base_path, directory) if directory else Path.cwd(),
        make_command=make_command or DEFAULT_MAKE_COMMAND,
        build_jobs=build_jobs,
    )


# pylint: disable=too-many-arguments
def _parse_suite_section(
    value: Any,
    section_name: str,
    base_path: Path,
    *,
    default_root: Path | None,
    default_pattern: str,
    default_exclude_suffix: str | None,
) -> SuiteSettings:
    section = _optional_mapping(value, section_name)
    root = _optional_string(section.get("root"), f"{section_name}.root")
    pattern = _require_non_empty_string(
        section.get("pattern", default_pattern), f"{section_name}.pattern"
    )
    if "exclude_suffix" in section:
        exclude_suffix = _optional_string(
            section.get("exclude_suffix"), f"{section_name}.exclude_suffix"
        )
    else:
        exclude_suffix = default_exclude_suffix
    return SuiteSettings(
        root=_resolve_path(base_path, root) if root else default_root,
        pattern=pattern,
        exclude_suffix=exclude_suffix,
    )


# pylint: enable=too-many-arguments


def _parse_execution_section(value: Any) -> ExecutionSettings:
    section = _optional_mapping(value, "execution")
    parallelism = _require_positive_int(
        section.get("parallelism", default_parallelism()), "execution.parallelism"
    )
    timeout_value = section.get("timeout_seconds")
    timeout_seconds = (
        None
        if timeout_value is None
        else _require_positive_int(timeout_value, "execution.timeout_seconds")
    )
    return ExecutionSettings(parallelism=parallelism, timeout_seconds=timeout_seconds)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
