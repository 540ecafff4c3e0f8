"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "verifier.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Suite configuration template for boom-verifier.
# Every key is optional. Uncomment and fill <OPTIONAL> placeholders as needed.
# Relative paths are resolved against the directory of this file.

simulator:
  # Directory holding simulator-example-<CONFIG>; defaults to the working directory.
  # directory: "<OPTIONAL>"
  # make_command: "<OPTIONAL>"
  # build_jobs: "<OPTIONAL>"

suites:
  assembly:
    # Defaults to $RISCV/riscv64-unknown-elf/share/riscv-tests/isa.
    # root: "<OPTIONAL>"
    pattern: "rv64*"
    # Companion files ending with this suffix are never run.
    exclude_suffix: "dump"
  benchmark:
    # Required when running the benchmark suite (or pass --bmark-root).
    # root: "<OPTIONAL>"
    pattern: "*.riscv"

execution:
  # Worker threads; defaults to the number of available CPUs.
  # parallelism: "<OPTIONAL>"
  # Per-run watchdog in seconds; runs are unbounded when unset.
  # timeout_seconds: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML suite configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder suite configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Suite configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
