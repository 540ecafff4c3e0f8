"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import RISCV_ENV_VAR, ConfigurationError, load_configuration
from .runtime_settings import (
    Configuration,
    ExecutionSettings,
    SimulatorSettings,
    SuiteSettings,
)

__all__ = [
    "Configuration",
    "ExecutionSettings",
    "SimulatorSettings",
    "SuiteSettings",
    "ConfigurationError",
    "RISCV_ENV_VAR",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
