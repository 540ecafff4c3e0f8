"""Simulator build domain exports."""

from .simulator_builder import BuildError, BuildResult, build_command, build_simulator

__all__ = ["BuildError", "BuildResult", "build_command", "build_simulator"]
