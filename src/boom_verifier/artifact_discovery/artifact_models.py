"""Artifact discovery entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class DiscoveryError(Exception):
    """Raised when an artifact root cannot be opened or the pattern is invalid."""


class GlobEntryError(Exception):
    """Raised when a single matched path cannot be inspected."""


@dataclass(frozen=True)
class Artifact:
    """One executable test program handed to the simulator."""

    path: Path

    @property
    def name(self) -> str:
        """Display name used in report lines (final path segment)."""
        return self.path.name
