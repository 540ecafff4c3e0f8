"""Glob-based artifact discovery service."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from .artifact_models import Artifact, DiscoveryError, GlobEntryError

ExclusionPredicate = Callable[[Path], bool]

_LOGGER = logging.getLogger(__name__)


def suffix_exclusion(suffix: str | None) -> ExclusionPredicate:
    """Build a predicate rejecting paths whose final segment ends with `suffix`."""
    if not suffix:
        return _exclude_nothing

    def _excluded(path: Path) -> bool:
        return path.name.endswith(suffix)

    return _excluded


def discover(
    root: Path | str,
    pattern: str,
    exclude: ExclusionPredicate | None = None,
) -> tuple[Artifact, ...]:
    """Expand `pattern` under `root` and return the runnable artifacts sorted by path.

    Args:
      root: Directory the pattern is expanded in.
      pattern: Relative glob pattern, e.g. ``rv64*``.
      exclude: Optional predicate; matching paths are dropped.

    Returns:
      Artifacts in lexicographic path order.

    Raises:
      DiscoveryError: If the root cannot be opened or the pattern is invalid.
    """
    root_path = Path(root)
    _ensure_readable_root(root_path)
    is_excluded = exclude or _exclude_nothing

    try:
        matches = sorted(root_path.glob(pattern))
    except (ValueError, NotImplementedError) as exc:
        raise DiscoveryError(f"Invalid artifact pattern '{pattern}': {exc}") from exc
    except OSError as exc:
        raise DiscoveryError(f"Failed to open artifact root {root_path}: {exc}") from exc

    artifacts: list[Artifact] = []
    for path in matches:
        try:
            _inspect_entry(path)
        except GlobEntryError as exc:
            _LOGGER.warning("Skipping artifact entry: %s", exc)
            continue
        if is_excluded(path):
            continue
        artifacts.append(Artifact(path=path))
    return tuple(artifacts)


def _ensure_readable_root(root: Path) -> None:
    if not root.exists():
        raise DiscoveryError(f"Artifact root not found: {root}")
    if not root.is_dir():
        raise DiscoveryError(f"Artifact root is not a directory: {root}")
    try:
        with os.scandir(root) as entries:
            next(entries, None)
    except OSError as exc:
        raise DiscoveryError(f"Failed to open artifact root {root}: {exc}") from exc


def _inspect_entry(path: Path) -> None:
    try:
        path.stat()
    except OSError as exc:
        raise GlobEntryError(f"{path}: {exc}") from exc


def _exclude_nothing(_path: Path) -> bool:
    return False
