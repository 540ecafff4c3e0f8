"""Artifact discovery domain exports."""

from .artifact_models import Artifact, DiscoveryError, GlobEntryError
from .glob_discovery import ExclusionPredicate, discover, suffix_exclusion

__all__ = [
    "Artifact",
    "DiscoveryError",
    "GlobEntryError",
    "ExclusionPredicate",
    "discover",
    "suffix_exclusion",
]
