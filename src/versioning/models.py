"""Data models for version resolution and project descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

import semantic_version

from constants import Constants, ProjectKinds


class Ecosystem(Enum):
    """Enum for supported project ecosystems."""
    NODE = ProjectKinds.NODE.value
    DOTNET = ProjectKinds.DOTNET.value


class BumpKind(Enum):
    """Semantic version increment level."""
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


class VersionSource(Enum):
    """Where the next version was derived from."""
    FROM_TAG = "tag"
    FROM_PROJECT = "project"
    FALLBACK_DEFAULT = "default"


@dataclass(frozen=True)
class ProjectDescriptor:
    """How a project declares its own version."""
    ecosystem: Ecosystem
    declared_version: Optional[semantic_version.Version]
    manifest_paths: Tuple[str, ...]
    raw_version: Optional[str] = None

    def __post_init__(self):
        if not self.manifest_paths:
            raise ValueError("ProjectDescriptor requires at least one manifest path")

    @classmethod
    def create(
        cls,
        ecosystem: Ecosystem,
        declared_version: Optional[semantic_version.Version],
        manifest_paths: Iterable[str],
        raw_version: Optional[str] = None,
    ) -> "ProjectDescriptor":
        """Build a descriptor, normalizing the path list to a tuple."""
        return cls(
            ecosystem=ecosystem,
            declared_version=declared_version,
            manifest_paths=tuple(manifest_paths),
            raw_version=raw_version,
        )


@dataclass(frozen=True)
class NextVersionDecision:
    """Outcome of the next-version policy."""
    version: semantic_version.Version
    is_initial_release: bool
    source: VersionSource

    def __post_init__(self):
        if self.is_initial_release and str(self.version) != Constants.INITIAL_VERSION:
            raise ValueError(
                f"An initial release must be {Constants.INITIAL_VERSION}, got {self.version}"
            )
