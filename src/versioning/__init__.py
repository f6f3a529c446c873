"""Semantic version handling, project descriptors and the next-version policy."""

from .models import BumpKind, Ecosystem, NextVersionDecision, ProjectDescriptor, VersionSource
from .policy import decide
from .project import detect, write_version
from .semver import increment, parse_strict, parse_tag, select_latest, strip_tag_prefix

__all__ = [
    "BumpKind",
    "Ecosystem",
    "NextVersionDecision",
    "ProjectDescriptor",
    "VersionSource",
    "decide",
    "detect",
    "write_version",
    "increment",
    "parse_strict",
    "parse_tag",
    "select_latest",
    "strip_tag_prefix",
]
