"""Next-version policy: pick the version for the upcoming release.

Rules, first match wins:

1. Neither the latest tag nor the declared version is valid: start at 1.0.0.
2. A valid tag exists: bump the tag. The tag wins over the declared version
   even when the two disagree, since tags record what was actually released.
3. Only the declared version is valid: a declared 1.0.0 (build metadata
   ignored) is treated as never released and kept as-is; anything else is
   bumped.

Rule 3's 1.0.0 special case means a project that hand-set 1.0.0 without
tagging cannot bump past it through this path.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import semantic_version

from constants import Constants

from .models import BumpKind, NextVersionDecision, ProjectDescriptor, VersionSource
from .semver import increment, parse_tag

logger = logging.getLogger(__name__)

TagInput = Optional[Union[semantic_version.Version, str]]


def _coerce_tag(latest_tag: TagInput) -> Optional[semantic_version.Version]:
    if isinstance(latest_tag, semantic_version.Version):
        return latest_tag
    return parse_tag(latest_tag)


def decide(
    latest_tag: TagInput,
    descriptor: ProjectDescriptor,
    bump: Union[BumpKind, str],
) -> NextVersionDecision:
    """Decide the next version from the latest tag and the declared version."""
    bump = BumpKind(bump)
    tag_version = _coerce_tag(latest_tag)
    declared = descriptor.declared_version
    initial = semantic_version.Version(Constants.INITIAL_VERSION)

    if tag_version is None and declared is None:
        decision = NextVersionDecision(initial, True, VersionSource.FALLBACK_DEFAULT)
    elif tag_version is not None:
        decision = NextVersionDecision(increment(tag_version, bump), False, VersionSource.FROM_TAG)
    elif str(declared.truncate("prerelease")) == Constants.INITIAL_VERSION:
        decision = NextVersionDecision(initial, True, VersionSource.FROM_PROJECT)
    else:
        decision = NextVersionDecision(increment(declared, bump), False, VersionSource.FROM_PROJECT)

    logger.debug(
        "Next version %s from %s (tag=%s, declared=%s, bump=%s)",
        decision.version, decision.source.value, tag_version, declared, bump.value,
    )
    return decision
