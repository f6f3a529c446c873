"""Semantic version parsing, comparison and increment helpers."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

import semantic_version

from common.logging_utils import extra_context, is_debug_enabled
from errors import InvalidVersionInput

from .models import BumpKind

logger = logging.getLogger(__name__)

_TAG_PREFIXES = ("v", "V")


def parse_strict(text: Optional[str]) -> Optional[semantic_version.Version]:
    """Parse ``text`` as a strict semantic version.

    Returns None for anything that is not ``major.minor.patch[-pre][+build]``.
    Leading zeros and a leading "v" are rejected; strip tag prefixes with
    ``strip_tag_prefix`` first.
    """
    if not isinstance(text, str) or not text:
        return None
    try:
        return semantic_version.Version(text)
    except ValueError:
        return None


def require_version(text: Optional[str]) -> semantic_version.Version:
    """Parse ``text`` or raise InvalidVersionInput."""
    version = parse_strict(text)
    if version is None:
        raise InvalidVersionInput(text)
    return version


def strip_tag_prefix(tag: str) -> str:
    """Drop a single leading "v" from a tag name."""
    tag = tag.strip()
    if tag[:1] in _TAG_PREFIXES:
        return tag[1:]
    return tag


def parse_tag(tag: Optional[str]) -> Optional[semantic_version.Version]:
    """Parse a release tag name such as ``v1.2.3``."""
    if not isinstance(tag, str):
        return None
    return parse_strict(strip_tag_prefix(tag))


def select_latest(candidates: Iterable[str]) -> Optional[str]:
    """Return the tag name holding the highest semantic version.

    Candidates that do not parse are ignored. Prereleases take part in the
    comparison and rank below their release. Returns None when nothing parses.
    """
    best_tag: Optional[str] = None
    best_version: Optional[semantic_version.Version] = None
    skipped = 0
    for tag in candidates:
        version = parse_tag(tag)
        if version is None:
            skipped += 1
            continue
        if best_version is None or version > best_version:
            best_tag, best_version = tag.strip(), version

    if is_debug_enabled(logger):
        logger.debug("Selected latest tag", extra=extra_context(
            event="decision", component="semver", action="select_latest",
            target=best_tag, skipped=skipped,
        ))
    return best_tag


def increment(
    base: semantic_version.Version,
    bump: Union[BumpKind, str],
) -> semantic_version.Version:
    """Return ``base`` bumped by one ``bump`` level.

    Prerelease and build components are dropped, so a prerelease bumps to
    its corresponding release where the level already covers it.
    """
    bump = BumpKind(bump)
    if bump is BumpKind.MAJOR:
        return base.next_major()
    if bump is BumpKind.MINOR:
        return base.next_minor()
    return base.next_patch()
