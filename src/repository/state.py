"""Repository state snapshot used to decide pull-request readiness."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from constants import Constants
from errors import VersionControlCommandError
from versioning.semver import select_latest

from .git import GitClient
from .remote import hosted_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitDivergence:
    """Commit counts relative to the default branch."""
    behind: int
    ahead: int

    def __post_init__(self):
        if self.behind < 0 or self.ahead < 0:
            raise ValueError("commit counts must be non-negative")


@dataclass(frozen=True)
class RepositoryState:
    """Snapshot of the working repository."""
    remote_url: str
    hosted_url: str
    current_branch: str
    default_branch: str
    is_clean: bool
    divergence: CommitDivergence

    def __post_init__(self):
        if not self.current_branch or not self.default_branch:
            raise ValueError("branch names must not be empty")


def status_is_clean(status: str) -> bool:
    """True only for an up-to-date branch with nothing to commit."""
    return Constants.STATUS_UP_TO_DATE in status and Constants.STATUS_CLEAN in status


def parse_divergence(output: str) -> CommitDivergence:
    """Parse ``git rev-list --left-right --count`` output (behind, ahead)."""
    parts = output.split()
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise VersionControlCommandError(["git", "rev-list"], 0, f"unexpected output: {output!r}")
    return CommitDivergence(behind=int(parts[0]), ahead=int(parts[1]))


def inspect_repository(git: GitClient) -> RepositoryState:
    """Collect a fresh RepositoryState.

    The working tree and remote are validated before anything else, then all
    refs and tags are fetched so divergence counts are current.
    """
    git.ensure_work_tree()
    remote_url = git.remote_url()
    web_url = hosted_url(remote_url)

    git.fetch_all()
    current = git.current_branch()
    default = git.default_branch()
    clean = status_is_clean(git.status())
    divergence = parse_divergence(git.rev_list_left_right(f"{git.remote}/{default}", "HEAD"))

    state = RepositoryState(
        remote_url=remote_url,
        hosted_url=web_url,
        current_branch=current,
        default_branch=default,
        is_clean=clean,
        divergence=divergence,
    )
    logger.debug("Repository state: %s", state)
    return state


def latest_release_tag(git: GitClient) -> Optional[str]:
    """Return the highest semantic-version tag in the repository, if any."""
    return select_latest(git.tags())
