"""Pull-request release flow.

Sequences readiness validation, the project's tests, next-version selection,
manifest update, commit/push and PR link emission. This is the only module
that decides which failures are fatal: everything propagates except a failed
tag lookup, which degrades to "no tag yet".
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Callable, Optional, Union

from cli_config import ReleaseConfig
from errors import ExternalToolError, ManifestWriteError
from repository.git import GitClient, commit_and_push
from repository.readiness import check_readiness
from repository.remote import compare_url
from repository.state import RepositoryState, inspect_repository, latest_release_tag
from versioning.models import BumpKind, NextVersionDecision, ProjectDescriptor
from versioning.policy import decide
from versioning.project import detect, write_version

from .links import clickable_link
from .project_tests import run_tests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PullRequestOutcome:
    """What a pull-request run did."""
    state: RepositoryState
    project: ProjectDescriptor
    latest_tag: Optional[str]
    decision: NextVersionDecision
    version_updated: bool
    pushed: bool
    pr_url: str


def print_link(url: str) -> None:
    """Default link emitter: print a clickable link to stdout."""
    print(f"Create your PR here: {clickable_link(url, stream=sys.stdout)}")


class ReleaseOrchestrator:
    """Runs the pull-request flow for one project root."""

    def __init__(
        self,
        root: str = ".",
        config: Optional[ReleaseConfig] = None,
        git: Optional[GitClient] = None,
        test_runner: Optional[Callable[..., None]] = None,
        emit_link: Optional[Callable[[str], None]] = None,
    ):
        self.root = root
        self.config = config or ReleaseConfig()
        self.git = git or GitClient(cwd=root, remote=self.config.remote)
        self.test_runner = test_runner or run_tests
        self.emit_link = emit_link or print_link

    # ---------- steps ----------

    def _check_repository(self) -> RepositoryState:
        logger.info("Checking if repo is clean and up-to-date...")
        state = inspect_repository(self.git)
        check_readiness(state)
        logger.info("Repository is clean and up-to-date")
        return state

    def _resolve_project(self) -> ProjectDescriptor:
        project = detect(self.root)
        logger.info(
            "Project version is %s (%s)",
            project.raw_version if project.raw_version is not None else "not set",
            project.ecosystem.value,
        )
        return project

    def _run_tests(self, project: ProjectDescriptor) -> None:
        if self.config.skip_tests:
            logger.warning("Skipping tests (--skip-tests)")
            return
        logger.info("Running tests...")
        self.test_runner(project.ecosystem, cwd=self.root, overrides=self.config.test_commands)
        logger.info("All tests passed")

    def _find_latest_tag(self) -> Optional[str]:
        try:
            tag = latest_release_tag(self.git)
        except ExternalToolError as e:
            logger.warning("Failed to get latest release tag: %s", e)
            return None
        if tag:
            logger.info("Latest release tag is %s", tag)
        else:
            logger.info("No release tags found, will use project version or start from 1.0.0")
        return tag

    def _update_version(self, project: ProjectDescriptor, decision: NextVersionDecision) -> bool:
        files = " and ".join(project.manifest_paths)
        if project.declared_version is not None and str(project.declared_version) == str(decision.version):
            logger.info("%s-project version in %s is already up to date.", project.ecosystem.value, files)
            return False
        if self.config.dry_run:
            logger.info("Dry run: would update %s to %s", files, decision.version)
            return False
        try:
            write_version(project, decision.version)
        except OSError as e:
            raise ManifestWriteError(f"Failed to update project version: {e}") from e
        logger.info("%s-project version in %s updated to %s", project.ecosystem.value, files, decision.version)
        return True

    def _commit_and_push(self, state: RepositoryState, decision: NextVersionDecision) -> None:
        message = self.config.format_commit_message(decision.version)
        commit_and_push(self.git, message, state.current_branch)
        logger.info("Version update committed and pushed to remote")

    # ---------- flow ----------

    def run_pull_request(self, bump: Union[BumpKind, str]) -> PullRequestOutcome:
        """Run the full pull-request flow for a ``bump`` release."""
        bump = BumpKind(bump)
        state = self._check_repository()
        project = self._resolve_project()
        self._run_tests(project)
        latest_tag = self._find_latest_tag()

        decision = decide(latest_tag, project, bump)
        logger.info(
            "Next version is %s (determined from %s)%s",
            decision.version, decision.source.value,
            ", this is the initial release" if decision.is_initial_release else "",
        )

        updated = self._update_version(project, decision)
        if updated:
            self._commit_and_push(state, decision)

        url = compare_url(
            state.hosted_url, state.default_branch, state.current_branch,
            title=self.config.pr_title, body=self.config.pr_body,
        )
        self.emit_link(url)
        return PullRequestOutcome(
            state=state,
            project=project,
            latest_tag=latest_tag,
            decision=decision,
            version_updated=updated,
            pushed=updated,
            pr_url=url,
        )
