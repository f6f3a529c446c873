"""Allow-listed git command runner."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import List, Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from errors import (
    DisallowedCommand,
    MissingRemote,
    NotAVersionControlRepository,
    VersionControlCommandError,
)

logger = logging.getLogger(__name__)

_NOT_A_REPO_MARKER = "not a git repository"


def _git_env():
    # status phrases are matched in English
    return {**os.environ, "LC_ALL": "C"}


class GitClient:
    """Runs git subcommands in a working directory.

    Only the subcommands listed in ``Constants.GIT_ALLOWED_COMMANDS`` may be
    executed. Output is returned as text.
    """

    def __init__(self, cwd: Optional[str] = None, remote: str = Constants.DEFAULT_REMOTE):
        self.cwd = cwd
        self.remote = remote

    def run(self, *args: str) -> str:
        """Run ``git <args>`` and return stdout.

        Raises:
            DisallowedCommand: the subcommand is not allow-listed.
            NotAVersionControlRepository: cwd is not inside a git repository.
            VersionControlCommandError: git failed or is not installed.
        """
        if not args or args[0] not in Constants.GIT_ALLOWED_COMMANDS:
            raise DisallowedCommand(
                f"Only git commands {', '.join(Constants.GIT_ALLOWED_COMMANDS)} are allowed, "
                f"got: {' '.join(args) or '<empty>'}"
            )
        command: List[str] = ["git", *args]

        if is_debug_enabled(logger):
            logger.debug("Running git command", extra=extra_context(
                event="subprocess", component="git", action=args[0], target=self.cwd,
            ))

        try:
            proc = subprocess.run(
                command,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=False,
                env=_git_env(),
            )
        except FileNotFoundError as e:
            raise VersionControlCommandError(command, 127, str(e)) from e

        if proc.returncode != 0:
            stderr = proc.stderr or ""
            if _NOT_A_REPO_MARKER in stderr.lower():
                raise NotAVersionControlRepository(self.cwd or ".")
            raise VersionControlCommandError(command, proc.returncode, stderr)
        return proc.stdout

    # ---------- queries ----------

    def ensure_work_tree(self) -> None:
        """Raise NotAVersionControlRepository unless cwd is inside a work tree."""
        if self.run("rev-parse", "--is-inside-work-tree").strip() != "true":
            raise NotAVersionControlRepository(self.cwd or ".")

    def remote_url(self) -> str:
        try:
            return self.run("config", "--get", f"remote.{self.remote}.url").strip()
        except VersionControlCommandError as e:
            # git config exits 1 when the key is unset
            if e.returncode == 1:
                raise MissingRemote(self.remote) from e
            raise

    def fetch_all(self) -> None:
        self.run("fetch", "--all", "--tags")

    def current_branch(self) -> str:
        return self.run("rev-parse", "--abbrev-ref", "HEAD").strip()

    def default_branch(self) -> str:
        ref = self.run("rev-parse", "--abbrev-ref", f"{self.remote}/HEAD").strip()
        prefix = f"{self.remote}/"
        return ref[len(prefix):] if ref.startswith(prefix) else ref

    def status(self) -> str:
        return self.run("status")

    def rev_list_left_right(self, left: str, right: str) -> str:
        return self.run("rev-list", "--left-right", "--count", f"{left}...{right}").strip()

    def tags(self) -> List[str]:
        return [t for t in self.run("tag").splitlines() if t.strip()]

    # ---------- writes ----------

    def add_all(self) -> None:
        self.run("add", ".")

    def commit(self, message: str) -> None:
        self.run("commit", "-m", message)

    def push(self, branch: str, extra: Sequence[str] = ("--quiet",)) -> None:
        self.run("push", self.remote, branch, *extra)


def commit_and_push(git: GitClient, message: str, branch: Optional[str] = None) -> None:
    """Stage everything, commit with ``message`` and push ``branch``."""
    git.add_all()
    git.commit(message)
    git.push(branch or git.current_branch())
    logger.info("Committed '%s' and pushed to %s", message, git.remote)
