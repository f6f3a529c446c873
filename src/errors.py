"""Error taxonomy for ReleaseGate.

Every failure raised by the core is a ``ReleaseGateError``. The five families
below map to the categories the CLI reports; only the CLI entry point turns
them into exit codes.
"""

from __future__ import annotations


class ReleaseGateError(Exception):
    """Base class for all ReleaseGate failures."""


# ---------- Validation ----------


class ValidationError(ReleaseGateError):
    """Input had the wrong shape (bad version text, bad config, bad command)."""


class InvalidVersionInput(ValidationError):
    """A version string does not conform to semantic versioning."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid semver version: {value}")


class DisallowedCommand(ValidationError):
    """A git command outside the allow-list was requested."""


class ConfigError(ValidationError):
    """The configuration file could not be loaded."""


# ---------- Repository state ----------


class RepositoryStateError(ReleaseGateError):
    """The repository cannot be used to open a pull request."""


class NotAVersionControlRepository(RepositoryStateError):
    """The working directory is not a git repository."""

    def __init__(self, path: str = "."):
        self.path = path
        super().__init__(f"Directory is not a Git repository: {path}")


class UnsupportedRemoteProvider(RepositoryStateError):
    """The remote does not point at a supported hosting provider."""

    def __init__(self, remote_url: str):
        self.remote_url = remote_url
        super().__init__(
            f"Repository remote '{remote_url}' is not a GitHub repository. "
            "Only GitHub is supported for PR creation."
        )


class MissingRemote(RepositoryStateError):
    """The configured remote does not exist in the repository."""

    def __init__(self, remote: str):
        self.remote = remote
        super().__init__(f"Repository has no remote named '{remote}'.")


class OnDefaultBranch(RepositoryStateError):
    """The working tree is checked out on the default branch."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            f"You are currently on the default branch ({branch}). "
            "Please switch to a feature branch to create a PR."
        )


class BehindDefaultBranch(RepositoryStateError):
    """The current branch is missing commits from the default branch."""

    def __init__(self, count: int, default_branch: str = ""):
        self.count = count
        self.default_branch = default_branch
        target = default_branch or "the default branch"
        super().__init__(
            f"Your branch is behind {target} by {count} commit(s). "
            f"Please merge {target} into your branch before creating a PR."
        )


class DirtyWorkingTree(RepositoryStateError):
    """There are uncommitted or unpushed changes."""

    def __init__(self):
        super().__init__("Please commit and push or stash your changes before creating a PR.")


# ---------- Project descriptor ----------


class ProjectDescriptorError(ReleaseGateError):
    """The project version declaration is missing, unsupported or ambiguous."""


class UnsupportedProjectKind(ProjectDescriptorError):
    """No known manifest was found in the project root."""

    def __init__(self, root: str):
        self.root = root
        super().__init__(f"Unsupported project type for version retrieval in {root}.")


class MultipleVersionTags(ProjectDescriptorError):
    """A single project file declares more than one version tag."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Multiple <Version> tags found in .csproj file {path}")


class AmbiguousProjectVersion(ProjectDescriptorError):
    """More than one project file declares a version tag."""

    def __init__(self, paths):
        self.paths = list(paths)
        super().__init__(
            "Multiple .csproj files with version tag found in solution: "
            + ", ".join(self.paths)
        )


class NoVersionTagFound(ProjectDescriptorError):
    """Project files exist but none declares a version tag."""

    def __init__(self):
        super().__init__("No <Version> tag found in any .csproj file.")


class ManifestReadError(ProjectDescriptorError):
    """A manifest file could not be read or decoded."""


class ManifestWriteError(ProjectDescriptorError):
    """A manifest file could not be rewritten with the new version."""


# ---------- Policy ----------


class PolicyError(ReleaseGateError):
    """The next-version decision could not be made."""


# ---------- External tools ----------


class ExternalToolError(ReleaseGateError):
    """An external process (git, test runner) failed."""


class VersionControlCommandError(ExternalToolError):
    """A git command exited with a non-zero status."""

    def __init__(self, command, returncode: int, stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"'{' '.join(self.command)}' failed: {detail}")


class TestRunFailed(ExternalToolError):
    """The project's test command failed."""

    __test__ = False  # keep pytest from collecting this class

    def __init__(self, command, returncode: int):
        self.command = list(command)
        self.returncode = returncode
        super().__init__(
            f"Tests failed ('{' '.join(self.command)}' exited with {returncode}), "
            "please fix the errors before you create a PR"
        )
