"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    REPOSITORY_NOT_READY = 1
    USAGE_ERROR = 2
    PROJECT_ERROR = 3
    TEST_FAILURE = 4
    VERSION_UPDATE_ERROR = 5
    TOOL_ERROR = 6


class ProjectKinds(Enum):
    """Project kinds supported by the program.

    Args:
        Enum (string): Project kinds supported by the program.
    """

    NODE = "node"
    DOTNET = "dotnet"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PACKAGE_JSON_FILE = "package.json"
    PACKAGE_LOCK_FILE = "package-lock.json"
    CSPROJ_SUFFIX = ".csproj"
    SCAN_SKIP_DIRS = ["bin", "obj", "node_modules"]
    CONFIG_FILE = ".releasegate.yml"

    BUMP_KINDS = ["patch", "minor", "major"]
    INITIAL_VERSION = "1.0.0"

    DEFAULT_REMOTE = "origin"
    # git@github.com:<owner>/<repo>.git - SSH version
    # https://github.com/<owner>/<repo>.git - HTTPS version
    GITHUB_SSH_PREFIX = "git@github.com:"
    GITHUB_HTTPS_PREFIX = "https://github.com/"
    GITHUB_WEB_BASE = "https://github.com"
    STATUS_UP_TO_DATE = "Your branch is up to date with "
    STATUS_CLEAN = "nothing to commit, working tree clean"
    GIT_ALLOWED_COMMANDS = [
        "fetch", "status", "rev-parse", "rev-list", "tag",
        "config", "add", "commit", "push",
    ]

    TEST_COMMANDS = {
        ProjectKinds.NODE.value: ["npm", "test"],
        ProjectKinds.DOTNET.value: ["dotnet", "test"],
    }

    PR_TITLE = "PLACEHOLDER CREATE YOUR OWN TITLE"
    PR_BODY = (
        "PLACEHOLDER BODY\n\n Closes (change to #{issue_number} for automatic "
        "closing of issues) (add description of closing notes here)"
    )
    COMMIT_MESSAGE = "chore: bump version to {version}"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "RELEASEGATE_LOG_LEVEL"
