"""Git repository inspection and pull-request readiness."""

from .git import GitClient, commit_and_push
from .readiness import check_readiness
from .state import CommitDivergence, RepositoryState, inspect_repository, latest_release_tag

__all__ = [
    "GitClient",
    "commit_and_push",
    "check_readiness",
    "CommitDivergence",
    "RepositoryState",
    "inspect_repository",
    "latest_release_tag",
]
