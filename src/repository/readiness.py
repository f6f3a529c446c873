"""Pull-request readiness checks."""

from errors import BehindDefaultBranch, DirtyWorkingTree, OnDefaultBranch

from .state import RepositoryState


def check_readiness(state: RepositoryState) -> None:
    """Raise if ``state`` is not safe to open a pull request from.

    Checks run in a fixed order and stop at the first failure: default
    branch, then behind count, then cleanliness.
    """
    if state.current_branch == state.default_branch:
        raise OnDefaultBranch(state.current_branch)
    if state.divergence.behind > 0:
        raise BehindDefaultBranch(state.divergence.behind, state.default_branch)
    if not state.is_clean:
        raise DirtyWorkingTree()
