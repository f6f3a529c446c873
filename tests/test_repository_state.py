"""Tests for repository inspection and readiness checks."""

import os
import shutil
import tempfile

import pytest

from errors import (
    BehindDefaultBranch,
    DirtyWorkingTree,
    MissingRemote,
    NotAVersionControlRepository,
    OnDefaultBranch,
    UnsupportedRemoteProvider,
    VersionControlCommandError,
)
from repository.git import GitClient
from repository.readiness import check_readiness
from repository.state import (
    CommitDivergence,
    RepositoryState,
    inspect_repository,
    latest_release_tag,
    parse_divergence,
    status_is_clean,
)

CLEAN_STATUS = """On branch feature/x
Your branch is up to date with 'origin/feature/x'.

nothing to commit, working tree clean
"""

DIRTY_STATUS = """On branch feature/x
Your branch is up to date with 'origin/feature/x'.

Changes not staged for commit:
  modified:   README.md
"""

AHEAD_STATUS = """On branch feature/x
Your branch is ahead of 'origin/feature/x' by 1 commit.

nothing to commit, working tree clean
"""


class FakeGit:
    """In-memory stand-in for GitClient."""

    def __init__(self, remote_url="git@github.com:acme/widgets.git", current="feature/x",
                 default="main", status=CLEAN_STATUS, counts="0\t2", tags=(),
                 work_tree=True):
        self.remote = "origin"
        self._work_tree = work_tree
        self._remote_url = remote_url
        self._current = current
        self._default = default
        self._status = status
        self._counts = counts
        self._tags = list(tags)
        self.calls = []

    def ensure_work_tree(self):
        self.calls.append("ensure_work_tree")
        if not self._work_tree:
            raise NotAVersionControlRepository(".")

    def remote_url(self):
        self.calls.append("remote_url")
        if self._remote_url is None:
            raise MissingRemote(self.remote)
        return self._remote_url

    def fetch_all(self):
        self.calls.append("fetch_all")

    def current_branch(self):
        return self._current

    def default_branch(self):
        return self._default

    def status(self):
        return self._status

    def rev_list_left_right(self, left, right):
        self.calls.append(f"rev-list {left}...{right}")
        return self._counts

    def tags(self):
        return self._tags


def _state(current="feature/x", default="main", clean=True, behind=0, ahead=1):
    return RepositoryState(
        remote_url="git@github.com:acme/widgets.git",
        hosted_url="https://github.com/acme/widgets",
        current_branch=current,
        default_branch=default,
        is_clean=clean,
        divergence=CommitDivergence(behind=behind, ahead=ahead),
    )


class TestStatusParsing:
    """Test status and rev-list parsing."""

    def test_clean_status(self):
        assert status_is_clean(CLEAN_STATUS) is True

    @pytest.mark.parametrize("status", [DIRTY_STATUS, AHEAD_STATUS, "", "fatal: something"])
    def test_not_clean(self, status):
        assert status_is_clean(status) is False

    def test_parse_divergence(self):
        assert parse_divergence("3\t5") == CommitDivergence(behind=3, ahead=5)

    def test_parse_divergence_garbage(self):
        with pytest.raises(VersionControlCommandError):
            parse_divergence("oops")

    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError):
            CommitDivergence(behind=-1, ahead=0)


class TestInspectRepository:
    """Test inspect_repository function."""

    def test_builds_state(self):
        git = FakeGit(counts="1\t4")

        state = inspect_repository(git)

        assert state.hosted_url == "https://github.com/acme/widgets"
        assert state.current_branch == "feature/x"
        assert state.default_branch == "main"
        assert state.is_clean is True
        assert state.divergence == CommitDivergence(behind=1, ahead=4)
        assert "rev-list origin/main...HEAD" in git.calls

    def test_remote_validated_before_fetch(self):
        git = FakeGit(remote_url="git@bitbucket.org:acme/widgets.git")

        with pytest.raises(UnsupportedRemoteProvider):
            inspect_repository(git)
        assert git.calls == ["ensure_work_tree", "remote_url"]

    def test_not_a_repository_stops_first(self):
        git = FakeGit(work_tree=False)

        with pytest.raises(NotAVersionControlRepository):
            inspect_repository(git)
        assert git.calls == ["ensure_work_tree"]

    def test_missing_remote(self):
        git = FakeGit(remote_url=None)

        with pytest.raises(MissingRemote):
            inspect_repository(git)
        assert "fetch_all" not in git.calls

    @pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
    def test_real_directory_without_repository(self, monkeypatch):
        with tempfile.TemporaryDirectory() as tmpdir:
            monkeypatch.setenv("GIT_CEILING_DIRECTORIES", os.path.dirname(os.path.realpath(tmpdir)))

            with pytest.raises(NotAVersionControlRepository):
                inspect_repository(GitClient(cwd=tmpdir))

    def test_empty_branch_rejected(self):
        with pytest.raises(ValueError):
            inspect_repository(FakeGit(default=""))

    def test_latest_release_tag(self):
        assert latest_release_tag(FakeGit(tags=["v1.0.0", "v1.2.0", "nightly"])) == "v1.2.0"
        assert latest_release_tag(FakeGit(tags=[])) is None


class TestCheckReadiness:
    """Test check_readiness function."""

    def test_ready(self):
        assert check_readiness(_state()) is None

    def test_on_default_branch(self):
        with pytest.raises(OnDefaultBranch):
            check_readiness(_state(current="main"))

    def test_default_branch_checked_first(self):
        with pytest.raises(OnDefaultBranch):
            check_readiness(_state(current="main", clean=False, behind=7))

    def test_behind_default_branch(self):
        with pytest.raises(BehindDefaultBranch) as exc:
            check_readiness(_state(behind=3, clean=False))
        assert exc.value.count == 3
        assert "3 commit(s)" in str(exc.value)

    def test_dirty_working_tree(self):
        with pytest.raises(DirtyWorkingTree):
            check_readiness(_state(clean=False))
