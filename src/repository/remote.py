"""GitHub remote URL parsing and pull-request link building."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, urlencode

from constants import Constants
from errors import UnsupportedRemoteProvider

_REPO_PATH_RE = re.compile(r"^(?P<owner>[A-Za-z0-9_.-]+)/(?P<repo>[A-Za-z0-9_.-]+?)(?:\.git)?/?$")


@dataclass(frozen=True)
class RepoRef:
    """Owner/repo pair of a GitHub remote."""
    owner: str
    repo: str

    @property
    def web_url(self) -> str:
        return f"{Constants.GITHUB_WEB_BASE}/{self.owner}/{self.repo}"


def parse_remote(remote_url: str) -> RepoRef:
    """Parse an SSH or HTTPS GitHub remote URL.

    Raises:
        UnsupportedRemoteProvider: the URL is not one of the two accepted forms.
    """
    url = (remote_url or "").strip()
    path: Optional[str] = None
    for prefix in (Constants.GITHUB_SSH_PREFIX, Constants.GITHUB_HTTPS_PREFIX):
        if url.startswith(prefix):
            path = url[len(prefix):]
            break
    if path is None:
        raise UnsupportedRemoteProvider(url)
    m = _REPO_PATH_RE.match(path)
    if not m:
        raise UnsupportedRemoteProvider(url)
    return RepoRef(owner=m.group("owner"), repo=m.group("repo"))


def hosted_url(remote_url: str) -> str:
    """Translate a remote URL into the browsable repository URL."""
    return parse_remote(remote_url).web_url


def compare_url(
    base_url: str,
    default_branch: str,
    current_branch: str,
    title: str = Constants.PR_TITLE,
    body: str = Constants.PR_BODY,
) -> str:
    """Build the GitHub compare link that pre-fills a new pull request."""
    query = urlencode({"expand": "1", "title": title, "body": body}, quote_via=quote)
    branches = f"{quote(default_branch, safe='/')}...{quote(current_branch, safe='/')}"
    return f"{base_url.rstrip('/')}/compare/{branches}?{query}"
