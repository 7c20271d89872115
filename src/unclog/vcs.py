"""Version control platforms: project URLs, change links, and git remotes."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Union
from urllib.parse import urlparse

from .errors import UnsupportedProjectUrlError
from .utils import log_debug, log_info, log_warning

PlatformIdKind = Literal["issue", "pull_request"]

PLATFORM_ID_ISSUE: PlatformIdKind = "issue"
PLATFORM_ID_PULL_REQUEST: PlatformIdKind = "pull_request"

GITHUB_HOST = "github.com"
GITLAB_HOST = "gitlab.com"


@dataclass(frozen=True)
class PlatformId:
    """A reference to a change through an issue or pull request number."""

    kind: PlatformIdKind
    number: int

    @classmethod
    def issue(cls, number: int) -> "PlatformId":
        return cls(PLATFORM_ID_ISSUE, number)

    @classmethod
    def pull_request(cls, number: int) -> "PlatformId":
        return cls(PLATFORM_ID_PULL_REQUEST, number)


def _owner_and_project(url: str, path: str) -> tuple[str, str]:
    parts = [part for part in path.split("/") if part]
    if len(parts) < 2:
        raise UnsupportedProjectUrlError(url)
    project = parts[1]
    if project.endswith(".git"):
        project = project[: -len(".git")]
    return parts[0], project


@dataclass(frozen=True)
class GitHubProject:
    owner: str
    project: str

    @property
    def url(self) -> str:
        return f"https://{GITHUB_HOST}/{self.owner}/{self.project}"

    def change_url(self, platform_id: PlatformId) -> str:
        if platform_id.kind == PLATFORM_ID_ISSUE:
            return f"{self.url}/issues/{platform_id.number}"
        return f"{self.url}/pull/{platform_id.number}"

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class GitLabProject:
    host: str
    owner: str
    project: str

    @property
    def url(self) -> str:
        return f"https://{self.host}/{self.owner}/{self.project}"

    def change_url(self, platform_id: PlatformId) -> str:
        if platform_id.kind == PLATFORM_ID_ISSUE:
            return f"{self.url}/-/issues/{platform_id.number}"
        return f"{self.url}/-/merge_requests/{platform_id.number}"

    def __str__(self) -> str:
        return self.url


Project = Union[GitHubProject, GitLabProject]


def _normalize_remote_url(url: str) -> str:
    """Turn an SSH remote (``git@host:owner/name.git``) into an HTTPS URL."""
    url = url.strip()
    if url.startswith("git@"):
        _, _, remainder = url.partition("@")
        host, _, path = remainder.partition(":")
        return f"https://{host}/{path}"
    if url.startswith("ssh://"):
        parsed = urlparse(url)
        return f"https://{parsed.hostname}{parsed.path}"
    return url


def parse_project_url(url: str) -> Project:
    """Parse a GitHub or GitLab project URL."""
    parsed = urlparse(_normalize_remote_url(url))
    host = parsed.hostname
    if not host or parsed.scheme not in ("http", "https"):
        raise UnsupportedProjectUrlError(url)
    owner, project = _owner_and_project(url, parsed.path)
    if host == GITHUB_HOST:
        return GitHubProject(owner, project)
    if host == GITLAB_HOST or host.startswith("gitlab."):
        return GitLabProject(host, owner, project)
    raise UnsupportedProjectUrlError(url)


def git_remote_url(repo_root: Path, remote: str = "origin") -> Optional[str]:
    """Return the URL of a git remote, or None if git cannot report it."""
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", remote],
            cwd=str(repo_root),
            check=True,
            capture_output=True,
            text=True,
        )
    except (subprocess.CalledProcessError, FileNotFoundError) as exc:
        log_debug(f"git failed to report URL of remote '{remote}': {exc}")
        return None
    url = result.stdout.strip()
    return url or None


def detect_project_url(repo_root: Path, remote: str = "origin") -> Optional[str]:
    """Infer the project URL from a git remote of the repository."""
    remote_url = git_remote_url(repo_root, remote)
    if remote_url is None:
        log_warning(f"unable to determine URL of git remote '{remote}'.")
        return None
    try:
        project = parse_project_url(remote_url)
    except UnsupportedProjectUrlError:
        log_warning(f"git remote '{remote}' is not a GitHub or GitLab project: {remote_url}")
        return None
    log_info(f"inferred project URL {project.url} from git remote '{remote}'.")
    return project.url
