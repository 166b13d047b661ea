"""Git related utilities."""

from __future__ import annotations

import re
import subprocess
from dataclasses import asdict, dataclass
from pathlib import Path

# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class CommitInfo:
    """One line of ``git log`` output."""

    hash: str
    author: str
    date: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(slots=True)
class RemoteRepo:
    """Owner and name parsed from a GitHub remote URL."""

    owner: str
    name: str


# ---------------------------------------------------------------------------
# Git Execution
# ---------------------------------------------------------------------------


def run_git(repo: Path | str, *args: str) -> str:
    """Run a git command inside `repo` and return its stdout.

    Raises:
        RuntimeError: if the command exits with a non-zero status or git is missing.
    """
    repo_path = Path(repo)
    try:
        proc = subprocess.run(
            ["git", "-C", str(repo_path), *args],
            check=True,
            capture_output=True,
            text=True,
        )
        return proc.stdout
    except subprocess.CalledProcessError as exc:
        raise RuntimeError(f"git command failed ({' '.join(args)}): {exc.stderr.strip()}") from exc
    except OSError as exc:
        raise RuntimeError(f"git is not available: {exc}") from exc


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

_GITHUB_REMOTE_RE = re.compile(r"github\.com[/:]([^/]+)/([^/]+?)(?:\.git)?/?$")

# hash|author|date|subject; the subject may itself contain '|'
LOG_FORMAT = "--pretty=format:%H|%an|%ad|%s"


def parse_github_remote(url: str) -> RemoteRepo | None:
    """Parse ``owner/name`` out of an HTTPS or SSH GitHub remote URL."""
    match = _GITHUB_REMOTE_RE.search(url.strip())
    if match is None:
        return None
    return RemoteRepo(owner=match.group(1), name=match.group(2))


def parse_commit_log(output: str) -> list[CommitInfo]:
    """Convert ``git log`` output in ``LOG_FORMAT`` to commits."""
    commits: list[CommitInfo] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split("|", 3)
        if len(parts) < 4:
            continue
        sha, author, date, message = parts
        commits.append(CommitInfo(hash=sha, author=author, date=date, message=message))
    return commits


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def get_remote_url(repo: Path | str, remote: str = "origin") -> str:
    return run_git(repo, "config", "--get", f"remote.{remote}.url").strip()


def list_tracked_files(repo: Path | str) -> list[str]:
    """Return paths of all files tracked in the index."""
    output = run_git(repo, "ls-files")
    return [line.strip() for line in output.splitlines() if line.strip()]


def get_recent_commits(repo: Path | str, count: int = 20) -> list[CommitInfo]:
    output = run_git(repo, "log", "-n", str(count), LOG_FORMAT, "--date=iso-strict")
    return parse_commit_log(output)


__all__ = [
    "CommitInfo",
    "RemoteRepo",
    "LOG_FORMAT",
    "run_git",
    "parse_github_remote",
    "parse_commit_log",
    "get_remote_url",
    "list_tracked_files",
    "get_recent_commits",
]
