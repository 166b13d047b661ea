from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from jsonresume_mcp.utils.git import (
    get_recent_commits,
    get_remote_url,
    list_tracked_files,
    parse_commit_log,
    parse_github_remote,
    run_git,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _git_available() -> bool:
    return shutil.which("git") is not None


def _run(cmd: list[str], *, cwd: Path) -> None:
    subprocess.run(cmd, cwd=str(cwd), check=True, capture_output=True, text=True)


def _init_repo(tmp: Path) -> Path:
    _run(["git", "init", "-q"], cwd=tmp)
    _run(["git", "config", "user.name", "Tester"], cwd=tmp)
    _run(["git", "config", "user.email", "tester@example.com"], cwd=tmp)
    _run(["git", "config", "commit.gpgsign", "false"], cwd=tmp)
    return tmp


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("url", "owner", "name"),
    [
        ("https://github.com/octo/widget.git", "octo", "widget"),
        ("https://github.com/octo/widget", "octo", "widget"),
        ("git@github.com:octo/widget.git", "octo", "widget"),
        ("ssh://git@github.com/octo/my.repo.git", "octo", "my.repo"),
    ],
)
def test_parse_github_remote(url: str, owner: str, name: str) -> None:
    remote = parse_github_remote(url)
    assert remote is not None
    assert (remote.owner, remote.name) == (owner, name)


def test_parse_github_remote_rejects_other_hosts() -> None:
    assert parse_github_remote("https://gitlab.com/octo/widget.git") is None
    assert parse_github_remote("") is None


def test_parse_commit_log_keeps_pipes_in_subject() -> None:
    """Only the first three separators split fields."""
    output = (
        "abc123|Ada|2024-05-01T10:00:00+00:00|feat: add a|b parser\n"
        "\n"
        "malformed line\n"
        "def456|Bob|2024-04-30T09:00:00+00:00|fix: typo\n"
    )

    commits = parse_commit_log(output)

    assert [c.hash for c in commits] == ["abc123", "def456"]
    assert commits[0].message == "feat: add a|b parser"
    assert commits[1].to_dict() == {
        "hash": "def456",
        "author": "Bob",
        "date": "2024-04-30T09:00:00+00:00",
        "message": "fix: typo",
    }


# ---------------------------------------------------------------------------
# Git Execution
# ---------------------------------------------------------------------------


def test_run_git_outside_repo_raises(tmp_path: Path) -> None:
    if not _git_available():
        pytest.skip("git not available")

    with pytest.raises(RuntimeError, match="git command failed"):
        run_git(tmp_path, "log", "-n", "1")


@pytest.mark.skipif(not _git_available(), reason="git not available")
def test_queries_against_real_repo(tmp_path: Path) -> None:
    repo = _init_repo(tmp_path)
    (repo / "a.py").write_text("x = 1\n")
    (repo / "untracked.txt").write_text("ignored\n")
    _run(["git", "add", "a.py"], cwd=repo)
    _run(["git", "commit", "-q", "-m", "initial commit"], cwd=repo)
    _run(["git", "remote", "add", "origin", "https://github.com/octo/demo.git"], cwd=repo)

    assert list_tracked_files(repo) == ["a.py"]
    assert get_remote_url(repo) == "https://github.com/octo/demo.git"
    commits = get_recent_commits(repo, 5)
    assert len(commits) == 1
    assert commits[0].author == "Tester"
    assert commits[0].message == "initial commit"
