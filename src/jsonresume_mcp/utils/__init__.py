"""Utility functions and helpers"""

from jsonresume_mcp.utils.git import (
    CommitInfo,
    RemoteRepo,
    get_recent_commits,
    get_remote_url,
    list_tracked_files,
    parse_commit_log,
    parse_github_remote,
    run_git,
)

__all__ = [
    "CommitInfo",
    "RemoteRepo",
    "get_recent_commits",
    "get_remote_url",
    "list_tracked_files",
    "parse_commit_log",
    "parse_github_remote",
    "run_git",
]
