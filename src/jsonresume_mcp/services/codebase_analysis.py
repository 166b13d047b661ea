"""
Repository analysis feeding the project-driven résumé enhancement.

The analysis gathers, for a single working tree:
- repository name, owner and description
- file counts per extension (git-tracked, or a directory walk without git)
- recent commits
- technologies declared by manifests
- README content

The five probes are independent and run concurrently on a thread pool.
Each one degrades to an empty value on failure; the analysis itself
never fails because of a single probe.
"""

from __future__ import annotations

import logging
import os
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jsonresume_mcp.constants.technology_constants import (
    README_NAMES,
    RECENT_COMMIT_LIMIT,
    SKIP_DIRS,
)
from jsonresume_mcp.detection import TechnologyDetector, detect_technologies
from jsonresume_mcp.utils.git import (
    CommitInfo,
    get_recent_commits,
    get_remote_url,
    list_tracked_files,
    parse_github_remote,
)

logger = logging.getLogger(__name__)


@dataclass
class CodebaseAnalysis:
    """The repository analysis record handed to the LLM."""

    repo_name: str
    repo_owner: str = "unknown"
    repo_description: str | None = None
    languages: dict[str, int] = field(default_factory=dict)
    file_count: int = 0
    recent_commits: list[CommitInfo] = field(default_factory=list)
    technologies: list[str] = field(default_factory=list)
    summary: str = ""
    readme_content: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "repoName": self.repo_name,
            "repoOwner": self.repo_owner,
            "languages": dict(self.languages),
            "fileCount": self.file_count,
            "recentCommits": [c.to_dict() for c in self.recent_commits],
            "technologies": list(self.technologies),
            "summary": self.summary,
        }
        if self.repo_description:
            data["repoDescription"] = self.repo_description
        if self.readme_content is not None:
            data["readmeContent"] = self.readme_content
        return data


def _extension_counts(paths: list[str]) -> dict[str, int]:
    counts: Counter[str] = Counter()
    for path in paths:
        ext = os.path.splitext(path)[1].lower()
        if ext:
            counts[ext[1:]] += 1
    return dict(counts)


def build_summary(
    name: str, languages: dict[str, int], file_count: int, technologies: list[str]
) -> str:
    """One-sentence description: top three extensions and first five technologies."""
    top = [lang for lang, _ in sorted(languages.items(), key=lambda kv: kv[1], reverse=True)[:3]]
    return (
        f"{name} is a {'/'.join(top)} project with {file_count} files "
        f"using {', '.join(technologies[:5])}."
    )


class CodebaseAnalyzer:
    """Collects an analysis record for the working tree at ``root``."""

    def __init__(self, root: Path | str | None = None) -> None:
        self.root = Path(root) if root is not None else Path.cwd()

    def _walk_files(self) -> list[str]:
        """List files under root, skipping VCS, dependency and build folders."""
        files: list[str] = []
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = [
                d for d in dirnames if not d.startswith(".") and d.lower() not in SKIP_DIRS
            ]
            for filename in filenames:
                rel = Path(dirpath, filename).relative_to(self.root)
                files.append(rel.as_posix())
        return files

    def _project_files(self) -> list[str]:
        try:
            return list_tracked_files(self.root)
        except RuntimeError as exc:
            logger.info("git ls-files unavailable (%s); walking %s", exc, self.root)
            return self._walk_files()

    def get_repo_details(self) -> tuple[str, str, str | None]:
        """Return (name, owner, description) for the repository."""
        name, owner = self.root.resolve().name, "unknown"
        try:
            remote = parse_github_remote(get_remote_url(self.root))
        except RuntimeError as exc:
            logger.info("No git remote for %s: %s", self.root, exc)
            remote = None
        if remote is not None:
            name, owner = remote.name, remote.owner

        description = TechnologyDetector.package_json_data(self.root).get("description")
        if not description:
            project = TechnologyDetector.pyproject_data(self.root).get("project") or {}
            description = project.get("description")
        return name, owner, description or None

    def count_files_by_language(self) -> dict[str, int]:
        return _extension_counts(self._project_files())

    def count_files(self) -> int:
        return len(self._project_files())

    def get_recent_commits(self, count: int = RECENT_COMMIT_LIMIT) -> list[CommitInfo]:
        try:
            return get_recent_commits(self.root, count)
        except RuntimeError as exc:
            logger.info("Could not read commits for %s: %s", self.root, exc)
            return []

    def detect_technologies(self) -> list[str]:
        return detect_technologies(self.root)

    def get_readme_content(self) -> str | None:
        try:
            for entry in sorted(self.root.iterdir()):
                if entry.is_file() and entry.name.lower() in README_NAMES:
                    return entry.read_text(encoding="utf-8", errors="ignore")
        except OSError:
            logger.exception("Error reading README in %s", self.root)
        return None

    def _probe(self, label: str, fn: Any, default: Any) -> Any:
        try:
            return fn()
        except Exception:
            logger.exception("Codebase probe %s failed for %s", label, self.root)
            return default

    def analyze(self) -> CodebaseAnalysis:
        """Run every probe and assemble the analysis record.

        Raises:
            FileNotFoundError: if ``root`` is not an existing directory.
        """
        if not self.root.is_dir():
            raise FileNotFoundError(f"Not a directory: {self.root}")

        name, owner, description = self.get_repo_details()

        probes = {
            "languages": (self.count_files_by_language, {}),
            "commits": (self.get_recent_commits, []),
            "technologies": (self.detect_technologies, []),
            "file_count": (self.count_files, 0),
            "readme": (self.get_readme_content, None),
        }
        with ThreadPoolExecutor(max_workers=len(probes)) as pool:
            futures = {
                label: pool.submit(self._probe, label, fn, default)
                for label, (fn, default) in probes.items()
            }
            results = {label: future.result() for label, future in futures.items()}

        languages = results["languages"]
        technologies = results["technologies"]
        file_count = results["file_count"]
        return CodebaseAnalysis(
            repo_name=name,
            repo_owner=owner,
            repo_description=description,
            languages=languages,
            file_count=file_count,
            recent_commits=results["commits"],
            technologies=technologies,
            summary=build_summary(name, languages, file_count, technologies),
            readme_content=results["readme"],
        )
