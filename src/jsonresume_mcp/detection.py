from __future__ import annotations

import json
import re
import tomllib
from collections.abc import Iterable
from pathlib import Path

from jsonresume_mcp.constants.technology_constants import (
    PACKAGE_JSON_MARKERS,
    PYTHON_DEPENDENCY_MARKERS,
    ROOT_ENTRY_MARKERS,
)

_REQUIREMENT_NAME_RE = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")


class TechnologyDetector:
    """Detector for technologies declared by a project's manifests."""

    @staticmethod
    def _read_text(path: Path) -> str:
        """Read file text, tolerating failures.

        Args:
            path: Path to the file to read.

        Returns:
            File contents or an empty string when unreadable.
        """
        try:
            return path.read_text(encoding="utf-8", errors="ignore")
        except OSError:
            return ""

    @staticmethod
    def _requirement_names(lines: Iterable[str]) -> set[str]:
        names: set[str] = set()
        for line in lines:
            match = _REQUIREMENT_NAME_RE.match(str(line))
            if match and not str(line).lstrip().startswith(("#", "-")):
                names.add(match.group(1).lower().replace("_", "-"))
        return names

    @staticmethod
    def package_json_data(root: Path) -> dict:
        """Return the parsed ``package.json``, or an empty dict."""
        pkg = root / "package.json"
        if not pkg.exists():
            return {}
        try:
            data = json.loads(TechnologyDetector._read_text(pkg) or "{}")
        except json.JSONDecodeError:
            return {}
        return data if isinstance(data, dict) else {}

    @staticmethod
    def pyproject_data(root: Path) -> dict:
        """Return the parsed ``pyproject.toml``, or an empty dict."""
        pyproject = root / "pyproject.toml"
        if not pyproject.exists():
            return {}
        try:
            return tomllib.loads(TechnologyDetector._read_text(pyproject))
        except tomllib.TOMLDecodeError:
            return {}

    @staticmethod
    def _from_package_json(root: Path) -> list[str]:
        """Detect Node.js and the frameworks listed in ``package.json``.

        Args:
            root: Project root directory.

        Returns:
            Technologies in marker order.
        """
        if not (root / "package.json").exists():
            return []
        data = TechnologyDetector.package_json_data(root)

        deps = {
            **(data.get("dependencies") or {}),
            **(data.get("devDependencies") or {}),
        }
        deps_lower = {str(k).lower() for k in deps}

        found = ["Node.js"]
        for marker, technology in PACKAGE_JSON_MARKERS.items():
            if marker in deps_lower:
                found.append(technology)
        return found

    @staticmethod
    def _from_python_manifests(root: Path) -> list[str]:
        """Detect Python libraries from ``pyproject.toml`` and requirements files.

        Args:
            root: Project root directory.

        Returns:
            Technologies in marker order.
        """
        deps: set[str] = set()

        project = TechnologyDetector.pyproject_data(root).get("project") or {}
        deps |= TechnologyDetector._requirement_names(project.get("dependencies") or [])
        for extra in (project.get("optional-dependencies") or {}).values():
            deps |= TechnologyDetector._requirement_names(extra or [])

        for fname in ("requirements.txt", "requirements-dev.txt"):
            path = root / fname
            if path.exists():
                content = TechnologyDetector._read_text(path)
                deps |= TechnologyDetector._requirement_names(content.splitlines())

        return [tech for marker, tech in PYTHON_DEPENDENCY_MARKERS.items() if marker in deps]

    @staticmethod
    def _from_root_entries(root: Path) -> list[str]:
        """Detect technologies from well-known top-level files and folders.

        Args:
            root: Project root directory.

        Returns:
            Technologies in marker order.
        """
        try:
            entries = {p.name for p in root.iterdir()}
        except OSError:
            return []

        found = [tech for marker, tech in ROOT_ENTRY_MARKERS.items() if marker in entries]
        if any("migration" in name.lower() for name in entries):
            found.append("Database Migrations")
        return found


def detect_technologies(project_root: Path | str) -> list[str]:
    """Identify technologies used by a project.

    Args:
        project_root: Path to the project directory.

    Returns:
        De-duplicated technology names in detection order. Empty when the
        directory does not exist.
    """
    root = Path(project_root)
    if not root.exists() or not root.is_dir():
        return []

    detectors = (
        TechnologyDetector._from_package_json,
        TechnologyDetector._from_root_entries,
        TechnologyDetector._from_python_manifests,
    )

    seen: dict[str, None] = {}
    for det in detectors:
        for technology in det(root):
            seen.setdefault(technology, None)
    return list(seen)
