from __future__ import annotations

from jsonresume_mcp.constants.technology_constants import (
    PACKAGE_JSON_MARKERS,
    PYTHON_DEPENDENCY_MARKERS,
    README_NAMES,
    RECENT_COMMIT_LIMIT,
    ROOT_ENTRY_MARKERS,
    SKIP_DIRS,
)

__all__ = [
    "PACKAGE_JSON_MARKERS",
    "PYTHON_DEPENDENCY_MARKERS",
    "README_NAMES",
    "RECENT_COMMIT_LIMIT",
    "ROOT_ENTRY_MARKERS",
    "SKIP_DIRS",
]
