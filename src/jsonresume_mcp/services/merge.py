"""Non-destructive merge of a proposed update into a résumé.

Rules:
    * the caller's handle is never mutated; the result is a deep copy
    * nothing pre-existing is removed or edited, except ``meta.lastModified``
    * projects and skills are appended only when their case-insensitive,
      trimmed name is not already present; duplicates are skipped silently
    * the storage identity is carried over unchanged

Running the same update twice therefore adds nothing the second time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from jsonresume_mcp.models.resume import (
    ChangeRecord,
    MergeResult,
    ResumeDocument,
    utc_timestamp,
)
from jsonresume_mcp.schemas.updates import JobBasedResumeUpdate, ResumeUpdate

logger = logging.getLogger(__name__)

__all__ = ["entry_key", "existing_keys", "merge_resume_update"]


def entry_key(entry: Any) -> str | None:
    """Return the dedup key for a skill or project entry.

    Entries appear either as bare strings or as objects with a ``name``;
    both normalize to the lower-cased, trimmed name. Entries without a
    usable name yield None and never collide with anything.
    """
    if isinstance(entry, str):
        name = entry
    elif isinstance(entry, dict):
        name = entry.get("name")
    else:
        name = getattr(entry, "name", None)
    if not isinstance(name, str):
        return None
    key = name.strip().lower()
    return key or None


def existing_keys(entries: Iterable[Any]) -> set[str]:
    return {key for key in map(entry_key, entries) if key is not None}


def _section(document: dict[str, Any], name: str) -> list[Any] | None:
    """Return the list stored under ``name``; None if it holds something else."""
    value = document.get(name)
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning(
            "Resume section %r is a %s, not a list; leaving it untouched",
            name,
            type(value).__name__,
        )
        return None
    return value


def merge_resume_update(
    resume: ResumeDocument, update: ResumeUpdate | JobBasedResumeUpdate
) -> MergeResult:
    """Apply ``update`` onto ``resume`` and report what was actually added.

    Args:
        resume: Current résumé handle (left untouched).
        update: Validated proposal; a ``ResumeUpdate`` also carries a project.

    Returns:
        MergeResult with the new handle and its ChangeRecord.
    """
    updated = resume.copy()
    document = updated.document
    changes = ChangeRecord(other_changes=list(update.changes))

    if isinstance(update, ResumeUpdate):
        _merge_project(document, update, changes)
    _merge_skills(document, update, changes)

    meta = document.get("meta")
    if meta is None:
        document["meta"] = {"lastModified": utc_timestamp()}
    elif isinstance(meta, dict):
        meta["lastModified"] = utc_timestamp()
    else:
        logger.warning("Resume meta is not an object; timestamp not updated")

    return MergeResult(updated_resume=updated, changes=changes)


def _merge_project(document: dict[str, Any], update: ResumeUpdate, changes: ChangeRecord) -> None:
    projects = _section(document, "projects")
    if projects is None:
        return
    project = update.new_project
    if entry_key(project.name) in existing_keys(projects):
        logger.info("Project %r already on the resume; skipping", project.name)
        return
    document["projects"] = [*projects, project.to_wire()]
    changes.added_projects.append(project.name)


def _merge_skills(
    document: dict[str, Any], update: JobBasedResumeUpdate, changes: ChangeRecord
) -> None:
    skills = _section(document, "skills")
    if skills is None:
        return
    seen = existing_keys(skills)
    appended: list[dict[str, Any]] = []
    for skill in update.new_skills:
        key = entry_key(skill.name)
        if key is None or key in seen:
            continue
        seen.add(key)
        appended.append(skill.to_wire())
        changes.added_skills.append(skill.name)
    if appended:
        document["skills"] = [*skills, *appended]
