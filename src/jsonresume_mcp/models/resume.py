"""In-memory résumé handle and the records produced by an enhancement."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

# Private wire attribute carrying the gist id next to the JSON Resume body.
IDENTITY_ATTRIBUTE = "_gistId"


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(UTC).isoformat()


@dataclass(slots=True)
class ResumeDocument:
    """A JSON Resume body plus the gist it was loaded from.

    The identity never lives inside ``document``; it is only written next
    to the body when a caller explicitly asks for it via
    ``to_wire(include_identity=True)``.

    Attributes:
        document: The JSON Resume object.
        identity: Opaque storage identifier (gist id), if known.
    """

    document: dict[str, Any]
    identity: str | None = None

    @classmethod
    def from_wire(cls, data: dict[str, Any], identity: str | None = None) -> ResumeDocument:
        """Build a handle from raw JSON, lifting out the private identity attribute."""
        body = copy.deepcopy(data)
        embedded = body.pop(IDENTITY_ATTRIBUTE, None)
        return cls(document=body, identity=identity or embedded)

    def to_wire(self, *, include_identity: bool = False) -> dict[str, Any]:
        """Return a deep copy of the body, optionally tagged with the identity."""
        body = copy.deepcopy(self.document)
        if include_identity and self.identity:
            body[IDENTITY_ATTRIBUTE] = self.identity
        return body

    def copy(self) -> ResumeDocument:
        return ResumeDocument(document=copy.deepcopy(self.document), identity=self.identity)


@dataclass(slots=True)
class ChangeRecord:
    """What the merge actually added, as opposed to what was proposed."""

    added_skills: list[str] = field(default_factory=list)
    added_projects: list[str] = field(default_factory=list)
    updated_work: list[str] = field(default_factory=list)
    other_changes: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added_skills or self.added_projects or self.updated_work)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "addedSkills": list(self.added_skills),
            "addedProjects": list(self.added_projects),
            "updatedWork": list(self.updated_work),
            "otherChanges": list(self.other_changes),
        }


@dataclass(slots=True)
class MergeResult:
    """Output of a single merge: the new handle and its change record."""

    updated_resume: ResumeDocument
    changes: ChangeRecord


@dataclass(slots=True)
class EnhancementResult:
    """Result of enhancing a résumé with the current project."""

    updated_resume: ResumeDocument
    changes: ChangeRecord
    summary: str
    user_message: str
    resume_link: str


@dataclass(slots=True)
class JobEnhancementResult:
    """Result of tailoring a résumé to a job description.

    ``skills_to_highlight``, ``suggested_projects`` and ``updated_summary``
    are recommendations only; they are never merged into the document.
    """

    updated_resume: ResumeDocument
    changes: ChangeRecord
    summary: str
    skills_to_highlight: list[str] = field(default_factory=list)
    suggested_projects: list[str] = field(default_factory=list)
    updated_summary: str | None = None


def sample_resume() -> dict[str, Any]:
    """Return a fresh JSON Resume skeleton used when the user has none."""
    return {
        "basics": {
            "name": "",
            "label": "Software Developer",
            "email": "",
            "phone": "",
            "summary": (
                "Experienced software developer with a passion for creating "
                "efficient and scalable applications."
            ),
            "location": {"city": "", "countryCode": "", "region": ""},
            "profiles": [
                {"network": "GitHub", "username": "", "url": ""},
                {"network": "LinkedIn", "username": "", "url": ""},
            ],
        },
        "work": [],
        "education": [],
        "skills": [],
        "projects": [],
        "meta": {"version": "v1.0.0", "lastModified": utc_timestamp()},
    }
