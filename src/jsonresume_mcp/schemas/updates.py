"""Pydantic schemas for the proposed updates returned by the LLM.

Field names are snake_case in Python and camelCase on the wire (JSON
Resume convention); dump with ``by_alias=True, exclude_none=True``.
"""

from __future__ import annotations

from typing import Annotated
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
MIN_DESCRIPTION_LENGTH = 10

# Values an LLM likes to use for "still running"; an ongoing project has no endDate.
ONGOING_END_DATES = frozenset({"", "present", "current", "ongoing", "now"})

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
IsoDate = Annotated[str, StringConstraints(strip_whitespace=True, pattern=ISO_DATE_PATTERN)]


class _WireModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def to_wire(self) -> dict:
        """Serialize with JSON Resume key names, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SkillEntry(_WireModel):
    """A JSON Resume skill; ``name`` is the case-insensitive identity."""

    name: NonEmptyStr
    level: str | None = None
    keywords: list[str] | None = None
    category: str | None = None


class ProjectEntry(_WireModel):
    """A JSON Resume project entry; ``name`` is the case-insensitive identity."""

    name: NonEmptyStr
    start_date: IsoDate = Field(alias="startDate")
    end_date: IsoDate | None = Field(default=None, alias="endDate")
    description: str = Field(min_length=MIN_DESCRIPTION_LENGTH)
    highlights: list[str] | None = None
    keywords: list[str] | None = None
    url: str | None = None
    roles: list[str] | None = None
    entity: str | None = None
    type: str | None = None

    @field_validator("end_date", mode="before")
    @classmethod
    def _drop_ongoing_sentinel(cls, value: object) -> object:
        if isinstance(value, str) and value.strip().lower() in ONGOING_END_DATES:
            return None
        return value

    @field_validator("description")
    @classmethod
    def _require_meaningful_description(cls, value: str) -> str:
        if len(value.split()) < 2:
            raise ValueError("description must be a meaningful sentence, not a single word")
        return value

    @field_validator("url")
    @classmethod
    def _require_well_formed_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("url must be an absolute http(s) URL")
        return value


class JobBasedResumeUpdate(_WireModel):
    """Skills-only update; the shape the merge accepts for job tailoring."""

    new_skills: list[SkillEntry] = Field(default_factory=list, alias="newSkills")
    changes: list[NonEmptyStr] = Field(min_length=1)


class ResumeUpdate(JobBasedResumeUpdate):
    """Codebase-driven update: exactly one new project plus skills."""

    new_project: ProjectEntry = Field(alias="newProject")


class JobResumeUpdate(_WireModel):
    """Job-driven proposal, including advisory lists that are never merged."""

    updated_summary: str | None = Field(default=None, alias="updatedSummary")
    updated_skills: list[SkillEntry] = Field(default_factory=list, alias="updatedSkills")
    skills_to_highlight: list[str] = Field(default_factory=list, alias="skillsToHighlight")
    suggested_projects: list[str] = Field(default_factory=list, alias="suggestedProjects")
    changes: list[NonEmptyStr] = Field(min_length=1)

    def to_skills_update(self) -> JobBasedResumeUpdate:
        return JobBasedResumeUpdate(new_skills=self.updated_skills, changes=self.changes)
