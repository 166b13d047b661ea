"""Pydantic schemas for LLM payloads and job descriptions."""

from jsonresume_mcp.schemas.job import JobDescription, JobLocation, JobSkill
from jsonresume_mcp.schemas.updates import (
    ISO_DATE_PATTERN,
    MIN_DESCRIPTION_LENGTH,
    JobBasedResumeUpdate,
    JobResumeUpdate,
    ProjectEntry,
    ResumeUpdate,
    SkillEntry,
)

__all__ = [
    "ISO_DATE_PATTERN",
    "MIN_DESCRIPTION_LENGTH",
    "JobBasedResumeUpdate",
    "JobDescription",
    "JobLocation",
    "JobResumeUpdate",
    "JobSkill",
    "ProjectEntry",
    "ResumeUpdate",
    "SkillEntry",
]
