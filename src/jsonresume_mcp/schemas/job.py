"""Schema for the job description document read by ``enhance_resume``."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from jsonresume_mcp.schemas.updates import NonEmptyStr


class JobLocation(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    address: str | None = None
    postal_code: str | None = Field(default=None, alias="postalCode")
    city: str | None = None
    country_code: str | None = Field(default=None, alias="countryCode")
    region: str | None = None


class JobSkill(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: NonEmptyStr
    level: str = ""
    keywords: list[str] = Field(default_factory=list)


class JobDescription(BaseModel):
    """A job posting in the JSON Resume "job" format."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: NonEmptyStr
    company: NonEmptyStr
    type: str = ""
    date: str = ""
    description: str = Field(min_length=10)
    location: JobLocation = Field(default_factory=JobLocation)
    remote: str | None = None
    salary: str | None = None
    experience: str | None = None
    responsibilities: list[str] = Field(default_factory=list)
    qualifications: list[str] = Field(default_factory=list)
    skills: list[JobSkill] = Field(default_factory=list)
