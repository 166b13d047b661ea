from __future__ import annotations

from typing import Any

import pytest

from jsonresume_mcp.schemas.updates import JobResumeUpdate, ResumeUpdate
from jsonresume_mcp.services.llm_providers import OracleContractError
from jsonresume_mcp.services.schema_validator import UpdateValidationError, validate_payload


def _fields(exc: UpdateValidationError) -> list[str]:
    return [issue.field for issue in exc.issues]


def test_valid_payload_is_coerced(project_payload: dict[str, Any]) -> None:
    """A conforming payload becomes a ResumeUpdate."""
    update = validate_payload(project_payload, ResumeUpdate)

    assert update.new_project.name == "X"
    assert update.new_project.start_date == "2024-03-01"
    assert [s.name for s in update.new_skills] == ["TypeScript", "React"]


def test_missing_description_is_rejected(project_payload: dict[str, Any]) -> None:
    """Dropping the project description fails with a field-level issue."""
    del project_payload["newProject"]["description"]

    with pytest.raises(UpdateValidationError) as exc_info:
        validate_payload(project_payload, ResumeUpdate)

    assert "newProject.description" in _fields(exc_info.value)
    assert isinstance(exc_info.value, OracleContractError)


@pytest.mark.parametrize("start_date", ["March 2024", "2024-3-1", "2024/03/01", ""])
def test_non_iso_start_date_is_rejected(
    project_payload: dict[str, Any], start_date: str
) -> None:
    """Dates must be YYYY-MM-DD."""
    project_payload["newProject"]["startDate"] = start_date

    with pytest.raises(UpdateValidationError) as exc_info:
        validate_payload(project_payload, ResumeUpdate)

    assert "newProject.startDate" in _fields(exc_info.value)


def test_short_or_single_word_description_is_rejected(project_payload: dict[str, Any]) -> None:
    """Descriptions must be a sentence, not a label."""
    project_payload["newProject"]["description"] = "Tool"
    with pytest.raises(UpdateValidationError):
        validate_payload(project_payload, ResumeUpdate)

    project_payload["newProject"]["description"] = "Supercalifragilistic"
    with pytest.raises(UpdateValidationError) as exc_info:
        validate_payload(project_payload, ResumeUpdate)
    assert "newProject.description" in _fields(exc_info.value)


def test_malformed_url_is_rejected(project_payload: dict[str, Any]) -> None:
    """Project URLs must be absolute http(s) URLs."""
    project_payload["newProject"]["url"] = "github.com/octocat/x"

    with pytest.raises(UpdateValidationError) as exc_info:
        validate_payload(project_payload, ResumeUpdate)

    assert "newProject.url" in _fields(exc_info.value)


def test_empty_changes_is_rejected(project_payload: dict[str, Any]) -> None:
    """Every update must describe at least one change."""
    project_payload["changes"] = []

    with pytest.raises(UpdateValidationError) as exc_info:
        validate_payload(project_payload, ResumeUpdate)

    assert "changes" in _fields(exc_info.value)


@pytest.mark.parametrize("end_date", ["Present", "current", "ongoing", ""])
def test_ongoing_end_date_is_dropped(project_payload: dict[str, Any], end_date: str) -> None:
    """Sentinel end dates mean "ongoing" and are stored as absent."""
    project_payload["newProject"]["endDate"] = end_date

    update = validate_payload(project_payload, ResumeUpdate)

    assert update.new_project.end_date is None
    assert "endDate" not in update.new_project.to_wire()


def test_non_object_payload_is_rejected() -> None:
    """A JSON array is not an update."""
    with pytest.raises(UpdateValidationError, match="expected a JSON object"):
        validate_payload(["not", "an", "object"], ResumeUpdate)


def test_job_update_requires_only_changes() -> None:
    """Advisory fields default to empty; changes is still required."""
    update = validate_payload({"changes": ["Highlighted Python"]}, JobResumeUpdate)

    assert update.updated_skills == []
    assert update.skills_to_highlight == []
    assert update.updated_summary is None

    with pytest.raises(UpdateValidationError):
        validate_payload({"updatedSkills": [{"name": "Go"}]}, JobResumeUpdate)
