from __future__ import annotations

import copy
from typing import Any

import pytest

from jsonresume_mcp.models.resume import ResumeDocument
from jsonresume_mcp.schemas.updates import JobBasedResumeUpdate, ResumeUpdate
from jsonresume_mcp.services.merge import entry_key, merge_resume_update


def _update(payload: dict[str, Any]) -> ResumeUpdate:
    return ResumeUpdate.model_validate(payload)


def test_entry_key_normalizes_strings_and_objects() -> None:
    """Skills given as strings or objects share one case-insensitive key."""
    assert entry_key("  React ") == "react"
    assert entry_key({"name": "REACT"}) == "react"
    assert entry_key({"level": "Advanced"}) is None
    assert entry_key({"name": "   "}) is None
    assert entry_key(42) is None


def test_merge_adds_project_and_skips_existing_skill(
    resume: ResumeDocument, project_payload: dict[str, Any]
) -> None:
    """React is already present (any case); TypeScript and X are new."""
    result = merge_resume_update(resume, _update(project_payload))

    doc = result.updated_resume.document
    assert [p["name"] for p in doc["projects"]] == ["Old Project", "X"]
    assert doc["skills"] == [
        "python",
        {"name": "React", "level": "Advanced"},
        {"name": "TypeScript"},
    ]
    assert result.changes.added_projects == ["X"]
    assert result.changes.added_skills == ["TypeScript"]
    assert result.changes.other_changes == project_payload["changes"]


def test_merge_does_not_mutate_input(
    resume: ResumeDocument, project_payload: dict[str, Any]
) -> None:
    """The caller's handle is left exactly as it was."""
    before = copy.deepcopy(resume.document)
    merge_resume_update(resume, _update(project_payload))
    assert resume.document == before


def test_merge_is_idempotent(resume: ResumeDocument, project_payload: dict[str, Any]) -> None:
    """Applying the same update twice adds nothing the second time."""
    update = _update(project_payload)
    first = merge_resume_update(resume, update)
    second = merge_resume_update(first.updated_resume, update)

    assert second.changes.added_projects == []
    assert second.changes.added_skills == []
    assert second.changes.is_empty
    first_doc = {k: v for k, v in first.updated_resume.document.items() if k != "meta"}
    second_doc = {k: v for k, v in second.updated_resume.document.items() if k != "meta"}
    assert first_doc == second_doc


def test_merge_preserves_every_existing_entry(
    resume: ResumeDocument, project_payload: dict[str, Any]
) -> None:
    """Pre-existing sections and entries survive untouched."""
    result = merge_resume_update(resume, _update(project_payload))
    doc = result.updated_resume.document

    assert doc["basics"] == resume.document["basics"]
    assert doc["work"] == resume.document["work"]
    assert doc["projects"][0] == resume.document["projects"][0]
    for skill in resume.document["skills"]:
        assert skill in doc["skills"]


def test_merge_project_name_is_case_insensitive(
    resume: ResumeDocument, project_payload: dict[str, Any]
) -> None:
    """A project named like an existing one, modulo case and spaces, is skipped."""
    project_payload["newProject"]["name"] = "  old project "
    result = merge_resume_update(resume, _update(project_payload))

    assert len(result.updated_resume.document["projects"]) == 1
    assert result.changes.added_projects == []


def test_merge_carries_identity_and_sets_last_modified(
    resume: ResumeDocument, project_payload: dict[str, Any]
) -> None:
    """Identity is preserved; only meta.lastModified changes among existing fields."""
    result = merge_resume_update(resume, _update(project_payload))

    assert result.updated_resume.identity == "gist-123"
    assert "_gistId" not in result.updated_resume.document
    meta = result.updated_resume.document["meta"]
    assert meta["version"] == "v1.0.0"
    assert meta["lastModified"] != "2020-01-01T00:00:00+00:00"


def test_merge_creates_missing_sections() -> None:
    """An empty résumé gains projects, skills and meta."""
    update = ResumeUpdate.model_validate(
        {
            "newProject": {
                "name": "Solo",
                "startDate": "2023-01-01",
                "description": "A small command line tool.",
            },
            "newSkills": [{"name": "Go"}],
            "changes": ["Added Solo"],
        }
    )
    result = merge_resume_update(ResumeDocument(document={}), update)

    doc = result.updated_resume.document
    assert doc["projects"] == [
        {"name": "Solo", "startDate": "2023-01-01", "description": "A small command line tool."}
    ]
    assert doc["skills"] == [{"name": "Go"}]
    assert "lastModified" in doc["meta"]


def test_merge_ongoing_project_has_no_end_date(resume: ResumeDocument) -> None:
    """An endDate of "Present" is dropped rather than stored."""
    update = ResumeUpdate.model_validate(
        {
            "newProject": {
                "name": "Live",
                "startDate": "2024-01-01",
                "endDate": "Present",
                "description": "Still being actively developed.",
            },
            "changes": ["Added Live"],
        }
    )
    result = merge_resume_update(resume, update)

    added = result.updated_resume.document["projects"][-1]
    assert added["name"] == "Live"
    assert "endDate" not in added


def test_merge_dedupes_within_proposed_skills(resume: ResumeDocument) -> None:
    """Duplicate names inside one proposal are added once."""
    update = JobBasedResumeUpdate.model_validate(
        {
            "newSkills": [{"name": "Rust"}, {"name": "rust"}, {"name": "PYTHON"}],
            "changes": ["Added Rust"],
        }
    )
    result = merge_resume_update(resume, update)

    assert result.changes.added_skills == ["Rust"]
    assert result.updated_resume.document["skills"][-1] == {"name": "Rust"}
    assert "projects" in result.updated_resume.document
    assert len(result.updated_resume.document["projects"]) == 1


def test_merge_skips_section_that_is_not_a_list(
    project_payload: dict[str, Any], caplog: pytest.LogCaptureFixture
) -> None:
    """A malformed section is left as-is instead of raising."""
    resume = ResumeDocument(document={"skills": "Python, Go", "projects": []})
    result = merge_resume_update(resume, _update(project_payload))

    assert result.updated_resume.document["skills"] == "Python, Go"
    assert result.changes.added_skills == []
    assert result.changes.added_projects == ["X"]
    assert "not a list" in caplog.text


def test_merge_service_x_scenario() -> None:
    """Existing JavaScript is kept once; Service X and Go are added."""
    resume = ResumeDocument(document={"skills": [{"name": "JavaScript"}], "projects": []})
    update = ResumeUpdate.model_validate(
        {
            "newProject": {
                "name": "Service X",
                "startDate": "2024-01-01",
                "description": "A thing that does X for users.",
            },
            "newSkills": [{"name": "JavaScript"}, {"name": "Go"}],
            "changes": ["added Service X", "added Go"],
        }
    )

    result = merge_resume_update(resume, update)

    doc = result.updated_resume.document
    assert [p["name"] for p in doc["projects"]] == ["Service X"]
    assert [s["name"] for s in doc["skills"]] == ["JavaScript", "Go"]
    assert result.changes.added_skills == ["Go"]
    assert result.changes.added_projects == ["Service X"]
