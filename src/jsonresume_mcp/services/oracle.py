"""LLM calls that turn facts into proposed résumé updates."""

from __future__ import annotations

import json
import logging
from typing import Any

from jsonresume_mcp.schemas.job import JobDescription
from jsonresume_mcp.schemas.updates import JobResumeUpdate, ResumeUpdate
from jsonresume_mcp.services.llm_providers import LLMError
from jsonresume_mcp.services.llm_service import LLMService
from jsonresume_mcp.services.schema_validator import validate_payload

logger = logging.getLogger(__name__)

PROJECT_SYSTEM_PROMPT = (
    "You are a technical resume writer that creates JSON Resume compatible project "
    "entries and skills based on codebase analysis. You focus on accuracy and "
    "professional descriptions. Use format YYYY-MM-DD for dates. For ongoing "
    "projects, omit the endDate field entirely rather than using 'Present'. Group "
    "skills by category when possible. Respond with a single JSON object only."
)

JOB_SYSTEM_PROMPT = (
    "You are an expert resume writer helping a candidate tailor a JSON Resume to a "
    "job description. Never invent experience: only propose skills the candidate "
    "plausibly has from the resume, and only reference projects and skills that "
    "already exist when suggesting what to highlight. Respond with a single JSON "
    "object only."
)

SUMMARY_SYSTEM_PROMPT = (
    "You are a helpful assistant that creates concise summaries of resume updates."
)

SUMMARY_MAX_TOKENS = 150


def _schema_hint(model: type) -> str:
    return json.dumps(model.model_json_schema(by_alias=True), indent=2)


class ResumeOracle:
    """Asks the LLM for proposed updates and validates what comes back.

    Args:
        llm_service: Service used for the structured update calls.
        summary_service: Optional cheaper service for prose summaries;
            defaults to ``llm_service``.
    """

    def __init__(self, llm_service: LLMService, summary_service: LLMService | None = None) -> None:
        self.llm_service = llm_service
        self.summary_service = summary_service or llm_service

    def _request_json(self, system_instructions: str, user_content: str) -> Any:
        try:
            text = self.llm_service.generate_llm_response(
                system_instructions=system_instructions,
                user_content=user_content,
                temperature=0.2,
                json_mode=True,
            )
        except LLMError:
            raise
        except Exception as e:
            raise LLMError(f"LLM API call failed: {e}") from e

        if not text:
            raise LLMError("LLM returned an empty response")
        return LLMService.extract_json_from_response(text)

    def generate_resume_enhancement(self, analysis: dict[str, Any]) -> ResumeUpdate:
        """Propose one project entry and new skills from a codebase analysis."""
        user_content = (
            "Based on this codebase analysis, generate a single project entry and "
            "relevant skills for a resume.\n\n"
            f"Codebase analysis:\n{json.dumps(analysis, indent=2, default=str)}\n\n"
            "Return JSON matching this schema (newProject, newSkills, changes):\n"
            f"{_schema_hint(ResumeUpdate)}"
        )
        logger.info("Requesting resume enhancement for %s", analysis.get("repoName", "project"))
        payload = self._request_json(PROJECT_SYSTEM_PROMPT, user_content)
        return validate_payload(payload, ResumeUpdate)

    def generate_job_based_enhancement(
        self, resume: dict[str, Any], job: JobDescription | dict[str, Any]
    ) -> JobResumeUpdate:
        """Propose skill updates and advisory highlights for a job description.

        ``resume`` must be the public body, without the storage identity.
        """
        job_data = (
            job.model_dump(mode="json", by_alias=True, exclude_none=True)
            if isinstance(job, JobDescription)
            else job
        )
        user_content = (
            "Tailor this resume to the job below.\n\n"
            f"Resume:\n{json.dumps(resume, indent=2)}\n\n"
            f"Job description:\n{json.dumps(job_data, indent=2)}\n\n"
            "Return JSON matching this schema. updatedSkills lists skills to add; "
            "skillsToHighlight and suggestedProjects must name existing resume "
            "entries; updatedSummary is an optional rewritten basics.summary:\n"
            f"{_schema_hint(JobResumeUpdate)}"
        )
        logger.info("Requesting job-based enhancement for %s", job_data.get("title", "job"))
        payload = self._request_json(JOB_SYSTEM_PROMPT, user_content)
        return validate_payload(payload, JobResumeUpdate)

    def generate_update_summary(self, changes: list[str]) -> str:
        """Summarize a change list in a short paragraph. May raise LLMError."""
        user_content = (
            "Create a brief, professional summary of these changes made to a resume:\n"
            + "\n".join(changes)
        )
        text = self.summary_service.generate_llm_response(
            system_instructions=SUMMARY_SYSTEM_PROMPT,
            user_content=user_content,
            temperature=0.5,
            max_tokens=SUMMARY_MAX_TOKENS,
        )
        if not text:
            raise LLMError("LLM returned an empty summary")
        return text
