"""Enhancement orchestration: oracle -> validation -> merge -> summary.

The primary update is all-or-nothing: an oracle or validation failure
propagates before anything is merged. The prose summary is secondary and
falls back to a fixed sentence when the LLM cannot produce it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from jsonresume_mcp.models.resume import (
    EnhancementResult,
    JobEnhancementResult,
    ResumeDocument,
)
from jsonresume_mcp.schemas.job import JobDescription
from jsonresume_mcp.services.merge import merge_resume_update
from jsonresume_mcp.services.oracle import ResumeOracle

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY = "Resume updated with new project details and skills."

REVIEW_WARNING = (
    "Note: Please review the changes to ensure they match your preferences. "
    "You can revert to a previous version through your GitHub Gist revision "
    "history if needed."
)


def build_user_message(resume_link: str, changes: Sequence[str]) -> str:
    """Compose the message shown to the user after a project enhancement."""
    bullets = "\n".join(f"- {change}" for change in changes)
    return (
        "Your resume has been updated with your latest project contributions! "
        f"View it at {resume_link}\n\n"
        f"Changes made:\n{bullets}\n\n"
        f"{REVIEW_WARNING}"
    )


class ResumeEnhancer:
    """Owns one enhancement request end to end.

    Args:
        oracle: Source of proposed updates and change summaries.
        registry_url: Base URL of the public résumé viewer.
    """

    def __init__(self, oracle: ResumeOracle, registry_url: str) -> None:
        self.oracle = oracle
        self.registry_url = registry_url.rstrip("/")

    def resume_link(self, username: str) -> str:
        return f"{self.registry_url}/{username}"

    def _summarize(self, changes: list[str]) -> str:
        try:
            return self.oracle.generate_update_summary(changes)
        except Exception:
            logger.exception("Summary generation failed; using fallback summary")
            return FALLBACK_SUMMARY

    def enhance_with_project_context(
        self,
        resume: ResumeDocument,
        analysis: dict[str, Any],
        username: str,
    ) -> EnhancementResult:
        """Add the analyzed project and its skills to ``resume``.

        Args:
            resume: Current résumé handle.
            analysis: Repository analysis record.
            username: GitHub username, used for the viewing link.

        Raises:
            LLMError: if the proposed update cannot be obtained or validated.
        """
        logger.info(
            "Enhancing resume with project %s (technologies: %s)",
            analysis.get("repoName"),
            ", ".join(analysis.get("technologies") or []) or "none",
        )
        update = self.oracle.generate_resume_enhancement(analysis)
        merged = merge_resume_update(resume, update)
        logger.info(
            "Merged project update: +%d project(s), +%d skill(s)",
            len(merged.changes.added_projects),
            len(merged.changes.added_skills),
        )

        summary = self._summarize(update.changes)
        link = self.resume_link(username)
        return EnhancementResult(
            updated_resume=merged.updated_resume,
            changes=merged.changes,
            summary=summary,
            user_message=build_user_message(link, update.changes),
            resume_link=link,
        )

    def enhance_for_job(
        self,
        resume: ResumeDocument,
        job: JobDescription | dict[str, Any],
    ) -> JobEnhancementResult:
        """Tailor skills to ``job``; highlights and summary stay advisory.

        Raises:
            LLMError: if the proposed update cannot be obtained or validated.
        """
        proposal = self.oracle.generate_job_based_enhancement(resume.to_wire(), job)
        merged = merge_resume_update(resume, proposal.to_skills_update())
        logger.info("Merged job update: +%d skill(s)", len(merged.changes.added_skills))

        return JobEnhancementResult(
            updated_resume=merged.updated_resume,
            changes=merged.changes,
            summary=self._summarize(proposal.changes),
            skills_to_highlight=list(proposal.skills_to_highlight),
            suggested_projects=list(proposal.suggested_projects),
            updated_summary=proposal.updated_summary,
        )
