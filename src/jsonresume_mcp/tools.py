"""Tool handlers shared by the stdio MCP server, the HTTP API and the CLI.

Every handler takes a free-form arguments mapping and returns a
JSON-serializable dict. ``call_tool`` wraps handlers so that each
response carries an explicit ``isError`` marker; only an unknown tool
name escapes as an exception (``UnknownToolError``), which transports map
to their protocol-level "method not found" fault.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from jsonresume_mcp.config import Settings
from jsonresume_mcp.schemas.job import JobDescription
from jsonresume_mcp.services.codebase_analysis import CodebaseAnalyzer
from jsonresume_mcp.services.enhancer import REVIEW_WARNING, ResumeEnhancer
from jsonresume_mcp.services.gist_client import GistClient, GistNotFoundError, StorageError
from jsonresume_mcp.services.llm_providers import LLMError, OracleParseError
from jsonresume_mcp.services.llm_service import LLMService
from jsonresume_mcp.services.oracle import ResumeOracle
from jsonresume_mcp.services.resume_store import ResumeStore
from jsonresume_mcp.services.schema_validator import UpdateValidationError

logger = logging.getLogger(__name__)

PROJECT_UPDATE_WARNING = (
    "Automatic resume updates might have modified your resume in ways that don't "
    "match your preferences. You can revert to a previous version through your "
    "GitHub Gist revision history if needed."
)


class ToolInputError(ValueError):
    """Raised for bad caller input: missing arguments, unreadable job files."""


class UnknownToolError(LookupError):
    """Raised when a tool name is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


@dataclass
class ToolContext:
    """Long-lived collaborators shared by every tool call in a process."""

    settings: Settings
    store: ResumeStore
    enhancer: ResumeEnhancer
    default_directory: Path = field(default_factory=Path.cwd)

    @classmethod
    def from_settings(cls, settings: Settings, *, default_directory: Path | None = None) -> ToolContext:
        client = GistClient(
            settings.github_token,
            api_url=settings.github_api_url,
            timeout=settings.http_timeout,
        )
        store = ResumeStore(client, settings.github_username, filename=settings.resume_filename)

        llm_service = LLMService.from_settings(
            settings.llm_provider, settings.llm_api_key, settings.llm_model
        )
        summary_service = (
            LLMService.from_settings(
                settings.llm_provider, settings.llm_api_key, settings.summary_model
            )
            if settings.summary_model
            else None
        )
        enhancer = ResumeEnhancer(
            ResumeOracle(llm_service, summary_service), registry_url=settings.registry_url
        )
        return cls(
            settings=settings,
            store=store,
            enhancer=enhancer,
            default_directory=default_directory or Path.cwd(),
        )

    def close(self) -> None:
        self.store.client.close()


# ---------------------------------------------------------------------------
# Argument helpers
# ---------------------------------------------------------------------------


def _optional_str(arguments: Mapping[str, Any], key: str) -> str | None:
    value = arguments.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ToolInputError(f"'{key}' must be a string")
    return value


def _resolve_directory(ctx: ToolContext, arguments: Mapping[str, Any]) -> Path:
    directory = _optional_str(arguments, "directory")
    path = Path(directory).expanduser() if directory else ctx.default_directory
    if not path.is_dir():
        raise ToolInputError(f"Directory not found: {path}")
    return path


def load_job_description(path_value: str) -> JobDescription:
    """Read and validate a job description JSON file.

    Raises:
        ToolInputError: if the file is missing, not JSON, or not a valid job.
    """
    path = Path(path_value).expanduser()
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ToolInputError(f"Job description file not found: {path}") from exc
    except OSError as exc:
        raise ToolInputError(f"Could not read job description file {path}: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ToolInputError(f"Job description file {path} is not valid JSON: {exc.msg}") from exc

    try:
        return JobDescription.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ToolInputError(f"Invalid job description in {path}: {problems}") from exc


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def analyze_codebase(ctx: ToolContext, arguments: Mapping[str, Any]) -> dict[str, Any]:
    root = _resolve_directory(ctx, arguments)
    logger.info("Starting codebase analysis of %s", root)
    analysis = CodebaseAnalyzer(root).analyze()
    return {"message": "Codebase analysis completed successfully", **analysis.to_dict()}


def check_resume(ctx: ToolContext, arguments: Mapping[str, Any]) -> dict[str, Any]:
    resume = ctx.store.fetch_resume()
    if resume is None:
        return {"message": "No resume found", "exists": False, "resumeUrl": None}
    return {
        "message": "Resume found",
        "exists": True,
        "resumeUrl": ctx.settings.resume_url,
        "resume": resume.to_wire(),
    }


def enhance_resume_with_project(ctx: ToolContext, arguments: Mapping[str, Any]) -> dict[str, Any]:
    root = _resolve_directory(ctx, arguments)

    resume = ctx.store.get_or_create_resume()
    analysis = CodebaseAnalyzer(root).analyze()
    result = ctx.enhancer.enhance_with_project_context(
        resume, analysis.to_dict(), ctx.settings.github_username
    )
    stored = ctx.store.update_resume(result.updated_resume)

    return {
        "message": "Resume enhanced with current project successfully",
        "updatedResume": stored.to_wire(),
        "changes": result.changes.to_dict(),
        "summary": result.summary,
        "userMessage": result.user_message,
        "resumeUrl": result.resume_link,
        "projectName": analysis.repo_name,
        "warning": PROJECT_UPDATE_WARNING,
    }


def enhance_resume(ctx: ToolContext, arguments: Mapping[str, Any]) -> dict[str, Any]:
    job_path = _optional_str(arguments, "job_json_path")
    if job_path is None:
        raise ToolInputError("Missing required argument 'job_json_path'")
    job = load_job_description(job_path)

    resume = ctx.store.fetch_resume()
    if resume is None:
        raise GistNotFoundError(
            f"No {ctx.settings.resume_filename} gist found for {ctx.settings.github_username}"
        )

    result = ctx.enhancer.enhance_for_job(resume, job)
    _, gist_url = ctx.store.create_tailored_resume(result.updated_resume)

    return {
        "message": f"Tailored resume for {job.title} at {job.company} saved to a new gist",
        "gistUrl": gist_url,
        "changes": result.changes.to_dict(),
        "summary": result.summary,
        "skillsToHighlight": result.skills_to_highlight,
        "suggestedProjects": result.suggested_projects,
        "updatedSummary": result.updated_summary,
        "warning": REVIEW_WARNING,
    }


# ---------------------------------------------------------------------------
# Registry and dispatch
# ---------------------------------------------------------------------------

_DIRECTORY_SCHEMA = {
    "type": "object",
    "properties": {
        "directory": {
            "type": "string",
            "description": "Directory to analyze. Defaults to the server's working directory.",
        }
    },
    "required": [],
}


@dataclass(frozen=True, slots=True)
class ToolSpec:
    name: str
    description: str
    handler: Callable[[ToolContext, Mapping[str, Any]], dict[str, Any]]
    input_schema: dict[str, Any]


TOOLS: dict[str, ToolSpec] = {
    tool.name: tool
    for tool in (
        ToolSpec(
            name="analyze_codebase",
            description=(
                "Analyzes a codebase and returns information about technologies, "
                "languages, and recent commits"
            ),
            handler=analyze_codebase,
            input_schema=_DIRECTORY_SCHEMA,
        ),
        ToolSpec(
            name="check_resume",
            description="Checks if the GitHub user has a JSON Resume and returns it",
            handler=check_resume,
            input_schema={"type": "object", "properties": {}, "required": []},
        ),
        ToolSpec(
            name="enhance_resume_with_project",
            description=(
                "Enhances the user's JSON Resume with information about the project "
                "in the given directory"
            ),
            handler=enhance_resume_with_project,
            input_schema=_DIRECTORY_SCHEMA,
        ),
        ToolSpec(
            name="enhance_resume",
            description=(
                "Tailors the user's JSON Resume to a job description file and saves "
                "the result to a new secret gist"
            ),
            handler=enhance_resume,
            input_schema={
                "type": "object",
                "properties": {
                    "job_json_path": {
                        "type": "string",
                        "description": "Path to a JSON file describing the job",
                    }
                },
                "required": ["job_json_path"],
            },
        ),
    )
}


def error_payload(kind: str, exc: BaseException, **extra: Any) -> dict[str, Any]:
    return {"isError": True, "error": {"type": kind, "message": str(exc), **extra}}


def call_tool(ctx: ToolContext, name: str, arguments: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Dispatch ``name`` and wrap the outcome with an ``isError`` marker.

    Raises:
        UnknownToolError: if ``name`` is not a registered tool.
    """
    tool = TOOLS.get(name)
    if tool is None:
        raise UnknownToolError(name)

    args = dict(arguments or {})
    logger.info("Tool %s called with %s", name, args)
    try:
        result = tool.handler(ctx, args)
    except ToolInputError as exc:
        logger.warning("Tool %s rejected input: %s", name, exc)
        return error_payload("input_error", exc)
    except UpdateValidationError as exc:
        logger.error("Tool %s: LLM output failed validation: %s", name, exc)
        return error_payload(
            "validation_error", exc, issues=[issue._asdict() for issue in exc.issues]
        )
    except OracleParseError as exc:
        logger.error("Tool %s: LLM output was not JSON: %s", name, exc)
        return error_payload("parse_error", exc)
    except LLMError as exc:
        logger.error("Tool %s: LLM call failed: %s", name, exc)
        return error_payload("llm_error", exc)
    except GistNotFoundError as exc:
        logger.warning("Tool %s: %s", name, exc)
        return error_payload("not_found", exc)
    except StorageError as exc:
        logger.error("Tool %s: storage failure: %s", name, exc)
        return error_payload("storage_error", exc)
    except Exception as exc:
        logger.exception("Tool %s failed", name)
        return error_payload("internal_error", exc)

    return {"isError": False, **result}
