from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import httpx
import pytest

from jsonresume_mcp.config import Settings
from jsonresume_mcp.models.resume import ResumeDocument
from jsonresume_mcp.services.enhancer import ResumeEnhancer
from jsonresume_mcp.services.gist_client import GistClient
from jsonresume_mcp.services.llm_providers import LLMProvider
from jsonresume_mcp.services.llm_service import LLMService
from jsonresume_mcp.services.oracle import ResumeOracle
from jsonresume_mcp.services.resume_store import ResumeStore
from jsonresume_mcp.tools import ToolContext


class ScriptedProvider(LLMProvider):
    """LLM provider that replays canned responses in order."""

    def __init__(self, responses: Iterable[str | Exception]) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def send_prompt(
        self,
        system_instructions: str,
        user_content: str,
        config: dict,
        *,
        json_mode: bool = False,
    ) -> str:
        self.calls.append(
            {
                "system_instructions": system_instructions,
                "user_content": user_content,
                "config": config,
                "json_mode": json_mode,
            }
        )
        if not self.responses:
            raise AssertionError("ScriptedProvider ran out of responses")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def scripted_oracle(*responses: str | Exception) -> tuple[ResumeOracle, ScriptedProvider]:
    provider = ScriptedProvider(responses)
    return ResumeOracle(LLMService(provider=provider)), provider


@pytest.fixture
def project_payload() -> dict[str, Any]:
    """A well-formed codebase-driven update as the LLM would return it."""
    return {
        "newProject": {
            "name": "X",
            "startDate": "2024-03-01",
            "description": "A developer tool for syncing resumes.",
            "highlights": ["Built the merge engine"],
            "keywords": ["TypeScript", "Node.js"],
            "url": "https://github.com/octocat/x",
        },
        "newSkills": [{"name": "TypeScript"}, {"name": "React"}],
        "changes": ["Added project X", "Added TypeScript and React skills"],
    }


@pytest.fixture
def project_response(project_payload: dict[str, Any]) -> str:
    return json.dumps(project_payload)


@pytest.fixture
def resume() -> ResumeDocument:
    """A stored résumé with one project and mixed skill shapes."""
    return ResumeDocument(
        document={
            "basics": {"name": "Octo Cat", "summary": "Developer."},
            "work": [{"name": "Acme", "position": "Engineer"}],
            "skills": ["python", {"name": "React", "level": "Advanced"}],
            "projects": [{"name": "Old Project", "description": "Something I built earlier."}],
            "meta": {"version": "v1.0.0", "lastModified": "2020-01-01T00:00:00+00:00"},
        },
        identity="gist-123",
    )


@pytest.fixture
def make_oracle():
    """Factory building a ResumeOracle over a ScriptedProvider."""
    return scripted_oracle


API_URL = "https://api.github.test"


def gist(gist_id: str, updated_at: str, resume: dict[str, Any] | None = None, **files: str) -> dict:
    """A gist as returned by the GitHub API, optionally holding resume.json."""
    entries = {name: {"filename": name, "content": content} for name, content in files.items()}
    if resume is not None:
        entries["resume.json"] = {"filename": "resume.json", "content": json.dumps(resume)}
    return {
        "id": gist_id,
        "updated_at": updated_at,
        "html_url": f"https://gist.github.com/{gist_id}",
        "files": entries,
    }


class FakeGitHub:
    """Records requests and answers them from a route table."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}

    def on(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        status, body = route
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def client(self) -> GistClient:
        return GistClient("ghp_test", api_url=API_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        github_token="ghp_test",
        github_username="octocat",
        llm_api_key="sk-test",
        github_api_url=API_URL,
    )


@pytest.fixture
def make_context(github: FakeGitHub, settings: Settings, tmp_path: Path):
    """Factory for a ToolContext wired to the fake GitHub and scripted LLM responses."""

    def _make(*responses: str | Exception) -> tuple[ToolContext, ScriptedProvider]:
        oracle, provider = scripted_oracle(*responses)
        ctx = ToolContext(
            settings=settings,
            store=ResumeStore(github.client(), settings.github_username),
            enhancer=ResumeEnhancer(oracle, registry_url=settings.registry_url),
            default_directory=tmp_path,
        )
        return ctx, provider

    return _make
