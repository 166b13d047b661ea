"""MCP server exposing the résumé tools over stdio.

stdout carries the protocol; all logging goes to stderr.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp import types
from mcp.server.fastmcp import FastMCP
from mcp.shared.exceptions import McpError

from jsonresume_mcp.tools import TOOLS, ToolContext, call_tool

logger = logging.getLogger(__name__)

SERVER_NAME = "jsonresume-mcp"

INSTRUCTIONS = (
    "This server keeps a developer's JSON Resume, stored in a GitHub gist, up to date. "
    "Use analyze_codebase to inspect the current repository. "
    "Use check_resume to see whether the user already has a resume. "
    "Use enhance_resume_with_project to add the current project and its skills to the "
    "resume; existing entries are never removed or rewritten. "
    "Use enhance_resume with the path to a job description JSON file to save a "
    "tailored copy of the resume to a new secret gist."
)


def build_server(ctx: ToolContext) -> FastMCP:
    """Create a FastMCP server whose tools dispatch through ``call_tool``."""
    mcp = FastMCP(name=SERVER_NAME, instructions=INSTRUCTIONS)

    @mcp.tool(name="analyze_codebase", description=TOOLS["analyze_codebase"].description)
    def analyze_codebase_tool(directory: str | None = None) -> dict[str, Any]:
        """Analyze a codebase.

        Args:
            directory: Directory to analyze (default: the server's working directory).
        """
        return call_tool(ctx, "analyze_codebase", {"directory": directory})

    @mcp.tool(name="check_resume", description=TOOLS["check_resume"].description)
    def check_resume_tool() -> dict[str, Any]:
        return call_tool(ctx, "check_resume", {})

    @mcp.tool(
        name="enhance_resume_with_project",
        description=TOOLS["enhance_resume_with_project"].description,
    )
    def enhance_resume_with_project_tool(directory: str | None = None) -> dict[str, Any]:
        """Add the project in ``directory`` to the user's resume.

        Args:
            directory: Project directory (default: the server's working directory).
        """
        return call_tool(ctx, "enhance_resume_with_project", {"directory": directory})

    @mcp.tool(name="enhance_resume", description=TOOLS["enhance_resume"].description)
    def enhance_resume_tool(job_json_path: str) -> dict[str, Any]:
        """Tailor the resume to a job.

        Args:
            job_json_path: Path to a JSON file describing the job.
        """
        return call_tool(ctx, "enhance_resume", {"job_json_path": job_json_path})

    _reject_unknown_tools(mcp)
    return mcp


def _reject_unknown_tools(mcp: FastMCP) -> None:
    """Answer calls to unregistered tools with a JSON-RPC "method not found" error.

    FastMCP reports unknown names as an ordinary tool result with ``isError``
    set; the handler is wrapped so the client gets a protocol fault instead.
    """
    server = mcp._mcp_server
    handle_call = server.request_handlers[types.CallToolRequest]

    async def handler(req: types.CallToolRequest) -> types.ServerResult:
        name = req.params.name
        if name not in TOOLS:
            logger.warning("Rejected call to unknown tool %s", name)
            raise McpError(
                types.ErrorData(code=types.METHOD_NOT_FOUND, message=f"Unknown tool: {name}")
            )
        return await handle_call(req)

    server.request_handlers[types.CallToolRequest] = handler


def run_stdio(ctx: ToolContext) -> None:
    """Serve the tools over stdio until the client disconnects."""
    mcp = build_server(ctx)
    logger.info("Starting %s in stdio mode (GitHub user: %s)", SERVER_NAME, ctx.settings.github_username)
    try:
        mcp.run(transport="stdio")
    finally:
        ctx.close()
        logger.info("%s stopped", SERVER_NAME)
