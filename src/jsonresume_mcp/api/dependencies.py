"""Shared dependencies for API routes."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from jsonresume_mcp.tools import ToolContext


def get_tool_context(request: Request) -> ToolContext:
    """Return the tool context created at application startup.

    Raises:
        HTTPException: 503 if the application started without one.
    """
    ctx = getattr(request.app.state, "tool_context", None)
    if ctx is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Server is not configured. Check GITHUB_TOKEN, GITHUB_USERNAME and the LLM API key.",
        )
    return ctx
