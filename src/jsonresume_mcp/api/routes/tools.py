"""Routes exposing the résumé tools over HTTP."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status

from jsonresume_mcp.api.dependencies import get_tool_context
from jsonresume_mcp.api.schemas.tools import ToolCallRequest, ToolInfo, ToolList
from jsonresume_mcp.tools import TOOLS, ToolContext, UnknownToolError, call_tool

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("", response_model=ToolList, response_model_by_alias=True)
def list_tools() -> ToolList:
    """List every registered tool."""
    return ToolList(
        tools=[
            ToolInfo(name=tool.name, description=tool.description, input_schema=tool.input_schema)
            for tool in TOOLS.values()
        ]
    )


@router.post("/{name}")
def invoke_tool(
    name: str,
    ctx: Annotated[ToolContext, Depends(get_tool_context)],
    request: ToolCallRequest | None = None,
) -> dict[str, Any]:
    """Run a tool; failures come back as ``isError`` payloads with status 200.

    Raises:
        HTTPException: 404 if no tool is registered under ``name``.
    """
    arguments = request.arguments if request is not None else {}
    try:
        return call_tool(ctx, name, arguments)
    except UnknownToolError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
