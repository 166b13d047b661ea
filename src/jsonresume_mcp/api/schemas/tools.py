"""Pydantic schemas for the tool endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolInfo(BaseModel):
    """A registered tool and the arguments it accepts."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(alias="inputSchema")


class ToolList(BaseModel):
    tools: list[ToolInfo]


class ToolCallRequest(BaseModel):
    """Body of ``POST /api/tools/{name}``."""

    arguments: dict[str, Any] = Field(default_factory=dict)
