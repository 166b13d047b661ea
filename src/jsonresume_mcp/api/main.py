"""FastAPI application exposing the résumé tools over HTTP."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jsonresume_mcp.api.routes import health, tools
from jsonresume_mcp.config import ConfigError, Settings
from jsonresume_mcp.tools import ToolContext

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


def create_app(ctx: ToolContext | None = None) -> FastAPI:
    """Build the application.

    Args:
        ctx: Tool context to serve. When omitted, one is built from the
            environment at startup.

    Startup fails with ``ConfigError`` when the environment is incomplete.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Attach the tool context on startup and close it on shutdown."""
        context = ctx
        if context is None:
            try:
                settings = Settings.from_env()
            except ConfigError as exc:
                logger.error("Configuration error: %s", exc)
                raise
            context = ToolContext.from_settings(settings)
        app.state.tool_context = context
        yield
        context.close()

    app = FastAPI(
        title="JSON Resume MCP API",
        description="HTTP access to the codebase analysis and resume enhancement tools",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(tools.router, prefix="/api")
    return app


app = create_app()


def main() -> None:
    """Start the development server."""
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run("jsonresume_mcp.api.main:app", host="127.0.0.1", port=8000)


if __name__ == "__main__":
    main()
