"""Route handlers for the API."""

from jsonresume_mcp.api.routes import health, tools

__all__ = ["health", "tools"]
