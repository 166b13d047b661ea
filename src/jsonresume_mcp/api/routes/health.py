"""Health check routes."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """Report that the API is up, with its name and version."""
    return {"status": "healthy", "service": request.app.title, "version": request.app.version}
