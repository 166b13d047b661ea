"""Résumé persistence on GitHub gists, with session-scoped identity tracking.

The user's résumé is the most recently updated gist holding a file named
``resume.json``. Its gist id is cached on an ``IdentityCache`` for the
life of the process; a failed fetch through the cache clears it and
retries the listing path exactly once.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from jsonresume_mcp.models.resume import ResumeDocument, sample_resume, utc_timestamp
from jsonresume_mcp.services.gist_client import GistClient, GistNotFoundError, StorageError

logger = logging.getLogger(__name__)

__all__ = ["IdentityCache", "ResumeStore"]

_EPOCH = datetime.min.replace(tzinfo=UTC)


@dataclass(slots=True)
class IdentityCache:
    """Remembers which gist holds the configured user's résumé."""

    gist_id: str | None = None

    def remember(self, gist_id: str) -> None:
        self.gist_id = gist_id

    def invalidate(self) -> None:
        self.gist_id = None


def _updated_at(gist: dict[str, Any]) -> datetime:
    raw = gist.get("updated_at")
    if not raw:
        return _EPOCH
    try:
        parsed = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def _serialize(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


class ResumeStore:
    """Reads and writes the user's JSON Resume gist.

    Args:
        client: Gist API client.
        username: GitHub user whose gists are searched.
        filename: Canonical résumé filename inside a gist.
        cache: Identity cache; a fresh one is created when omitted.
    """

    def __init__(
        self,
        client: GistClient,
        username: str,
        *,
        filename: str = "resume.json",
        cache: IdentityCache | None = None,
    ) -> None:
        self.client = client
        self.username = username
        self.filename = filename
        self.cache = cache if cache is not None else IdentityCache()

    # ------------------------------------------------------------------
    # Identity tracking
    # ------------------------------------------------------------------

    def remember_identity(self, gist_id: str) -> None:
        self.cache.remember(gist_id)

    def invalidate(self) -> None:
        self.cache.invalidate()

    def _has_resume_file(self, gist: dict[str, Any]) -> bool:
        files = gist.get("files") or {}
        return any(
            (meta or {}).get("filename", name) == self.filename for name, meta in files.items()
        )

    def _find_resume_gist(self) -> dict[str, Any] | None:
        logger.info("Listing gists for user: %s", self.username)
        try:
            gists = self.client.list_gists(self.username)
        except GistNotFoundError:
            logger.warning("No gist listing for user %s; treating as no resume", self.username)
            return None
        candidates = [g for g in gists if g.get("id") and self._has_resume_file(g)]
        if not candidates:
            logger.info("No %s found in any of %d gists", self.filename, len(gists))
            return None
        candidates.sort(key=_updated_at, reverse=True)
        chosen = candidates[0]
        logger.info(
            "Found %d %s gists; using most recent %s (updated %s)",
            len(candidates),
            self.filename,
            chosen["id"],
            chosen.get("updated_at"),
        )
        return chosen

    def resolve_identity(self) -> str | None:
        """Return the résumé gist id, or None when the user has none."""
        if self.cache.gist_id:
            return self.cache.gist_id
        gist = self._find_resume_gist()
        if gist is None:
            return None
        self.remember_identity(gist["id"])
        return gist["id"]

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def _load_from_gist(self, gist: dict[str, Any]) -> ResumeDocument | None:
        files = gist.get("files") or {}
        entry = next(
            (
                meta
                for name, meta in files.items()
                if (meta or {}).get("filename", name) == self.filename
            ),
            None,
        )
        if entry is None:
            return None

        content = entry.get("content")
        if content is None or entry.get("truncated"):
            raw_url = entry.get("raw_url")
            if not raw_url:
                return None
            content = self.client.fetch_raw(raw_url)

        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise StorageError(f"{self.filename} in gist {gist.get('id')} is not valid JSON") from exc
        if not isinstance(data, dict):
            raise StorageError(f"{self.filename} in gist {gist.get('id')} is not a JSON object")
        return ResumeDocument.from_wire(data, identity=gist.get("id"))

    def fetch_resume(self) -> ResumeDocument | None:
        """Fetch the current résumé, or None when the user has none.

        Raises:
            StorageError: if the listing itself fails or the stored file is unusable.
        """
        cached_id = self.cache.gist_id
        if cached_id:
            logger.info("Using cached gist ID: %s", cached_id)
            try:
                resume = self._load_from_gist(self.client.get_gist(cached_id))
            except StorageError:
                logger.warning("Cached gist %s could not be fetched; re-listing", cached_id)
                resume = None
            if resume is not None:
                return resume
            self.invalidate()

        gist = self._find_resume_gist()
        if gist is None:
            return None
        self.remember_identity(gist["id"])
        return self._load_from_gist(gist)

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def create_sample_resume(self) -> ResumeDocument:
        """Create a public ``resume.json`` gist seeded from the GitHub profile."""
        profile = self.client.get_user(self.username)
        document = sample_resume()
        basics = document["basics"]
        basics["name"] = profile.get("name") or self.username
        basics["email"] = profile.get("email") or ""
        for entry in basics["profiles"]:
            if entry.get("network") == "GitHub":
                entry["username"] = self.username
                entry["url"] = f"https://github.com/{self.username}"

        logger.info("Creating new gist with %s", self.filename)
        gist = self.client.create_gist(
            {self.filename: _serialize(document)},
            description="My JSON Resume",
            public=True,
        )
        self.remember_identity(gist["id"])
        logger.info("Created new gist with ID: %s", gist["id"])
        return ResumeDocument(document=document, identity=gist["id"])

    def get_or_create_resume(self) -> ResumeDocument:
        resume = self.fetch_resume()
        if resume is not None:
            return resume
        logger.info("No resume found, creating a sample resume")
        return self.create_sample_resume()

    def update_resume(self, resume: ResumeDocument) -> ResumeDocument:
        """Overwrite the résumé's own gist in place (revision history keeps the old one).

        Raises:
            StorageError: if the handle carries no storage identity.
        """
        gist_id = resume.identity or self.resolve_identity()
        if not gist_id:
            raise StorageError("Cannot update a resume that was never stored")

        updated = resume.copy()
        meta = updated.document.setdefault("meta", {})
        if isinstance(meta, dict):
            meta["lastModified"] = utc_timestamp()

        logger.info("Updating %s in gist %s", self.filename, gist_id)
        self.client.update_gist(gist_id, {self.filename: _serialize(updated.to_wire())})
        self.remember_identity(gist_id)
        updated.identity = gist_id
        return updated

    def create_tailored_resume(self, resume: ResumeDocument) -> tuple[ResumeDocument, str]:
        """Write ``resume`` to a new secret gist; the original is never touched.

        Returns:
            The stored handle (with the new gist's identity) and the gist URL.
        """
        timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S%fZ")
        filename = f"updated_resume_{timestamp}.json"

        document = resume.to_wire()
        meta = document.setdefault("meta", {})
        if isinstance(meta, dict):
            meta["lastModified"] = utc_timestamp()

        logger.info("Creating tailored resume gist: %s", filename)
        gist = self.client.create_gist(
            {filename: _serialize(document)},
            description=f"Updated resume - {timestamp}",
            public=False,
        )
        url = gist.get("html_url") or f"https://gist.github.com/{gist['id']}"
        return ResumeDocument(document=document, identity=gist["id"]), url
