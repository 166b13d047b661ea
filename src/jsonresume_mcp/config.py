"""Runtime configuration loaded from the environment.

Variables may also come from a ``.env`` file in the working directory.
Required: ``GITHUB_TOKEN``, ``GITHUB_USERNAME`` and the API key of the
configured LLM provider (``OPENAI_API_KEY`` or ``GEMINI_API_KEY``).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_REGISTRY_URL = "https://registry.jsonresume.org"
DEFAULT_RESUME_FILENAME = "resume.json"
DEFAULT_HTTP_TIMEOUT = 30.0

# provider name -> environment variable holding its API key
LLM_KEY_VARIABLES = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
}


class ConfigError(RuntimeError):
    """Raised when required configuration is missing or invalid."""


@dataclass(frozen=True, slots=True)
class Settings:
    """Process-wide settings for the server and the CLI."""

    github_token: str
    github_username: str
    llm_api_key: str
    llm_provider: str = "openai"
    llm_model: str | None = None
    summary_model: str | None = None
    github_api_url: str = DEFAULT_GITHUB_API_URL
    registry_url: str = DEFAULT_REGISTRY_URL
    resume_filename: str = DEFAULT_RESUME_FILENAME
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @property
    def resume_url(self) -> str:
        """Public registry page rendering the user's résumé."""
        return f"{self.registry_url.rstrip('/')}/{self.github_username}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``environ`` (defaults to ``os.environ``).

        Raises:
            ConfigError: if any required variable is missing, or the LLM
                provider is not supported.
        """
        env = os.environ if environ is None else environ

        provider = (env.get("LLM_PROVIDER") or "openai").strip().lower()
        key_var = LLM_KEY_VARIABLES.get(provider)
        if key_var is None:
            raise ConfigError(
                f"Unsupported LLM_PROVIDER {provider!r}; expected one of "
                f"{', '.join(sorted(LLM_KEY_VARIABLES))}"
            )

        required = ("GITHUB_TOKEN", "GITHUB_USERNAME", key_var)
        missing = [name for name in required if not (env.get(name) or "").strip()]
        if missing:
            raise ConfigError(
                "Missing required environment variable(s): " + ", ".join(missing)
            )

        timeout_raw = env.get("HTTP_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_HTTP_TIMEOUT
        except ValueError as exc:
            raise ConfigError(f"HTTP_TIMEOUT must be a number, got {timeout_raw!r}") from exc

        return cls(
            github_token=env["GITHUB_TOKEN"].strip(),
            github_username=env["GITHUB_USERNAME"].strip(),
            llm_api_key=env[key_var].strip(),
            llm_provider=provider,
            llm_model=env.get("LLM_MODEL") or None,
            summary_model=env.get("LLM_SUMMARY_MODEL") or None,
            github_api_url=env.get("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL,
            registry_url=env.get("RESUME_REGISTRY_URL") or DEFAULT_REGISTRY_URL,
            resume_filename=env.get("RESUME_FILENAME") or DEFAULT_RESUME_FILENAME,
            http_timeout=timeout,
        )
