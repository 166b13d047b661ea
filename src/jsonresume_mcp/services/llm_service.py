from __future__ import annotations

import json
import re
from typing import Any

from jsonresume_mcp.services.llm_providers import (
    LLMProvider,
    OracleParseError,
    create_provider,
)

"""LLM service with multi-provider support. (OpenAI, Gemini)"""

_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)


class LLMService:
    def __init__(self, provider: LLMProvider) -> None:
        """Initialize LLM service with a specific provider.
        Args:
            provider: LLM provider instance
        """
        self.provider = provider

    @classmethod
    def from_settings(cls, provider_name: str, api_key: str, model: str | None = None) -> LLMService:
        """Build the service for the provider named in ``Settings``."""
        return cls(provider=create_provider(provider_name, api_key=api_key, model=model))

    def generate_llm_response(
        self,
        system_instructions: str,
        user_content: str,
        temperature: float | None = 0.7,
        max_tokens: int | None = None,
        seed: int | None = None,
        *,
        json_mode: bool = False,
    ) -> str:
        """Send system and user content to the LLM in one step.

        Args:
            system_instructions: System-level instructions.
            user_content: User content.
            temperature: Controls randomness (0.0-2.0). Lower = more deterministic.
            max_tokens: Maximum response length. None = provider default.
            seed: Random seed for reproducibility (if supported by provider).
            json_mode: Constrain the response to a JSON object.

        Returns:
            The text response from the LLM.
        """
        config = self.provider.generate_llm_config(temperature, max_tokens, seed)
        return self.provider.send_prompt(
            system_instructions, user_content, config, json_mode=json_mode
        )

    @staticmethod
    def extract_json_from_response(response: str) -> Any:
        """Decode JSON from an LLM response, tolerating markdown code fences.

        Raises:
            OracleParseError: if no JSON document can be decoded.
        """
        text = (response or "").strip()
        match = _CODE_FENCE_RE.search(text)
        if match:
            text = match.group(1).strip()
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise OracleParseError(f"LLM response is not valid JSON: {exc.msg}") from exc
