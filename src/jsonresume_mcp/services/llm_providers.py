from __future__ import annotations

import os
from abc import ABC, abstractmethod

from dotenv import load_dotenv

"""LLM provider implementations."""

# Load environment variables for LLM API keys (OPENAI_API_KEY, GEMINI_API_KEY, LLM_MODEL, etc.)
load_dotenv()

DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


class LLMError(RuntimeError):
    """Raised when LLM service cannot be used or fails."""


class OracleContractError(LLMError):
    """Raised when the LLM answered, but not with what was asked for."""


class OracleParseError(OracleContractError):
    """Raised when the LLM output cannot be decoded as JSON."""


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    def generate_llm_config(
        self,
        temperature: float | None,
        max_tokens: int | None,
        seed: int | None,
    ) -> dict:
        """Generate llm configs

        Args:
            temperature: Controls randomness
            max_tokens: Maximum response length
            seed: Random seed for reproducibility

        Returns:
            Configuration dictionary with common parameters
        """
        config = {}

        if temperature is not None:
            config["temperature"] = temperature
        if max_tokens is not None:
            config["max_tokens"] = max_tokens
        if seed is not None:
            config["seed"] = seed

        return config

    @abstractmethod
    def send_prompt(
        self,
        system_instructions: str,
        user_content: str,
        config: dict,
        *,
        json_mode: bool = False,
    ) -> str:
        """Send a prompt to the LLM and return the text response.

        Args:
            system_instructions: System-level instructions.
            user_content: The user turn.
            config: Configuration dictionary for the LLM request.
            json_mode: Ask the provider to constrain output to a JSON object.

        Returns:
            The text response from the LLM.
        """


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions implementation."""

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        from openai import OpenAI

        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not self.api_key:
            raise LLMError("Missing OPENAI_API_KEY environment variable")

        self.model = model or os.environ.get("LLM_MODEL", DEFAULT_OPENAI_MODEL)
        self.client = OpenAI(api_key=self.api_key)

    def send_prompt(
        self,
        system_instructions: str,
        user_content: str,
        config: dict,
        *,
        json_mode: bool = False,
    ) -> str:
        kwargs = dict(config)
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_instructions},
                    {"role": "user", "content": user_content},
                ],
                **kwargs,
            )
        except Exception as e:
            raise LLMError(f"OpenAI API call failed: {e}") from e

        if not response.choices:
            raise LLMError("OpenAI returned no choices")
        return (response.choices[0].message.content or "").strip()


class GeminiProvider(LLMProvider):
    """Gemini implementation."""

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        """Initialize Gemini provider with API key from arguments or environment."""
        from google import genai

        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise LLMError("Missing GEMINI_API_KEY environment variable")

        self.model = model or os.environ.get("LLM_MODEL", DEFAULT_GEMINI_MODEL)
        self.client = genai.Client(api_key=self.api_key)

    def generate_llm_config(
        self,
        temperature: float | None,
        max_tokens: int | None,
        seed: int | None,
    ) -> dict:
        """Generate Gemini-specific configuration dictionary."""
        config = super().generate_llm_config(temperature, max_tokens, seed)

        # Map common 'max_tokens' to Gemini's 'max_output_tokens'
        if "max_tokens" in config:
            config["max_output_tokens"] = config.pop("max_tokens")

        return config

    def send_prompt(
        self,
        system_instructions: str,
        user_content: str,
        config: dict,
        *,
        json_mode: bool = False,
    ) -> str:
        """Send prompt to Gemini and return response text."""
        request_config = {**config, "system_instruction": system_instructions}
        if json_mode:
            request_config["response_mime_type"] = "application/json"
        try:
            response = self.client.models.generate_content(
                model=self.model, contents=user_content, config=request_config
            )
            return (response.text or "").strip()
        except Exception as e:
            raise LLMError(f"Gemini API call failed: {e}") from e


PROVIDERS: dict[str, type[LLMProvider]] = {
    "openai": OpenAIProvider,
    "gemini": GeminiProvider,
}


def create_provider(name: str, api_key: str | None = None, model: str | None = None) -> LLMProvider:
    """Instantiate the provider registered under ``name``."""
    provider_cls = PROVIDERS.get(name.lower())
    if provider_cls is None:
        raise LLMError(f"Unknown LLM provider: {name}.")
    return provider_cls(api_key=api_key, model=model)
