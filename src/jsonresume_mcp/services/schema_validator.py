"""Strict validation of LLM payloads before they are allowed near a résumé.

The LLM is treated as an untrusted function returning text. A payload is
only used once it has been coerced into one of the pydantic shapes in
``jsonresume_mcp.schemas``; anything else aborts the enhancement.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, TypeVar

from pydantic import BaseModel, ValidationError

from jsonresume_mcp.services.llm_providers import OracleContractError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ValidationIssue(NamedTuple):
    """One failed rule: dotted field path and the rule's message."""

    field: str
    rule: str

    def __str__(self) -> str:
        return f"{self.field}: {self.rule}"


class UpdateValidationError(OracleContractError):
    """Raised when an LLM payload does not conform to the expected shape."""

    def __init__(self, shape: str, issues: list[ValidationIssue]) -> None:
        self.shape = shape
        self.issues = issues
        detail = "; ".join(str(issue) for issue in issues) or "unknown error"
        super().__init__(f"{shape} failed schema validation: {detail}")


def _issues_from(error: ValidationError) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for item in error.errors():
        path = ".".join(str(part) for part in item.get("loc", ())) or "<root>"
        issues.append(ValidationIssue(path, item.get("msg", "invalid")))
    return issues


def validate_payload(payload: Any, shape: type[ModelT]) -> ModelT:
    """Check and coerce ``payload`` into ``shape``.

    Args:
        payload: Decoded JSON produced by the LLM.
        shape: The pydantic model the payload must satisfy.

    Returns:
        The validated model instance.

    Raises:
        UpdateValidationError: listing every failed field and rule.
    """
    if not isinstance(payload, dict):
        raise UpdateValidationError(
            shape.__name__,
            [ValidationIssue("<root>", f"expected a JSON object, got {type(payload).__name__}")],
        )
    try:
        return shape.model_validate(payload)
    except ValidationError as exc:
        error = UpdateValidationError(shape.__name__, _issues_from(exc))
        logger.warning("%s", error)
        raise error from exc
