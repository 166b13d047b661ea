"""Services"""

from jsonresume_mcp.services.enhancer import ResumeEnhancer
from jsonresume_mcp.services.gist_client import GistClient, GistNotFoundError, StorageError
from jsonresume_mcp.services.llm_providers import (
    LLMError,
    OracleContractError,
    OracleParseError,
)
from jsonresume_mcp.services.merge import merge_resume_update
from jsonresume_mcp.services.resume_store import IdentityCache, ResumeStore
from jsonresume_mcp.services.schema_validator import UpdateValidationError, validate_payload

__all__ = [
    "ResumeEnhancer",
    "GistClient",
    "GistNotFoundError",
    "StorageError",
    "LLMError",
    "OracleContractError",
    "OracleParseError",
    "merge_resume_update",
    "IdentityCache",
    "ResumeStore",
    "UpdateValidationError",
    "validate_payload",
]
