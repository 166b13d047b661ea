"""Data models and type definitions"""

from jsonresume_mcp.models.resume import (
    IDENTITY_ATTRIBUTE,
    ChangeRecord,
    EnhancementResult,
    JobEnhancementResult,
    MergeResult,
    ResumeDocument,
    sample_resume,
    utc_timestamp,
)

__all__ = [
    "IDENTITY_ATTRIBUTE",
    "ChangeRecord",
    "EnhancementResult",
    "JobEnhancementResult",
    "MergeResult",
    "ResumeDocument",
    "sample_resume",
    "utc_timestamp",
]
