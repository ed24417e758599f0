"""Pydantic response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for response serialization
and automatic OpenAPI documentation. Pydantic models enforce field types
at runtime and generate JSON Schema that appears in the /docs UI.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Stats field names match caption_cleaner.core.ir.TranscriptStats exactly
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class StatsModel(BaseModel):
    """Statistics for one cleaned transcript."""

    original_line_count: int = Field(description="Content lines produced by the caption parser.")
    original_word_count: int = Field(description="Words before deduplication.")
    cleaned_word_count: int = Field(description="Words after deduplication.")
    cleaned_char_length: int = Field(description="Characters in the cleaned text.")


class CleanResponse(BaseModel):
    """Cleaned transcript returned by POST /clean.

    RULES:
    - config echoes the effective dedup settings used for this request
    - saved_files is empty unless the request asked to save the result
    """

    source_name: str = Field(description="Name of the cleaned document (file stem or given name).")
    text: str = Field(description="The cleaned transcript text.")
    stats: StatsModel = Field(description="Before/after statistics.")
    config: Dict[str, Any] = Field(description="Effective dedup settings.")
    saved_files: List[str] = Field(
        default_factory=list,
        description="Files written to the output directory when save was requested.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "source_name": "K3qMpcjLZGg",
                "text": "the market is up today. volatility remains high.",
                "stats": {
                    "original_line_count": 1,
                    "original_word_count": 18,
                    "cleaned_word_count": 8,
                    "cleaned_char_length": 48,
                },
                "config": {
                    "pattern_threshold": 0.85,
                    "sentence_threshold": 0.8,
                    "max_pattern_window": 20,
                    "min_pattern_window": 2,
                    "min_content_word_length": 3,
                    "fingerprint_width": 5,
                },
                "saved_files": [],
            }
        ]
    }}


class FormatInfo(BaseModel):
    """Description of an available output format."""

    key: str = Field(description="Format identifier used in API requests.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '-clean.txt').")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})


class TranscriptInfo(BaseModel):
    """One saved transcript in the output directory."""

    identifier: str = Field(description="Name the transcript was saved under.")
    size: int = Field(description="File size in bytes.")
    text_length: int = Field(description="Characters in the saved text.")
    modified_at: float = Field(description="Last modification time (Unix timestamp).")


class TranscriptText(BaseModel):
    """A saved transcript's text."""

    identifier: str = Field(description="Name the transcript was saved under.")
    text: str = Field(description="The saved cleaned text.")
