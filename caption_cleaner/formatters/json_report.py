"""JSON report formatter: cleaned text plus statistics.

WHY: The logging/reporting side consumes the statistics record
(original line count, cleaned length, word counts) next to the text.
A schema-checked JSON file keeps that contract explicit.

HOW: Serializes CleanedTranscript.to_dict(), validates it with
jsonschema against schemas/cleaned_transcript.schema.json, and returns
it pretty-printed.

RULES:
- Output suffix: "-clean.json"
- Media type: "application/json"
- Validate output against the schema before returning; raise on failure
- Non-ASCII text is written as-is (ensure_ascii=False)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from caption_cleaner.core.ir import CleanedTranscript
from caption_cleaner.formatters.base import BaseFormatter, FormatterOutput

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "cleaned_transcript.schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def get_schema() -> Dict[str, Any]:
    """Load the report schema from disk, cached after the first call."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


class JsonReportFormatter(BaseFormatter):
    """Formatter that produces a validated JSON report."""

    @property
    def name(self) -> str:
        return "JSON Report"

    def format(self, transcript: CleanedTranscript) -> List[FormatterOutput]:
        """Convert a CleanedTranscript into a JSON report.

        Raises:
            jsonschema.ValidationError: If the report does not conform
                to the bundled schema.
        """
        report = transcript.to_dict()
        jsonschema.validate(instance=report, schema=get_schema())
        return [
            FormatterOutput(
                suffix="-clean.json",
                content=json.dumps(report, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]
