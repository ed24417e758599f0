"""Result dataclasses for cleaned transcripts.

WHY: The pipeline produces a cleaned string, but the reporting side (CLI
summary, JSON report, HTTP API) also needs to know how much was removed.
A small typed result keeps the text and its statistics together so every
formatter and caller reads the same numbers.

HOW: Two dataclasses:
  TranscriptStats   — counts taken before and after cleaning
  CleanedTranscript — the cleaned text plus its stats

RULES:
- original_line_count counts content lines produced by the parser
- word counts are whitespace-delimited token counts
- cleaned_char_length is len(text) of the final string
- cleaned_word_count <= original_word_count always holds
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict


@dataclass
class TranscriptStats:
    """Statistics describing one pipeline run.

    RULES:
    - original_line_count: content lines out of the parser
    - original_word_count: tokens in the flattened word stream
    - cleaned_word_count: tokens in the final text
    - cleaned_char_length: characters in the final text
    """

    original_line_count: int = 0
    original_word_count: int = 0
    cleaned_word_count: int = 0
    cleaned_char_length: int = 0

    @property
    def removed_word_count(self) -> int:
        return self.original_word_count - self.cleaned_word_count


@dataclass
class CleanedTranscript:
    """The sole artifact exposed across the core boundary.

    WHY: Formatters and sinks need the text and its statistics together,
    plus a name to file the result under.

    RULES:
    - text: the cleaned transcript, single line, no markup
    - stats: TranscriptStats for this run
    - source_name: identifier of the input (file stem, video id, ...),
      empty when the caller did not provide one
    """

    text: str
    stats: TranscriptStats = field(default_factory=TranscriptStats)
    source_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-serializable form of this result."""
        return {
            "source_name": self.source_name,
            "text": self.text,
            "stats": asdict(self.stats),
        }
