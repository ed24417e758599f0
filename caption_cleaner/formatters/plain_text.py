"""Plain text formatter: the cleaned transcript as a .txt file.

WHY: The summarizer downstream only wants the words, one file per
video or caption file.

RULES:
- Content is the cleaned text followed by one newline
- An empty transcript produces an empty file (no newline)
- Output suffix: "-clean.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import List

from caption_cleaner.core.ir import CleanedTranscript
from caption_cleaner.formatters.base import BaseFormatter, FormatterOutput


class PlainTextFormatter(BaseFormatter):
    """Formatter that writes the cleaned text as-is."""

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, transcript: CleanedTranscript) -> List[FormatterOutput]:
        content = transcript.text
        if content:
            content += "\n"
        return [
            FormatterOutput(
                suffix="-clean.txt",
                content=content,
                media_type="text/plain",
            )
        ]
