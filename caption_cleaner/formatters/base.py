"""Abstract base formatter and output container.

WHY: A cleaned transcript is handed to different consumers: a
summarizer wants plain text, the reporting side wants text plus
statistics as JSON. This base class gives the CLI, the HTTP API and the
sink one interface to work with any output format generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list so one formatter may produce several files
- ``suffix`` starts with a hyphen, e.g. ``"-clean.txt"``
- The caller is responsible for prepending the source identifier
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from caption_cleaner.core.ir import CleanedTranscript


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source identifier,
                e.g. ``"-clean.txt"`` -> ``"K3qMpcjLZGg-clean.txt"``.
        content: The file content.
        media_type: MIME type for the content, e.g. ``"text/plain"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Plain Text'."""

    @abstractmethod
    def format(self, transcript: CleanedTranscript) -> List[FormatterOutput]:
        """Convert a CleanedTranscript into one or more output files."""
