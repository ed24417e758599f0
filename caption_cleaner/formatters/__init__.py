"""Output formatter registry.

WHY: The CLI, the HTTP API and the sink need a single lookup to find the
right formatter by name. A central dict makes it trivial to add formats.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["plain_text"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API fields)
- Values are BaseFormatter subclasses (not instances)
- DEFAULT_FORMATS is what the CLI writes when --formats is not given
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from caption_cleaner.formatters.json_report import JsonReportFormatter
from caption_cleaner.formatters.plain_text import PlainTextFormatter

if TYPE_CHECKING:
    from caption_cleaner.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "plain_text": PlainTextFormatter,
    "json_report": JsonReportFormatter,
}

DEFAULT_FORMATS: List[str] = ["plain_text"]
