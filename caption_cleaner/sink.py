"""Directory sink for cleaned transcripts.

WHY: Cleaned transcripts are filed per source (one video id, one caption
file) so the summarizer can pick them up later. Writing to a fixed
process-wide folder as a side effect of cleaning would tie the core to
the filesystem; an explicit sink object keeps that decision with the
caller.

HOW: A DirectorySink owns one directory. write() saves formatter outputs
as ``{identifier}{suffix}``, read_text() returns a saved plain text
transcript, and list_entries() describes every saved transcript, newest
first.

RULES:
- The directory is created on first write, not on construction
- Identifiers are single path components; separators and ".." raise
  ValueError
- Existing files for the same identifier are overwritten
- Only "-clean.txt" files are listed and read back
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from caption_cleaner.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)

TEXT_SUFFIX = "-clean.txt"
_IDENTIFIER_RE = re.compile(r"[\w.\- ]+")


def validate_identifier(identifier: str) -> str:
    """Return identifier if it is safe to use as a file name stem.

    Raises:
        ValueError: If it is empty, contains path separators or other
            characters outside [word . - space], or contains "..".
    """
    if (
        not identifier
        or not _IDENTIFIER_RE.fullmatch(identifier)
        or identifier == "."
        or ".." in identifier
    ):
        raise ValueError("Invalid transcript identifier: {!r}".format(identifier))
    return identifier


@dataclass
class SinkEntry:
    """Metadata for one saved transcript."""

    identifier: str
    path: Path
    size: int
    text_length: int
    modified_at: float


class DirectorySink:
    """Files formatter outputs under one directory, keyed by identifier."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    def write(self, identifier: str, outputs: Sequence[FormatterOutput]) -> List[Path]:
        """Save each output as ``{identifier}{suffix}`` and return the paths."""
        identifier = validate_identifier(identifier)
        self.directory.mkdir(parents=True, exist_ok=True)
        paths: List[Path] = []
        for output in outputs:
            path = self.directory / "{}{}".format(identifier, output.suffix)
            path.write_text(output.content, encoding="utf-8")
            paths.append(path)
        logger.info("saved %d file(s) for %s in %s", len(paths), identifier, self.directory)
        return paths

    def read_text(self, identifier: str) -> Optional[str]:
        """Return the saved plain text transcript, or None if there is none."""
        path = self.directory / "{}{}".format(validate_identifier(identifier), TEXT_SUFFIX)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def list_entries(self) -> List[SinkEntry]:
        """Describe every saved plain text transcript, newest first."""
        if not self.directory.is_dir():
            return []
        entries: List[SinkEntry] = []
        for path in self.directory.glob("*" + TEXT_SUFFIX):
            stat = path.stat()
            entries.append(SinkEntry(
                identifier=path.name[:-len(TEXT_SUFFIX)],
                path=path,
                size=stat.st_size,
                text_length=len(path.read_text(encoding="utf-8")),
                modified_at=stat.st_mtime,
            ))
        entries.sort(key=lambda e: (e.modified_at, e.identifier), reverse=True)
        return entries
