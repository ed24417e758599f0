"""Deduplication pipeline: caption document in, CleanedTranscript out.

WHY: The parser and the three dedup stages are only useful composed in
one fixed order. Callers (CLI, HTTP API, batch jobs) need a single entry
point that takes a raw caption document and returns the cleaned text
with its statistics.

HOW: parse_captions() -> flatten lines into one word stream and strip
markup that spans caption lines -> remove_pattern_repeats() ->
remove_sentence_repeats() -> remove_adjacent_duplicates() -> re-parse
the single result line. A pass can expose work for an earlier step
(collapsing "a a b" leaves a fresh "a b" pattern, dropping a sentence
can join an aside across the gap), so passes repeat until one changes
nothing. The result is a fixed point of a full pass, which is what makes
cleaning idempotent. clean_many() runs independent documents on a
thread pool.

RULES:
- Stages run strictly in order; each is a pure function of its input
- Every pass that changes the text makes it strictly shorter, so the
  pass loop always terminates
- Output is never longer than the input, in words or characters
- Empty or whitespace-only input yields an empty CleanedTranscript
- The config is passed explicitly; nothing is read from globals
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Mapping, Optional, Sequence

from caption_cleaner.config import DedupConfig
from caption_cleaner.core.adjacent import remove_adjacent_duplicates
from caption_cleaner.core.ir import CleanedTranscript, TranscriptStats
from caption_cleaner.core.parser import clean_markup, parse_captions
from caption_cleaner.core.patterns import remove_pattern_repeats
from caption_cleaner.core.sentences import remove_sentence_repeats

logger = logging.getLogger(__name__)


def _dedup_pass(tokens: List[str], config: DedupConfig) -> List[str]:
    """Run the three dedup stages once over a word stream."""
    words = remove_pattern_repeats(
        tokens,
        threshold=config.pattern_threshold,
        max_window=config.max_pattern_window,
        min_window=config.min_pattern_window,
    )
    text = remove_sentence_repeats(
        " ".join(words),
        threshold=config.sentence_threshold,
        min_word_length=config.min_content_word_length,
        fingerprint_width=config.fingerprint_width,
    )
    words = remove_adjacent_duplicates(text.split())
    logger.debug(
        "dedup pass: %d -> %d words", len(tokens), len(words)
    )
    return words


def deduplicate_lines(
    lines: Sequence[str],
    config: Optional[DedupConfig] = None,
) -> str:
    """Flatten content lines into one text and deduplicate it.

    Args:
        lines: Content lines as produced by parse_captions().
        config: Dedup settings; defaults to DedupConfig().

    Returns:
        The cleaned text, tokens separated by single spaces.
    """
    if config is None:
        config = DedupConfig()
    # Asides and tags can open on one caption line and close on the next
    text = clean_markup(" ".join(lines))
    while True:
        deduped = " ".join(_dedup_pass(text.split(), config))
        cleaned = " ".join(parse_captions(deduped))
        if cleaned == text:
            return text
        text = cleaned


def clean_transcript(
    raw: str,
    config: Optional[DedupConfig] = None,
    source_name: str = "",
) -> CleanedTranscript:
    """Clean one raw caption document.

    WHY: This is the single public entry point of the core. Everything
    outside the core (formatters, sinks, CLI, API) consumes its result.

    HOW: Parses the document, deduplicates the content lines, and
    measures the input and output for the stats record.

    Args:
        raw: SRT/WebVTT caption document or plain transcript text.
        config: Dedup settings; defaults to DedupConfig().
        source_name: Identifier recorded on the result (file stem, video id).

    Returns:
        CleanedTranscript with the cleaned text and its statistics.
    """
    lines = parse_captions(raw)
    original_word_count = sum(len(line.split()) for line in lines)
    text = deduplicate_lines(lines, config)

    stats = TranscriptStats(
        original_line_count=len(lines),
        original_word_count=original_word_count,
        cleaned_word_count=len(text.split()),
        cleaned_char_length=len(text),
    )
    logger.info(
        "cleaned %s: original lines=%d, words %d -> %d, cleaned length=%d chars",
        source_name or "<document>",
        stats.original_line_count,
        stats.original_word_count,
        stats.cleaned_word_count,
        stats.cleaned_char_length,
    )
    return CleanedTranscript(text=text, stats=stats, source_name=source_name)


def clean_many(
    documents: Mapping[str, str],
    config: Optional[DedupConfig] = None,
    max_workers: Optional[int] = None,
) -> Dict[str, CleanedTranscript]:
    """Clean several independent documents concurrently.

    RULES:
    - Keys are source names; the result keeps the input key order
    - Each document runs its own sequential pipeline
    - An exception from any document propagates to the caller
    """
    if config is None:
        config = DedupConfig()
    names = list(documents)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        results = pool.map(
            lambda name: clean_transcript(documents[name], config, source_name=name),
            names,
        )
        return dict(zip(names, results))
