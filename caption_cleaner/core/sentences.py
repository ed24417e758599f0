"""Sentence repeat eliminator: drop near-duplicate sentences.

WHY: After pattern collapsing, overlapping caption windows still leave
sentences that differ by a word or two ("revenue grew sharply this
quarter" / "revenue grew sharply last quarter"), plus short fragments
cut off at window boundaries. Neither adds information for a summarizer.

HOW: The text is split into sentences. Each sentence is reduced to a
fingerprint of its first few content words and compared against the
fingerprints of the sentences already kept. A sentence whose fingerprint
overlap reaches the threshold, or that has fewer than three content
words, is dropped. Survivors are rejoined with ". " and a final period.

RULES:
- Sentences end at runs of . ! ? followed by whitespace or end of text,
  so decimals like "2.5" stay inside their sentence
- Content words are lowercased words of at least min_word_length chars
- A sentence with fewer than 3 content words is never kept
- Only kept sentences register a fingerprint
- First occurrence order is preserved; only later duplicates are dropped
- Fewer than 2 sentences, or nothing dropped: the input is returned as is
"""

from __future__ import annotations

import logging
import re
from typing import List

from caption_cleaner.config import (
    FINGERPRINT_WIDTH,
    MIN_CONTENT_WORD_LENGTH,
    SENTENCE_OVERLAP_THRESHOLD,
)
from caption_cleaner.core.similarity import positional_overlap

logger = logging.getLogger(__name__)

SENTENCE_END_RE = re.compile(r"[.!?]+(?=\s|$)")
MIN_SENTENCE_CONTENT_WORDS = 3


def split_sentences(text: str) -> List[str]:
    """Split text into stripped, non-empty sentences without their terminators."""
    return [s.strip() for s in SENTENCE_END_RE.split(text) if s.strip()]


def content_words(sentence: str, min_word_length: int = MIN_CONTENT_WORD_LENGTH) -> List[str]:
    return [w for w in sentence.lower().split() if len(w) >= min_word_length]


def fingerprint(
    sentence: str,
    min_word_length: int = MIN_CONTENT_WORD_LENGTH,
    width: int = FINGERPRINT_WIDTH,
) -> List[str]:
    """Return the first `width` content words of a sentence, lowercased."""
    return content_words(sentence, min_word_length)[:width]


def remove_sentence_repeats(
    text: str,
    *,
    threshold: float = SENTENCE_OVERLAP_THRESHOLD,
    min_word_length: int = MIN_CONTENT_WORD_LENGTH,
    fingerprint_width: int = FINGERPRINT_WIDTH,
) -> str:
    """Drop sentences that near-duplicate an earlier kept sentence.

    Args:
        text: Text after pattern elimination.
        threshold: Fingerprint overlap at which a sentence is a duplicate.
        min_word_length: Minimum length of a content word.
        fingerprint_width: Number of content words in a fingerprint.

    Returns:
        The kept sentences joined with ". " plus a trailing period, or
        the unchanged input when nothing was dropped.
    """
    sentences = split_sentences(text)
    if len(sentences) < 2:
        return text

    kept: List[str] = []
    seen: List[List[str]] = []
    for sentence in sentences:
        if len(content_words(sentence, min_word_length)) < MIN_SENTENCE_CONTENT_WORDS:
            continue
        fp = fingerprint(sentence, min_word_length, fingerprint_width)
        if any(positional_overlap(fp, other) >= threshold for other in seen):
            continue
        kept.append(sentence)
        seen.append(fp)

    if len(kept) == len(sentences):
        return text

    logger.debug(
        "remove_sentence_repeats: kept %d of %d sentences", len(kept), len(sentences)
    )
    if not kept:
        return ""
    return ". ".join(kept) + "."
