"""Caption parser: raw SRT/WebVTT markup or plain text to content lines.

WHY: Caption files interleave the spoken text with structure (sequence
numbers, timing ranges, headers, NOTE/STYLE blocks) and inline markup
(voice/class tags, karaoke timestamps, HTML entities, [Music] and
(applause) asides). The dedup stages only want the spoken words, in
order, one line per caption text line.

HOW: Every physical line is classified into a LineKind, then a small
state machine (EXPECT_BLOCK_START -> EXPECT_TIMING -> COLLECT_TEXT)
decides whether the line is caption text. The transition table is plain
data so the grammar and its recovery behavior can be read at a glance.
Text lines are cleaned with clean_markup() and kept when non-empty.

RULES:
- A document with at least one timing line is parsed in block mode;
  text in a block that never reached its timing line is skipped
- Only an empty line ends a block; a whitespace-only line inside a cue
  (YouTube auto-captions) is skipped without a state change
- A document with no timing line is a plain transcript; every content
  line passes through after markup stripping
- Timing lines, digit-only lines, header lines, and blank lines are
  never emitted, neither before nor after markup stripping
- Markup stripping repeats until stable, entities first, so escaped and
  doubly escaped tags do not survive into the output
- The parser never raises; empty or whitespace-only input yields []
"""

from __future__ import annotations

import enum
import logging
import re
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)

# =============================================================================
# Line classification
# =============================================================================

_TIMESTAMP = r"(?:\d+:)?\d{1,2}:\d{2}[.,]\d{1,3}"
TIMING_RE = re.compile(r"^\s*" + _TIMESTAMP + r"\s*-->\s*" + _TIMESTAMP)
SEQUENCE_RE = re.compile(r"^\d+$")
HEADER_RE = re.compile(r"^(?:(?:WEBVTT|NOTE|STYLE|REGION)\b|Kind:|Language:)")

# Markup tags (<c>, </i>, <v Speaker>, <c.colorE5E5E5>) and VTT karaoke
# timestamps (<00:00:01.280>). A bare "<" followed by a digit or space is
# text, not a tag.
TAG_RE = re.compile(r"</?[A-Za-z][^<>]*>|<" + _TIMESTAMP + r">")
ENTITY_RE = re.compile(r"&(amp|lt|gt|quot|#39|nbsp);")
ASIDE_RE = re.compile(r"\[[^\]]*\]|\([^)]*\)")
WHITESPACE_RE = re.compile(r"\s+")

ENTITIES: Dict[str, str] = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "#39": "'",
    "nbsp": " ",
}


class LineKind(enum.Enum):
    """What a single physical line of a caption document is.

    RULES:
    - BLANK is a truly empty line; only BLANK ends a caption block
    - PADDING is a line of whitespace only, as YouTube auto-captions put
      between a timing line and its text; it never changes the state
    """

    BLANK = "blank"
    PADDING = "padding"
    TIMING = "timing"
    SEQUENCE = "sequence"
    HEADER = "header"
    TEXT = "text"


class ParserState(enum.Enum):
    """Where the parser is inside the current caption block.

    RULES:
    - EXPECT_BLOCK_START: between blocks, waiting for a cue number or timing
    - EXPECT_TIMING: inside a block that has not reached its timing line;
      anything but a timing line or a blank is skipped here
    - COLLECT_TEXT: after the timing line; text lines are caption content
    """

    EXPECT_BLOCK_START = "expect_block_start"
    EXPECT_TIMING = "expect_timing"
    COLLECT_TEXT = "collect_text"


def classify_line(line: str) -> LineKind:
    """Classify one physical line, line terminator already removed."""
    if not line:
        return LineKind.BLANK
    line = line.strip()
    if not line:
        return LineKind.PADDING
    if TIMING_RE.match(line):
        return LineKind.TIMING
    if SEQUENCE_RE.match(line):
        return LineKind.SEQUENCE
    if HEADER_RE.match(line):
        return LineKind.HEADER
    return LineKind.TEXT


# =============================================================================
# State machine
# =============================================================================

_S = ParserState
_K = LineKind

# (state, line kind) -> (next state, emit line as content)
BLOCK_TRANSITIONS: Dict[Tuple[ParserState, LineKind], Tuple[ParserState, bool]] = {
    (_S.EXPECT_BLOCK_START, _K.BLANK): (_S.EXPECT_BLOCK_START, False),
    (_S.EXPECT_BLOCK_START, _K.TIMING): (_S.COLLECT_TEXT, False),
    (_S.EXPECT_BLOCK_START, _K.SEQUENCE): (_S.EXPECT_TIMING, False),
    (_S.EXPECT_BLOCK_START, _K.HEADER): (_S.EXPECT_TIMING, False),
    # WebVTT cue identifiers are free text; a malformed block lands here too
    (_S.EXPECT_BLOCK_START, _K.TEXT): (_S.EXPECT_TIMING, False),
    (_S.EXPECT_TIMING, _K.BLANK): (_S.EXPECT_BLOCK_START, False),
    (_S.EXPECT_TIMING, _K.TIMING): (_S.COLLECT_TEXT, False),
    (_S.EXPECT_TIMING, _K.SEQUENCE): (_S.EXPECT_TIMING, False),
    (_S.EXPECT_TIMING, _K.HEADER): (_S.EXPECT_TIMING, False),
    (_S.EXPECT_TIMING, _K.TEXT): (_S.EXPECT_TIMING, False),
    (_S.COLLECT_TEXT, _K.BLANK): (_S.EXPECT_BLOCK_START, False),
    # Back-to-back cues without a separating blank line
    (_S.COLLECT_TEXT, _K.TIMING): (_S.COLLECT_TEXT, False),
    (_S.COLLECT_TEXT, _K.SEQUENCE): (_S.COLLECT_TEXT, False),
    (_S.COLLECT_TEXT, _K.HEADER): (_S.COLLECT_TEXT, False),
    (_S.COLLECT_TEXT, _K.TEXT): (_S.COLLECT_TEXT, True),
}
for _state in ParserState:
    BLOCK_TRANSITIONS[(_state, _K.PADDING)] = (_state, False)

# Plain transcripts have no blocks: blank lines are paragraph breaks.
PLAIN_TRANSITIONS = dict(BLOCK_TRANSITIONS)
PLAIN_TRANSITIONS[(_S.COLLECT_TEXT, _K.BLANK)] = (_S.COLLECT_TEXT, False)


# =============================================================================
# Public API
# =============================================================================

def _strip_markup_once(text: str) -> str:
    text = ENTITY_RE.sub(lambda m: ENTITIES[m.group(1)], text)
    text = TAG_RE.sub("", text)
    text = ASIDE_RE.sub("", text)
    return WHITESPACE_RE.sub(" ", text).strip()


def clean_markup(line: str) -> str:
    """Strip markup from caption text until none is left.

    Decodes the standard entities, removes tags, removes [bracketed] and
    (parenthetical) asides, and collapses whitespace. The round repeats
    until the text stops changing, so "&amp;gt;" ends up as ">" and a
    tag uncovered by removing another tag is removed too. Every round
    that changes the text shortens it, so the loop terminates.
    """
    text = _strip_markup_once(line)
    while True:
        again = _strip_markup_once(text)
        if again == text:
            return text
        text = again


def parse_captions(raw: str) -> List[str]:
    """Parse a raw caption document into ordered content lines.

    WHY: This is the first pipeline stage. Downstream stages flatten the
    lines into one word stream, so the parser's only job is to decide
    which lines are spoken text and to clean them.

    HOW: Splits into physical lines, classifies each, and walks the
    transition table. Block mode is chosen when any line is a timing
    range; otherwise the plain-transcript table is used starting in
    COLLECT_TEXT.

    Args:
        raw: SRT/WebVTT document text, or a plain transcript.

    Returns:
        Non-empty cleaned content lines in document order.
    """
    if not raw or not raw.strip():
        return []

    lines = raw.lstrip("\ufeff").splitlines()
    kinds = [classify_line(line) for line in lines]

    if LineKind.TIMING in kinds:
        table = BLOCK_TRANSITIONS
        state = ParserState.EXPECT_BLOCK_START
    else:
        table = PLAIN_TRANSITIONS
        state = ParserState.COLLECT_TEXT

    content: List[str] = []
    for line, kind in zip(lines, kinds):
        state, emit = table[(state, kind)]
        if not emit:
            continue
        cleaned = clean_markup(line)
        # "[Music] 42" must not turn into something a re-parse would skip
        if cleaned and classify_line(cleaned) is LineKind.TEXT:
            content.append(cleaned)

    logger.debug(
        "parse_captions: %d content lines from %d physical lines (%s mode)",
        len(content), len(lines),
        "block" if table is BLOCK_TRANSITIONS else "plain",
    )
    return content
