"""Pattern repeat eliminator: collapse runs of a repeated word group.

WHY: A captioning engine that re-emits overlapping windows produces the
same 2-20 word group several times back to back ("the market is up
today. the market is up today. the market is up today."). Collapsing
each run to one copy removes the bulk of the artifact before any
sentence-level reasoning happens.

HOW: One forward pass with a cursor. At each cursor every window length
from the longest that still fits twice down to the minimum is tried,
longest first. For a window, consecutive equal-sized blocks after it are
compared with positional_overlap(); every block reaching the threshold
extends the run. The first window with at least one repeat wins: it is
emitted once and the cursor jumps past the whole run. Otherwise a single
token is emitted and the cursor advances by one.

RULES:
- Longest matching window wins at a given cursor (greedy, deterministic)
- Only the first copy of a run is emitted; repeats are never merged
- Streams shorter than 4 tokens are returned unchanged
- Token comparison is exact and case-sensitive
- The scan is inherently sequential: each cursor jump depends on the
  previous decision
"""

from __future__ import annotations

from typing import List, Sequence

from caption_cleaner.config import (
    MAX_PATTERN_WINDOW,
    MIN_PATTERN_WINDOW,
    PATTERN_MATCH_THRESHOLD,
)
from caption_cleaner.core.similarity import positional_overlap

MIN_PATTERN_STREAM = 4


def _run_end(
    tokens: Sequence[str],
    start: int,
    window: int,
    threshold: float,
) -> int:
    """Return the index just past the run of repeats of tokens[start:start+window].

    The returned index equals start + window when the pattern does not repeat.
    """
    pattern = tokens[start:start + window]
    check = start + window
    while check + window <= len(tokens):
        block = tokens[check:check + window]
        if positional_overlap(pattern, block) < threshold:
            break
        check += window
    return check


def remove_pattern_repeats(
    tokens: Sequence[str],
    *,
    threshold: float = PATTERN_MATCH_THRESHOLD,
    max_window: int = MAX_PATTERN_WINDOW,
    min_window: int = MIN_PATTERN_WINDOW,
) -> List[str]:
    """Collapse contiguous repeated word patterns to a single occurrence.

    Args:
        tokens: Flat word stream.
        threshold: Positional overlap a block needs to count as a repeat.
        max_window: Longest pattern length tried.
        min_window: Shortest pattern length tried.

    Returns:
        New token list; its length never exceeds len(tokens).
    """
    if len(tokens) < MIN_PATTERN_STREAM:
        return list(tokens)

    result: List[str] = []
    i = 0
    n = len(tokens)
    while i < n:
        longest = min(max_window, (n - i) // 2)
        for window in range(longest, min_window - 1, -1):
            end = _run_end(tokens, i, window, threshold)
            if end > i + window:
                result.extend(tokens[i:i + window])
                i = end
                break
        else:
            result.append(tokens[i])
            i += 1
    return result


def collapse_text_patterns(text: str, **kwargs) -> str:
    """String-in, string-out wrapper around remove_pattern_repeats()."""
    return " ".join(remove_pattern_repeats(text.split(), **kwargs))
