"""Positional word-overlap scoring shared by the dedup stages.

WHY: Sliding-window artifacts repeat text almost verbatim, with at most a
word or two changed at the same position. A same-index comparison catches
exactly that and is far cheaper than edit distance or set overlap.

HOW: Counts positions where both sequences hold the same token and
normalizes by the longer length, so a length mismatch also lowers the
score.

RULES:
- Comparison is exact (callers lowercase first when they want that)
- Two empty sequences score 1.0; one empty sequence scores 0.0
- The result is always in [0, 1]
"""

from __future__ import annotations

from typing import Sequence


def positional_overlap(a: Sequence[str], b: Sequence[str]) -> float:
    """Return matches / max(len(a), len(b)) for same-index token matches."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    matches = sum(1 for x, y in zip(a, b) if x == y)
    return matches / longest
