"""Adjacent duplicate collapser: drop immediately repeated tokens.

WHY: Window boundaries often leave a doubled word behind ("the The cat")
that neither the pattern nor the sentence stage removes, because a
single token is below the minimum pattern length.

RULES:
- A token is dropped if it equals the previous *retained* token,
  ignoring case
- The first token is always retained
"""

from __future__ import annotations

from typing import List, Sequence


def remove_adjacent_duplicates(tokens: Sequence[str]) -> List[str]:
    result: List[str] = []
    for token in tokens:
        if result and token.lower() == result[-1].lower():
            continue
        result.append(token)
    return result
