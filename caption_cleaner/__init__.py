"""Caption Cleaner — deduplication of auto-generated caption transcripts.

WHY: Auto-generated caption tracks repeat the same phrase or sentence many
times in a row because the captioning engine re-emits overlapping text
windows. Left in place, those sliding-window artifacts bloat the token
budget of any downstream summarizer and confuse it.

HOW: Linear pipeline — parse (caption markup to content lines), collapse
repeated word patterns, drop near-duplicate sentences, collapse adjacent
duplicate tokens. Output goes through pluggable formatters to an explicit
sink. Each stage is independently testable.

RULES:
- Every stage only removes words, never reorders or inserts them
- Each document is processed statelessly; identical input, identical output
- The CleanedTranscript is the stable contract between core and formatters
"""

__version__ = "0.1.0"
