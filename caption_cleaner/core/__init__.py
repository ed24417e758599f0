"""Core parsing, deduplication, and result modules.

WHY: The core package is the algorithmic heart of the cleaner — the
caption parser, the three dedup stages, the similarity scorer they share,
and the result dataclasses that every formatter consumes.

HOW: parser.py turns caption markup into content lines, patterns.py,
sentences.py and adjacent.py are the dedup stages, similarity.py scores
positional overlap, pipeline.py composes them, ir.py defines the result.

RULES:
- Every function here is pure — no I/O, no module-level mutable state
- Stages only remove words or sentences; they never reorder or add words
- The result dataclasses are the contract — change with care
"""
