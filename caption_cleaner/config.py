"""Configuration defaults, dedup tuning knobs, and .env loading.

WHY: The fuzzy-match thresholds and window sizes were chosen empirically
against real caption tracks, not derived. Keeping them as plain,
overridable data (not buried in the algorithms) lets them be re-tuned
against a caption corpus without touching the pipeline code.

HOW: python-dotenv loads the .env file on import. Defaults are module
constants; DedupConfig bundles them into one value object that every
pipeline stage receives explicitly. load_config() reads the environment
at call time and applies explicit overrides on top.

RULES:
- Thresholds are fractions in (0, 1]; a block or fingerprint whose
  positional overlap reaches the threshold counts as a repeat
- Pattern windows: 2 <= min_pattern_window <= max_pattern_window
- Content words are words of at least min_content_word_length characters
- Invalid settings raise ValueError, never silently clamp
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Dedup defaults
# ---------------------------------------------------------------------------

PATTERN_MATCH_THRESHOLD = 0.85
"""Minimum positional overlap for a word block to count as a pattern repeat."""

SENTENCE_OVERLAP_THRESHOLD = 0.8
"""Minimum fingerprint overlap for a sentence to count as a near-duplicate."""

MAX_PATTERN_WINDOW = 20
MIN_PATTERN_WINDOW = 2
MIN_CONTENT_WORD_LENGTH = 3
FINGERPRINT_WIDTH = 5

# ---------------------------------------------------------------------------
# I/O defaults
# ---------------------------------------------------------------------------

SUPPORTED_CAPTION_FORMATS: set[str] = {".vtt", ".srt", ".txt"}
"""Caption file extensions accepted for upload (lowercase, with dot)."""

DEFAULT_OUTPUT_DIR = os.getenv("CAPTION_OUTPUT_DIR", "subtitles")

_ENV_KEYS: Dict[str, str] = {
    "pattern_threshold": "CAPTION_PATTERN_THRESHOLD",
    "sentence_threshold": "CAPTION_SENTENCE_THRESHOLD",
    "max_pattern_window": "CAPTION_MAX_PATTERN_WINDOW",
    "min_pattern_window": "CAPTION_MIN_PATTERN_WINDOW",
    "min_content_word_length": "CAPTION_MIN_WORD_LENGTH",
    "fingerprint_width": "CAPTION_FINGERPRINT_WIDTH",
}


@dataclass(frozen=True)
class DedupConfig:
    """Tuning knobs shared by the dedup stages.

    Attributes:
        pattern_threshold: Block match ratio for the pattern eliminator.
        sentence_threshold: Fingerprint overlap for the sentence eliminator.
        max_pattern_window: Longest word pattern tried at each cursor.
        min_pattern_window: Shortest word pattern tried at each cursor.
        min_content_word_length: Minimum length of a fingerprint word.
        fingerprint_width: Number of leading content words in a fingerprint.
    """

    pattern_threshold: float = PATTERN_MATCH_THRESHOLD
    sentence_threshold: float = SENTENCE_OVERLAP_THRESHOLD
    max_pattern_window: int = MAX_PATTERN_WINDOW
    min_pattern_window: int = MIN_PATTERN_WINDOW
    min_content_word_length: int = MIN_CONTENT_WORD_LENGTH
    fingerprint_width: int = FINGERPRINT_WIDTH

    def validate(self) -> "DedupConfig":
        """Check value ranges and return self.

        Raises:
            ValueError: If any field is outside its allowed range.
        """
        for name in ("pattern_threshold", "sentence_threshold"):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise ValueError(
                    "{} must be in (0, 1], got {}".format(name, value)
                )
        if self.min_pattern_window < 2:
            raise ValueError(
                "min_pattern_window must be at least 2, got {}".format(
                    self.min_pattern_window
                )
            )
        if self.max_pattern_window < self.min_pattern_window:
            raise ValueError(
                "max_pattern_window ({}) is smaller than min_pattern_window ({})".format(
                    self.max_pattern_window, self.min_pattern_window
                )
            )
        if self.min_content_word_length < 1:
            raise ValueError("min_content_word_length must be at least 1")
        if self.fingerprint_width < 1:
            raise ValueError("fingerprint_width must be at least 1")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _read_env_overrides() -> Dict[str, Any]:
    """Collect DedupConfig fields set in the environment.

    Raises:
        ValueError: If a variable is set but not a number.
    """
    overrides: Dict[str, Any] = {}
    for field_name, env_key in _ENV_KEYS.items():
        raw = os.getenv(env_key, "").strip()
        if not raw:
            continue
        cast = float if field_name.endswith("threshold") else int
        try:
            overrides[field_name] = cast(raw)
        except ValueError:
            raise ValueError(
                "{} must be a number, got '{}'".format(env_key, raw)
            ) from None
    return overrides


def load_config(**overrides: Any) -> DedupConfig:
    """Build a validated DedupConfig from env defaults plus overrides.

    WHY: The CLI and the HTTP API both accept per-call overrides on top of
    whatever the deployment configured in .env.

    HOW: Starts from the dataclass defaults, applies CAPTION_* environment
    variables, then applies keyword overrides whose value is not None.

    RULES:
    - Unknown override names raise TypeError (dataclass replace semantics)
    - None values are ignored so optional CLI flags can be passed through
    - The result is always validated
    """
    values = _read_env_overrides()
    values.update({k: v for k, v in overrides.items() if v is not None})
    return replace(DedupConfig(), **values).validate()
