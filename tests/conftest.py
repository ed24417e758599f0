"""Shared test fixtures for the caption_cleaner test suite.

WHY: Several test modules need the same caption documents: a rolling
auto-caption WebVTT track, a classic SRT file, and the plain-text
repetition cases. Centralizing them keeps every module on the same
inputs and expected outputs.

HOW: Module-level constants hold the documents; fixtures hand them out
and write them to tmp_path for the file-based tests (CLI, API).

RULES:
- ROLLING_VTT reproduces YouTube auto-caption structure: header lines,
  cue settings on timing lines, karaoke timestamp tags, and each cue
  repeating the previous cue's text
- YOUTUBE_AUTO_VTT keeps the whitespace-only line YouTube puts between
  a timing line and its text
- Expected cleaned texts are written out literally, never recomputed
"""

from typing import Dict

import pytest

ROLLING_VTT = """WEBVTT
Kind: captions
Language: en

00:00:00.000 --> 00:00:02.000 align:start position:0%
stocks rallied on strong earnings

00:00:02.000 --> 00:00:04.000 align:start position:0%
stocks rallied on strong earnings
<00:00:02.500><c> investors</c><00:00:03.000><c> cheered</c><00:00:03.500><c> the</c><00:00:03.800><c> news</c>

00:00:04.000 --> 00:00:06.000 align:start position:0%
investors cheered the news
"""

ROLLING_VTT_CLEAN = "stocks rallied on strong earnings investors cheered the news"

SAMPLE_SRT = """1
00:00:01,000 --> 00:00:03,000
Hello &amp; welcome to the show.

2
00:00:03,000 --> 00:00:05,000
[Music] Today we talk about markets.
"""

SAMPLE_SRT_LINES = ["Hello & welcome to the show.", "Today we talk about markets."]

TRIPLE_REPEAT = (
    "the market is up today. the market is up today. "
    "the market is up today. volatility remains high."
)
TRIPLE_REPEAT_CLEAN = "the market is up today. volatility remains high."

CLEAN_PLAIN = "Markets opened higher this morning. Analysts expect more gains ahead."

YOUTUBE_AUTO_VTT = (
    "WEBVTT\n"
    "Kind: captions\n"
    "Language: en\n"
    "\n"
    "00:00:00.030 --> 00:00:02.070 align:start position:0%\n"
    " \n"
    "welcome<00:00:00.390><c> to</c><00:00:00.750><c> the</c><00:00:01.110><c> show</c>\n"
    "\n"
    "00:00:02.070 --> 00:00:02.080 align:start position:0%\n"
    "welcome to the show\n"
    " \n"
    "\n"
    "00:00:02.080 --> 00:00:04.500 align:start position:0%\n"
    "welcome to the show\n"
    "today<00:00:02.600><c> we</c><00:00:02.900><c> talk</c><00:00:03.200><c> markets</c>\n"
)

SPLIT_ASIDE_SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:02,000\n"
    "the market rallied (according\n"
    "\n"
    "2\n"
    "00:00:02,000 --> 00:00:03,000\n"
    "to analysts) on strong earnings\n"
)

DOUBLE_ESCAPED = "profits &amp;gt; losses for the quarter"

MIXED_TERMINATORS = (
    "Did stocks rise today? Did stocks rise today? ok! "
    "Bonds fell sharply overnight."
)


@pytest.fixture
def rolling_vtt() -> str:
    return ROLLING_VTT


@pytest.fixture
def sample_srt() -> str:
    return SAMPLE_SRT


@pytest.fixture
def sample_documents() -> Dict[str, str]:
    """Every sample document, keyed by a short name."""
    return {
        "rolling_vtt": ROLLING_VTT,
        "sample_srt": SAMPLE_SRT,
        "triple_repeat": TRIPLE_REPEAT,
        "clean_plain": CLEAN_PLAIN,
        "stutter": "alpha beta beta alpha beta",
        "near_duplicate": (
            "revenue grew sharply this quarter. revenue grew sharply last quarter."
        ),
        "fragments": "the market is up today. ok yes. volatility remains high.",
        "youtube_auto": YOUTUBE_AUTO_VTT,
        "split_aside": SPLIT_ASIDE_SRT,
        "double_escaped": DOUBLE_ESCAPED,
        "mixed_terminators": MIXED_TERMINATORS,
        "empty": "",
    }


@pytest.fixture
def vtt_file(tmp_path):
    """ROLLING_VTT written to tmp_path/K3qMpcjLZGg.vtt."""
    path = tmp_path / "K3qMpcjLZGg.vtt"
    path.write_text(ROLLING_VTT, encoding="utf-8")
    return path


@pytest.fixture
def srt_file(tmp_path):
    """SAMPLE_SRT written to tmp_path/show.srt."""
    path = tmp_path / "show.srt"
    path.write_text(SAMPLE_SRT, encoding="utf-8")
    return path
