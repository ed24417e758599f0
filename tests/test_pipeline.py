"""Tests for the deduplication pipeline.

WHY: The pipeline is the contract every caller relies on. The stage
tests check each eliminator alone; these check the composition: stage
order, the repeat-until-stable loop, the stats record, and the batch
helper.

HOW: Real sample documents from conftest go through clean_transcript()
and the results are compared against literal expected text and counts.

RULES:
- Cleaning is idempotent: cleaning cleaned text changes nothing
- Cleaning never grows the word count
"""

import logging

import pytest

from caption_cleaner.config import DedupConfig
from caption_cleaner.core.ir import CleanedTranscript, TranscriptStats
from caption_cleaner.core.pipeline import clean_many, clean_transcript, deduplicate_lines

from conftest import (
    CLEAN_PLAIN,
    DOUBLE_ESCAPED,
    MIXED_TERMINATORS,
    ROLLING_VTT,
    ROLLING_VTT_CLEAN,
    SAMPLE_SRT_LINES,
    SPLIT_ASIDE_SRT,
    TRIPLE_REPEAT,
    TRIPLE_REPEAT_CLEAN,
    YOUTUBE_AUTO_VTT,
)


class TestCleanTranscript:

    def test_triple_repeat(self):
        assert clean_transcript(TRIPLE_REPEAT).text == TRIPLE_REPEAT_CLEAN

    def test_rolling_vtt_text_and_stats(self):
        result = clean_transcript(ROLLING_VTT, source_name="K3qMpcjLZGg")

        assert result.text == ROLLING_VTT_CLEAN
        assert result.source_name == "K3qMpcjLZGg"
        assert result.stats == TranscriptStats(
            original_line_count=4,
            original_word_count=18,
            cleaned_word_count=9,
            cleaned_char_length=60,
        )
        assert result.stats.removed_word_count == 9

    def test_srt_document(self, sample_srt):
        assert clean_transcript(sample_srt).text == " ".join(SAMPLE_SRT_LINES)

    def test_repeat_exposed_by_later_stage_is_removed(self):
        # Pass 1 leaves "alpha beta alpha beta"; pass 2 collapses it
        assert clean_transcript("alpha beta beta alpha beta").text == "alpha beta"

    def test_clean_text_passes_through(self):
        assert clean_transcript(CLEAN_PLAIN).text == CLEAN_PLAIN

    def test_near_duplicate_sentence(self):
        text = "revenue grew sharply this quarter. revenue grew sharply last quarter."
        assert clean_transcript(text).text == "revenue grew sharply this quarter."

    def test_config_changes_sentence_threshold(self):
        text = "revenue grew sharply this quarter. revenue grew sharply last quarter."
        result = clean_transcript(text, DedupConfig(sentence_threshold=0.9))
        assert result.text == text

    @pytest.mark.parametrize("raw", ["", "   \n\t", "WEBVTT\n\n"])
    def test_empty_input(self, raw):
        result = clean_transcript(raw)
        assert result == CleanedTranscript(
            text="",
            stats=TranscriptStats(
                original_line_count=0,
                original_word_count=0,
                cleaned_word_count=0,
                cleaned_char_length=0,
            ),
        )

    def test_logs_stats_at_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="caption_cleaner"):
            clean_transcript(ROLLING_VTT, source_name="K3qMpcjLZGg")
        assert "cleaned K3qMpcjLZGg: original lines=4" in caplog.text


SPLIT_TAG_SRT = (
    "1\n00:00:01,000 --> 00:00:02,000\nhello <c\n\n"
    "2\n00:00:02,000 --> 00:00:03,000\nclass> world\n"
)

EDGE_DOCUMENTS = [
    SPLIT_ASIDE_SRT,
    SPLIT_TAG_SRT,
    DOUBLE_ESCAPED,
    "&amp;amp;amp;lt;3 hearts for the home team",
    MIXED_TERMINATORS,
    "Is it up? yes! Is it up? Rates rose again today! ok. Rates rose again today.",
    YOUTUBE_AUTO_VTT,
]


class TestPipelineProperties:

    def test_idempotent(self, sample_documents):
        for name, raw in sample_documents.items():
            once = clean_transcript(raw).text
            assert clean_transcript(once).text == once, name

    @pytest.mark.parametrize("raw", EDGE_DOCUMENTS)
    def test_idempotent_with_markup_and_punctuation(self, raw):
        once = clean_transcript(raw).text
        assert clean_transcript(once).text == once

    def test_never_grows(self, sample_documents):
        for name, raw in sample_documents.items():
            result = clean_transcript(raw)
            assert result.stats.cleaned_word_count <= result.stats.original_word_count, name
            assert len(result.text) <= len(raw), name

    @pytest.mark.parametrize("raw", EDGE_DOCUMENTS)
    def test_never_grows_in_characters(self, raw):
        assert len(clean_transcript(raw).text) <= len(raw)

    def test_single_spaced_output(self, sample_documents):
        for name, raw in sample_documents.items():
            text = clean_transcript(raw).text
            assert text == " ".join(text.split()), name


class TestMarkupAcrossLines:

    def test_aside_split_across_cues(self):
        result = clean_transcript(SPLIT_ASIDE_SRT)
        assert result.text == "the market rallied on strong earnings"
        assert result.stats.original_word_count == 9
        assert result.stats.cleaned_word_count == 6

    def test_tag_split_across_cues(self):
        assert clean_transcript(SPLIT_TAG_SRT).text == "hello world"

    def test_double_escaped_entity(self):
        assert clean_transcript(DOUBLE_ESCAPED).text == "profits > losses for the quarter"

    def test_youtube_auto_captions(self):
        result = clean_transcript(YOUTUBE_AUTO_VTT)
        assert result.text == "welcome to the show today we talk markets"
        assert result.stats.original_line_count == 4

    def test_terminators_normalized_after_drop(self):
        assert clean_transcript(MIXED_TERMINATORS).text == (
            "Did stocks rise today. Bonds fell sharply overnight."
        )


class TestDeduplicateLines:

    def test_lines_are_flattened(self):
        lines = ["stocks rallied on", "stocks rallied on", "strong earnings"]
        assert deduplicate_lines(lines) == "stocks rallied on strong earnings"

    def test_no_lines(self):
        assert deduplicate_lines([]) == ""


class TestCleanMany:

    def test_results_keep_input_order(self, sample_documents):
        results = clean_many(sample_documents, max_workers=2)

        assert list(results) == list(sample_documents)
        for name, result in results.items():
            assert result.source_name == name
            assert result == clean_transcript(sample_documents[name], source_name=name)

    def test_config_applies_to_every_document(self):
        docs = {
            "a": "revenue grew sharply this quarter. revenue grew sharply last quarter.",
            "b": TRIPLE_REPEAT,
        }
        results = clean_many(docs, DedupConfig(sentence_threshold=0.9))
        assert results["a"].text == docs["a"]
        assert results["b"].text == TRIPLE_REPEAT_CLEAN

    def test_empty_batch(self):
        assert clean_many({}) == {}
