"""Unit tests for the pattern repeat eliminator.

WHY: This stage removes most of the sliding-window artifact. A wrong
window choice either leaves repeats behind or, worse, drops speech that
only looked like a repeat.

HOW: Tests feed literal word streams and compare against literal
expected streams: exact runs, fuzzy runs on both sides of the 0.85
threshold, the longest-first tie-break, and the short-stream bypass.
"""

from caption_cleaner.core.patterns import collapse_text_patterns, remove_pattern_repeats

from conftest import TRIPLE_REPEAT, TRIPLE_REPEAT_CLEAN


def _words(text):
    return text.split()


class TestExactRuns:

    def test_triple_repeat_collapses_to_one_copy(self):
        assert remove_pattern_repeats(_words(TRIPLE_REPEAT)) == _words(TRIPLE_REPEAT_CLEAN)

    def test_run_of_short_pattern(self):
        assert remove_pattern_repeats(_words("x y x y x y z")) == ["x", "y", "z"]

    def test_no_repeats_unchanged(self):
        words = _words("a b c d e f")
        assert remove_pattern_repeats(words) == words

    def test_longest_pattern_wins(self):
        """At one cursor a 4-word and a 2-word pattern both repeat; 4 wins."""
        assert remove_pattern_repeats(_words("a b a b a b a b")) == ["a", "b", "a", "b"]

    def test_comparison_is_case_sensitive(self):
        words = _words("Hello world hello world")
        assert remove_pattern_repeats(words) == words


class TestFuzzyRuns:

    def test_block_above_threshold_counts_as_repeat(self):
        # 6 of 7 positions match: 0.857 >= 0.85
        words = _words("one two three four five six seven one two three four five six eight")
        assert remove_pattern_repeats(words) == _words("one two three four five six seven")

    def test_block_below_threshold_is_kept(self):
        # 4 of 5 positions match: 0.8 < 0.85
        words = _words("alpha beta gamma delta epsilon alpha beta gamma delta zeta")
        assert remove_pattern_repeats(words) == words

    def test_custom_threshold(self):
        words = _words("alpha beta gamma delta epsilon alpha beta gamma delta zeta")
        assert remove_pattern_repeats(words, threshold=0.8) == words[:5]


class TestBypassAndBounds:

    def test_short_stream_unchanged(self):
        assert remove_pattern_repeats(["a", "a", "a"]) == ["a", "a", "a"]

    def test_empty_stream(self):
        assert remove_pattern_repeats([]) == []

    def test_min_window_limits_candidates(self):
        words = _words("a b a b c")
        assert remove_pattern_repeats(words, min_window=3) == words

    def test_max_window_limits_candidates(self):
        words = _words("one two three one two three")
        assert remove_pattern_repeats(words, max_window=2) == words

    def test_output_is_a_prefix_preserving_subsequence(self):
        words = _words(TRIPLE_REPEAT)
        result = remove_pattern_repeats(words)
        it = iter(words)
        assert all(token in it for token in result)
        assert len(result) <= len(words)


class TestCollapseTextPatterns:

    def test_string_wrapper(self):
        assert collapse_text_patterns("go home go home now") == "go home now"

    def test_wrapper_passes_options(self):
        assert collapse_text_patterns("go home go home now", min_window=3) == "go home go home now"
