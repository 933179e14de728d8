"""
Unit Tests for Input Sanitization

Tests for word normalization and sanitization utilities.
"""

from utils.sanitize import clean_query, normalize_word, safe_file_stem, sanitize_string


class TestStringSanitization:
    """Tests for general string sanitization."""

    def test_strips_whitespace(self):
        assert sanitize_string("  hello  ") == "hello"

    def test_limits_length(self):
        assert len(sanitize_string("a" * 2000, max_length=100)) == 100

    def test_no_limit(self):
        assert len(sanitize_string("a" * 2000, max_length=None)) == 2000

    def test_strips_html_by_default(self):
        assert sanitize_string("<b>bold</b>") == "bold"

    def test_allows_html_when_specified(self):
        assert sanitize_string("<b>bold</b>", allow_html=True) == "<b>bold</b>"

    def test_handles_none(self):
        assert sanitize_string(None) == ""

    def test_handles_empty(self):
        assert sanitize_string("") == ""


class TestQueryCleaning:
    """Tests for search query cleaning and store keys."""

    def test_keeps_case(self):
        assert clean_query("  Serendipity ") == "Serendipity"

    def test_collapses_inner_whitespace(self):
        assert clean_query("ice   \t cream") == "ice cream"

    def test_removes_unsafe_characters(self):
        assert clean_query('ca"t\\') == "cat"

    def test_keeps_apostrophes_and_hyphens(self):
        assert clean_query("o'clock") == "o'clock"
        assert clean_query("well-being") == "well-being"

    def test_whitespace_only_is_empty(self):
        assert clean_query("   \n ") == ""
        assert clean_query(None) == ""

    def test_long_query_is_not_truncated(self):
        assert len(clean_query("x" * 500)) == 500

    def test_long_queries_keep_distinct_keys(self):
        prefix = "a" * 100
        assert normalize_word(prefix + " first") != normalize_word(prefix + " second")

    def test_normalize_lowercases(self):
        assert normalize_word("  SERENDIPITY ") == "serendipity"

    def test_normalize_is_idempotent(self):
        once = normalize_word(" Ice  Cream ")
        assert normalize_word(once) == once


class TestFileStem:
    """Tests for storage file name stems."""

    def test_simple_word(self):
        assert safe_file_stem("Serendipity") == "serendipity"

    def test_phrase_and_punctuation(self):
        assert safe_file_stem("ice cream!") == "ice_cream"

    def test_path_separators_removed(self):
        assert "/" not in safe_file_stem("../../etc/passwd")

    def test_nothing_usable_falls_back(self):
        assert safe_file_stem("???") == "audio"
