"""Unit tests for regex and whitespace helpers."""

import re

from tasknotes_nlp.locales import get_language_config
from tasknotes_nlp.utils.text import (
    BoundaryConfig,
    cleanup_whitespace,
    escape_and_join,
    find_bounded,
    remove_span,
)


class TestBoundaryConfig:
    """Tests for keyword boundary selection."""

    def test_word_boundaries(self, english):
        """Test standard languages use \\b."""
        boundaries = BoundaryConfig.for_language(english)

        assert not boundaries.flexible
        assert re.search(boundaries.wrap("low"), "a low bar")
        assert not re.search(boundaries.wrap("low"), "lowest")

    def test_flexible_boundaries(self):
        """Test flexible languages match between whitespace only."""
        boundaries = BoundaryConfig.for_language(get_language_config("fr"))

        assert boundaries.flexible
        assert re.search(boundaries.wrap("échéance"), "rapport échéance demain")
        assert not re.search(boundaries.wrap("le"), "table")


class TestEscapeAndJoin:
    """Tests for alternation building."""

    def test_longest_first(self):
        """Test longer words are tried before their prefixes."""
        pattern = escape_and_join(["in", "in progress", "done"])
        assert re.match(f"(?:{pattern})", "in progress").group(0) == "in progress"

    def test_escapes_and_dedupes(self):
        """Test special characters are escaped and duplicates dropped."""
        assert escape_and_join(["a.m.", "a.m.", ""]) == re.escape("a.m.")

    def test_empty(self):
        """Test an empty word list gives an empty pattern."""
        assert escape_and_join([]) == ""


class TestWhitespaceHelpers:
    """Tests for whitespace cleanup and span removal."""

    def test_cleanup_whitespace(self):
        """Test runs collapse and ends are trimmed."""
        assert cleanup_whitespace("  a \t b\n c  ") == "a b c"

    def test_remove_span(self):
        """Test removing a span leaves single spaces."""
        text = "Buy milk urgent today"
        assert remove_span(text, 9, 15) == "Buy milk today"


class TestFindBounded:
    """Tests for whitespace-bounded literal search."""

    def test_finds_bounded_literal(self):
        """Test labels with punctuation are found."""
        assert find_bounded("Email *waiting-on now", "*waiting-on") == (6, 17)

    def test_is_case_insensitive(self):
        """Test case is ignored."""
        assert find_bounded("Ship it TOP PRIORITY", "top priority") == (8, 20)

    def test_rejects_prefix_match(self):
        """Test a literal that is part of a longer token is skipped."""
        assert find_bounded("p1-urgent", "p1") is None

    def test_finds_later_bounded_occurrence(self):
        """Test an unbounded first occurrence does not hide a later one."""
        assert find_bounded("p1-urgent p1", "p1") == (10, 12)

    def test_blank_needle(self):
        """Test blank needles never match."""
        assert find_bounded("anything", "  ") is None
