"""Tests for the change-marker grammar."""

import pytest

from seo_docgen.markers import (
    AdjustedMarker,
    KeywordMarker,
    NewMarker,
    find_leaked_markers,
    has_change_markers,
    parse_marker,
    remove_new_sentinels,
    strip_change_markers,
    summarize_changes,
    tokenize,
)


class TestParseMarker:
    """Tests for parse_marker."""

    def test_keyword(self):
        """Test keyword content is trimmed."""
        assert parse_marker("KEYWORD", "  liability cover ") == KeywordMarker(term="liability cover")

    def test_adjusted_with_arrow(self):
        """Test ADJUSTED splits on the arrow and keeps the new half for display."""
        marker = parse_marker("ADJUSTED", "teachers and educators → educators and teachers")

        assert marker == AdjustedMarker(
            old_text="teachers and educators",
            new_text="educators and teachers",
        )
        assert marker.display_text == "educators and teachers"
        assert marker.has_arrow

    @pytest.mark.parametrize("arrow", ["->", "-->", "=>", "==>"])
    def test_adjusted_ascii_arrows(self, arrow):
        """Test the ASCII arrow spellings are accepted."""
        marker = parse_marker("ADJUSTED", f"old phrase {arrow} new phrase")

        assert marker.old_text == "old phrase"
        assert marker.new_text == "new phrase"

    def test_adjusted_without_arrow_highlights_everything(self):
        """Test ADJUSTED without an arrow keeps the whole content."""
        marker = parse_marker("ADJUSTED", "trusted local experts")

        assert marker.old_text == ""
        assert marker.display_text == "trusted local experts"
        assert not marker.has_arrow

    def test_adjusted_splits_on_first_arrow_only(self):
        """Test a second arrow stays part of the new text."""
        marker = parse_marker("ADJUSTED", "a → b → c")

        assert marker.old_text == "a"
        assert marker.new_text == "b → c"

    def test_new_label(self):
        """Test NEW markers carry their label."""
        marker = parse_marker("new", " FAQ SECTION")

        assert marker == NewMarker(label="FAQ SECTION")
        assert marker.is_faq_section
        assert marker.display_text == ""
        assert not marker.highlighted


class TestTokenize:
    """Tests for tokenize."""

    def test_plain_text(self):
        """Test text without markers is one literal token."""
        assert tokenize("Nothing to see here.") == ["Nothing to see here."]

    def test_empty(self):
        """Test empty text gives no tokens."""
        assert tokenize("") == []

    def test_keyword_in_sentence(self):
        """Test literals around a marker are kept in order."""
        tokens = tokenize("with [[KEYWORD: liability cover]] today")

        assert tokens == ["with ", KeywordMarker(term="liability cover"), " today"]

    def test_case_insensitive_kind(self):
        """Test lowercase marker kinds are recognized."""
        tokens = tokenize("[[keyword: roofing]]")

        assert tokens == [KeywordMarker(term="roofing")]

    def test_adjacent_markers(self):
        """Test two markers with nothing between them."""
        tokens = tokenize("[[KEYWORD: a]][[ADJUSTED: b → c]]")

        assert tokens == [KeywordMarker(term="a"), AdjustedMarker(old_text="b", new_text="c")]

    def test_unclosed_marker_is_literal(self):
        """Test an unclosed marker is left as text."""
        tokens = tokenize("Broken [[KEYWORD: roofing")

        assert tokens == ["Broken [[KEYWORD: roofing"]

    def test_nested_marker_inner_wins(self):
        """Test nested markers fall back to literal text around the inner one."""
        tokens = tokenize("[[KEYWORD: a [[KEYWORD: b]] c]]")

        assert KeywordMarker(term="b") in tokens
        assert tokens[0] == "[[KEYWORD: a "
        assert tokens[-1] == " c]]"


class TestStripAndRemove:
    """Tests for strip_change_markers and remove_new_sentinels."""

    def test_strip_keeps_display_text(self):
        """Test stripped text is what the document shows."""
        text = "Our [[ADJUSTED: old team → expert team]] offers [[KEYWORD: roof repairs]].[[NEW]]"

        assert strip_change_markers(text) == "Our expert team offers roof repairs."

    def test_strip_removes_emphasis(self):
        """Test emphasis delimiters are removed inside and outside markers."""
        assert strip_change_markers("**Fast** [[KEYWORD: **cover**]]") == "Fast cover"

    def test_remove_new_sentinels_only(self):
        """Test only NEW sentinels are removed."""
        text = "[[NEW]]Fresh [[KEYWORD: kw]] line.[[NEW FAQ SECTION]]"

        assert remove_new_sentinels(text) == "Fresh [[KEYWORD: kw]] line."

    def test_has_change_markers(self):
        """Test marker detection."""
        assert has_change_markers("a [[NEW]] b")
        assert not has_change_markers("a [[broken b")
        assert not has_change_markers("")


class TestSummarizeChanges:
    """Tests for summarize_changes."""

    def test_counts_each_kind(self):
        """Test per-kind counts and the FAQ flag."""
        summary = summarize_changes(
            "[[KEYWORD: a]] [[KEYWORD: b]] [[ADJUSTED: c → d]] [[NEW]] [[NEW FAQ SECTION]]"
        )

        assert summary.keyword_insertions == 2
        assert summary.phrase_adjustments == 1
        assert summary.new_sentences == 1
        assert summary.faq_section_added
        assert summary.total == 4

    def test_describe(self):
        """Test the one-line description."""
        summary = summarize_changes("[[KEYWORD: a]] [[ADJUSTED: b → c]] [[NEW]] [[NEW FAQ SECTION]]")

        assert summary.describe() == (
            "Changes: 1 keyword insertion, 1 phrase adjustment, 1 new sentence, FAQ section added."
        )

    def test_describe_no_changes(self):
        """Test the description for unmarked text."""
        assert summarize_changes("Plain.").describe() == "No changes made to original content."


class TestFindLeakedMarkers:
    """Tests for find_leaked_markers."""

    def test_clean_text(self):
        """Test clean text has no leaks."""
        assert find_leaked_markers("All clean here.") == []

    def test_finds_brackets_and_tags(self):
        """Test leftover brackets and structural tags are reported."""
        leaks = find_leaked_markers("Broken [[KEYWORD: x and [H2] tag")

        assert "[[" in leaks
        assert "[H2]" in leaks
