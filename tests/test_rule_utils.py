"""Unit tests for length normalization and kind lookups."""

from linelint.rules.rule_utils import (
    line_has_kinds,
    normalized_length,
    strip_literals,
    strip_urls,
)
from linelint.syntax_kinds import COMMENT_KINDS, SyntaxKind


class TestStripLiterals:
    """Test collapsing of #colorLiteral / #imageLiteral spans."""

    def test_single_literal(self):
        text = 'let c = #colorLiteral(red: 1, green: 0, blue: 0, alpha: 1)'
        assert strip_literals(text, "#colorLiteral") == "let c = #"

    def test_repeated_literals(self):
        text = '#imageLiteral(resourceName: "a.jpg")' * 3
        assert strip_literals(text, "#imageLiteral") == "###"

    def test_other_delimiter_untouched(self):
        text = '#imageLiteral(resourceName: "a.jpg")'
        assert strip_literals(text, "#colorLiteral") == text

    def test_missing_close_paren_stops(self):
        text = 'x = #colorLiteral(red: 1, green: 0'
        assert strip_literals(text, "#colorLiteral") == text

    def test_stops_after_processed_prefix(self):
        text = '#colorLiteral(red: 1) #colorLiteral(red: 0'
        assert strip_literals(text, "#colorLiteral") == '# #colorLiteral(red: 0'

    def test_nested_parens_end_at_first_close(self):
        text = '#colorLiteral(red: (1), green: 0)'
        assert strip_literals(text, "#colorLiteral") == '#, green: 0)'

    def test_idempotent(self):
        text = 'a #colorLiteral(red: 1) b #colorLiteral(red: 2) c'
        once = strip_literals(text, "#colorLiteral")
        assert strip_literals(once, "#colorLiteral") == once


class TestStripUrls:
    """Test URL removal."""

    def test_removes_https_url(self):
        text = "// see https://example.com/docs/page?id=1 for details"
        assert strip_urls(text) == "// see  for details"

    def test_removes_www_url(self):
        assert strip_urls("go www.example.com/path now") == "go  now"

    def test_plain_text_unchanged(self):
        text = "let value = compute(a, b)"
        assert strip_urls(text) == text


class TestNormalizedLength:
    """Test the length used for threshold comparison."""

    def test_counts_characters_not_bytes(self):
        assert normalized_length("héllo wörld 😀") == 13

    def test_literals_always_collapsed(self):
        text = '#imageLiteral(resourceName: "image.jpg")' * 4
        assert normalized_length(text) == 4

    def test_urls_only_stripped_when_enabled(self):
        text = "x https://example.com/a/b"
        assert normalized_length(text) == len(text)
        assert normalized_length(text, ignores_urls=True) == 2


class TestLineHasKinds:
    """Test classification lookups."""

    def test_mapping_intersection(self):
        kinds = {3: {SyntaxKind.COMMENT}}
        assert line_has_kinds(3, COMMENT_KINDS, kinds)
        assert not line_has_kinds(2, COMMENT_KINDS, kinds)

    def test_sequence_out_of_range(self):
        kinds = [[], [SyntaxKind.COMMENT]]
        assert line_has_kinds(1, COMMENT_KINDS, kinds)
        assert not line_has_kinds(5, COMMENT_KINDS, kinds)

    def test_empty_classification(self):
        assert not line_has_kinds(1, COMMENT_KINDS, {})
