"""Tests for front matter fence scanning."""

import pytest

from titleblock.core.document_processor.front_matter import (
    NO_MATCH,
    TOKEN_TYPE,
    FenceMatch,
    FenceScanner,
)


def scan_text(make_state, text, scanner=None, end_line=None):
    state = make_state(text)
    scanner = scanner or FenceScanner()
    return scanner.scan(state, 0, state.lineMax if end_line is None else end_line)


class TestOpeningFence:
    """Tests for recognising the opening fence."""

    def test_basic_block(self, make_state):
        """Test the canonical title-only document."""
        match = scan_text(make_state, "---\ntitle: Foo\n---\n\nBody")

        assert isinstance(match, FenceMatch)
        assert match.closed is True
        assert match.token.map == [0, 2]
        assert match.token.content == "title: Foo\n"
        assert match.token.markup == "---\ntitle: Foo\n---"
        assert match.next_line == 3

    def test_token_is_hidden_block(self, make_state):
        """Test the emitted token is a hidden block-level metadata carrier."""
        token = scan_text(make_state, "---\na: 1\n---").token

        assert token.type == TOKEN_TYPE
        assert token.hidden is True
        assert token.block is True
        assert token.nesting == 0

    @pytest.mark.parametrize("text", ["--\na: 1\n--", "-\na: 1\n-", "-- -\na: 1\n---"])
    def test_short_opening_run_is_no_match(self, make_state, text):
        """Test fewer than three markers at line 0 never opens a block."""
        assert scan_text(make_state, text) is NO_MATCH

    def test_block_only_starts_at_line_zero(self, make_state):
        """Test a fence below the first line is not front matter."""
        state = make_state("Intro\n---\na: 1\n---\n")
        scanner = FenceScanner()

        assert scanner.scan(state, 1, state.lineMax) is NO_MATCH
        assert scanner.validate(state, 1) is False

    def test_first_character_must_be_marker(self, make_state):
        """Test an indented opening fence is rejected."""
        assert scan_text(make_state, " ---\na: 1\n---") is NO_MATCH

    def test_empty_source(self, make_state):
        """Test scanning an empty document."""
        assert scan_text(make_state, "") is NO_MATCH

    def test_validate_does_not_scan_body(self, make_state):
        """Test silent validation only looks at the opening fence."""
        scanner = FenceScanner()

        assert scanner.validate(make_state("---\nno closing fence"), 0) is True
        assert scanner.validate(make_state("--\na: 1\n---"), 0) is False

    def test_no_match_is_falsy(self):
        """Test NO_MATCH can be used in boolean context."""
        assert not NO_MATCH
        assert repr(NO_MATCH) == "NO_MATCH"


class TestClosingFence:
    """Tests for the closing fence rules."""

    def test_indented_closing_line_is_content(self, make_state):
        """Test a candidate indented four columns is skipped."""
        match = scan_text(make_state, "---\na: 1\n    ---\nb: 2\n---\n")

        assert match.token.map == [0, 4]
        assert match.token.content == "a: 1\n    ---\nb: 2\n"

    def test_indent_is_relative_to_block_indent(self, make_state):
        """Test indentation is measured against the enclosing block indent."""
        state = make_state("---\n  a: 1\n      ---\n     ---\n")
        state.blkIndent = 2

        match = FenceScanner().scan(state, 0, state.lineMax)

        assert match.closed is True
        assert match.end_line == 3

    def test_short_closing_run_is_content(self, make_state):
        """Test a closing run shorter than the opening run is skipped."""
        match = scan_text(make_state, "----\na: 1\n---\nb: 2\n----")

        assert match.token.map == [0, 4]
        assert match.token.content == "a: 1\n---\nb: 2\n"

    def test_longer_closing_run_closes(self, make_state):
        """Test a closing run longer than the opening run is accepted."""
        match = scan_text(make_state, "---\na: 1\n------\nBody")

        assert match.closed is True
        assert match.end_line == 2

    def test_trailing_text_rejects_closing_line(self, make_state):
        """Test only whitespace may follow the closing run."""
        match = scan_text(make_state, "---\na: 1\n--- x\n---\n")

        assert match.end_line == 3
        assert match.token.content == "a: 1\n--- x\n"

    def test_trailing_whitespace_is_allowed(self, make_state):
        """Test trailing spaces and tabs after the closing run."""
        match = scan_text(make_state, "---\na: 1\n--- \t\nBody")

        assert match.closed is True
        assert match.token.content == "a: 1\n"

    def test_document_end_marker_closes(self, make_state):
        """Test the YAML '...' line also closes the block."""
        match = scan_text(make_state, "---\na: 1\n...\nBody")

        assert match.closed is True
        assert match.token.map == [0, 2]
        assert match.token.content == "a: 1\n"
        assert match.next_line == 3

    def test_indented_document_end_is_content(self, make_state):
        """Test "..." inside a block scalar does not close the block."""
        text = "---\nabstract: |\n  first\n  ...\n  last\ntitle: T\n---\nBody\n"

        match = scan_text(make_state, text)

        assert match.end_line == 6
        assert match.token.content == "abstract: |\n  first\n  ...\n  last\ntitle: T\n"

    def test_document_end_at_block_indent(self, make_state):
        """Test "..." closes at the block indent of a nested container."""
        state = make_state("---\n  a: 1\n    ...\n  ...\n")
        state.blkIndent = 2

        match = FenceScanner().scan(state, 0, state.lineMax)

        assert match.end_line == 3
        assert match.token.content == "  a: 1\n    ...\n"


class TestAutoClose:
    """Tests for unterminated blocks."""

    def test_auto_close_at_document_end(self, make_state):
        """Test an unterminated block consumes through the last line."""
        match = scan_text(make_state, "---\na: 1\nb: 2")

        assert match.closed is False
        assert match.token.map == [0, 2]
        assert match.token.content == "a: 1\nb: 2"
        assert match.bound == 3
        assert match.next_line == 3

    def test_auto_close_at_enclosing_bound(self, make_state):
        """Test the block stops at the bound imposed by the caller."""
        match = scan_text(make_state, "---\na: 1\nb: 2\n---\n", end_line=2)

        assert match.closed is False
        assert match.token.map == [0, 1]
        assert match.token.content == "a: 1\n"
        assert match.bound == 2
        assert match.next_line == 2

    def test_opening_fence_alone(self, make_state):
        """Test a lone opening fence forms an empty auto-closed block."""
        match = scan_text(make_state, "---")

        assert match.closed is False
        assert match.token.map == [0, 0]
        assert match.token.content == ""
        assert match.next_line == 1

    def test_outdented_line_ends_block(self, make_state):
        """Test a line indented below the block indent ends the block."""
        state = make_state("---\n  a: 1\nb: 2\n  ---\n")
        state.blkIndent = 2

        match = FenceScanner().scan(state, 0, state.lineMax)

        assert match.closed is False
        assert match.token.content == "  a: 1\n"
        assert match.bound == 2
        assert match.next_line == 2

    def test_long_unterminated_block_terminates(self, make_state):
        """Test scanning a large unterminated block finishes."""
        text = "---\n" + "key: value\n" * 5000
        match = scan_text(make_state, text)

        assert match.closed is False
        assert match.end_line == 5000


class TestScannerConfiguration:
    """Tests for custom markers."""

    def test_custom_marker(self, make_state):
        """Test a '+++' fenced block."""
        match = scan_text(make_state, "+++\na = 1\n+++\n", scanner=FenceScanner("+"))

        assert match.closed is True
        assert match.token.content == "a = 1\n"

    def test_multi_character_marker(self, make_state):
        """Test runs are counted in whole marker units."""
        scanner = FenceScanner("-*", min_markers=2)

        assert scan_text(make_state, "-*\na: 1", scanner=scanner) is NO_MATCH
        match = scan_text(make_state, "-*-*\na: 1\n-*-\n-*-*\n", scanner=scanner)
        assert match.end_line == 3
        assert match.token.content == "a: 1\n-*-\n"

    def test_min_markers(self, make_state):
        """Test a custom minimum run length."""
        scanner = FenceScanner(min_markers=5)

        assert scan_text(make_state, "----\na: 1\n-----", scanner=scanner) is NO_MATCH
        assert scan_text(make_state, "-----\na: 1\n-----", scanner=scanner).closed is True

    @pytest.mark.parametrize("marker,min_markers", [("", 3), ("-", 0)])
    def test_invalid_configuration(self, marker, min_markers):
        """Test invalid scanner settings are rejected."""
        with pytest.raises(ValueError):
            FenceScanner(marker, min_markers)


class TestScanHasNoSideEffects:
    """Tests that scanning leaves the parse state untouched."""

    def test_scan_does_not_modify_state(self, make_state):
        """Test a successful scan leaves line registers and tokens alone."""
        state = make_state("---\na: 1\n---\nBody")
        before = (state.line, state.lineMax, state.parentType, len(state.tokens))

        FenceScanner().scan(state, 0, state.lineMax)

        assert (state.line, state.lineMax, state.parentType, len(state.tokens)) == before

    def test_no_match_does_not_modify_state(self, make_state):
        """Test a failed scan leaves the state alone."""
        state = make_state("--\nBody")
        FenceScanner().scan(state, 0, state.lineMax)

        assert state.line == 0
        assert state.lineMax == 2
        assert state.tokens == []
