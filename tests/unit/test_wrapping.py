"""
Unit tests for terminal width detection and content wrapping.
"""

import pytest
from unittest.mock import patch

from waymark.display.terminal import DEFAULT_TERMINAL_WIDTH, get_terminal_width
from waymark.display.wrapping import get_available_width, wrap_content
from waymark.models.render import WrapConfig


@pytest.fixture
def no_terminal(monkeypatch):
    """Remove COLUMNS and pretend stdout is not a terminal."""
    monkeypatch.delenv('COLUMNS', raising=False)
    with patch('waymark.display.terminal._columns_from_terminal', return_value=None):
        yield


class TestTerminalWidth:
    """Test cases for terminal width detection."""

    def test_explicit_width_wins(self, monkeypatch):
        """Test that an explicit width overrides COLUMNS."""
        monkeypatch.setenv('COLUMNS', '100')
        assert get_terminal_width(42) == 42

    def test_columns_env(self, monkeypatch):
        """Test that COLUMNS is used when no width is given."""
        monkeypatch.setenv('COLUMNS', '120')
        assert get_terminal_width() == 120

    @pytest.mark.parametrize("value", ["wide", "0", "-5", ""])
    def test_invalid_columns_env_ignored(self, monkeypatch, value):
        """Test that unusable COLUMNS values fall through to the default."""
        monkeypatch.setenv('COLUMNS', value)
        with patch('waymark.display.terminal._columns_from_terminal', return_value=None):
            assert get_terminal_width() == DEFAULT_TERMINAL_WIDTH

    def test_live_terminal_size(self, monkeypatch):
        """Test that the live terminal size is used when COLUMNS is unset."""
        monkeypatch.delenv('COLUMNS', raising=False)
        with patch('waymark.display.terminal._columns_from_terminal', return_value=132):
            assert get_terminal_width() == 132

    def test_default_width(self, no_terminal):
        """Test the fallback width."""
        assert get_terminal_width() == 80


class TestAvailableWidth:
    """Test cases for available width computation."""

    def test_width_minus_indent(self):
        """Test that the indent is subtracted from the width."""
        assert get_available_width(WrapConfig(width=30, indent=10)) == 20

    def test_never_below_one(self):
        """Test that an indent wider than the terminal still leaves one column."""
        assert get_available_width(WrapConfig(width=10, indent=25)) == 1

    def test_detected_width(self, monkeypatch):
        """Test that a missing width is detected from the environment."""
        monkeypatch.setenv('COLUMNS', '60')
        assert get_available_width(WrapConfig(indent=12)) == 48


class TestWrapContent:
    """Test cases for wrap_content()."""

    def test_no_wrap_identity(self):
        """Test that no_wrap returns the content untouched."""
        content = "  a very long line that would otherwise wrap many times over  "
        assert wrap_content(content, WrapConfig(width=10, no_wrap=True)) == [content]

    def test_no_wrap_keeps_blank_content(self):
        """Test that no_wrap does not normalise blank content."""
        assert wrap_content("   ", WrapConfig(no_wrap=True)) == ["   "]

    @pytest.mark.parametrize("content", ["", "   ", "\t \t"])
    def test_blank_content(self, content):
        """Test that empty or whitespace-only content yields one empty line."""
        assert wrap_content(content, WrapConfig(width=40)) == [""]

    def test_fits_on_one_line(self):
        """Test that content within the available width is returned as-is."""
        content = "fix the bug #perf"
        assert wrap_content(content, WrapConfig(width=40, indent=10)) == [content]

    def test_exact_fit(self):
        """Test content exactly as wide as the available width."""
        content = "x" * 20
        assert wrap_content(content, WrapConfig(width=30, indent=10)) == [content]

    def test_default_config_uses_detected_width(self, no_terminal):
        """Test wrapping without a config."""
        assert wrap_content("short") == ["short"]

    def test_wraps_at_spaces(self):
        """Test greedy wrapping of plain words."""
        lines = wrap_content("fix the bug in the parser module now", WrapConfig(width=20))

        assert lines == ["fix the bug in the", "parser module now"]

    def test_width_bound(self):
        """Test that every wrapped line fits the available width."""
        content = "refactor the session cache so that eviction happens @alice #perf #auth owner:@bob"
        config = WrapConfig(width=40, indent=8)

        lines = wrap_content(content, config)

        assert len(lines) > 1
        assert all(len(line) <= 32 for line in lines)
        assert " ".join(lines) == content

    def test_breaks_before_tags_and_mentions(self):
        """Test that structured tokens move whole to the next line."""
        lines = wrap_content("update handler @alice #perf #auth", WrapConfig(width=20))

        assert lines == ["update handler", "@alice #perf #auth"]

    def test_lines_are_trimmed(self):
        """Test that no line starts or ends with whitespace."""
        lines = wrap_content("alpha    beta    gamma    delta", WrapConfig(width=14))

        assert all(line == line.strip() for line in lines)
        assert all(line for line in lines)

    def test_force_split_oversized_tag(self):
        """Test that a token wider than the line is sliced into fragments."""
        content = "#verylongtagthatexceedsavailablewidthbutcannotbesplit"

        lines = wrap_content(content, WrapConfig(indent=10, width=30))

        assert len(lines) > 1
        assert "".join(lines) == content
        assert lines[:2] == [content[:20], content[20:40]]

    def test_force_split_carries_last_fragment(self):
        """Test that the last fragment keeps accumulating following tokens."""
        content = "abcdefghijklmnopqrstuvwxy z"

        lines = wrap_content(content, WrapConfig(width=10))

        assert lines == ["abcdefghij", "klmnopqrst", "uvwxy z"]

    def test_unbreakable_run_overflows(self):
        """Test that text glued to text is never broken."""
        content = "aaaaaaaaaa/bbbbbbbbbb/cc"

        lines = wrap_content(content, WrapConfig(width=20))

        assert lines == [content]

    def test_width_one(self):
        """Test wrapping when only a single column is available."""
        lines = wrap_content("ab cd", WrapConfig(width=5, indent=10))

        assert "".join(lines) == "abcd"

    def test_leading_space_run_wider_than_line(self):
        """Test that a whitespace run at the start of a line is dropped, not sliced."""
        lines = wrap_content(" " * 25 + "abc def", WrapConfig(width=10))

        assert lines == ["abc def"]

    def test_inner_space_run_wider_than_line(self):
        """Test that a long whitespace run between words only causes a break."""
        lines = wrap_content("abc" + " " * 25 + "def", WrapConfig(width=10))

        assert lines == ["abc", "def"]
