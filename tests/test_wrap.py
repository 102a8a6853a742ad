"""Tests for word wrapping."""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from rich.cells import cell_len

from vestcli.engine.wrap import wrap_text
from vestcli.exceptions import LayoutError

words = st.lists(
    st.text(alphabet="abcdefghijklmnopqrstuvwxyzčćšđž", min_size=1, max_size=15),
    min_size=0,
    max_size=40,
)


class TestWrapText:
    """Test for wrap_text."""

    def test_empty_text_gives_one_empty_line(self) -> None:
        """Test that empty text still reserves a line."""
        assert wrap_text(text="", width=10) == [""]

    def test_short_text_fits_on_one_line(self) -> None:
        """Test text narrower than width."""
        assert wrap_text(text="one two", width=10) == ["one two"]

    def test_line_is_flushed_before_reaching_width(self) -> None:
        """Test that a line never grows to width."""
        assert wrap_text(text="aaaa bbbb", width=9) == ["aaaa", "bbbb"]
        assert wrap_text(text="aaaa bbbb", width=10) == ["aaaa bbbb"]

    def test_leading_spaces_are_kept(self) -> None:
        """Test that an indent made of spaces survives wrapping."""
        assert wrap_text(text="    TEST TEST", width=10) == ["    TEST", "TEST"]

    def test_long_word_is_not_split(self) -> None:
        """Test that a word longer than width gets a line of its own."""
        assert wrap_text(text="a abcdefghijkl b", width=5) == ["a", "abcdefghijkl", "b"]

    def test_long_first_word_stays_after_indent(self) -> None:
        """Test that an indent is not left on a line of its own before a long word."""
        assert wrap_text(text="    abcdefghijkl b", width=8) == ["    abcdefghijkl", "b"]

    def test_wide_characters_count_as_two_cells(self) -> None:
        """Test that width is measured in terminal cells."""
        assert wrap_text(text="日本 日本", width=6) == ["日本", "日本"]

    def test_negative_width_raises(self) -> None:
        """Test that a negative width is a layout error."""
        with pytest.raises(LayoutError):
            wrap_text(text="text", width=-1)

    @given(words=words, width=st.integers(min_value=1, max_value=60))
    def test_lines_fit_unless_single_long_word(self, words: list[str], width: int) -> None:
        """Test that only a lone oversized word may exceed width."""
        for line in wrap_text(text=" ".join(words), width=width):
            assert cell_len(line) <= width or " " not in line

    @given(words=words, width=st.integers(min_value=1, max_value=60))
    def test_rewrapping_is_idempotent(self, words: list[str], width: int) -> None:
        """Test that wrapping the joined lines again gives the same lines."""
        lines: list[str] = wrap_text(text=" ".join(words), width=width)
        assert wrap_text(text=" ".join(lines), width=width) == lines

    @given(words=words, width=st.integers(min_value=1, max_value=60))
    def test_words_are_kept_in_order(self, words: list[str], width: int) -> None:
        """Test that wrapping neither drops nor reorders words."""
        lines: list[str] = wrap_text(text=" ".join(words), width=width)
        assert " ".join(lines).split() == words
        assert len(lines) >= 1
