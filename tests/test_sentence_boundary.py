"""Tests for sentence-boundary chunking."""

from __future__ import annotations

import pytest

from docprep.services.chunking.sentence_boundary import sentence_boundary_chunks

SAMPLE = (
    "The quick brown fox jumps over the lazy dog. "
    "Pack my box with five dozen liquor jugs! "
    "How vexingly quick daft zebras jump?\n"
    "Sphinx of black quartz, judge my vow. "
    "The five boxing wizards jump quickly."
)


def _assert_lossless(text: str, chunks: list[str]) -> None:
    """Chunks appear in order in the text, and only whitespace is lost."""
    pos = 0
    for chunk in chunks:
        found = text.find(chunk, pos)
        assert found >= 0
        assert text[pos:found].strip() == ""
        pos = found + len(chunk)
    assert text[pos:].strip() == ""


class TestSingleChunk:
    """Content that fits is returned as-is."""

    def test_fits(self) -> None:
        """Short content is one chunk."""
        assert sentence_boundary_chunks("Hello. World.", 100) == ["Hello. World."]

    def test_exact_fit(self) -> None:
        """Content exactly chunk_size long is one chunk."""
        assert sentence_boundary_chunks("abcde", 5) == ["abcde"]

    def test_not_trimmed(self) -> None:
        """A single chunk keeps its surrounding whitespace."""
        assert sentence_boundary_chunks("  hi  ", 10) == ["  hi  "]

    def test_empty(self) -> None:
        """Empty content yields one empty chunk."""
        assert sentence_boundary_chunks("", 10) == [""]

    def test_invalid_size(self) -> None:
        """chunk_size must be positive."""
        with pytest.raises(ValueError):
            sentence_boundary_chunks("abc", 0)


class TestSplitting:
    """Boundary selection."""

    def test_raw_boundaries_without_punctuation(self) -> None:
        """No boundary characters: chunks are exactly chunk_size."""
        chunks = sentence_boundary_chunks("A" * 5000, 1000)
        assert len(chunks) == 5
        assert all(len(c) == 1000 for c in chunks)
        assert sum(len(c) for c in chunks) == 5000

    def test_splits_after_sentence_end(self) -> None:
        """Each chunk ends right after the last boundary in its window."""
        text = "First sentence. Second sentence. Third."
        assert sentence_boundary_chunks(text, 20) == ["First sentence.", "Second sentence.", "Third."]

    def test_newline_is_a_boundary(self) -> None:
        """A newline counts as a sentence boundary."""
        text = "line one\nline two\nline three"
        assert sentence_boundary_chunks(text, 12) == ["line one", "line two", "line three"]

    def test_whitespace_only_slices_dropped(self) -> None:
        """Slices that strip to nothing are not emitted."""
        text = "x." + " " * 6 + "y"
        assert sentence_boundary_chunks(text, 3) == ["x.", "y"]

    def test_boundary_at_window_start(self) -> None:
        """A boundary at the very first position still makes progress."""
        assert sentence_boundary_chunks(".abcdef", 3) == [".", "abc", "def"]

    def test_counts_characters(self) -> None:
        """Multi-byte characters count as one."""
        chunks = sentence_boundary_chunks("中" * 10, 4)
        assert [len(c) for c in chunks] == [4, 4, 2]

    def test_strip_keeps_ascii_separators(self) -> None:
        """Only Unicode whitespace is stripped from chunk edges."""
        assert sentence_boundary_chunks("\x1fab. cd", 4) == ["\x1fab.", "cd"]


class TestChunkProperties:
    """Properties that hold for any input."""

    @pytest.mark.parametrize("size", [1, 7, 25, 60, 150])
    def test_size_bound_and_lossless(self, size: int) -> None:
        """Chunks never exceed chunk_size and only boundary whitespace is dropped."""
        chunks = sentence_boundary_chunks(SAMPLE, size)
        assert all(0 < len(c) <= size for c in chunks)
        _assert_lossless(SAMPLE, chunks)
        assert "".join("".join(chunks).split()) == "".join(SAMPLE.split())
