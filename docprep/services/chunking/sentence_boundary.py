"""Sentence-boundary chunking. Splits at the last . ! ? or newline that fits in chunk_size characters."""

from docprep.utils.text import strip_whitespace

SENTENCE_BOUNDARIES = (".", "!", "?", "\n")


def _last_boundary(window: str) -> int:
    """Index of the last sentence boundary in window, or -1."""
    return max(window.rfind(c) for c in SENTENCE_BOUNDARIES)


def sentence_boundary_chunks(text: str, chunk_size: int) -> list[str]:
    """
    Split text into chunks of at most chunk_size characters.

    Text that already fits is returned as a single untouched chunk. Otherwise each
    chunk ends just after the last boundary character in its window, or at the raw
    window end when the window has none. Chunks are stripped of surrounding
    whitespace and chunks left empty by stripping are dropped.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    length = len(text)
    if length <= chunk_size:
        return [text]
    chunks: list[str] = []
    start = 0
    while start < length:
        end = min(start + chunk_size, length)
        boundary = end
        if end < length:
            pos = _last_boundary(text[start:end])
            if pos >= 0:
                boundary = start + pos + 1
        piece = strip_whitespace(text[start:boundary])
        if piece:
            chunks.append(piece)
        start = boundary
    return chunks
