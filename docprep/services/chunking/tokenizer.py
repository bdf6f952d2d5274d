"""
Token counts for chunk records, document stats, and response estimates.

The tiktoken encoding named by the TOKEN_ENCODING setting is loaded on first use.
An encoding that cannot be loaded is remembered and counts fall back to a
character estimate for the rest of the process.
"""

from docprep.config.logging import get_logger
from docprep.config.settings import get_settings

logger = get_logger(__name__)

CHARS_PER_TOKEN = 4

_encodings: dict[str, object] = {}
_unavailable: set[str] = set()


def _get_encoding(name: str):
    if name in _encodings:
        return _encodings[name]
    if name in _unavailable:
        return None
    try:
        import tiktoken
        _encodings[name] = tiktoken.get_encoding(name)
    except Exception as e:
        _unavailable.add(name)
        logger.warning(
            "Token encoding unavailable, using character estimate",
            extra={"encoding": name, "error": str(e)},
        )
        return None
    return _encodings[name]


def estimate_tokens_from_chars(text: str) -> int:
    return len(text) // CHARS_PER_TOKEN


def count_tokens(text: str, encoding_name: str | None = None) -> int:
    """
    Token count for text. Special-token strings such as "<|endoftext|>" in document
    content are counted as ordinary text.
    """
    if not text:
        return 0
    enc = _get_encoding(encoding_name or get_settings().token_encoding)
    if enc is not None:
        return len(enc.encode(text, disallowed_special=()))
    return estimate_tokens_from_chars(text)
