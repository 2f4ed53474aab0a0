"""Text helpers shared by the loader, indexer and inbound adapters.

Case files and user queries should have BOM markers stripped at the
boundary so downstream scoring never sees spurious characters. Internal
layers assume text is already clean.
"""

import re
import unicodedata

_CODE_FENCE = re.compile(r"```[\s\S]*?```")


def normalize_text(text: str | None) -> str:
    """Remove BOM/replacement characters, apply NFKC and strip whitespace.

    Args:
        text: Input text, possibly None.

    Returns:
        Cleaned text, or an empty string for empty input.
    """
    if not text:
        return ""
    cleaned = text.replace("\ufeff", "").replace("\ufffd", "")
    return unicodedata.normalize("NFKC", cleaned).strip()


def strip_code_blocks(markdown: str) -> str:
    """Drop fenced code blocks from a markdown body."""
    return _CODE_FENCE.sub("", markdown)
