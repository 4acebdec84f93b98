"""Small text helpers shared across folio."""

import re
from unicodedata import normalize


def slugify(text: str, max_len: int = 60) -> str:
    """Convert text to a safe URL-friendly slug.

    Args:
        text: Input text to slugify
        max_len: Maximum length of output slug (default 60)

    Returns:
        Safe slug string suitable for filenames, URLs and HTML ids

    Examples:
        >>> slugify("Go Pointers, Explained")
        'go-pointers-explained'
        >>> slugify("Café")
        'cafe'

    """
    normalized = normalize("NFKD", text).encode("ascii", "ignore").decode("ascii").lower()
    slug = re.sub(r"[^a-z0-9]+", "-", normalized).strip("-")

    if not slug:
        return "untitled"

    if len(slug) > max_len:
        slug = slug[:max_len].rstrip("-")

    return slug


def word_count(text: str) -> int:
    return len(text.split())


def truncate_words(text: str, max_words: int = 50, suffix: str = "...") -> str:
    """Truncate text to ``max_words`` words, appending ``suffix`` if cut."""
    words = text.split()
    if len(words) <= max_words:
        return " ".join(words)
    return " ".join(words[:max_words]) + suffix
