from __future__ import annotations

import re
from html.parser import HTMLParser

_SLUG_RE = re.compile(r"[\s/]+")
_WS_RE = re.compile(r"\s+")

DEFAULT_DESCRIPTION_LIMIT = 500


class _TextExtractor(HTMLParser):
    """Tiny HTML parser that keeps only text nodes."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._buf: list[str] = []

    def handle_data(self, data: str) -> None:
        self._buf.append(data)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        # Keep words from adjacent block elements apart.
        self._buf.append(" ")

    @property
    def text(self) -> str:
        return "".join(self._buf)


def slugify(name: str) -> str:
    """Lowercase *name* and collapse runs of whitespace or slashes to '-'."""
    return _SLUG_RE.sub("-", name.strip().lower())


def strip_markup(html: str, limit: int | None = DEFAULT_DESCRIPTION_LIMIT) -> str:
    """Reduce an HTML fragment to trimmed plain text of at most *limit* chars.

    ``limit=None`` keeps the whole text.
    """
    if not html:
        return ""
    parser = _TextExtractor()
    parser.feed(html)
    parser.close()
    text = _WS_RE.sub(" ", parser.text).strip()
    return text[:limit].rstrip()


def fuzzy_match(a: str, b: str) -> bool:
    """Case-insensitive substring containment in either direction.

    Reconciles catalog names with upstream names such as "Amazon EC2" vs
    "EC2". Blank names never match.
    """
    left = a.strip().lower()
    right = b.strip().lower()
    if not left or not right:
        return False
    return left in right or right in left


_AFTER_COLON_RE = re.compile(r":\s*(.+?)(?:\s*\(|$)")
_BEFORE_SEPARATOR_RE = re.compile(r"^(.*?)(?:\s*[-–—]|\s*:)")


def title_after_colon(title: str) -> str:
    """Text after the first colon, up to an opening parenthesis.

    e.g. ``Informational message: Amazon EC2 (N. Virginia)`` -> ``Amazon EC2``
    """
    match = _AFTER_COLON_RE.search(title)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return title.split(":")[0].strip() or title


def title_prefix(title: str, words: int = 4) -> str:
    """Text before the first dash or colon, else the first few words."""
    match = _BEFORE_SEPARATOR_RE.match(title)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return " ".join(title.split()[:words])
