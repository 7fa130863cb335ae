"""
Text helpers shared by the document serializer and the CLI.

Escaping is applied unconditionally to every user-supplied string that
ends up inside XML/XHTML: an unescaped ampersand or angle bracket makes
the whole package unreadable.
"""

from __future__ import annotations

import re
from xml.sax.saxutils import escape

_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}

# Characters kept in download filenames: ASCII alphanumerics, hiragana,
# katakana and CJK unified ideographs.
_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF]")


def escape_xml(text: str | None) -> str:
    """
    Escape the five reserved markup characters (& < > " ').

    Example:
        >>> escape_xml('Tom & "Jerry" <1>')
        'Tom &amp; &quot;Jerry&quot; &lt;1&gt;'
    """
    if text is None:
        return ""
    return escape(str(text), _QUOTE_ENTITIES)


def padded(number: int, width: int = 4) -> str:
    """Zero-pad a page number: 7 -> '0007'."""
    return str(number).zfill(width)


def suggested_filename(title: str) -> str:
    """
    Download filename for a book title.

    Example:
        >>> suggested_filename("My Book: Vol.1")
        'My_Book__Vol_1.epub'
    """
    return f"{_UNSAFE_FILENAME_CHARS.sub('_', title)}.epub"
