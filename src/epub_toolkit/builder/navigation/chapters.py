"""
Chapter list edits for the editing layer.

Each helper returns a new tuple kept sorted by page_index; the input
tuple is left untouched.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import replace
from typing import Optional, Sequence

from epub_toolkit.core.models import Chapter

MAX_AUTO_CHAPTERS = 10
PAGES_PER_AUTO_CHAPTER = 10


def _sorted(chapters) -> tuple[Chapter, ...]:
    return tuple(sorted(chapters, key=lambda c: c.page_index))


def add_chapter(
    chapters: Sequence[Chapter],
    page_index: int,
    title: str = "",
    *,
    chapter_id: Optional[str] = None,
) -> tuple[Chapter, ...]:
    """
    Add a chapter starting at page_index.

    A blank title becomes "Chapter N" where N is the new chapter count.
    """
    title = title.strip() or f"Chapter {len(chapters) + 1}"
    chapter = Chapter(id=chapter_id or uuid.uuid4().hex[:8], title=title, page_index=page_index)
    return _sorted([*chapters, chapter])


def remove_chapter(chapters: Sequence[Chapter], chapter_id: str) -> tuple[Chapter, ...]:
    return tuple(c for c in chapters if c.id != chapter_id)


def rename_chapter(chapters: Sequence[Chapter], chapter_id: str, title: str) -> tuple[Chapter, ...]:
    return tuple(replace(c, title=title) if c.id == chapter_id else c for c in chapters)


def auto_generate_chapters(image_count: int, *, title_format: str = "Chapter {number}") -> tuple[Chapter, ...]:
    """
    Spread chapters evenly over the images.

    One chapter per ten images, at most ten chapters.

    Example:
        >>> [c.page_index for c in auto_generate_chapters(25)]
        [0, 8, 16]
    """
    if image_count <= 0:
        return ()
    count = min(MAX_AUTO_CHAPTERS, math.ceil(image_count / PAGES_PER_AUTO_CHAPTER))
    return tuple(
        Chapter(
            id=f"auto-{i + 1}",
            title=title_format.format(number=i + 1),
            page_index=math.floor(image_count / count * i),
        )
        for i in range(count)
    )
