"""
Module: builder.layout.presets

Purpose:
    Bulk layout edits used by the editing layer. Every function returns a
    new tuple; the input is never modified, so callers swap the result into
    a fresh BookMetadata snapshot.

Key Functions:
    - default_page_layouts(): Layouts for freshly ingested images
    - fit_page_layouts(): Pad or truncate layouts to the image count
    - manga_layout(): Spread everything except the first and last page
    - single_page_layout(): Clear every spread flag
    - alternate_spread_layout(): Spread odd indices
    - toggle_spread() / set_spread(): Per-page edits
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from epub_toolkit.core.models import PageLayout, PageType, ReadingDirection


def default_page_layouts(
    count: int,
    direction: ReadingDirection = ReadingDirection.RTL,
) -> tuple[PageLayout, ...]:
    """
    Layouts for a freshly ingested image list.

    The first image is typed as cover, the rest as content; no spreads.
    Called again from scratch whenever images are added, removed or
    reordered.
    """
    return tuple(
        PageLayout(
            page_type=PageType.COVER if index == 0 else PageType.CONTENT,
            spread=False,
            reading_direction=direction,
        )
        for index in range(count)
    )


def fit_page_layouts(
    layouts: Sequence[PageLayout],
    count: int,
    direction: ReadingDirection = ReadingDirection.RTL,
) -> tuple[PageLayout, ...]:
    """
    Exactly one layout per image.

    Extra layouts are dropped; missing ones default to a plain content page
    in the book's reading direction.
    """
    fitted = list(layouts[:count])
    fitted.extend(PageLayout(reading_direction=direction) for _ in range(count - len(fitted)))
    return tuple(fitted)


def manga_layout(layouts: Sequence[PageLayout]) -> tuple[PageLayout, ...]:
    """First and last page single, everything in between spread."""
    last = len(layouts) - 1
    return tuple(
        replace(layout, spread=0 < index < last)
        for index, layout in enumerate(layouts)
    )


def single_page_layout(layouts: Sequence[PageLayout]) -> tuple[PageLayout, ...]:
    return tuple(replace(layout, spread=False) for layout in layouts)


def alternate_spread_layout(layouts: Sequence[PageLayout]) -> tuple[PageLayout, ...]:
    """Spread pages at odd indices (2nd, 4th, ... page)."""
    return tuple(
        replace(layout, spread=index > 0 and index % 2 == 1)
        for index, layout in enumerate(layouts)
    )


def toggle_spread(layouts: Sequence[PageLayout], index: int) -> tuple[PageLayout, ...]:
    """Flip the spread flag of one page."""
    if not 0 <= index < len(layouts):
        raise IndexError(f"page index out of range: {index}")
    return tuple(
        replace(layout, spread=not layout.spread) if i == index else layout
        for i, layout in enumerate(layouts)
    )


def set_spread(
    layouts: Sequence[PageLayout],
    indices: Iterable[int],
    spread: bool,
) -> tuple[PageLayout, ...]:
    """Set the spread flag on a selection of pages; out-of-range indices are ignored."""
    selected = set(indices)
    return tuple(
        replace(layout, spread=spread) if i in selected else layout
        for i, layout in enumerate(layouts)
    )
