"""
Module: builder.layout.roles

Purpose:
    Decide the left/right spread property written into the package spine.

    The rule is pure index parity: it does not look at neighbouring pages,
    so a spread page whose neighbours are single pages still gets a side.
    It intentionally differs from the preview pairing in
    builder.layout.spreads.

Key Functions:
    - spread_role(): LEFT or RIGHT for a content-image index
    - spread_property(): Spine property for a manifest entry (or None)
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from epub_toolkit.core.models import ReadingDirection

from .models import PageManifestEntry


class SpreadRole(str, Enum):
    """Side of a facing-page spread."""
    LEFT = "page-spread-left"
    RIGHT = "page-spread-right"

    def __str__(self) -> str:
        return self.value


def spread_role(original_index: int, direction: ReadingDirection) -> SpreadRole:
    """
    Side for a content image, by parity of its original index.

    rtl: odd index -> left, even -> right
    ltr: even index -> left, odd -> right

    Example:
        >>> spread_role(0, ReadingDirection.RTL)
        <SpreadRole.RIGHT: 'page-spread-right'>
    """
    if ReadingDirection(direction) is ReadingDirection.RTL:
        is_left = original_index % 2 == 1
    else:
        is_left = original_index % 2 == 0
    return SpreadRole.LEFT if is_left else SpreadRole.RIGHT


def spread_property(entry: PageManifestEntry, direction: ReadingDirection) -> Optional[str]:
    """Spine itemref property for an entry; None unless it's a spread content page."""
    if not entry.spread or entry.original_index is None:
        return None
    return str(spread_role(entry.original_index, direction))
