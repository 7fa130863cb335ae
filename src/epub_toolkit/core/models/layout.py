"""
Module: layout

Purpose:
    Per-page layout flags. One PageLayout exists per content image, keyed
    by position. The tuple of layouts is rebuilt wholesale whenever the
    image list is reordered or shrunk; individual entries are never deleted.

Key Classes:
    - PageType: cover / toc / content
    - ReadingDirection: ltr / rtl
    - PageLayout: Flags for a single page

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.metadata.BookMetadata
    - builder.layout.spreads: Preview grouping
    - builder.layout.paginator: Manifest entries
    - builder.layout.presets: Bulk layout edits
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PageType(str, Enum):
    """Role of a page within the book."""
    COVER = "cover"
    TOC = "toc"
    CONTENT = "content"

    def __str__(self) -> str:
        return self.value


class ReadingDirection(str, Enum):
    """Page progression direction."""
    LTR = "ltr"  # Left-to-right: standard prose
    RTL = "rtl"  # Right-to-left: manga, vertical Japanese text

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PageLayout:
    """
    Layout flags for one page (immutable).

    Attributes:
        page_type: Role of the page
        spread: Whether the page wants to be half of a two-page spread
        reading_direction: Direction recorded when the layout was created

    Example:
        >>> PageLayout(spread=True).is_spread_eligible
        True
        >>> PageLayout(page_type=PageType.COVER, spread=True).is_spread_eligible
        False
    """

    page_type: PageType = PageType.CONTENT
    spread: bool = False
    reading_direction: ReadingDirection = ReadingDirection.RTL

    def __post_init__(self) -> None:
        """Coerce plain strings to enums."""
        object.__setattr__(self, "page_type", PageType(self.page_type))
        object.__setattr__(self, "reading_direction", ReadingDirection(self.reading_direction))

    @property
    def is_spread_eligible(self) -> bool:
        """Content page flagged for spread display."""
        return self.page_type is PageType.CONTENT and self.spread

    def to_dict(self) -> dict:
        return {
            "type": str(self.page_type),
            "spread": self.spread,
            "reading_direction": str(self.reading_direction),
        }

    @classmethod
    def from_dict(cls, data: dict) -> PageLayout:
        return cls(
            page_type=PageType(data.get("type", "content")),
            spread=bool(data.get("spread", False)),
            reading_direction=ReadingDirection(data.get("reading_direction", "rtl")),
        )
