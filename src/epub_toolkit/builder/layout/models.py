"""
Module: builder.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses for preview spread groups and the flat page
    manifest that the package is serialized from.

Key Classes:
    - SpreadKind: single / spread / spread-single
    - SpreadPair: One preview group of 1 or 2 content pages
    - PageManifestEntry: One page of the exported package

Dependencies:
    - dataclasses (std)
    - core.models: ImageAsset, PageType

Used By:
    - builder.layout.spreads: Creates SpreadPairs
    - builder.layout.paginator: Creates PageManifestEntries
    - builder.output.documents: Serializes PageManifestEntries
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from epub_toolkit.core.models import ImageAsset, PageType
from epub_toolkit.core.utils.text import padded


class SpreadKind(str, Enum):
    """Kind of preview group."""
    SINGLE = "single"                  # Stand-alone page
    SPREAD = "spread"                  # Two facing pages
    SPREAD_SINGLE = "spread-single"    # Spread-flagged page without a partner

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SpreadPair:
    """
    Preview grouping of content pages (immutable, never persisted).

    Attributes:
        kind: Group kind
        pages: Content-image indices in display order (slot 1 first).
            For rtl spreads the higher index comes first.

    Example:
        >>> pair = SpreadPair(SpreadKind.SPREAD, (2, 1))
        >>> pair.is_spread
        True
    """

    kind: SpreadKind
    pages: tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate group size against kind."""
        expected = 2 if self.kind is SpreadKind.SPREAD else 1
        if len(self.pages) != expected:
            raise ValueError(
                f"{self.kind} group must have {expected} page(s): {self.pages}"
            )

    @property
    def is_spread(self) -> bool:
        """True for both paired spreads and unpaired spread pages."""
        return self.kind is not SpreadKind.SINGLE


@dataclass(frozen=True)
class PageManifestEntry:
    """
    One page of the exported package (immutable).

    Attributes:
        id: Manifest id of the image item ("cover", "img3", "back-cover")
        href: Image path relative to OEBPS ("images/image_0003.png")
        media_type: Image mime type
        page_number: 1-based package page number
        asset: Source image (referenced, not copied)
        is_cover: Front cover page
        is_back_cover: Back cover page
        spread: Page is flagged for spread display
        page_type: Layout type carried from PageLayout
        original_index: Index in the content-image array (None for covers)

    Example:
        >>> entry.page_filename
        'page_0003.xhtml'
        >>> entry.page_id
        'page3'
    """

    id: str
    href: str
    media_type: str
    page_number: int
    asset: ImageAsset
    is_cover: bool = False
    is_back_cover: bool = False
    spread: bool = False
    page_type: PageType = PageType.CONTENT
    original_index: Optional[int] = None

    def __post_init__(self) -> None:
        if self.page_number < 1:
            raise ValueError(f"page_number must be >= 1: {self.page_number}")
        if self.is_cover and self.is_back_cover:
            raise ValueError("entry cannot be both front and back cover")

    @property
    def is_content(self) -> bool:
        return not (self.is_cover or self.is_back_cover)

    @property
    def page_filename(self) -> str:
        """XHTML document name for this page."""
        if self.is_cover:
            return "cover.xhtml"
        if self.is_back_cover:
            return "back_cover.xhtml"
        return f"page_{padded(self.page_number)}.xhtml"

    @property
    def page_id(self) -> str:
        """Manifest/spine id of this page's XHTML document."""
        if self.is_cover:
            return "cover-page"
        if self.is_back_cover:
            return "back-cover-page"
        return f"page{self.page_number}"
