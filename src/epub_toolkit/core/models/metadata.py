"""
Module: metadata

Purpose:
    Book-level settings snapshot consumed by a single synthesis call.
    The editing layer builds a new BookMetadata (dataclasses.replace) for
    every change; the core only ever reads it.

Key Classes:
    - BookSize: Target device presets
    - PageSize: Resolved page width/height in pixels
    - Chapter: Chapter start marker pointing into the content-image array
    - BookMetadata: Complete settings record

Dependencies:
    - dataclasses (std)
    - core.models.assets: ImageAsset (covers)
    - core.models.layout: PageLayout, ReadingDirection

Used By:
    - builder.controller
    - builder.navigation.toc
    - builder.output.documents
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .assets import ImageAsset
from .layout import PageLayout, ReadingDirection


# Bounds for custom page dimensions (pixels)
MIN_PAGE_DIMENSION = 100
MAX_PAGE_DIMENSION = 2000

DEFAULT_CUSTOM_WIDTH = 600
DEFAULT_CUSTOM_HEIGHT = 800


class BookSize(str, Enum):
    """Target device presets."""
    KINDLE_STANDARD = "kindle-standard"
    KINDLE_LARGE = "kindle-large"
    KINDLE_PAPERWHITE = "kindle-paperwhite"
    IPAD_STANDARD = "ipad-standard"
    MOBILE_FRIENDLY = "mobile-friendly"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PageSize:
    """Page dimensions in pixels."""
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")


PRESET_SIZES: dict[BookSize, PageSize] = {
    BookSize.KINDLE_STANDARD: PageSize(600, 800),
    BookSize.KINDLE_LARGE: PageSize(758, 1024),
    BookSize.KINDLE_PAPERWHITE: PageSize(758, 1024),
    BookSize.IPAD_STANDARD: PageSize(768, 1024),
    BookSize.MOBILE_FRIENDLY: PageSize(480, 640),
}


@dataclass(frozen=True, slots=True)
class Chapter:
    """
    Chapter start marker (immutable).

    Attributes:
        id: Identifier, used in navigation point ids
        title: Display title (escaped on output)
        page_index: 0-based index into the content-image array. This is
            NOT the package page number; covers are accounted for later.

    Example:
        >>> Chapter(id="c1", title="Intro", page_index=4).page_number
        5
    """

    id: str
    title: str
    page_index: int

    def __post_init__(self) -> None:
        """Validate chapter on construction."""
        if self.page_index < 0:
            raise ValueError(f"page_index must be >= 0: {self.page_index}")

    @property
    def page_number(self) -> int:
        """Human-readable page number within the content images (1-based)."""
        return self.page_index + 1

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "page_index": self.page_index,
            "page_number": self.page_number,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Chapter:
        return cls(
            id=str(data["id"]),
            title=data["title"],
            page_index=int(data["page_index"]),
        )


@dataclass(frozen=True)
class BookMetadata:
    """
    Book settings snapshot (immutable).

    Attributes:
        title: Book title
        author: Author name (dc:creator)
        description: Short description
        publisher: Publisher name
        language: BCP 47 language code, e.g. "ja", "en"
        page_direction: Progression direction for the whole package
        book_size: Device preset; CUSTOM uses custom_width/custom_height
        custom_width: Page width when book_size is CUSTOM
        custom_height: Page height when book_size is CUSTOM
        front_cover: Optional front cover image (package page 1)
        back_cover: Optional back cover image (last package page)
        enable_toc: Emit a chapter index page (only if chapters exist)
        chapters: Chapters, kept sorted by page_index
        page_layouts: One PageLayout per content image

    Invariants:
        - chapters sorted ascending by page_index (normalised on construction)
        - custom dimensions within [MIN_PAGE_DIMENSION, MAX_PAGE_DIMENSION]
          when book_size is CUSTOM

    Example:
        >>> meta = BookMetadata(title="Sketches", page_direction=ReadingDirection.LTR)
        >>> meta.page_size
        PageSize(width=600, height=800)
    """

    title: str = "My Image Book"
    author: str = "Unknown Author"
    description: str = "A book created from images"
    publisher: str = "Image to EPUB Converter"
    language: str = "ja"
    page_direction: ReadingDirection = ReadingDirection.RTL
    book_size: BookSize = BookSize.KINDLE_STANDARD
    custom_width: int = DEFAULT_CUSTOM_WIDTH
    custom_height: int = DEFAULT_CUSTOM_HEIGHT
    front_cover: Optional[ImageAsset] = None
    back_cover: Optional[ImageAsset] = None
    enable_toc: bool = False
    chapters: tuple[Chapter, ...] = field(default_factory=tuple)
    page_layouts: tuple[PageLayout, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Normalise collections and validate dimensions."""
        object.__setattr__(self, "page_direction", ReadingDirection(self.page_direction))
        object.__setattr__(self, "book_size", BookSize(self.book_size))
        object.__setattr__(
            self, "chapters", tuple(sorted(self.chapters, key=lambda c: c.page_index))
        )
        object.__setattr__(self, "page_layouts", tuple(self.page_layouts))

        if self.book_size is BookSize.CUSTOM:
            for name in ("custom_width", "custom_height"):
                value = getattr(self, name)
                if not (MIN_PAGE_DIMENSION <= value <= MAX_PAGE_DIMENSION):
                    raise ValueError(
                        f"{name} must be between {MIN_PAGE_DIMENSION} and "
                        f"{MAX_PAGE_DIMENSION}: {value}"
                    )

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def page_size(self) -> PageSize:
        """Target page size resolved from the preset or custom dimensions."""
        if self.book_size is BookSize.CUSTOM:
            return PageSize(self.custom_width, self.custom_height)
        return PRESET_SIZES[self.book_size]

    @property
    def is_rtl(self) -> bool:
        return self.page_direction is ReadingDirection.RTL

    @property
    def has_toc_page(self) -> bool:
        """Whether the linear chapter index page is emitted."""
        return self.enable_toc and len(self.chapters) > 0
