"""
Image-to-EPUB Core Package

Shared data models and utilities. These models are the single source of
truth for every builder stage.

**DESIGN NOTES:**

1. **Immutable Snapshots**
   - Settings are edited by building new BookMetadata instances
   - A synthesis call only ever reads the snapshot it was given

2. **Derived Data Is Never Stored**
   - Spread groups, package page numbers and chapter targets are
     recomputed from the snapshot on every build
   - Chapter.page_number is a property, not a field
"""

from .models import (
    BookMetadata,
    BookSize,
    Chapter,
    ImageAsset,
    PageLayout,
    PageSize,
    PageType,
    ReadingDirection,
)

__all__ = [
    "BookMetadata",
    "BookSize",
    "Chapter",
    "ImageAsset",
    "PageLayout",
    "PageSize",
    "PageType",
    "ReadingDirection",
]
