"""
Core Models Package

Immutable, validated data models shared by every builder stage.

All models are frozen dataclasses. A synthesis call receives one
BookMetadata snapshot and a tuple of ImageAssets; nothing in the
builder mutates them.
"""

from .assets import EPUB_IMAGE_TYPES, ImageAsset
from .layout import PageLayout, PageType, ReadingDirection
from .metadata import BookMetadata, BookSize, Chapter, PageSize

__all__ = [
    "EPUB_IMAGE_TYPES",
    "ImageAsset",
    "PageLayout",
    "PageType",
    "ReadingDirection",
    "BookMetadata",
    "BookSize",
    "Chapter",
    "PageSize",
]
