"""
Module: builder.loading

Purpose:
    Image intake: files, directories and data URLs into ImageAssets.
"""

from .loader import (
    LoaderError,
    MAX_IMAGES,
    IMAGE_SUFFIXES,
    load_images,
    load_data_urls,
    discover_images,
    natural_sort_key,
)

__all__ = [
    "LoaderError",
    "MAX_IMAGES",
    "IMAGE_SUFFIXES",
    "load_images",
    "load_data_urls",
    "discover_images",
    "natural_sort_key",
]
