"""
Module: builder.layout.paginator

Purpose:
    Assign package page numbers and archive paths to every image.
    Produces the flat manifest that all documents are serialized from.

Key Functions:
    - paginate(): Main pagination function

Algorithm:
    1. Front cover (if any) is page 1
    2. Content images follow in array order, numbered from the next integer
    3. Back cover (if any) is the last page
    Numbers are never skipped or reassigned; any change to the image list
    means a full re-run.

Dependencies:
    - builder.layout.models: PageManifestEntry
    - core.models: ImageAsset, PageLayout

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from epub_toolkit.core.models import ImageAsset, PageLayout, PageType
from epub_toolkit.core.utils.text import padded

from .models import PageManifestEntry

logger = logging.getLogger(__name__)

# Layout used for images without an explicit PageLayout
_DEFAULT_LAYOUT = PageLayout(page_type=PageType.CONTENT, spread=False)


def paginate(
    images: Sequence[ImageAsset],
    layouts: Sequence[PageLayout],
    *,
    front_cover: Optional[ImageAsset] = None,
    back_cover: Optional[ImageAsset] = None,
) -> tuple[PageManifestEntry, ...]:
    """
    Build the flat page manifest.

    Rules:
    1. Front cover: id "cover", images/cover.<ext>, never a spread
    2. Content: id "img<N>", images/image_NNNN.<ext> where NNNN is the
       package page number (not the original index); spread and page type
       come from the page's layout
    3. Back cover: id "back-cover", images/back_cover.<ext>, never a spread

    Args:
        images: Content images in reading order
        layouts: PageLayout per content image (missing entries default to
            a non-spread content page)
        front_cover: Optional front cover image
        back_cover: Optional back cover image

    Returns:
        Tuple of entries with page numbers 1..N, contiguous
    """
    entries: List[PageManifestEntry] = []
    page_number = 0

    if front_cover is not None:
        page_number += 1
        entries.append(PageManifestEntry(
            id="cover",
            href=f"images/cover.{front_cover.extension}",
            media_type=front_cover.mime_type,
            page_number=page_number,
            asset=front_cover,
            is_cover=True,
        ))

    for index, image in enumerate(images):
        layout = layouts[index] if index < len(layouts) else _DEFAULT_LAYOUT
        page_number += 1
        entries.append(PageManifestEntry(
            id=f"img{page_number}",
            href=f"images/image_{padded(page_number)}.{image.extension}",
            media_type=image.mime_type,
            page_number=page_number,
            asset=image,
            spread=layout.spread,
            page_type=layout.page_type,
            original_index=index,
        ))

    if back_cover is not None:
        page_number += 1
        entries.append(PageManifestEntry(
            id="back-cover",
            href=f"images/back_cover.{back_cover.extension}",
            media_type=back_cover.mime_type,
            page_number=page_number,
            asset=back_cover,
            is_back_cover=True,
        ))

    logger.debug(f"Paginated {len(images)} content images into {len(entries)} package pages")

    return tuple(entries)
