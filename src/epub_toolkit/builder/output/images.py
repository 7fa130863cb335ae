"""
Module: builder.output.images

Purpose:
    Turn manifest entries into archive image files. Payloads are written
    byte-for-byte (no re-encoding); Pillow is only used to check that a
    payload actually decodes before it goes into the package.

Key Functions:
    - image_archive_path(): Archive path for an entry's image
    - verify_image(): Pillow decode check
    - image_file(): (archive path, bytes) for one entry

Dependencies:
    - PIL/Pillow
    - builder.layout.models: PageManifestEntry
"""

from __future__ import annotations

import logging
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from epub_toolkit.core.models import ImageAsset

from ..errors import BuildError
from ..layout.models import PageManifestEntry

logger = logging.getLogger(__name__)

CONTENT_ROOT = "OEBPS"


def image_archive_path(entry: PageManifestEntry) -> str:
    """
    Example:
        >>> image_archive_path(entry)
        'OEBPS/images/image_0002.png'
    """
    return f"{CONTENT_ROOT}/{entry.href}"


def verify_image(asset: ImageAsset) -> None:
    """
    Check that an asset's payload is a decodable image.

    Raises:
        BuildError: If Pillow can't identify or verify the payload, or the
            image exceeds Pillow's decompression bomb limit
    """
    try:
        with Image.open(BytesIO(asset.data)) as image:
            image.verify()
    except Image.DecompressionBombError as e:
        raise BuildError(f"Image {asset.name!r} is too large to package: {e}") from e
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, EOFError) as e:
        raise BuildError(f"Image {asset.name!r} could not be decoded: {e}") from e


def image_file(entry: PageManifestEntry, *, verify: bool = True) -> tuple[str, bytes]:
    """
    Archive path and payload for one manifest entry.

    Args:
        entry: Manifest entry
        verify: Run the Pillow decode check first

    Returns:
        Tuple of (archive path, raw bytes)

    Raises:
        BuildError: If verify is set and the payload doesn't decode
    """
    if verify:
        verify_image(entry.asset)
    logger.debug(f"Embedding {entry.asset.name} as {entry.href} ({entry.asset.size} bytes)")
    return image_archive_path(entry), entry.asset.data
