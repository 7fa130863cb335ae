"""
Module: assets

Purpose:
    Provides the ImageAsset dataclass - one decoded page image handed over
    by the intake layer. The core only references assets; it never copies
    or re-encodes their payload.

Key Functions:
    - ImageAsset.from_path(path): Read a file and sniff its format with Pillow
    - ImageAsset.from_data_url(url, name): Decode a base64 data URL
    - ImageAsset.extension: Archive file extension derived from the mime type

Dependencies:
    - PIL/Pillow: Format sniffing for files on disk
    - base64 (std)

Used By:
    - core.models.metadata.BookMetadata (front/back covers)
    - builder.loading.loader
    - builder.layout.paginator
    - builder.output.images
"""

from __future__ import annotations

import base64
import binascii
import re
import uuid
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError


# "data:image/png;base64,AAAA..."
_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^,;]*)*?);base64,", re.IGNORECASE)

# Mime subtypes whose raw form is not a sensible file extension
_EXTENSION_OVERRIDES = {
    "svg+xml": "svg",
    "x-icon": "ico",
    "vnd.microsoft.icon": "ico",
}

# Raster image types an EPUB reading system must render without a fallback
EPUB_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})

# Pillow formats that are a flavour of a core type
_FORMAT_MIME_OVERRIDES = {
    "MPO": "image/jpeg",
}


def _new_asset_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class ImageAsset:
    """
    A single uploaded page image (immutable).

    Attributes:
        name: Original file name as supplied by the user
        mime_type: Mime type, e.g. "image/png"
        data: Raw image bytes (never base64)
        position: Position in upload order (0-indexed)
        id: Unique identifier, stable for the lifetime of the asset
        size: Byte size of the payload (defaults to len(data))

    Invariants:
        - mime_type starts with "image/"
        - size >= 0
        - position >= 0

    Example:
        >>> asset = ImageAsset(name="001.png", mime_type="image/png", data=b"...")
        >>> asset.extension
        'png'
    """

    name: str
    mime_type: str
    data: bytes
    position: int = 0
    id: str = field(default_factory=_new_asset_id)
    size: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate asset on construction."""
        if not self.mime_type.startswith("image/"):
            raise ValueError(f"mime_type must be an image type: {self.mime_type!r}")
        if self.position < 0:
            raise ValueError(f"position must be >= 0: {self.position}")
        if self.size is None:
            object.__setattr__(self, "size", len(self.data))
        elif self.size < 0:
            raise ValueError(f"size must be >= 0: {self.size}")

    @property
    def extension(self) -> str:
        """File extension for the archive entry (mime subtype, e.g. 'jpeg')."""
        subtype = self.mime_type.split("/", 1)[1].lower()
        return _EXTENSION_OVERRIDES.get(subtype, subtype)

    # ─────────────────────────────────────────────────────────────────────────
    # Constructors
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_path(cls, path: Path, *, position: int = 0) -> ImageAsset:
        """
        Load an image file from disk.

        The mime type comes from the decoded format, not the file suffix,
        so a mislabelled "photo.png" that is really a JPEG is stored as
        image/jpeg.

        Args:
            path: Image file path
            position: Position in upload order

        Returns:
            ImageAsset holding the file's bytes

        Raises:
            FileNotFoundError: If path doesn't exist
            ValueError: If the file is not a recognised image, is not a
                JPEG/PNG/GIF/WebP image, or is too large to decode safely
        """
        path = Path(path)
        data = path.read_bytes()
        mime_type = sniff_mime_type(data)
        if mime_type is None:
            raise ValueError(f"Not a recognised image file: {path}")
        if mime_type not in EPUB_IMAGE_TYPES:
            raise ValueError(f"Unsupported image type {mime_type}: {path}")
        return cls(name=path.name, mime_type=mime_type, data=data, position=position)

    @classmethod
    def from_data_url(cls, url: str, name: str, *, position: int = 0) -> ImageAsset:
        """
        Decode a base64 data URL (as produced by browser file readers).

        Args:
            url: "data:<mime>;base64,<payload>"
            name: Display name for the asset
            position: Position in upload order

        Raises:
            ValueError: If the URL is not a base64 image data URL or the
                payload is not valid base64
        """
        mime_type, data = decode_data_url(url)
        return cls(name=name, mime_type=mime_type, data=data, position=position)


def decode_data_url(url: str) -> tuple[str, bytes]:
    """
    Strip the data-URL transport prefix and base64-decode the payload.

    Returns:
        Tuple of (mime_type, raw bytes)

    Raises:
        ValueError: If the URL is malformed or the payload is not base64

    Example:
        >>> decode_data_url("data:image/gif;base64,R0lGODlh")
        ('image/gif', b'GIF89a')
    """
    match = _DATA_URL_RE.match(url)
    if not match or not match.group("mime"):
        raise ValueError("Not a base64 data URL")
    mime_type = match.group("mime").lower()
    payload = url[match.end():]
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
    return mime_type, data


def sniff_mime_type(data: bytes) -> Optional[str]:
    """
    Identify image bytes with Pillow; None if Pillow can't read them.

    Multi-picture JPEGs (MPO) are reported as image/jpeg.

    Raises:
        ValueError: If the declared dimensions exceed Pillow's
            decompression bomb limit
    """
    try:
        with Image.open(BytesIO(data)) as img:
            image_format = img.format
    except Image.DecompressionBombError as e:
        raise ValueError(f"Image too large: {e}") from e
    except (UnidentifiedImageError, OSError):
        return None
    if image_format is None:
        return None
    if image_format in _FORMAT_MIME_OVERRIDES:
        return _FORMAT_MIME_OVERRIDES[image_format]
    return Image.MIME.get(image_format, f"image/{image_format.lower()}")
