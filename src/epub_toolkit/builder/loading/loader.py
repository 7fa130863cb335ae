"""
Module: builder.loading.loader

Purpose:
    Intake for the builder: turn file paths, directories and data URLs
    into ImageAssets in reading order.

Key Functions:
    - load_images(): Load images from files and directories
    - load_data_urls(): Decode (name, data URL) pairs
    - discover_images(): Find image files in a directory
    - natural_sort_key(): Numeric-aware file name ordering

Key Classes:
    - LoaderError: Exception for loading failures

Dependencies:
    - pathlib (std)
    - core.models: ImageAsset (Pillow-backed format sniffing)

Used By:
    - cli: build / spreads commands
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

from epub_toolkit.core.models import ImageAsset

logger = logging.getLogger(__name__)

MAX_IMAGES = 500

IMAGE_SUFFIXES = frozenset({
    ".jpg", ".jpeg", ".png", ".gif", ".webp",
})

_DIGITS_RE = re.compile(r"(\d+)")


class LoaderError(Exception):
    """Error loading images."""
    pass


def natural_sort_key(name: str) -> tuple:
    """
    Sort key that compares digit runs numerically.

    Example:
        >>> sorted(["p10.png", "p2.png", "p1.png"], key=natural_sort_key)
        ['p1.png', 'p2.png', 'p10.png']
    """
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part.lower())
        for part in _DIGITS_RE.split(name)
        if part
    )


def discover_images(directory: Path) -> List[Path]:
    """
    Image files directly inside a directory, naturally sorted by name.

    Hidden files and non-image suffixes are skipped.
    """
    if not directory.is_dir():
        raise LoaderError(f"Not a directory: {directory}")

    found = [
        path for path in directory.iterdir()
        if path.is_file()
        and not path.name.startswith(".")
        and path.suffix.lower() in IMAGE_SUFFIXES
    ]
    found.sort(key=lambda p: natural_sort_key(p.name))
    logger.debug(f"Found {len(found)} images in {directory}")
    return found


def _expand(paths: Iterable[Union[str, Path]]) -> List[Path]:
    expanded: List[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            expanded.extend(discover_images(path))
        elif path.exists():
            expanded.append(path)
        else:
            raise LoaderError(f"Image path does not exist: {path}")
    return expanded


def load_images(
    paths: Sequence[Union[str, Path]],
    *,
    max_images: int = MAX_IMAGES,
) -> List[ImageAsset]:
    """
    Load images in reading order.

    Directories expand to their image files (natural order); explicit
    file arguments keep the order they were given in.

    Args:
        paths: Files and/or directories
        max_images: Upper bound on the number of images

    Returns:
        ImageAssets with position set to their index

    Raises:
        LoaderError: If a path is missing, a file isn't a JPEG/PNG/GIF/WebP
            image (or is too large to decode safely), nothing
            was found, or there are more than max_images images

    Example:
        >>> images = load_images([Path("scans/")])
        >>> [img.name for img in images[:3]]
        ['001.png', '002.png', '010.png']
    """
    files = _expand(paths)

    if not files:
        raise LoaderError("No images found")
    if len(files) > max_images:
        raise LoaderError(f"Too many images: {len(files)} (maximum {max_images})")

    images: List[ImageAsset] = []
    for position, path in enumerate(files):
        try:
            images.append(ImageAsset.from_path(path, position=position))
        except (OSError, ValueError) as e:
            raise LoaderError(f"Failed to load {path}: {e}") from e

    logger.info(f"Loaded {len(images)} images")
    return images


def load_data_urls(
    items: Sequence[Tuple[str, str]],
    *,
    max_images: int = MAX_IMAGES,
) -> List[ImageAsset]:
    """
    Decode (name, data URL) pairs as produced by browser file readers.

    Raises:
        LoaderError: If a URL can't be decoded or there are too many items
    """
    if len(items) > max_images:
        raise LoaderError(f"Too many images: {len(items)} (maximum {max_images})")

    images: List[ImageAsset] = []
    for position, (name, url) in enumerate(items):
        try:
            images.append(ImageAsset.from_data_url(url, name, position=position))
        except ValueError as e:
            raise LoaderError(f"Failed to decode {name}: {e}") from e
    return images
