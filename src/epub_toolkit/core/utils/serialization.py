"""
Serialization Utilities

To/from JSON for the book settings snapshot.

Settings files use snake_case keys mirroring BookMetadata. Cover images
are stored as file paths (relative to the settings file); everything else
maps one-to-one onto model fields. Calculated values (page_number on
chapters, resolved page size) are written for readability but ignored on
load.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from ..models.assets import ImageAsset
from ..models.layout import PageLayout, ReadingDirection
from ..models.metadata import BookMetadata, BookSize, Chapter
from ..schemas.validator import ValidationError, validate_settings


_TEXT_FIELDS = ("title", "author", "description", "publisher", "language")


# ─────────────────────────────────────────────────────────────────────────────
# BookMetadata Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_metadata(metadata: BookMetadata) -> dict[str, Any]:
    """
    Serialize BookMetadata to a dictionary.

    Cover assets are represented by their file name only; image bytes
    never go into settings files.
    """
    size = metadata.page_size
    return {
        "title": metadata.title,
        "author": metadata.author,
        "description": metadata.description,
        "publisher": metadata.publisher,
        "language": metadata.language,
        "page_direction": str(metadata.page_direction),
        "book_size": str(metadata.book_size),
        "custom_width": metadata.custom_width,
        "custom_height": metadata.custom_height,
        "page_size": {"width": size.width, "height": size.height},
        "front_cover": metadata.front_cover.name if metadata.front_cover else None,
        "back_cover": metadata.back_cover.name if metadata.back_cover else None,
        "enable_toc": metadata.enable_toc,
        "chapters": [chapter.to_dict() for chapter in metadata.chapters],
        "page_layouts": [layout.to_dict() for layout in metadata.page_layouts],
    }


def deserialize_metadata(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
    base_path: Path | None = None,
) -> BookMetadata:
    """
    Deserialize BookMetadata from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate the dict first
        strict: Use full JSON Schema validation (requires jsonschema)
        base_path: Directory that relative cover paths resolve against

    Returns:
        BookMetadata instance

    Raises:
        ValidationError: If the dict is invalid or a cover can't be loaded
    """
    if validate:
        validate_settings(data, strict=strict)

    kwargs: dict[str, Any] = {
        name: data[name] for name in _TEXT_FIELDS if data.get(name) is not None
    }

    try:
        return BookMetadata(
            **kwargs,
            page_direction=ReadingDirection(data.get("page_direction", "rtl")),
            book_size=BookSize(data.get("book_size", "kindle-standard")),
            custom_width=int(data.get("custom_width", 600)),
            custom_height=int(data.get("custom_height", 800)),
            front_cover=_load_cover(data.get("front_cover"), base_path, "front_cover"),
            back_cover=_load_cover(data.get("back_cover"), base_path, "back_cover"),
            enable_toc=bool(data.get("enable_toc", False)),
            chapters=tuple(Chapter.from_dict(c) for c in data.get("chapters", [])),
            page_layouts=tuple(PageLayout.from_dict(p) for p in data.get("page_layouts", [])),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid settings: {e}") from e


def _load_cover(value: Optional[str], base_path: Path | None, field_name: str) -> Optional[ImageAsset]:
    """Resolve a cover path and load it as an ImageAsset."""
    if not value:
        return None
    path = Path(value)
    if base_path is not None and not path.is_absolute():
        path = base_path / path
    try:
        return ImageAsset.from_path(path)
    except (OSError, ValueError) as e:
        raise ValidationError(f"Cannot load {field_name} image {path}: {e}", path=field_name) from e


# ─────────────────────────────────────────────────────────────────────────────
# File I/O
# ─────────────────────────────────────────────────────────────────────────────

def load_settings_json(path: Path, *, strict: bool = False) -> BookMetadata:
    """
    Load BookMetadata from a settings JSON file.

    Cover paths resolve relative to the file's directory.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {path}: {e}") from e
    return deserialize_metadata(data, strict=strict, base_path=path.parent)


def save_settings_json(metadata: BookMetadata, path: Path) -> None:
    """Save BookMetadata to a settings JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_metadata(metadata), f, indent=2, ensure_ascii=False)
