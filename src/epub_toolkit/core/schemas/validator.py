"""
Schema Validation Utilities

Validates book settings before they reach the builder.

Two entry points:
- `validate_settings()` checks a raw settings dict (JSON file / CLI input).
  Basic checks always run; strict mode adds full JSON Schema validation.
- `validate_build_inputs()` checks a BookMetadata snapshot against the
  image list it will be built with: things a single model can't know on
  its own, like whether a chapter points past the last image.

Both raise ValidationError with a dotted path to the offending field.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from ..models.assets import EPUB_IMAGE_TYPES, ImageAsset
from ..models.metadata import BookMetadata, MAX_PAGE_DIMENSION, MIN_PAGE_DIMENSION


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}

_DIRECTIONS = ("ltr", "rtl")
_PAGE_TYPES = ("cover", "toc", "content")


def _get_jsonschema():
    """Import jsonschema lazily."""
    import jsonschema
    return jsonschema


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when settings or build inputs fail validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


# ─────────────────────────────────────────────────────────────────────────────
# Settings dicts
# ─────────────────────────────────────────────────────────────────────────────

def validate_settings(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a settings dictionary.

    Args:
        data: Settings dictionary (snake_case keys, see settings.schema.json)
        strict: If True, also validate against the JSON Schema

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Settings must be a JSON object", path="")

    direction = data.get("page_direction", "rtl")
    if direction not in _DIRECTIONS:
        raise ValidationError(
            f"Invalid page_direction: {direction!r} (must be 'ltr' or 'rtl')",
            path="page_direction",
        )

    if data.get("book_size") == "custom":
        for name in ("custom_width", "custom_height"):
            value = data.get(name)
            if value is None:
                continue
            if not isinstance(value, int) or not (MIN_PAGE_DIMENSION <= value <= MAX_PAGE_DIMENSION):
                raise ValidationError(
                    f"Invalid {name}: {value!r} (must be {MIN_PAGE_DIMENSION}-{MAX_PAGE_DIMENSION})",
                    path=name,
                )

    chapters = data.get("chapters", [])
    if not isinstance(chapters, list):
        raise ValidationError("chapters must be a list", path="chapters")
    for i, chapter in enumerate(chapters):
        _validate_chapter(chapter, f"chapters[{i}]")

    layouts = data.get("page_layouts", [])
    if not isinstance(layouts, list):
        raise ValidationError("page_layouts must be a list", path="page_layouts")
    for i, layout in enumerate(layouts):
        _validate_layout(layout, f"page_layouts[{i}]")

    if strict:
        jsonschema = _get_jsonschema()
        schema = _load_schema("settings")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            ) from e


def _validate_chapter(data: Any, path: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError("chapter must be an object", path=path)
    required = ["id", "title", "page_index"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Chapter missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )
    page_index = data["page_index"]
    if not isinstance(page_index, int) or page_index < 0:
        raise ValidationError(
            f"Invalid page_index: {page_index!r} (must be non-negative integer)",
            path=f"{path}.page_index",
        )


def _validate_layout(data: Any, path: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError("page layout must be an object", path=path)
    page_type = data.get("type", "content")
    if page_type not in _PAGE_TYPES:
        raise ValidationError(f"Invalid page type: {page_type!r}", path=f"{path}.type")
    if "spread" in data and not isinstance(data["spread"], bool):
        raise ValidationError("spread must be a boolean", path=f"{path}.spread")


# ─────────────────────────────────────────────────────────────────────────────
# Build inputs
# ─────────────────────────────────────────────────────────────────────────────

def validate_build_inputs(images: Sequence[ImageAsset], metadata: BookMetadata) -> None:
    """
    Check a metadata snapshot against the images it will be built with.

    Rules:
    - At least one content image
    - No more page layouts than images (missing layouts default to content)
    - Every image and cover is JPEG, PNG, GIF or WebP
    - Every chapter page_index within [0, len(images))

    Raises:
        ValidationError: On the first violated rule
    """
    if not images:
        raise ValidationError("No images to build", path="images")

    if len(metadata.page_layouts) > len(images):
        raise ValidationError(
            f"{len(metadata.page_layouts)} page layouts for {len(images)} images",
            path="page_layouts",
        )

    assets = [*images, metadata.front_cover, metadata.back_cover]
    unsupported = [
        f"{asset.name}: {asset.mime_type}"
        for asset in assets
        if asset is not None and asset.mime_type not in EPUB_IMAGE_TYPES
    ]
    if unsupported:
        raise ValidationError(
            f"Unsupported image type ({unsupported[0]}); use JPEG, PNG, GIF or WebP",
            path="images",
            errors=unsupported,
        )

    errors = [
        f"Chapter {chapter.id!r} points to page index {chapter.page_index} "
        f"(valid range 0-{len(images) - 1})"
        for chapter in metadata.chapters
        if chapter.page_index >= len(images)
    ]
    if errors:
        raise ValidationError(errors[0], path="chapters", errors=errors)
