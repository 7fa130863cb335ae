"""
Unit Tests for Schema Validation

Tests for the validator module.
"""

import pytest

from epub_toolkit.core.models import BookMetadata, Chapter, ImageAsset, PageLayout
from epub_toolkit.core.schemas.validator import (
    validate_settings,
    validate_build_inputs,
    ValidationError,
)


class TestValidateSettings:
    """Tests for validate_settings function."""

    @pytest.fixture
    def valid_settings(self) -> dict:
        return {
            "title": "Sketches",
            "author": "A. Artist",
            "language": "en",
            "page_direction": "ltr",
            "book_size": "custom",
            "custom_width": 800,
            "custom_height": 1200,
            "enable_toc": True,
            "chapters": [{"id": "c1", "title": "One", "page_index": 0}],
            "page_layouts": [{"type": "content", "spread": False}],
        }

    def test_validate_when_valid_data_then_no_error(self, valid_settings):
        validate_settings(valid_settings)
        validate_settings(valid_settings, strict=True)

    def test_validate_when_empty_dict_then_no_error(self):
        validate_settings({})

    def test_validate_when_not_a_dict_then_raises_error(self):
        with pytest.raises(ValidationError):
            validate_settings(["title"])

    def test_validate_when_invalid_direction_then_raises_error(self, valid_settings):
        valid_settings["page_direction"] = "ttb"
        with pytest.raises(ValidationError) as exc_info:
            validate_settings(valid_settings)
        assert exc_info.value.path == "page_direction"

    def test_validate_when_custom_width_too_small_then_raises_error(self, valid_settings):
        valid_settings["custom_width"] = 50
        with pytest.raises(ValidationError) as exc_info:
            validate_settings(valid_settings)
        assert exc_info.value.path == "custom_width"

    def test_validate_when_chapter_missing_fields_then_raises_error(self, valid_settings):
        valid_settings["chapters"] = [{"id": "c1"}]
        with pytest.raises(ValidationError) as exc_info:
            validate_settings(valid_settings)
        assert exc_info.value.path == "chapters[0]"
        assert "Missing field: title" in exc_info.value.errors

    def test_validate_when_negative_page_index_then_raises_error(self, valid_settings):
        valid_settings["chapters"][0]["page_index"] = -1
        with pytest.raises(ValidationError) as exc_info:
            validate_settings(valid_settings)
        assert exc_info.value.path == "chapters[0].page_index"

    def test_validate_when_invalid_page_type_then_raises_error(self, valid_settings):
        valid_settings["page_layouts"] = [{"type": "appendix"}]
        with pytest.raises(ValidationError) as exc_info:
            validate_settings(valid_settings)
        assert exc_info.value.path == "page_layouts[0].type"

    def test_validate_when_spread_not_bool_then_raises_error(self, valid_settings):
        valid_settings["page_layouts"] = [{"spread": "yes"}]
        with pytest.raises(ValidationError):
            validate_settings(valid_settings)

    def test_strict_when_unknown_book_size_then_raises_error(self, valid_settings):
        valid_settings["book_size"] = "tablet"
        # Basic checks don't know about book sizes
        validate_settings(valid_settings)
        with pytest.raises(ValidationError) as exc_info:
            validate_settings(valid_settings, strict=True)
        assert exc_info.value.path == "book_size"


class TestValidateBuildInputs:
    """Tests for validate_build_inputs function."""

    @pytest.fixture
    def two_images(self):
        return [
            ImageAsset(name=f"{i}.png", mime_type="image/png", data=b"x", position=i)
            for i in range(2)
        ]

    def test_validate_when_valid_inputs_then_no_error(self, two_images):
        meta = BookMetadata(
            chapters=(Chapter("c1", "One", 1),),
            page_layouts=(PageLayout(), PageLayout(spread=True)),
        )
        validate_build_inputs(two_images, meta)

    def test_validate_when_no_images_then_raises_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_build_inputs([], BookMetadata())
        assert exc_info.value.path == "images"

    def test_validate_when_too_many_layouts_then_raises_error(self, two_images):
        meta = BookMetadata(page_layouts=(PageLayout(),) * 3)
        with pytest.raises(ValidationError) as exc_info:
            validate_build_inputs(two_images, meta)
        assert exc_info.value.path == "page_layouts"

    def test_validate_when_fewer_layouts_then_no_error(self, two_images):
        validate_build_inputs(two_images, BookMetadata(page_layouts=(PageLayout(),)))

    def test_validate_when_chapter_past_last_image_then_raises_error(self, two_images):
        meta = BookMetadata(chapters=(Chapter("c1", "One", 0), Chapter("c2", "Two", 2)))
        with pytest.raises(ValidationError) as exc_info:
            validate_build_inputs(two_images, meta)
        assert exc_info.value.path == "chapters"
        assert len(exc_info.value.errors) == 1
        assert "'c2'" in exc_info.value.errors[0]

    def test_validate_when_image_not_epub_media_type_then_raises_error(self, two_images):
        scan = ImageAsset(name="scan.tiff", mime_type="image/tiff", data=b"x", position=2)
        with pytest.raises(ValidationError, match="Unsupported image type") as exc_info:
            validate_build_inputs([*two_images, scan], BookMetadata())
        assert exc_info.value.path == "images"
        assert exc_info.value.errors == ["scan.tiff: image/tiff"]

    def test_validate_when_cover_not_epub_media_type_then_raises_error(self, two_images):
        cover = ImageAsset(name="cover.bmp", mime_type="image/bmp", data=b"x")
        with pytest.raises(ValidationError, match="cover.bmp"):
            validate_build_inputs(two_images, BookMetadata(back_cover=cover))

    @pytest.mark.parametrize("mime_type", ["image/jpeg", "image/png", "image/gif", "image/webp"])
    def test_validate_when_core_media_type_then_no_error(self, mime_type):
        image = ImageAsset(name="page", mime_type=mime_type, data=b"x")
        validate_build_inputs([image], BookMetadata())
