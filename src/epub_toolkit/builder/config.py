"""
Module: builder.config

Purpose:
    Configuration dataclass for the build pipeline. Immutable
    configuration with validation on construction. Book content lives in
    BookMetadata; this only controls how a build runs.

Key Classes:
    - BuilderConfig: Build options

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.controller: Main build controller
    - cli
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


def _new_book_id() -> str:
    return str(uuid.uuid4())


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for building a package (immutable).

    Attributes:
        output_path: Also write the package here after a successful build
        compression_level: DEFLATE level for every entry except mimetype
        validate: Check inputs before building (chapter ranges, layout
            count). When False, out-of-range chapters produce dangling
            navigation links instead of an error.
        verify_images: Decode-check every image with Pillow before embedding
        book_id: Package unique identifier (UUID string)
        modified: Timestamp written as dc:date / dcterms:modified
            (timezone-aware; converted to UTC)

    Example:
        >>> config = BuilderConfig(output_path=Path("out/book.epub"))
        >>> config.compression_level
        9
    """

    # Output
    output_path: Optional[Path] = None
    compression_level: int = 9

    # Checks
    validate: bool = True
    verify_images: bool = True

    # Package identity
    book_id: str = field(default_factory=_new_book_id)
    modified: datetime = field(default_factory=_now_utc)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not 1 <= self.compression_level <= 9:
            raise ValueError(f"compression_level must be 1-9: {self.compression_level}")
        if not self.book_id:
            raise ValueError("book_id must not be empty")
        if self.modified.tzinfo is None:
            raise ValueError("modified must be timezone-aware (e.g. datetime.now(timezone.utc))")
        if self.output_path is not None and not isinstance(self.output_path, Path):
            object.__setattr__(self, "output_path", Path(self.output_path))
