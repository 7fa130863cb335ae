"""
Module: builder.controller

Purpose:
    Orchestrate the complete package build pipeline.
    Validate → Paginate → Embed images → Page documents → Package
    documents → Finalize

Key Functions:
    - build_epub(): Synchronous entry point
    - synthesize_epub(): Async entry point (yields to the event loop
      between images and documents)

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Pipeline:
    Both entry points drive the same generator. It yields once per
    embedded image and per written document; the async entry point awaits
    between yields so a caller's event loop stays responsive. Phases run
    strictly in order and progress never goes backwards.

Dependencies:
    - builder.layout: Pagination and spread grouping
    - builder.navigation: Navigation model
    - builder.output: Documents and archive writer

Used By:
    - cli: build command
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator, List, Optional, Sequence

from epub_toolkit.core.models import BookMetadata, ImageAsset
from epub_toolkit.core.schemas import ValidationError, validate_build_inputs

from .config import BuilderConfig
from .errors import BuildError
from .layout import PageManifestEntry, SpreadPair, count_spreads, fit_page_layouts, paginate, resolve_spreads
from .navigation import NavigationLabels, NavigationModel, TOC_PAGE_FILENAME, build_navigation, labels_for
from .output import (
    CONTENT_ROOT,
    NAV_FILENAME,
    NCX_FILENAME,
    PACKAGE_PATH,
    STYLESHEET_PATH,
    EpubArchive,
    container_xml,
    image_file,
    nav_xhtml,
    package_opf,
    page_document,
    stylesheet,
    toc_ncx,
    toc_xhtml,
)
from .progress import (
    IMAGES_DONE,
    METADATA_DONE,
    PAGES_DONE,
    STARTED,
    STRUCTURE_CREATED,
    FINISHED,
    ProgressCallback,
    ProgressReporter,
)
from .timing import TimingLog, timed_phase

logger = logging.getLogger(__name__)

__all__ = ["BuildError", "BuildResult", "build_epub", "synthesize_epub"]


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        data: Finished package bytes
        entries: Page manifest the package was built from
        navigation: Navigation model (map + chapter index)
        spreads: Preview spread groups for the content pages
        metadata: Build metadata dictionary (counts, ids, timings)
        warnings: Any warnings during build
        output_path: Where the package was written (if requested)

    Example:
        >>> result = build_epub(images, BookMetadata(title="Sketches"))
        >>> print(f"{result.page_count} pages, {len(result.data)} bytes")
    """
    data: bytes
    entries: tuple[PageManifestEntry, ...]
    navigation: NavigationModel
    spreads: tuple[SpreadPair, ...]
    metadata: dict
    warnings: tuple[str, ...]
    output_path: Optional[Path] = None

    @property
    def page_count(self) -> int:
        return len(self.entries)


def build_epub(
    images: Sequence[ImageAsset],
    metadata: BookMetadata,
    config: Optional[BuilderConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> BuildResult:
    """
    Build a fixed-layout EPUB package from start to finish.

    Pipeline:
    1. Validate inputs (unless config.validate is False)
    2. Paginate covers and content images
    3. Embed every image payload (Pillow decode check first)
    4. Write one XHTML document per page, plus the chapter index page
    5. Write package documents (OPF, NCX, nav, stylesheet)
    6. Finalize the archive; write it to config.output_path if set

    Args:
        images: Content images in reading order
        metadata: Book settings snapshot
        config: Build options (defaults if None)
        on_progress: Called with a percentage in [0, 100], never decreasing

    Returns:
        BuildResult with the package bytes and build metadata

    Raises:
        BuildError: If any step fails; nothing is written in that case

    Example:
        >>> result = build_epub(images, metadata, BuilderConfig(output_path=Path("book.epub")))
        >>> result.output_path
        PosixPath('book.epub')
    """
    steps = _build_steps(images, metadata, config or BuilderConfig(), ProgressReporter(on_progress))
    while True:
        try:
            next(steps)
        except StopIteration as stop:
            return stop.value


async def synthesize_epub(
    images: Sequence[ImageAsset],
    metadata: BookMetadata,
    config: Optional[BuilderConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> BuildResult:
    """
    Async variant of build_epub().

    Same pipeline and result; hands control back to the event loop after
    each image and each document.
    """
    steps = _build_steps(images, metadata, config or BuilderConfig(), ProgressReporter(on_progress))
    while True:
        try:
            next(steps)
        except StopIteration as stop:
            return stop.value
        await asyncio.sleep(0)


# ─────────────────────────────────────────────────────────────────────────────
# Pipeline
# ─────────────────────────────────────────────────────────────────────────────

def _build_steps(
    images: Sequence[ImageAsset],
    metadata: BookMetadata,
    config: BuilderConfig,
    progress: ProgressReporter,
) -> Generator[None, None, BuildResult]:
    """Build pipeline as a generator; the return value is the BuildResult."""
    warnings: List[str] = []
    timings = TimingLog()
    start_time = time.perf_counter()

    logger.info(f"Starting build of {metadata.title!r} with {len(images)} images")
    progress.report(STARTED)

    # 1. Validate
    with timed_phase(timings, "validate"):
        if config.validate:
            try:
                validate_build_inputs(images, metadata)
            except ValidationError as e:
                raise BuildError(f"Invalid build inputs: {e}") from e
        else:
            warnings.extend(_dangling_chapter_warnings(images, metadata))

    # 2. Paginate and resolve navigation
    with timed_phase(timings, "layout"):
        entries = paginate(
            images,
            metadata.page_layouts,
            front_cover=metadata.front_cover,
            back_cover=metadata.back_cover,
        )
        labels = labels_for(metadata.language)
        navigation = build_navigation(
            metadata.chapters,
            entries,
            enable_toc=metadata.enable_toc,
            labels=labels,
        )
        spreads = resolve_spreads(
            fit_page_layouts(metadata.page_layouts, len(images), metadata.page_direction),
            metadata.page_direction,
        )

    archive = EpubArchive(compression_level=config.compression_level)
    try:
        archive.add("META-INF/container.xml", container_xml())
        logger.info(f"Paginated {len(entries)} pages")
        progress.report(STRUCTURE_CREATED)
        yield

        data = yield from _write_package(archive, entries, navigation, metadata, labels, config, progress, timings)
    finally:
        # No-op once finalized
        archive.discard()

    output_path = None
    if config.output_path is not None:
        output_path = _write_output(config.output_path, data)
        logger.info(f"Wrote package to {output_path}")

    elapsed = time.perf_counter() - start_time
    logger.info(f"Package build completed in {elapsed:.2f}s ({len(data)} bytes)")
    logger.debug(timings.summary())

    progress.report(FINISHED)

    return BuildResult(
        data=data,
        entries=entries,
        navigation=navigation,
        spreads=spreads,
        metadata=_build_metadata(metadata, config, entries, spreads, archive, timings),
        warnings=tuple(warnings),
        output_path=output_path,
    )


def _write_package(
    archive: EpubArchive,
    entries: Sequence[PageManifestEntry],
    navigation: NavigationModel,
    metadata: BookMetadata,
    labels: NavigationLabels,
    config: BuilderConfig,
    progress: ProgressReporter,
    timings: TimingLog,
) -> Generator[None, None, bytes]:
    """Embed images, write every document and finalize; returns the archive bytes."""
    # 3. Embed images
    for done, entry in enumerate(entries, start=1):
        with timed_phase(timings, "images"):
            path, data = image_file(entry, verify=config.verify_images)
            archive.add(path, data)
        progress.report_images(done, len(entries))
        yield

    logger.info(f"Embedded {len(entries)} images")
    progress.report(IMAGES_DONE)

    # 4. Page documents
    size = metadata.page_size
    for entry in entries:
        with timed_phase(timings, "pages"):
            archive.add(f"{CONTENT_ROOT}/{entry.page_filename}", page_document(entry, size, labels))
        yield

    if navigation.has_toc_page:
        with timed_phase(timings, "pages"):
            archive.add(f"{CONTENT_ROOT}/{TOC_PAGE_FILENAME}", toc_xhtml(metadata, navigation, labels))

    progress.report(PAGES_DONE)

    # 5. Package documents
    with timed_phase(timings, "package"):
        archive.add(
            PACKAGE_PATH,
            package_opf(
                metadata,
                entries,
                navigation,
                book_id=config.book_id,
                modified=config.modified,
            ),
        )
        archive.add(f"{CONTENT_ROOT}/{NCX_FILENAME}", toc_ncx(metadata, navigation, book_id=config.book_id))
        archive.add(f"{CONTENT_ROOT}/{NAV_FILENAME}", nav_xhtml(metadata, navigation, labels))
        archive.add(f"{CONTENT_ROOT}/{STYLESHEET_PATH}", stylesheet())

    progress.report(METADATA_DONE)
    yield

    # 6. Finalize
    with timed_phase(timings, "finalize"):
        return archive.finalize()


def _dangling_chapter_warnings(images: Sequence[ImageAsset], metadata: BookMetadata) -> list[str]:
    """Warnings for chapters that will produce dangling links (validation off)."""
    messages = []
    for chapter in metadata.chapters:
        if chapter.page_index >= len(images):
            message = (
                f"Chapter {chapter.id!r} points to page index {chapter.page_index} "
                f"but there are only {len(images)} images"
            )
            logger.warning(message)
            messages.append(message)
    return messages


def _write_output(path: Path, data: bytes) -> Path:
    """Write finished package bytes."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise BuildError(f"Failed to write package to {path}: {e}") from e
    return path


def _build_metadata(
    metadata: BookMetadata,
    config: BuilderConfig,
    entries: Sequence[PageManifestEntry],
    spreads: Sequence[SpreadPair],
    archive: EpubArchive,
    timings: TimingLog,
) -> dict:
    """
    Build metadata dictionary for the result.

    Example:
        {
            "title": "Sketches",
            "book_id": "7b0c...",
            "page_count": 12,
            "content_pages": 10,
            "spread_pages": 4,
            "spreads": {"single": 6, "spread": 2, "spread-single": 0},
            "files": ["mimetype", "META-INF/container.xml", ...],
            "timings": {"phase_timings": {...}, "total": 0.12, ...}
        }
    """
    size = metadata.page_size
    return {
        "title": metadata.title,
        "book_id": config.book_id,
        "modified": config.modified.astimezone(timezone.utc).isoformat(),
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "page_direction": str(metadata.page_direction),
        "page_size": {"width": size.width, "height": size.height},
        "page_count": len(entries),
        "content_pages": sum(1 for e in entries if e.is_content),
        "spread_pages": sum(1 for e in entries if e.spread),
        "spreads": count_spreads(spreads),
        "files": list(archive.paths),
        "timings": timings.to_dict(),
    }
