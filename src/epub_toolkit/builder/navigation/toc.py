"""
Module: builder.navigation.toc

Purpose:
    Build the navigation model for the package: the ordered navigation map
    (serialized as toc.ncx and nav.xhtml) and the linear chapter index
    (serialized as toc.xhtml).

Key Functions:
    - build_navigation(): Main entry point
    - chapter_target(): Page document a chapter links to

Offset Rule:
    Chapter.page_index counts content images only. With a front cover the
    cover takes package page 1, so every chapter target moves up by one.
    The back cover comes after every content page and needs no shift.

Key Classes:
    - NavPoint: One entry of the navigation map
    - ChapterLink: One row of the chapter index page
    - NavigationModel: Both artifacts together

Dependencies:
    - core.models: Chapter
    - builder.layout.models: PageManifestEntry
    - builder.navigation.labels: Localized labels

Used By:
    - builder.controller
    - builder.output.documents
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from epub_toolkit.core.models import Chapter
from epub_toolkit.core.utils.text import padded

from ..layout.models import PageManifestEntry
from .labels import NavigationLabels, ENGLISH

logger = logging.getLogger(__name__)

TOC_PAGE_FILENAME = "toc.xhtml"


@dataclass(frozen=True)
class NavPoint:
    """
    Navigation map entry.

    Attributes:
        id: Element id ("navpoint-cover", "navpoint-chapter-<n>", ...)
        label: Display text (unescaped)
        src: Target document relative to OEBPS
        play_order: 1-based running order
    """
    id: str
    label: str
    src: str
    play_order: int


@dataclass(frozen=True)
class ChapterLink:
    """Chapter index row: title, target document, human page number."""
    title: str
    href: str
    page_number: int


@dataclass(frozen=True)
class NavigationModel:
    """
    Navigation artifacts for one build.

    Attributes:
        nav_points: Navigation map in package page order
        chapter_links: Rows of the chapter index page (empty if no page)
        has_toc_page: Whether toc.xhtml is emitted
    """
    nav_points: tuple[NavPoint, ...]
    chapter_links: tuple[ChapterLink, ...]
    has_toc_page: bool

    @property
    def targets(self) -> list[str]:
        return [point.src for point in self.nav_points]


def chapter_target(chapter: Chapter, has_front_cover: bool) -> str:
    """
    Page document for a chapter.

    Example:
        >>> chapter_target(Chapter("c1", "One", page_index=1), has_front_cover=True)
        'page_0003.xhtml'
    """
    adjusted_index = chapter.page_index + 1 if has_front_cover else chapter.page_index
    return f"page_{padded(adjusted_index + 1)}.xhtml"


def build_navigation(
    chapters: Sequence[Chapter],
    entries: Sequence[PageManifestEntry],
    *,
    enable_toc: bool,
    labels: NavigationLabels = ENGLISH,
) -> NavigationModel:
    """
    Build the navigation map and chapter index.

    Map order:
    1. Front cover (if present)
    2. Chapter index page (if emitted)
    3. One entry per chapter, or one per content page when there are
       no chapters
    4. Back cover (if present)

    The chapter index page is emitted only when chapters exist and
    enable_toc is set.

    Chapter indices are not range-checked here; validation happens before
    pagination (core.schemas.validator.validate_build_inputs). With
    validation disabled an out-of-range chapter produces a dangling link.

    Args:
        chapters: Chapters sorted by page_index
        entries: Full page manifest from paginate()
        enable_toc: Whether the user asked for a chapter index page
        labels: Localized fixed strings

    Returns:
        NavigationModel
    """
    has_front_cover = any(entry.is_cover for entry in entries)
    has_back_cover = any(entry.is_back_cover for entry in entries)
    has_toc_page = enable_toc and len(chapters) > 0
    content_pages = {entry.page_filename for entry in entries if entry.is_content}

    points: List[NavPoint] = []

    def add(point_id: str, label: str, src: str) -> None:
        points.append(NavPoint(point_id, label, src, play_order=len(points) + 1))

    if has_front_cover:
        add("navpoint-cover", labels.cover, "cover.xhtml")

    if has_toc_page:
        add("navpoint-toc", labels.toc, TOC_PAGE_FILENAME)

    chapter_links: List[ChapterLink] = []
    if chapters:
        for number, chapter in enumerate(chapters, start=1):
            target = chapter_target(chapter, has_front_cover)
            if target not in content_pages:
                logger.warning(
                    f"Chapter {chapter.id!r} targets {target}, which is not a content page"
                )
            add(f"navpoint-chapter-{number}", chapter.title, target)
            if has_toc_page:
                chapter_links.append(ChapterLink(chapter.title, target, chapter.page_number))
    else:
        for entry in entries:
            if entry.is_content:
                add(
                    f"navpoint-{entry.page_number}",
                    labels.page_label(entry.page_number),
                    entry.page_filename,
                )

    if has_back_cover:
        add("navpoint-back-cover", labels.back_cover, "back_cover.xhtml")

    return NavigationModel(
        nav_points=tuple(points),
        chapter_links=tuple(chapter_links),
        has_toc_page=has_toc_page,
    )
