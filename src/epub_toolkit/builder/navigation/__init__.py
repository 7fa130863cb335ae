"""
Module: builder.navigation

Purpose:
    Navigation model for the package (navigation map and chapter index)
    plus the chapter list helpers the editing layer uses.

Key Functions:
    - build_navigation(): Navigation map + chapter index rows
    - chapter_target(): Page document a chapter points to
    - labels_for(): Localized fixed strings

Used By:
    - builder.controller
    - builder.output.documents
"""

from .labels import NavigationLabels, labels_for
from .toc import (
    NavPoint,
    ChapterLink,
    NavigationModel,
    TOC_PAGE_FILENAME,
    build_navigation,
    chapter_target,
)
from .chapters import add_chapter, remove_chapter, rename_chapter, auto_generate_chapters

__all__ = [
    "NavigationLabels",
    "labels_for",
    "NavPoint",
    "ChapterLink",
    "NavigationModel",
    "TOC_PAGE_FILENAME",
    "build_navigation",
    "chapter_target",
    "add_chapter",
    "remove_chapter",
    "rename_chapter",
    "auto_generate_chapters",
]
