"""
Module: builder.output

Purpose:
    Serialize a paginated book into EPUB package files and write the
    archive.

Key Functions:
    - package_opf(), toc_ncx(), nav_xhtml(), toc_xhtml(), page_document()
    - stylesheet(): Package stylesheet
    - image_file(): Embedded image payload
    - write_epub(): Archive writer

Used By:
    - builder.controller
"""

from .documents import (
    MIMETYPE,
    PACKAGE_PATH,
    NCX_FILENAME,
    NAV_FILENAME,
    container_xml,
    package_opf,
    toc_ncx,
    nav_xhtml,
    toc_xhtml,
    cover_xhtml,
    back_cover_xhtml,
    page_xhtml,
    page_document,
)
from .stylesheet import STYLESHEET_PATH, stylesheet
from .images import CONTENT_ROOT, image_archive_path, image_file, verify_image
from .epub_writer import PackageFile, EpubArchive, write_epub, DEFAULT_COMPRESSION_LEVEL

__all__ = [
    "MIMETYPE",
    "PACKAGE_PATH",
    "NCX_FILENAME",
    "NAV_FILENAME",
    "container_xml",
    "package_opf",
    "toc_ncx",
    "nav_xhtml",
    "toc_xhtml",
    "cover_xhtml",
    "back_cover_xhtml",
    "page_xhtml",
    "page_document",
    "STYLESHEET_PATH",
    "stylesheet",
    "CONTENT_ROOT",
    "image_archive_path",
    "image_file",
    "verify_image",
    "PackageFile",
    "EpubArchive",
    "write_epub",
    "DEFAULT_COMPRESSION_LEVEL",
]
