"""
Module: builder.output.epub_writer

Purpose:
    Write the EPUB container: a ZIP archive whose first entry is the
    uncompressed ``mimetype`` file, followed by every other package file
    compressed with DEFLATE.

Key Classes:
    - PackageFile: One archive entry (path + content)
    - EpubArchive: Incremental in-memory writer (finalize() or discard())

Key Functions:
    - write_epub(): Write a complete list of files in one call

Archive layout:
    mimetype                     # stored, always first
    META-INF/container.xml
    OEBPS/content.opf
    OEBPS/toc.ncx
    OEBPS/nav.xhtml
    OEBPS/styles/style.css
    OEBPS/images/...
    OEBPS/*.xhtml

Dependencies:
    - zipfile (std)

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass
from io import BytesIO
from typing import Iterable, Optional, Union

from ..errors import BuildError
from .documents import MIMETYPE

logger = logging.getLogger(__name__)

DEFAULT_COMPRESSION_LEVEL = 9


@dataclass(frozen=True)
class PackageFile:
    """
    One archive entry.

    Attributes:
        path: Path inside the archive ("OEBPS/content.opf")
        content: Text (encoded as UTF-8) or raw bytes
    """
    path: str
    content: Union[str, bytes]

    @property
    def data(self) -> bytes:
        if isinstance(self.content, str):
            return self.content.encode("utf-8")
        return self.content


class EpubArchive:
    """
    In-memory EPUB archive writer.

    The mimetype entry is written on construction, so it is always the
    first entry. The buffer is private until finalize() returns its bytes;
    a failed write leaves nothing behind.

    Example:
        >>> archive = EpubArchive()
        >>> archive.add("META-INF/container.xml", container_xml())
        >>> data = archive.finalize()
    """

    def __init__(self, *, compression_level: int = DEFAULT_COMPRESSION_LEVEL) -> None:
        if not 1 <= compression_level <= 9:
            raise ValueError(f"compression_level must be 1-9: {compression_level}")
        self._compression_level = compression_level
        self._buffer = BytesIO()
        self._zip: Optional[zipfile.ZipFile] = zipfile.ZipFile(self._buffer, "w")
        self._paths: list[str] = []
        self._write(MIMETYPE.encode("ascii"), "mimetype", zipfile.ZIP_STORED)

    @property
    def paths(self) -> tuple[str, ...]:
        """Entry paths in write order."""
        return tuple(self._paths)

    def add(self, path: str, content: Union[str, bytes]) -> None:
        """Add one compressed entry."""
        data = content.encode("utf-8") if isinstance(content, str) else content
        self._write(data, path, zipfile.ZIP_DEFLATED)

    def add_file(self, package_file: PackageFile) -> None:
        self.add(package_file.path, package_file.data)

    def finalize(self) -> bytes:
        """
        Close the archive and return its bytes.

        Raises:
            BuildError: If the archive can't be closed
        """
        if self._zip is None:
            raise BuildError("Archive already finalized")
        try:
            self._zip.close()
        except (OSError, ValueError, zipfile.BadZipFile) as e:
            raise BuildError(f"Failed to finalize archive: {e}") from e
        finally:
            self._zip = None
        logger.debug(f"Finalized archive with {len(self._paths)} entries")
        return self._buffer.getvalue()

    def discard(self) -> None:
        """Close an unfinished archive and drop its buffer. No-op after finalize()."""
        if self._zip is None:
            return
        zip_file, self._zip = self._zip, None
        try:
            zip_file.close()
        except (OSError, ValueError, zipfile.BadZipFile) as e:
            logger.debug(f"Ignoring error while discarding archive: {e}")
        self._buffer = BytesIO()
        logger.debug(f"Discarded archive after {len(self._paths)} entries")

    def _write(self, data: bytes, path: str, compress_type: int) -> None:
        if self._zip is None:
            raise BuildError(f"Cannot write {path}: archive already finalized")
        if path in self._paths:
            raise BuildError(f"Duplicate archive entry: {path}")

        info = zipfile.ZipInfo(path, date_time=(1980, 1, 1, 0, 0, 0))
        info.compress_type = compress_type
        info.external_attr = 0o644 << 16
        try:
            if compress_type == zipfile.ZIP_STORED:
                self._zip.writestr(info, data)
            else:
                self._zip.writestr(info, data, compresslevel=self._compression_level)
        except (OSError, ValueError, zipfile.BadZipFile) as e:
            raise BuildError(f"Failed to write {path}: {e}") from e
        self._paths.append(path)


def write_epub(
    files: Iterable[PackageFile],
    *,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL,
) -> bytes:
    """
    Write a complete EPUB archive.

    Args:
        files: Package files in archive order (without mimetype; it is
            always written first)
        compression_level: DEFLATE level 1-9

    Returns:
        Archive bytes

    Raises:
        BuildError: If any entry can't be written
    """
    archive = EpubArchive(compression_level=compression_level)
    try:
        for package_file in files:
            archive.add_file(package_file)
        return archive.finalize()
    finally:
        archive.discard()
