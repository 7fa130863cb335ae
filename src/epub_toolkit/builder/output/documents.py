"""
Module: builder.output.documents

Purpose:
    Serialize the page manifest and book metadata into the text documents
    of an EPUB 3 fixed-layout package. Every function is pure: same inputs,
    same text.

Key Functions:
    - container_xml(): META-INF/container.xml
    - package_opf(): OEBPS/content.opf (metadata, manifest, spine)
    - toc_ncx(): OEBPS/toc.ncx (legacy navigation map)
    - nav_xhtml(): OEBPS/nav.xhtml (EPUB 3 navigation document)
    - page_document(): One XHTML page per manifest entry
    - toc_xhtml(): OEBPS/toc.xhtml (chapter index page)

Escaping:
    Every user-supplied string (title, author, description, publisher,
    language, chapter titles) goes through escape_xml() before it is
    embedded. Fixed strings and generated ids/paths do not.

Dependencies:
    - core.utils.text: escape_xml
    - builder.layout: PageManifestEntry, spread_property
    - builder.navigation: NavigationModel, NavigationLabels

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Sequence

from epub_toolkit.core.models import BookMetadata, PageSize
from epub_toolkit.core.utils.text import escape_xml

from ..layout.models import PageManifestEntry
from ..layout.roles import spread_property
from ..navigation.labels import NavigationLabels
from ..navigation.toc import NavigationModel, TOC_PAGE_FILENAME
from .stylesheet import STYLESHEET_PATH

MIMETYPE = "application/epub+zip"
PACKAGE_PATH = "OEBPS/content.opf"
NCX_FILENAME = "toc.ncx"
NAV_FILENAME = "nav.xhtml"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
XHTML_DOCTYPE = (
    '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.1//EN" '
    '"http://www.w3.org/TR/xhtml11/DTD/xhtml11.dtd">'
)


# ─────────────────────────────────────────────────────────────────────────────
# Container
# ─────────────────────────────────────────────────────────────────────────────

def container_xml() -> str:
    """Fixed pointer from META-INF to the package document."""
    return f"""{XML_DECLARATION}
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{PACKAGE_PATH}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>"""


# ─────────────────────────────────────────────────────────────────────────────
# Package document
# ─────────────────────────────────────────────────────────────────────────────

def package_opf(
    metadata: BookMetadata,
    entries: Sequence[PageManifestEntry],
    navigation: NavigationModel,
    *,
    book_id: str,
    modified: datetime,
) -> str:
    """
    Build content.opf.

    Manifest: ncx, stylesheet, nav document, chapter index page (if any),
    one image item and one page item per entry.
    Spine: cover page, chapter index page, content pages, back cover page.
    Content pages flagged as spreads carry page-spread-left/right, decided
    by index parity (builder.layout.roles).

    Args:
        metadata: Book settings snapshot
        entries: Page manifest from paginate()
        navigation: Navigation model (decides whether toc.xhtml exists)
        book_id: Unique identifier (UUID string)
        modified: Build timestamp

    Returns:
        Package document text
    """
    # Naive timestamps are taken as UTC
    modified_utc = modified.astimezone(timezone.utc) if modified.tzinfo else modified.replace(tzinfo=timezone.utc)
    direction = str(metadata.page_direction)
    has_front_cover = any(entry.is_cover for entry in entries)

    meta_lines = [
        f'    <dc:identifier id="BookId">urn:uuid:{escape_xml(book_id)}</dc:identifier>',
        f"    <dc:title>{escape_xml(metadata.title)}</dc:title>",
        f"    <dc:creator>{escape_xml(metadata.author)}</dc:creator>",
        f"    <dc:language>{escape_xml(metadata.language)}</dc:language>",
        f"    <dc:publisher>{escape_xml(metadata.publisher)}</dc:publisher>",
        f"    <dc:description>{escape_xml(metadata.description)}</dc:description>",
        f"    <dc:date>{modified_utc.date().isoformat()}</dc:date>",
        f'    <meta property="dcterms:modified">{modified_utc.strftime("%Y-%m-%dT%H:%M:%SZ")}</meta>',
    ]
    if has_front_cover:
        meta_lines.append('    <meta name="cover" content="cover"/>')
    if metadata.is_rtl:
        meta_lines.append('    <meta property="page-progression-direction">rtl</meta>')
    meta_lines.extend([
        '    <meta property="rendition:layout">pre-paginated</meta>',
        '    <meta property="rendition:orientation">auto</meta>',
        '    <meta property="rendition:spread">auto</meta>',
    ])

    manifest_lines = [
        f'    <item id="ncx" href="{NCX_FILENAME}" media-type="application/x-dtbncx+xml"/>',
        f'    <item id="css" href="{STYLESHEET_PATH}" media-type="text/css"/>',
        f'    <item id="nav" href="{NAV_FILENAME}" media-type="application/xhtml+xml" properties="nav"/>',
    ]
    if navigation.has_toc_page:
        manifest_lines.append(
            f'    <item id="toc-page" href="{TOC_PAGE_FILENAME}" media-type="application/xhtml+xml"/>'
        )
    for entry in entries:
        properties = ' properties="cover-image"' if entry.is_cover else ""
        manifest_lines.append(
            f'    <item id="{entry.id}" href="{entry.href}" media-type="{entry.media_type}"{properties}/>'
        )
    for entry in entries:
        manifest_lines.append(
            f'    <item id="{entry.page_id}" href="{entry.page_filename}" media-type="application/xhtml+xml"/>'
        )

    spine_lines: List[str] = []
    for entry in entries:
        if entry.is_cover:
            spine_lines.append(f'    <itemref idref="{entry.page_id}"/>')
    if navigation.has_toc_page:
        spine_lines.append('    <itemref idref="toc-page"/>')
    for entry in entries:
        if not entry.is_content:
            continue
        prop = spread_property(entry, metadata.page_direction)
        properties = f' properties="{prop}"' if prop else ""
        spine_lines.append(f'    <itemref idref="{entry.page_id}"{properties}/>')
    for entry in entries:
        if entry.is_back_cover:
            spine_lines.append(f'    <itemref idref="{entry.page_id}"/>')

    newline = "\n"
    return f"""{XML_DECLARATION}
<package xmlns="http://www.idpf.org/2007/opf" unique-identifier="BookId" version="3.0" prefix="rendition: http://www.idpf.org/vocab/rendition/#">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
{newline.join(meta_lines)}
  </metadata>
  <manifest>
{newline.join(manifest_lines)}
  </manifest>
  <spine toc="ncx" page-progression-direction="{direction}">
{newline.join(spine_lines)}
  </spine>
</package>"""


# ─────────────────────────────────────────────────────────────────────────────
# Navigation documents
# ─────────────────────────────────────────────────────────────────────────────

def toc_ncx(metadata: BookMetadata, navigation: NavigationModel, *, book_id: str) -> str:
    """Legacy NCX navigation map, one navPoint per navigation entry."""
    nav_points = "\n".join(
        f"""    <navPoint id="{escape_xml(point.id)}" playOrder="{point.play_order}">
      <navLabel>
        <text>{escape_xml(point.label)}</text>
      </navLabel>
      <content src="{point.src}"/>
    </navPoint>"""
        for point in navigation.nav_points
    )
    return f"""{XML_DECLARATION}
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <head>
    <meta name="dtb:uid" content="urn:uuid:{escape_xml(book_id)}"/>
    <meta name="dtb:depth" content="1"/>
    <meta name="dtb:totalPageCount" content="0"/>
    <meta name="dtb:maxPageNumber" content="0"/>
  </head>
  <docTitle>
    <text>{escape_xml(metadata.title)}</text>
  </docTitle>
  <navMap>
{nav_points}
  </navMap>
</ncx>"""


def nav_xhtml(metadata: BookMetadata, navigation: NavigationModel, labels: NavigationLabels) -> str:
    """EPUB 3 navigation document listing the same entries as the NCX."""
    items = "\n".join(
        f'        <li><a href="{point.src}">{escape_xml(point.label)}</a></li>'
        for point in navigation.nav_points
    )
    language = escape_xml(metadata.language)
    return f"""{XML_DECLARATION}
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops" xml:lang="{language}" lang="{language}">
<head>
  <meta charset="UTF-8"/>
  <title>{escape_xml(metadata.title)}</title>
</head>
<body>
  <nav epub:type="toc" id="toc">
    <h1>{escape_xml(labels.toc)}</h1>
    <ol>
{items}
    </ol>
  </nav>
</body>
</html>"""


def toc_xhtml(metadata: BookMetadata, navigation: NavigationModel, labels: NavigationLabels) -> str:
    """Linear chapter index page (toc.xhtml)."""
    links = "\n".join(
        f"""      <li class="toc-item">
        <a href="{link.href}" class="toc-link">
          <span class="toc-title">{escape_xml(link.title)}</span>
          <span class="toc-dots"></span>
          <span class="toc-page-number">{link.page_number}</span>
        </a>
      </li>"""
        for link in navigation.chapter_links
    )
    return f"""{XML_DECLARATION}
{XHTML_DOCTYPE}
<html xmlns="http://www.w3.org/1999/xhtml">
<head>
  <meta http-equiv="Content-Type" content="text/html;charset=UTF-8"/>
  <title>{escape_xml(labels.toc)}</title>
  <link rel="stylesheet" type="text/css" href="{STYLESHEET_PATH}"/>
</head>
<body class="toc-page">
  <div class="toc-container">
    <div class="toc-nav">
      <div class="toc-header">
        <h1 class="toc-title-main">{escape_xml(metadata.title)}</h1>
        <div class="toc-subtitle">{escape_xml(labels.toc)}</div>
        <div class="toc-decoration"></div>
      </div>
      <ol class="toc-list">
{links}
      </ol>
      <div class="toc-footer">
        <div class="toc-author">{escape_xml(labels.author_prefix)}{escape_xml(metadata.author)}</div>
        <div class="toc-publisher">{escape_xml(metadata.publisher)}</div>
      </div>
    </div>
  </div>
</body>
</html>"""


# ─────────────────────────────────────────────────────────────────────────────
# Page documents
# ─────────────────────────────────────────────────────────────────────────────

def _image_page(
    *,
    title: str,
    body_class: str,
    container_class: str,
    image_class: str,
    href: str,
    size: PageSize,
) -> str:
    return f"""{XML_DECLARATION}
{XHTML_DOCTYPE}
<html xmlns="http://www.w3.org/1999/xhtml">
<head>
  <meta http-equiv="Content-Type" content="text/html;charset=UTF-8"/>
  <title>{escape_xml(title)}</title>
  <link rel="stylesheet" type="text/css" href="{STYLESHEET_PATH}"/>
  <meta name="viewport" content="width={size.width},height={size.height}"/>
</head>
<body class="{body_class}">
  <div class="{container_class}">
    <img src="{href}" alt="{escape_xml(title)}" class="{image_class}"/>
  </div>
</body>
</html>"""


def cover_xhtml(entry: PageManifestEntry, size: PageSize, labels: NavigationLabels) -> str:
    return _image_page(
        title=labels.cover,
        body_class="cover-page",
        container_class="page-container",
        image_class="cover-image",
        href=entry.href,
        size=size,
    )


def back_cover_xhtml(entry: PageManifestEntry, size: PageSize, labels: NavigationLabels) -> str:
    return _image_page(
        title=labels.back_cover,
        body_class="back-cover-page",
        container_class="page-container",
        image_class="back-cover-image",
        href=entry.href,
        size=size,
    )


def page_xhtml(entry: PageManifestEntry, size: PageSize, labels: NavigationLabels) -> str:
    """Content page; spread pages get the spread-page class on every level."""
    spread_class = " spread-page" if entry.spread else ""
    return _image_page(
        title=labels.page_label(entry.page_number),
        body_class=f"content-page{spread_class}",
        container_class=f"page-container{spread_class}",
        image_class=f"page-image{spread_class}",
        href=entry.href,
        size=size,
    )


def page_document(entry: PageManifestEntry, size: PageSize, labels: NavigationLabels) -> str:
    """XHTML document for any manifest entry."""
    if entry.is_cover:
        return cover_xhtml(entry, size, labels)
    if entry.is_back_cover:
        return back_cover_xhtml(entry, size, labels)
    return page_xhtml(entry, size, labels)
