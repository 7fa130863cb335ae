"""
Unit tests for package document serialization.

Documents are parsed back with ElementTree to check structure rather
than comparing raw text.
"""

import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone

import pytest

from epub_toolkit.builder.layout import paginate
from epub_toolkit.builder.navigation import build_navigation
from epub_toolkit.builder.navigation.labels import ENGLISH, JAPANESE
from epub_toolkit.builder.output import (
    container_xml,
    nav_xhtml,
    package_opf,
    page_document,
    stylesheet,
    toc_ncx,
    toc_xhtml,
)
from epub_toolkit.core.models import BookMetadata, Chapter, PageLayout, PageSize, ReadingDirection

OPF = "{http://www.idpf.org/2007/opf}"
DC = "{http://purl.org/dc/elements/1.1/}"
NCX = "{http://www.daisy.org/z3986/2005/ncx/}"
XHTML = "{http://www.w3.org/1999/xhtml}"

BOOK_ID = "0b5c4bc6-7d3e-4a4f-9a52-2f1f1c1d9e10"
MODIFIED = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


def parse(text: str) -> ET.Element:
    # The XHTML 1.1 DOCTYPE has an external DTD ElementTree won't fetch
    return ET.fromstring(text.encode("utf-8"))


def build_opf(metadata, images, **cover_kwargs):
    entries = paginate(images, metadata.page_layouts, **cover_kwargs)
    navigation = build_navigation(metadata.chapters, entries, enable_toc=metadata.enable_toc)
    text = package_opf(metadata, entries, navigation, book_id=BOOK_ID, modified=MODIFIED)
    return parse(text), entries, navigation


def spine_refs(opf: ET.Element) -> list[tuple[str, str | None]]:
    return [
        (ref.get("idref"), ref.get("properties"))
        for ref in opf.find(f"{OPF}spine")
    ]


class TestContainer:

    def test_points_at_package_document(self):
        root = parse(container_xml())
        rootfile = root.find(".//{urn:oasis:names:tc:opendocument:xmlns:container}rootfile")
        assert rootfile.get("full-path") == "OEBPS/content.opf"
        assert rootfile.get("media-type") == "application/oebps-package+xml"


class TestPackageOpf:

    def test_ltr_without_covers_or_spreads(self, images):
        # Arrange
        meta = BookMetadata(title="Plain", page_direction=ReadingDirection.LTR)

        # Act
        opf, _, _ = build_opf(meta, images)

        # Assert
        spine = opf.find(f"{OPF}spine")
        assert spine.get("page-progression-direction") == "ltr"
        assert spine.get("toc") == "ncx"
        assert spine_refs(opf) == [("page1", None), ("page2", None), ("page3", None)]
        metas = opf.findall(f"{OPF}metadata/{OPF}meta")
        assert not any(m.get("name") == "cover" for m in metas)
        assert not any(m.get("property") == "page-progression-direction" for m in metas)
        assert "page-spread" not in ET.tostring(opf, encoding="unicode")

    def test_bibliographic_metadata(self, images):
        meta = BookMetadata(title="T", author="A", language="en", publisher="P", description="D")
        opf, _, _ = build_opf(meta, images)
        md = opf.find(f"{OPF}metadata")

        assert md.find(f"{DC}identifier").text == f"urn:uuid:{BOOK_ID}"
        assert md.find(f"{DC}title").text == "T"
        assert md.find(f"{DC}creator").text == "A"
        assert md.find(f"{DC}language").text == "en"
        assert md.find(f"{DC}publisher").text == "P"
        assert md.find(f"{DC}description").text == "D"
        assert md.find(f"{DC}date").text == "2024-05-01"
        modified = [m.text for m in md.findall(f"{OPF}meta") if m.get("property") == "dcterms:modified"]
        assert modified == ["2024-05-01T12:30:00Z"]

    def test_fixed_layout_hints(self, images):
        opf, _, _ = build_opf(BookMetadata(), images)
        props = {
            m.get("property"): m.text
            for m in opf.findall(f"{OPF}metadata/{OPF}meta")
            if m.get("property")
        }
        assert props["rendition:layout"] == "pre-paginated"
        assert props["rendition:orientation"] == "auto"
        assert props["rendition:spread"] == "auto"
        # rtl is the default direction
        assert props["page-progression-direction"] == "rtl"

    def test_front_cover_declared(self, images, make_asset):
        opf, _, _ = build_opf(BookMetadata(), images, front_cover=make_asset("cover.png"))

        metas = opf.findall(f"{OPF}metadata/{OPF}meta")
        assert any(m.get("name") == "cover" and m.get("content") == "cover" for m in metas)
        items = {i.get("id"): i for i in opf.find(f"{OPF}manifest")}
        assert items["cover"].get("properties") == "cover-image"
        assert items["cover"].get("href") == "images/cover.png"
        assert spine_refs(opf)[0] == ("cover-page", None)

    def test_manifest_lists_every_file(self, images, make_asset):
        meta = BookMetadata(enable_toc=True, chapters=(Chapter("c1", "One", 0),))
        opf, entries, _ = build_opf(meta, images, back_cover=make_asset("back.png"))

        hrefs = [i.get("href") for i in opf.find(f"{OPF}manifest")]
        assert hrefs[:4] == ["toc.ncx", "styles/style.css", "nav.xhtml", "toc.xhtml"]
        for entry in entries:
            assert entry.href in hrefs
            assert entry.page_filename in hrefs
        nav_item = opf.find(f"{OPF}manifest/{OPF}item[@id='nav']")
        assert nav_item.get("properties") == "nav"

    def test_spine_order_with_toc_and_covers(self, images, make_asset):
        meta = BookMetadata(enable_toc=True, chapters=(Chapter("c1", "One", 0),))
        opf, _, _ = build_opf(
            meta, images,
            front_cover=make_asset("cover.png"),
            back_cover=make_asset("back.png"),
        )
        assert [idref for idref, _ in spine_refs(opf)] == [
            "cover-page", "toc-page", "page2", "page3", "page4", "back-cover-page",
        ]

    def test_spread_properties_on_spine_only(self, images):
        meta = BookMetadata(page_layouts=(PageLayout(), PageLayout(spread=True), PageLayout(spread=True)))
        opf, _, _ = build_opf(meta, images)

        assert spine_refs(opf) == [
            ("page1", None),
            ("page2", "page-spread-left"),
            ("page3", "page-spread-right"),
        ]
        manifest_props = {i.get("properties") for i in opf.find(f"{OPF}manifest")}
        assert "page-spread-left" not in manifest_props

    def test_user_text_escaped(self, images):
        meta = BookMetadata(title='Tom & "Jerry" <1>', author="O'Brien")
        opf, _, _ = build_opf(meta, images)
        md = opf.find(f"{OPF}metadata")
        assert md.find(f"{DC}title").text == 'Tom & "Jerry" <1>'
        assert md.find(f"{DC}creator").text == "O'Brien"

    def test_modified_converted_to_utc(self, images):
        entries = paginate(images, [])
        navigation = build_navigation((), entries, enable_toc=False)
        tokyo = timezone(timedelta(hours=9))

        aware = package_opf(
            BookMetadata(), entries, navigation,
            book_id=BOOK_ID, modified=datetime(2024, 5, 1, 21, 30, tzinfo=tokyo),
        )
        naive = package_opf(
            BookMetadata(), entries, navigation,
            book_id=BOOK_ID, modified=datetime(2024, 5, 1, 12, 30),
        )

        for text in (aware, naive):
            assert '<meta property="dcterms:modified">2024-05-01T12:30:00Z</meta>' in text


class TestNavigationDocuments:

    @pytest.fixture
    def nav_setup(self, images, make_asset):
        meta = BookMetadata(
            title="A & B",
            enable_toc=True,
            chapters=(Chapter("c1", "Start <here>", 0), Chapter("c2", "Q&A", 2)),
        )
        entries = paginate(images, [], front_cover=make_asset("cover.png"))
        navigation = build_navigation(meta.chapters, entries, enable_toc=True)
        return meta, navigation

    def test_ncx_nav_points(self, nav_setup):
        meta, navigation = nav_setup
        root = parse(toc_ncx(meta, navigation, book_id=BOOK_ID))

        points = root.findall(f"{NCX}navMap/{NCX}navPoint")
        assert [p.get("playOrder") for p in points] == ["1", "2", "3", "4"]
        assert [p.find(f"{NCX}content").get("src") for p in points] == [
            "cover.xhtml", "toc.xhtml", "page_0002.xhtml", "page_0004.xhtml",
        ]
        labels = [p.find(f"{NCX}navLabel/{NCX}text").text for p in points]
        assert labels[2:] == ["Start <here>", "Q&A"]
        assert root.find(f"{NCX}docTitle/{NCX}text").text == "A & B"
        uid = root.find(f"{NCX}head/{NCX}meta[@name='dtb:uid']")
        assert uid.get("content") == f"urn:uuid:{BOOK_ID}"

    def test_nav_document_mirrors_ncx(self, nav_setup):
        meta, navigation = nav_setup
        root = parse(nav_xhtml(meta, navigation, ENGLISH))

        links = root.findall(f".//{XHTML}nav/{XHTML}ol/{XHTML}li/{XHTML}a")
        assert [a.get("href") for a in links] == navigation.targets
        assert links[0].text == "Cover"

    def test_toc_page_lists_chapters(self, nav_setup):
        meta, navigation = nav_setup
        root = parse(toc_xhtml(meta, navigation, JAPANESE))

        titles = [s.text for s in root.iter(f"{XHTML}span") if s.get("class") == "toc-title"]
        numbers = [s.text for s in root.iter(f"{XHTML}span") if s.get("class") == "toc-page-number"]
        assert titles == ["Start <here>", "Q&A"]
        assert numbers == ["1", "3"]
        author = [d.text for d in root.iter(f"{XHTML}div") if d.get("class") == "toc-author"]
        assert author == ["著者: Unknown Author"]


class TestPageDocuments:

    def test_content_page_viewport_and_image(self, images):
        entry = paginate(images, [])[1]
        root = parse(page_document(entry, PageSize(758, 1024), ENGLISH))

        viewport = root.find(f"{XHTML}head/{XHTML}meta[@name='viewport']")
        assert viewport.get("content") == "width=758,height=1024"
        img = root.find(f".//{XHTML}img")
        assert img.get("src") == "images/image_0002.png"
        assert "spread-page" not in root.find(f"{XHTML}body").get("class")

    def test_spread_page_has_spread_class(self, images):
        entry = paginate(images, [PageLayout(spread=True)])[0]
        root = parse(page_document(entry, PageSize(600, 800), ENGLISH))
        assert "spread-page" in root.find(f"{XHTML}body").get("class").split()

    def test_cover_and_back_cover_pages(self, images, make_asset):
        entries = paginate(
            images, [],
            front_cover=make_asset("cover.png"),
            back_cover=make_asset("back.png"),
        )
        cover = parse(page_document(entries[0], PageSize(600, 800), ENGLISH))
        back = parse(page_document(entries[-1], PageSize(600, 800), ENGLISH))

        assert cover.find(f"{XHTML}body").get("class") == "cover-page"
        assert cover.find(f".//{XHTML}img").get("class") == "cover-image"
        assert back.find(f"{XHTML}body").get("class") == "back-cover-page"
        assert back.find(f".//{XHTML}img").get("src") == "images/back_cover.png"


class TestStylesheet:

    def test_contains_page_and_kindle_rules(self):
        css = stylesheet()
        for selector in (".page-image", ".spread-page", ".cover-image", ".toc-list",
                         "@media amzn-kf8", "@media amzn-mobi", "@media print"):
            assert selector in css
        assert "object-fit: contain" in css
        assert css.count("{") == css.count("}")
