"""
Unit tests for chapter list helpers.
"""

from epub_toolkit.builder.navigation import (
    add_chapter,
    auto_generate_chapters,
    remove_chapter,
    rename_chapter,
)
from epub_toolkit.core.models import Chapter


class TestChapterEdits:

    def test_add_keeps_sorted_order(self):
        chapters = (Chapter("a", "A", 5),)
        result = add_chapter(chapters, 2, "B", chapter_id="b")
        assert [c.id for c in result] == ["b", "a"]
        assert chapters == (Chapter("a", "A", 5),)

    def test_add_blank_title_gets_default(self):
        result = add_chapter((Chapter("a", "A", 0),), 3, "   ")
        assert result[-1].title == "Chapter 2"
        assert result[-1].id

    def test_remove(self):
        chapters = (Chapter("a", "A", 0), Chapter("b", "B", 1))
        assert remove_chapter(chapters, "a") == (Chapter("b", "B", 1),)

    def test_remove_unknown_id_is_noop(self):
        chapters = (Chapter("a", "A", 0),)
        assert remove_chapter(chapters, "zzz") == chapters

    def test_rename(self):
        result = rename_chapter((Chapter("a", "A", 0),), "a", "Prologue")
        assert result[0].title == "Prologue"


class TestAutoGenerate:

    def test_one_chapter_per_ten_images(self):
        chapters = auto_generate_chapters(25)
        assert [c.page_index for c in chapters] == [0, 8, 16]
        assert [c.title for c in chapters] == ["Chapter 1", "Chapter 2", "Chapter 3"]
        assert [c.id for c in chapters] == ["auto-1", "auto-2", "auto-3"]

    def test_capped_at_ten_chapters(self):
        chapters = auto_generate_chapters(500)
        assert len(chapters) == 10
        assert chapters[1].page_index == 50

    def test_small_books_get_one_chapter(self):
        assert [c.page_index for c in auto_generate_chapters(4)] == [0]

    def test_no_images(self):
        assert auto_generate_chapters(0) == ()

    def test_custom_title_format(self):
        chapters = auto_generate_chapters(20, title_format="第{number}章")
        assert chapters[1].title == "第2章"
