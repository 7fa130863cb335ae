"""
Tests for the command line interface.
"""

import json
import zipfile

from epub_toolkit.cli import main


class TestBuildCommand:

    def test_build_writes_package(self, image_dir, tmp_path, capsys):
        out = tmp_path / "book.epub"

        code = main(["build", str(image_dir), "-o", str(out), "--title", "CLI Book", "--direction", "ltr"])

        assert code == 0
        assert out.exists()
        with zipfile.ZipFile(out) as zf:
            assert zf.namelist()[0] == "mimetype"
            opf = zf.read("OEBPS/content.opf").decode("utf-8")
            assert "<dc:title>CLI Book</dc:title>" in opf
            assert 'page-progression-direction="ltr"' in opf
        assert "3 pages" in capsys.readouterr().out

    def test_build_with_settings_and_layout(self, image_dir, tmp_path, sample_image):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({
            "title": "From Settings",
            "front_cover": "sample.png",
            "enable_toc": True,
            "chapters": [{"id": "c1", "title": "One", "page_index": 1}],
        }), encoding="utf-8")
        out = tmp_path / "book.epub"

        code = main(["build", str(image_dir), "--settings", str(settings), "--layout", "manga", "-o", str(out)])

        assert code == 0
        with zipfile.ZipFile(out) as zf:
            names = zf.namelist()
            assert "OEBPS/cover.xhtml" in names
            assert "OEBPS/toc.xhtml" in names
            opf = zf.read("OEBPS/content.opf").decode("utf-8")
            # manga layout: middle page is a spread page (content index 1, rtl -> left)
            assert 'idref="page3" properties="page-spread-left"' in opf

    def test_build_saves_resolved_settings(self, image_dir, tmp_path):
        saved = tmp_path / "resolved.json"
        code = main([
            "build", str(image_dir), "-o", str(tmp_path / "b.epub"),
            "--auto-chapters", "--toc", "--save-settings", str(saved),
        ])

        assert code == 0
        data = json.loads(saved.read_text(encoding="utf-8"))
        assert data["enable_toc"] is True
        assert [c["page_index"] for c in data["chapters"]] == [0]
        assert len(data["page_layouts"]) == 3

    def test_missing_image_returns_error_code(self, tmp_path):
        assert main(["build", str(tmp_path / "missing.png")]) == 1

    def test_chapter_out_of_range_returns_error_code(self, image_dir, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({
            "chapters": [{"id": "c1", "title": "Late", "page_index": 10}],
        }), encoding="utf-8")
        out = tmp_path / "book.epub"

        assert main(["build", str(image_dir), "--settings", str(settings), "-o", str(out)]) == 1
        assert not out.exists()

    def test_invalid_custom_size_returns_error_code(self, image_dir, tmp_path):
        code = main([
            "build", str(image_dir), "-o", str(tmp_path / "b.epub"),
            "--size", "custom", "--width", "50",
        ])
        assert code == 2


class TestSpreadsCommand:

    def test_prints_groups(self, image_dir, capsys):
        code = main(["spreads", str(image_dir), "--layout", "alternate", "--direction", "ltr"])

        assert code == 0
        out = capsys.readouterr().out
        lines = out.strip().splitlines()
        assert lines[0].split() == ["single", "p1.png"]
        assert lines[1].split() == ["spread-single", "p2.png"]
        assert lines[-1] == "single: 2, spread: 0, spread-single: 1"

    def test_short_layout_list_covers_every_image(self, image_dir, tmp_path, capsys):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"page_layouts": [{}, {}]}), encoding="utf-8")

        code = main(["spreads", str(image_dir), "--settings", str(settings)])

        assert code == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert [line.split()[1] for line in lines[:-1]] == ["p1.png", "p2.png", "p10.png"]
        assert lines[-1] == "single: 3, spread: 0, spread-single: 0"

    def test_manga_preset_on_short_layout_list_uses_last_image(self, image_dir, tmp_path, capsys):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"page_layouts": [{}]}), encoding="utf-8")

        code = main(["spreads", str(image_dir), "--settings", str(settings), "--layout", "manga"])

        assert code == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines[1].split() == ["spread-single", "p2.png"]
        assert lines[-1] == "single: 2, spread: 0, spread-single: 1"
