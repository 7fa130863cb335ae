"""
Command line interface.

    epub-toolkit build scans/ -o book.epub --title "Sketches" --direction ltr
    epub-toolkit build scans/ --settings book.json --layout manga
    epub-toolkit spreads scans/ --layout manga

Settings come from an optional JSON file (see core/schemas/settings.schema.json);
command line options override individual fields.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from epub_toolkit.builder import (
    BuildError,
    BuilderConfig,
    LoaderError,
    build_epub,
    load_images,
)
from epub_toolkit.builder.layout import (
    alternate_spread_layout,
    count_spreads,
    fit_page_layouts,
    manga_layout,
    resolve_spreads,
    single_page_layout,
)
from epub_toolkit.builder.navigation import auto_generate_chapters
from epub_toolkit.core.models import BookMetadata, BookSize, ImageAsset, ReadingDirection
from epub_toolkit.core.schemas import ValidationError
from epub_toolkit.core.utils import load_settings_json, save_settings_json, suggested_filename

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

LAYOUT_PRESETS = {
    "single": single_page_layout,
    "manga": manga_layout,
    "alternate": alternate_spread_layout,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="epub-toolkit",
        description="Build fixed-layout EPUB packages from page images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Layouts:
  single     - No spreads
  manga      - Every page except the first and last is a spread page
  alternate  - Pages at odd indices are spread pages

Examples:
  %(prog)s build scans/ -o book.epub
  %(prog)s build 01.png 02.png --title "Sketches" --direction ltr
  %(prog)s spreads scans/ --layout manga
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build an EPUB package")
    _add_book_arguments(build)
    build.add_argument("-o", "--output", type=Path, help="Output file (default: derived from title)")
    build.add_argument("--title", help="Book title")
    build.add_argument("--author", help="Author name")
    build.add_argument("--publisher", help="Publisher name")
    build.add_argument("--description", help="Short description")
    build.add_argument("--language", help="Language code, e.g. ja or en")
    build.add_argument(
        "--size",
        choices=[size.value for size in BookSize],
        help="Target device size preset",
    )
    build.add_argument("--width", type=int, help="Page width for --size custom")
    build.add_argument("--height", type=int, help="Page height for --size custom")
    build.add_argument("--front-cover", type=Path, help="Front cover image")
    build.add_argument("--back-cover", type=Path, help="Back cover image")
    build.add_argument("--toc", action="store_true", help="Add a chapter index page")
    build.add_argument(
        "--auto-chapters",
        action="store_true",
        help="Generate evenly spaced chapters (replaces chapters from settings)",
    )
    build.add_argument("--compression", type=int, default=9, help="DEFLATE level 1-9 (default: 9)")
    build.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip input validation (out-of-range chapters become dangling links)",
    )
    build.add_argument("--save-settings", type=Path, help="Also write the resolved settings JSON here")

    spreads = subparsers.add_parser("spreads", help="Show how pages pair into spreads")
    _add_book_arguments(spreads)

    return parser


def _add_book_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("images", nargs="+", type=Path, help="Image files or directories")
    parser.add_argument("--settings", type=Path, help="Settings JSON file")
    parser.add_argument("--strict", action="store_true", help="Validate settings against the JSON Schema")
    parser.add_argument(
        "--direction",
        choices=[direction.value for direction in ReadingDirection],
        help="Reading direction (default: rtl)",
    )
    parser.add_argument("--layout", choices=sorted(LAYOUT_PRESETS), help="Apply a spread layout preset")


def _resolve_metadata(args: argparse.Namespace, images: List[ImageAsset]) -> BookMetadata:
    """Settings file first, then command line overrides."""
    metadata = load_settings_json(args.settings, strict=args.strict) if args.settings else BookMetadata()

    overrides = {}
    for name in ("title", "author", "publisher", "description", "language"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value
    if args.direction:
        overrides["page_direction"] = ReadingDirection(args.direction)
    if getattr(args, "size", None):
        overrides["book_size"] = BookSize(args.size)
    if getattr(args, "width", None) is not None:
        overrides["custom_width"] = args.width
    if getattr(args, "height", None) is not None:
        overrides["custom_height"] = args.height
    if getattr(args, "front_cover", None):
        overrides["front_cover"] = ImageAsset.from_path(args.front_cover)
    if getattr(args, "back_cover", None):
        overrides["back_cover"] = ImageAsset.from_path(args.back_cover)
    if getattr(args, "toc", False):
        overrides["enable_toc"] = True
    if getattr(args, "auto_chapters", False):
        overrides["chapters"] = auto_generate_chapters(len(images))
    if overrides:
        metadata = replace(metadata, **overrides)

    layouts = fit_page_layouts(metadata.page_layouts, len(images), metadata.page_direction)
    if args.layout:
        layouts = LAYOUT_PRESETS[args.layout](layouts)
    if layouts != metadata.page_layouts:
        metadata = replace(metadata, page_layouts=layouts)

    return metadata


def _cmd_build(args: argparse.Namespace) -> int:
    images = load_images(args.images)
    metadata = _resolve_metadata(args, images)

    output = args.output or Path(suggested_filename(metadata.title))
    config = BuilderConfig(
        output_path=output,
        compression_level=args.compression,
        validate=not args.no_validate,
    )

    def on_progress(percent: float) -> None:
        logger.info(f"Progress: {percent:.0f}%")

    result = build_epub(images, metadata, config, on_progress=on_progress)

    for warning in result.warnings:
        logger.warning(warning)
    if args.save_settings:
        save_settings_json(metadata, args.save_settings)
        logger.info(f"Saved settings to {args.save_settings}")

    print(f"{result.output_path} ({result.page_count} pages, {len(result.data)} bytes)")
    return 0


def _cmd_spreads(args: argparse.Namespace) -> int:
    images = load_images(args.images)
    metadata = _resolve_metadata(args, images)

    groups = resolve_spreads(metadata.page_layouts, metadata.page_direction)
    for group in groups:
        names = " | ".join(images[i].name for i in group.pages if i < len(images))
        print(f"{str(group.kind):14s} {names}")

    counts = count_spreads(groups)
    print(", ".join(f"{kind}: {count}" for kind, count in counts.items()))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    commands = {"build": _cmd_build, "spreads": _cmd_spreads}
    try:
        return commands[args.command](args)
    except (LoaderError, ValidationError, BuildError) as e:
        logger.error(str(e))
        return 1
    except (ValueError, OSError) as e:
        logger.error(f"Invalid option: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
