"""
Module: builder

Purpose:
    Build pipeline for fixed-layout EPUB packages from page images.
    Paginates images and covers, resolves spreads and navigation, writes
    every package document and packs the archive.

Key Functions:
    - load_images(): Load images from files and directories
    - build_epub(): Main entry point for package generation
    - synthesize_epub(): Async variant of build_epub()

Key Classes:
    - BuilderConfig: Build options
    - BuildResult: Package bytes plus build metadata

Dependencies:
    - PIL: Image format sniffing and decode checks
    - epub_toolkit.core.models: Data models (ImageAsset, BookMetadata)
    - epub_toolkit.core.schemas.validator: Input validation

Used By:
    - epub_toolkit.cli: Command line interface
"""

from .config import BuilderConfig
from .errors import BuildError
from .loading import load_images, load_data_urls, LoaderError
from .progress import ProgressCallback, ProgressReporter
from .controller import build_epub, synthesize_epub, BuildResult

__all__ = [
    # Config
    "BuilderConfig",
    # Loading
    "load_images",
    "load_data_urls",
    "LoaderError",
    # Progress
    "ProgressCallback",
    "ProgressReporter",
    # Controller
    "build_epub",
    "synthesize_epub",
    "BuildResult",
    "BuildError",
]
