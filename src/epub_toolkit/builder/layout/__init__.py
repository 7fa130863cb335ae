"""
Module: builder.layout

Purpose:
    Page layout resolution for the package.
    Turns per-page flags and the image list into preview spread groups and
    the numbered page manifest.

Key Functions:
    - resolve_spreads(): Preview spread grouping
    - paginate(): Flat manifest with package page numbers
    - spread_role(): Export-time left/right side by index parity

Key Classes:
    - SpreadPair: Preview group of 1 or 2 pages
    - PageManifestEntry: One package page

Dependencies:
    - dataclasses (std)
    - epub_toolkit.core.models: ImageAsset, PageLayout

Used By:
    - builder.controller: Main build controller
    - cli: `spreads` command
"""

from .models import SpreadKind, SpreadPair, PageManifestEntry
from .spreads import resolve_spreads, count_spreads
from .paginator import paginate
from .roles import SpreadRole, spread_role, spread_property
from .presets import (
    default_page_layouts,
    fit_page_layouts,
    manga_layout,
    single_page_layout,
    alternate_spread_layout,
    toggle_spread,
    set_spread,
)

__all__ = [
    # Models
    "SpreadKind",
    "SpreadPair",
    "PageManifestEntry",
    # Functions
    "resolve_spreads",
    "count_spreads",
    "paginate",
    "SpreadRole",
    "spread_role",
    "spread_property",
    # Presets
    "default_page_layouts",
    "fit_page_layouts",
    "manga_layout",
    "single_page_layout",
    "alternate_spread_layout",
    "toggle_spread",
    "set_spread",
]
