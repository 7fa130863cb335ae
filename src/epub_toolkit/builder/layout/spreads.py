"""
Module: builder.layout.spreads

Purpose:
    Group content pages into preview spreads.
    Pure projection of the PageLayout tuple; the result is recomputed on
    every call and never stored.

Key Functions:
    - resolve_spreads(): Main grouping function

Algorithm:
    Scan left to right:
    1. Cover/toc pages and pages without the spread flag stand alone
    2. A spread-eligible page followed by another eligible page forms a
       two-page spread; both are consumed
    3. A spread-eligible page with no eligible successor becomes a
       spread-single group

Note:
    This grouping is for preview only. The left/right attribute written
    into the package comes from builder.layout.roles, which uses index
    parity and can disagree with the pairing here.

Dependencies:
    - builder.layout.models: SpreadPair, SpreadKind

Used By:
    - cli: `spreads` command
    - builder.controller: Spread statistics in build metadata
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from epub_toolkit.core.models import PageLayout, ReadingDirection

from .models import SpreadKind, SpreadPair

logger = logging.getLogger(__name__)


def resolve_spreads(
    layouts: Sequence[PageLayout],
    direction: ReadingDirection,
) -> tuple[SpreadPair, ...]:
    """
    Group pages into preview spreads.

    Every index 0..len(layouts)-1 appears exactly once across the groups,
    in ascending order group-by-group (within an rtl spread the pair is
    shown higher index first).

    Args:
        layouts: One PageLayout per content image
        direction: Book reading direction

    Returns:
        Tuple of SpreadPairs covering every page exactly once

    Example:
        >>> layouts = [PageLayout(), PageLayout(spread=True), PageLayout(spread=True)]
        >>> [p.pages for p in resolve_spreads(layouts, ReadingDirection.RTL)]
        [(0,), (2, 1)]
    """
    direction = ReadingDirection(direction)
    groups: List[SpreadPair] = []

    i = 0
    while i < len(layouts):
        layout = layouts[i]

        if not layout.is_spread_eligible:
            groups.append(SpreadPair(SpreadKind.SINGLE, (i,)))
            i += 1
            continue

        if i + 1 < len(layouts) and layouts[i + 1].is_spread_eligible:
            pages = (i + 1, i) if direction is ReadingDirection.RTL else (i, i + 1)
            groups.append(SpreadPair(SpreadKind.SPREAD, pages))
            i += 2
        else:
            logger.warning(f"Page {i} is flagged for spread but has no partner")
            groups.append(SpreadPair(SpreadKind.SPREAD_SINGLE, (i,)))
            i += 1

    return tuple(groups)


def count_spreads(groups: Sequence[SpreadPair]) -> dict[str, int]:
    """Count groups by kind (for summaries)."""
    counts = {str(kind): 0 for kind in SpreadKind}
    for group in groups:
        counts[str(group.kind)] += 1
    return counts
