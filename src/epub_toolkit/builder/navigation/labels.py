"""
Localized fixed strings used in navigation entries and page titles.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NavigationLabels:
    """Fixed UI strings for one language."""
    cover: str
    toc: str
    back_cover: str
    author_prefix: str
    page: str = "Page {number}"

    def page_label(self, number: int) -> str:
        return self.page.format(number=number)


ENGLISH = NavigationLabels(
    cover="Cover",
    toc="Contents",
    back_cover="Back Cover",
    author_prefix="Author: ",
)

JAPANESE = NavigationLabels(
    cover="表紙",
    toc="目次",
    back_cover="裏表紙",
    author_prefix="著者: ",
)

_BY_LANGUAGE = {
    "en": ENGLISH,
    "ja": JAPANESE,
}


def labels_for(language: str) -> NavigationLabels:
    """Labels for a language code ("ja", "ja-JP", ...); English otherwise."""
    primary = (language or "").split("-")[0].lower()
    return _BY_LANGUAGE.get(primary, ENGLISH)
