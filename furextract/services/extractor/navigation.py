# furextract/services/extractor/navigation.py
"""
Series navigation parsing.

Artists link the parts of a series from the description; the site renders
that as one marker element whose inner markup reads ``prev | first | next``.
A slot without an anchor (plain text such as ``<<< PREV``) is the normal
state at either end of a series and yields ``None``.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup

from furextract.models.navigation import NavLinks

from .config_loader import NavigationSelectors


def _link_target(fragment: str, pattern: "re.Pattern[str]") -> Optional[int]:
    soup = BeautifulSoup(fragment, "html.parser")
    for anchor in soup.find_all("a", href=True):
        match = pattern.search(anchor["href"])
        if match:
            return int(match.group(1))
    return None


def parse_nav_links(description: str, selectors: NavigationSelectors) -> Optional[NavLinks]:
    """
    Return the prev / first / next ids from ``description``.

    ``None`` means the description carries no navigation marker at all.
    """
    soup = BeautifulSoup(description, "html.parser")
    marker = soup.select_one(selectors.marker)
    if marker is None:
        return None

    pattern = re.compile(selectors.link_pattern)
    parts = marker.decode_contents().split(selectors.separator)
    # pad so a truncated marker still yields three slots
    parts = (parts + ["", "", ""])[:3]
    prev_id, first_id, next_id = (_link_target(part, pattern) for part in parts)

    return NavLinks(prev=prev_id, first=first_id, next=next_id)
