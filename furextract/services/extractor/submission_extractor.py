# furextract/services/extractor/submission_extractor.py
"""
Turns raw site HTML into validated models.

Every structural query comes from the injected ``SelectorProfile``; this
module only decides *what to do* with each match.  Outcomes of
``parse_submission`` are:

* a complete ``Submission`` (fingerprint unset),
* ``None`` when the page says the submission does not exist,
* a ``ScrapeError`` naming the part of the page that broke.

A partially filled record is never returned.
"""

import re
from datetime import datetime
from typing import List, Optional, Union
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Tag
from pydantic import ValidationError

from furextract.core.config import Settings
from furextract.core.exceptions import ScrapeError
from furextract.models.navigation import NavLinks
from furextract.models.online import OnlineCounts
from furextract.models.submission import Rating, Submission

from .config_loader import SelectorProfile, get_profile
from .content_resolver import resolve_content
from .dates import parse_date
from .navigation import parse_nav_links

Page = Union[str, bytes]

_NUMBER = re.compile(r"\d[\d,]*")


# ----------------------------------------------------------------------
# Small helpers
# ----------------------------------------------------------------------
def join_text_nodes(elem: Tag) -> str:
    """All descendant text nodes concatenated, then trimmed."""
    return "".join(elem.strings).strip()


def parse_online_text(text: str) -> OnlineCounts:
    """
    Map the first four numbers in ``text`` to total / guests / registered /
    other.  Missing numbers stay at zero.
    """
    numbers = [int(m.replace(",", "")) for m in _NUMBER.findall(text)]
    numbers = (numbers + [0, 0, 0, 0])[:4]
    total, guests, registered, other = numbers
    return OnlineCounts(total=total, guests=guests, registered=registered, other=other)


class SubmissionExtractor:
    """
    Applies a selector profile to submission and front pages.

    The profile is resolved once by the caller and injected here, so the
    extractor holds no process‑wide state and is safe to share.
    """

    def __init__(self, profile: SelectorProfile):
        self.profile = profile

    @classmethod
    def from_settings(cls, settings: Settings) -> "SubmissionExtractor":
        """Build an extractor for ``settings.SELECTOR_PROFILE``."""
        return cls(get_profile(settings.SELECTOR_PROFILE, settings.SELECTORS_PATH))

    @staticmethod
    def _soup(page: Page) -> BeautifulSoup:
        return BeautifulSoup(page, "html.parser")

    def _select_required(self, soup: BeautifulSoup, selector: str, field: str) -> Tag:
        elem = soup.select_one(selector)
        if elem is None:
            raise ScrapeError.missing_field(field)
        return elem

    # ------------------------------------------------------------------
    # Existence checks
    # ------------------------------------------------------------------
    def is_missing(self, soup: BeautifulSoup) -> bool:
        """True when the page reports that the submission does not exist."""
        sel = self.profile.submission
        if soup.title is not None and soup.title.get_text(strip=True) == sel.page_title_sentinel:
            return True
        return soup.select_one(sel.not_found) is not None

    # ------------------------------------------------------------------
    # Individual fields
    # ------------------------------------------------------------------
    def _artist(self, soup: BeautifulSoup) -> str:
        sel = self.profile.submission
        link = self._select_required(soup, sel.artist, "artist")
        href = link.get("href") or ""
        path = urlsplit(href).path
        if not path.startswith(sel.artist_path_prefix):
            raise ScrapeError.invalid_value("artist", href)
        handle = path[len(sel.artist_path_prefix):].split("/", 1)[0]
        if not handle:
            raise ScrapeError.invalid_value("artist", href)
        return handle

    def _rating(self, soup: BeautifulSoup) -> Rating:
        text = join_text_nodes(self._select_required(soup, self.profile.submission.rating, "rating"))
        try:
            return Rating(text)
        except ValueError as exc:
            raise ScrapeError.invalid_value("rating", text) from exc

    def _posted_at(self, soup: BeautifulSoup) -> datetime:
        sel = self.profile.submission
        elem = self._select_required(soup, sel.posted_at, "posted_at")
        # the attribute holds the absolute date; the text is usually "x days ago"
        text = elem.get(sel.posted_at_attribute) or join_text_nodes(elem)
        return parse_date(text)

    def _tags(self, soup: BeautifulSoup) -> List[str]:
        return [join_text_nodes(tag) for tag in soup.select(self.profile.submission.tags)]

    # ------------------------------------------------------------------
    # Submission page
    # ------------------------------------------------------------------
    def parse_submission(self, submission_id: int, page: Page) -> Optional[Submission]:
        """
        Extract the submission shown on a ``/view/<id>/`` page.

        Returns ``None`` when the page says the submission does not exist.
        """
        sel = self.profile.submission
        soup = self._soup(page)

        # 1️⃣ Confirmed absence is an outcome, not an error
        if self.is_missing(soup):
            return None

        # 2️⃣ Required fields – each failure names its field
        title = join_text_nodes(self._select_required(soup, sel.title, "title"))
        artist = self._artist(soup)
        content = resolve_content(soup, sel)
        rating = self._rating(soup)
        posted_at = self._posted_at(soup)
        description = self._select_required(soup, sel.description, "description").decode_contents()

        # 3️⃣ Optional list – empty is fine
        tags = self._tags(soup)

        try:
            return Submission(
                id=submission_id,
                title=title,
                artist=artist,
                content=content,
                rating=rating,
                posted_at=posted_at,
                tags=tags,
                description=description,
            )
        except ValidationError as exc:
            raise ScrapeError.invalid_record(exc) from exc

    def parse_nav_links(self, submission: Submission) -> Optional[NavLinks]:
        """Series navigation from ``submission.description`` (``None`` if absent)."""
        return parse_nav_links(submission.description, self.profile.navigation)

    # ------------------------------------------------------------------
    # Front page
    # ------------------------------------------------------------------
    def parse_latest_id(self, page: Page) -> int:
        """Id of the newest submission linked from the front page."""
        soup = self._soup(page)
        link = soup.select_one(self.profile.front_page.latest_submission)
        if link is None:
            raise ScrapeError.value_not_found("latest submission")

        href = link.get("href")
        if not href:
            raise ScrapeError.value_not_found("latest submission href")

        parts = [part for part in urlsplit(href).path.split("/") if part]
        if not parts:
            raise ScrapeError.value_not_found("latest submission id part")

        try:
            return int(parts[-1])
        except ValueError as exc:
            raise ScrapeError.invalid_number(parts[-1]) from exc

    def parse_online_counts(self, page: Page) -> Optional[OnlineCounts]:
        """
        Users‑online counters from the front page.

        Best effort: ``None`` when the counter block is absent, zeros for
        numbers the text does not contain.
        """
        soup = self._soup(page)
        stats = soup.select_one(self.profile.front_page.online_stats)
        if stats is None:
            return None
        return parse_online_text(stats.get_text(" "))
