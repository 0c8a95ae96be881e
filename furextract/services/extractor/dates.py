# furextract/services/extractor/dates.py
"""
Normalise the site's date text into an absolute UTC instant.

The site shows local times at a fixed UTC-5 offset (no DST) in one of two
templates, depending on the era of the page:

* ``Mar 23rd, 2019 12:46 AM``        – no seconds
* ``June 17, 2025 12:00:00 PM``      – with seconds

Ordinal suffixes are stripped first; the template is then chosen by whether
a seconds component is present.  Anything else is a hard parse failure.
"""

import re
from datetime import datetime, timedelta, timezone

from furextract.core.exceptions import ScrapeError

SITE_TIMEZONE = timezone(timedelta(hours=-5))

ORDINAL_SUFFIX = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)\b")
_HAS_SECONDS = re.compile(r"\d{1,2}:\d{2}:\d{2}")

TEMPLATE_MINUTES = "{month} %d, %Y %I:%M %p"
TEMPLATE_SECONDS = "{month} %d, %Y %I:%M:%S %p"


def strip_ordinals(text: str) -> str:
    """``"23rd"`` → ``"23"``; leaves everything else as is."""
    return ORDINAL_SUFFIX.sub(r"\1", text)


def _template_for(text: str) -> str:
    template = TEMPLATE_SECONDS if _HAS_SECONDS.search(text) else TEMPLATE_MINUTES
    month_token = text.split(" ", 1)[0]
    # Three letters ("Mar") is the abbreviated name, anything longer the full one.
    month = "%b" if len(month_token) <= 3 else "%B"
    return template.format(month=month)


def parse_date(text: str) -> datetime:
    """
    Parse site date text and return an aware UTC ``datetime``.

    Raises
    ------
    ScrapeError
        Non‑retryable, when the text matches neither template.
    """
    cleaned = " ".join(strip_ordinals(text).split())
    try:
        local = datetime.strptime(cleaned, _template_for(cleaned))
    except ValueError as exc:
        raise ScrapeError.invalid_date(text) from exc
    return local.replace(tzinfo=SITE_TIMEZONE).astimezone(timezone.utc)
