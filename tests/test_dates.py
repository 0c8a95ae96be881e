# tests/test_dates.py
from datetime import datetime, timezone

import pytest

from furextract.core.exceptions import ScrapeError
from furextract.services.extractor.dates import parse_date, strip_ordinals


# -------------------------------------------------------------------
# Both site templates, converted from UTC-5
# -------------------------------------------------------------------
def test_abbreviated_month_without_seconds():
    assert parse_date("Mar 23rd, 2019 12:46 AM") == datetime(2019, 3, 23, 5, 46, tzinfo=timezone.utc)


def test_full_month_with_seconds():
    assert parse_date("June 17, 2025 12:00:00 PM") == datetime(2025, 6, 17, 17, 0, tzinfo=timezone.utc)


def test_result_is_utc_aware():
    parsed = parse_date("Apr 16th, 2019 11:22 AM")
    assert parsed.tzinfo == timezone.utc
    assert parsed == datetime(2019, 4, 16, 16, 22, tzinfo=timezone.utc)


def test_late_evening_rolls_over_to_next_utc_day():
    assert parse_date("Dec 31st, 2020 11:30 PM") == datetime(2021, 1, 1, 4, 30, tzinfo=timezone.utc)


def test_no_dst_adjustment_in_summer():
    """The offset is fixed; July is still five hours behind UTC."""
    assert parse_date("Jul 4th, 2021 1:05 PM") == datetime(2021, 7, 4, 18, 5, tzinfo=timezone.utc)


def test_extra_whitespace_is_tolerated():
    assert parse_date("  Mar  1st, 2019  9:00 AM ") == datetime(2019, 3, 1, 14, 0, tzinfo=timezone.utc)


def test_deterministic():
    text = "June 17, 2025 12:00:00 PM"
    assert parse_date(text) == parse_date(text)


# -------------------------------------------------------------------
# Ordinal stripping
# -------------------------------------------------------------------
@pytest.mark.parametrize(
    "raw,expected",
    [("1st", "1"), ("2nd", "2"), ("3rd", "3"), ("13th", "13"), ("22nd", "22"), ("31st", "31")],
)
def test_strip_ordinals(raw, expected):
    assert strip_ordinals(raw) == expected


def test_strip_ordinals_is_idempotent():
    once = strip_ordinals("Mar 23rd, 2019 12:46 AM")
    assert once == "Mar 23, 2019 12:46 AM"
    assert strip_ordinals(once) == once


def test_strip_ordinals_leaves_month_names_alone():
    assert strip_ordinals("August 1st") == "August 1"


# -------------------------------------------------------------------
# Anything else is a hard, non‑retryable failure
# -------------------------------------------------------------------
@pytest.mark.parametrize(
    "text",
    ["2019-03-23T00:46:00", "Mar 23rd 2019", "yesterday", "", "Foo 23, 2019 12:46 AM"],
)
def test_unknown_formats_fail(text):
    with pytest.raises(ScrapeError) as exc_info:
        parse_date(text)

    assert exc_info.value.retry is False
    assert exc_info.value.field == "posted_at"
