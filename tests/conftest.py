# tests/conftest.py
from pathlib import Path

import pytest

from furextract.services.extractor.config_loader import get_profile
from furextract.services.extractor.submission_extractor import SubmissionExtractor

FIXTURES = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def profile():
    """The packaged ``current`` selector profile."""
    return get_profile("current")


@pytest.fixture
def extractor(profile):
    return SubmissionExtractor(profile)


@pytest.fixture
def image_page() -> str:
    return read_fixture("submission_image.html")


@pytest.fixture
def animation_page() -> str:
    return read_fixture("submission_animation.html")


@pytest.fixture
def front_page() -> str:
    return read_fixture("front_page.html")


@pytest.fixture
def load_fixture():
    """Read any file from ``tests/fixtures`` by name."""
    return read_fixture
