# furextract/services/extractor/content_resolver.py
"""
Decide whether a submission page carries a raster image or an embedded
animation and turn its asset reference into an absolute URL.

The image marker always wins when both markers are present.  A missing
marker means this is not a submission page at all (non‑retryable); a marker
without its asset attribute is treated as a render glitch (retryable).
"""

from typing import Union

from bs4 import BeautifulSoup, Tag
from pydantic import ValidationError

from furextract.core.exceptions import ScrapeError
from furextract.models.submission import AnimationContent, ImageContent

from .config_loader import SubmissionSelectors


def qualify_url(reference: str, scheme: str = "https:") -> str:
    """Prefix ``scheme`` to scheme‑relative references (``//host/path``)."""
    reference = reference.strip()
    if reference.startswith("//"):
        return scheme + reference
    return reference


def _asset_reference(elem: Tag, attribute: str, field: str) -> str:
    value = elem.get(attribute)
    if isinstance(value, list):  # multi‑valued attributes come back as lists
        value = " ".join(value)
    if not value or not value.strip():
        raise ScrapeError.missing_attribute(field, attribute)
    return value


def resolve_content(
    soup: BeautifulSoup, selectors: SubmissionSelectors
) -> Union[ImageContent, AnimationContent]:
    """
    Locate the content marker in ``soup`` and build the matching content variant.

    Raises
    ------
    ScrapeError
        ``retry=True`` when the marker lacks its asset attribute,
        ``retry=False`` when neither marker exists.
    """
    image = soup.select_one(selectors.image)
    animation = soup.select_one(selectors.animation)

    try:
        if image is not None:
            ref = _asset_reference(image, selectors.image_attribute, "image")
            return ImageContent(url=qualify_url(ref, selectors.asset_scheme))
        if animation is not None:
            ref = _asset_reference(animation, selectors.animation_attribute, "animation")
            return AnimationContent(url=qualify_url(ref, selectors.asset_scheme))
    except ValidationError as exc:
        # relative or otherwise unusable reference
        raise ScrapeError.invalid_record(exc) from exc

    raise ScrapeError.invalid_submission_type()
